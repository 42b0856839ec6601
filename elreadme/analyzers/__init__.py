"""Analyzers that pull structure out of Emacs Lisp sources."""

from .declarations import collect_declarations, scan_declarations
from .header import SectionTracker, header_value, parse_header_fields, split_source
from .license import LICENSE_CATALOG, match_license

__all__ = [
    "LICENSE_CATALOG",
    "SectionTracker",
    "collect_declarations",
    "header_value",
    "match_license",
    "parse_header_fields",
    "scan_declarations",
    "split_source",
]
