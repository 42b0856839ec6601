"""Line transforms from Lisp comments to Markdown."""

from .lines import fix_symbol_references, format_header, transform_line

__all__ = ["fix_symbol_references", "format_header", "transform_line"]
