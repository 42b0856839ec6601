"""Split a Lisp source file into header, commentary and code regions."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Optional, Sequence
from urllib.parse import urlparse

from ..models import Phase, SourceDocument
from ..transform.lines import strip_file_variables

_COMMENT_LINE = re.compile(r"^\s*;")
_HEADER_FIELD = re.compile(r"^;+\s*([A-Za-z][A-Za-z0-9_-]*):\s*(.*?)\s*$")
_TITLE_LINE = re.compile(r"^;;;\s+(\S+)(?:\s+---\s+(.*?))?\s*$")
_COMMENTARY_MARKER = re.compile(r"^;;;\s*Commentary:?\s*$", re.IGNORECASE)
_CODE_MARKER = re.compile(r"^;;;\s*Code:?\s*$", re.IGNORECASE)
_END_MARKER = re.compile(r"^;;;\s*\S+\s+ends here\s*$", re.IGNORECASE)


def is_comment_line(line: str) -> bool:
    return bool(_COMMENT_LINE.match(line))


def parse_header_fields(lines: Iterable[str]) -> Dict[str, str]:
    """Collect ``;; Key: value`` pairs up to the commentary marker.

    Later occurrences of a key replace earlier ones.
    """
    fields: Dict[str, str] = {}
    for line in lines:
        line = line.rstrip("\r\n")
        if _COMMENTARY_MARKER.match(line) or _CODE_MARKER.match(line):
            break
        match = _HEADER_FIELD.match(line)
        if match and match.group(2):
            fields[match.group(1)] = match.group(2)
    return fields


def header_value(fields: Dict[str, str], *keys: str) -> Optional[str]:
    """First non-empty value among ``keys``, ignoring the case of field names."""
    folded = {key.lower(): value for key, value in fields.items()}
    for key in keys:
        value = folded.get(key.lower())
        if value:
            return value
    return None


class SectionTracker:
    """Tracks which region of the file a forward scan is in."""

    def __init__(self) -> None:
        self.phase = Phase.BEFORE_COMMENTARY
        self.saw_commentary = False
        self.saw_code = False

    def advance(self, line: str) -> bool:
        """Feed one line; return True when it was a section marker."""
        if self.phase is Phase.DONE:
            return False
        if _COMMENTARY_MARKER.match(line) and self.phase is Phase.BEFORE_COMMENTARY:
            self.phase = Phase.IN_COMMENTARY
            self.saw_commentary = True
            return True
        if _CODE_MARKER.match(line) and self.phase in (Phase.BEFORE_COMMENTARY, Phase.IN_COMMENTARY):
            self.phase = Phase.IN_CODE
            self.saw_code = True
            return True
        if _END_MARKER.match(line) and self.phase is Phase.IN_CODE:
            self.phase = Phase.DONE
            return True
        return False


def split_source(lines: Sequence[str]) -> SourceDocument:
    """Walk the file once, routing every line to the region it belongs to."""
    lines = tuple(line.rstrip("\r\n") for line in lines)
    document = SourceDocument(lines=lines)
    document.header_fields = parse_header_fields(lines)
    tracker = SectionTracker()
    code_lines = []

    for line in lines:
        if tracker.advance(line):
            continue
        if tracker.phase is Phase.BEFORE_COMMENTARY:
            if document.title is None:
                _read_title(document, line)
            if is_comment_line(line):
                document.license_lines.append(line)
        elif tracker.phase is Phase.IN_COMMENTARY:
            document.commentary_lines.append(line)
        elif tracker.phase is Phase.IN_CODE:
            code_lines.append(line)

    document.code_text = "\n".join(code_lines) + ("\n" if code_lines else "")
    document.saw_commentary = tracker.saw_commentary
    document.saw_code = tracker.saw_code
    return document


def _read_title(document: SourceDocument, line: str) -> None:
    line = strip_file_variables(line)
    match = _TITLE_LINE.match(line)
    if not match or _HEADER_FIELD.match(line):
        return
    document.title = match.group(1)
    document.subtitle = match.group(2) or None


def package_name(title: Optional[str]) -> Optional[str]:
    """``foo-mode.el`` -> ``foo-mode``."""
    if not title:
        return None
    return re.sub(r"\.el$", "", title) or None


def repository_path(url: Optional[str]) -> Optional[str]:
    """Return ``owner/repo`` for a GitHub-style project URL."""
    if not url:
        return None
    parsed = urlparse(url.strip())
    if not parsed.netloc:
        return None
    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) < 2:
        return None
    repo = re.sub(r"\.git$", "", parts[1])
    return f"{parts[0]}/{repo}"


__all__ = [
    "SectionTracker",
    "header_value",
    "is_comment_line",
    "package_name",
    "parse_header_fields",
    "repository_path",
    "split_source",
]
