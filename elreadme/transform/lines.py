"""Line-level conversion of Lisp commentary into Markdown."""

from __future__ import annotations

import re

_SYMBOL_REFERENCE = re.compile(r"`([^ \t`']+)'")
_IMAGE_URL = re.compile(
    r"(^|[^(\"=])(https?://[^\s<>\"')]+\.(?:png|jpe?g))(?=[.,;:!]?(?:$|[\s)>\]]))",
    re.IGNORECASE,
)
_COMMENT_PREFIX = re.compile(r"^;+ ?")
_HEADER_PREFIX = re.compile(r"^;;; ")
_BULLET = re.compile(r"^( *)o ")
_LEADING_HASHES = re.compile(r"^#+\s*")
_TRAILING_COLON = re.compile(r"[\s:]+$")
_FILE_VARIABLES = re.compile(r"\s*-\*-.*?-\*-\s*")

HEADER_LEVEL = 3


def fix_symbol_references(line: str) -> str:
    """Drop the closing quote of `symbol' references, keeping the opening backtick."""
    return _SYMBOL_REFERENCE.sub(r"`\1", line)


def wrap_image_links(line: str) -> str:
    """Wrap bare image URLs in an <img> tag unless they already sit in a Markdown link."""
    return _IMAGE_URL.sub(r'\1<img src="\2">', line)


def strip_comment_prefix(line: str) -> str:
    return _COMMENT_PREFIX.sub("", line, count=1)


def strip_file_variables(text: str) -> str:
    """Remove a `-*- lexical-binding: t -*-` style cookie."""
    return _FILE_VARIABLES.sub(" ", text).strip()


def format_header(text: str, level: int) -> str:
    """Render ``text`` as a Markdown heading of the given level.

    Trailing colons and whitespace are dropped and the ``name --- summary``
    separator becomes an en-dash. Any heading marks already present are
    replaced, so formatting an existing heading again is a no-op.
    """
    title = _LEADING_HASHES.sub("", text.strip())
    title = _TRAILING_COLON.sub("", title)
    title = title.replace(" --- ", " – ")
    return f"{'#' * level} {title}"


def transform_line(line: str) -> str:
    """Convert one source line to its Markdown rendering, newline included."""
    line = line.rstrip("\r\n")
    line = fix_symbol_references(line)
    line = wrap_image_links(line)
    stripped = strip_comment_prefix(line)

    if _HEADER_PREFIX.match(line):
        return format_header(stripped, HEADER_LEVEL) + "\n"
    if _BULLET.match(stripped):
        return _BULLET.sub(r"\1* ", stripped, count=1) + "\n"
    return stripped + "\n"


__all__ = [
    "HEADER_LEVEL",
    "fix_symbol_references",
    "format_header",
    "strip_comment_prefix",
    "strip_file_variables",
    "transform_line",
    "wrap_image_links",
]
