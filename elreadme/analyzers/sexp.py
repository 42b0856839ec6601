"""Minimal reader for Emacs Lisp s-expressions.

Only what the declaration scanner needs: it finds where a top-level form ends
and hands back enough structure to pull out names, argument lists and
docstrings. Numbers and other atoms are kept as symbols.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

_DELIMITERS = set("()[]\";'`,")
_QUOTE_PREFIXES = {"'": "quote", "`": "\\`", "#'": "function", ",@": ",@", ",": ","}
_STRING_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "e": "\x1b", "a": "\x07", "f": "\f"}


class SexpError(ValueError):
    """Raised when the text is not a readable s-expression."""


@dataclass(frozen=True)
class Symbol:
    """A Lisp symbol (or any other non-string atom)."""

    name: str

    def __str__(self) -> str:
        return self.name


class Vector(tuple):
    """A bracketed vector literal."""


def read_form(text: str, start: int = 0) -> Tuple[Any, int]:
    """Read one form starting at ``start``; return it with the index just past it."""
    reader = _Reader(text)
    return reader.read(start)


class _Reader:
    def __init__(self, text: str) -> None:
        self.text = text

    def read(self, pos: int) -> Tuple[Any, int]:
        pos = self._skip_whitespace(pos)
        if pos >= len(self.text):
            raise SexpError("unexpected end of input")
        char = self.text[pos]

        if char == "(":
            return self._read_sequence(pos + 1, ")", list)
        if char == "[":
            return self._read_sequence(pos + 1, "]", Vector)
        if char in ")]":
            raise SexpError(f"unexpected {char!r} at offset {pos}")
        if char == '"':
            return self._read_string(pos + 1)
        if char == "?":
            return self._read_character(pos + 1)

        for prefix in ("#'", ",@", "'", "`", ","):
            if self.text.startswith(prefix, pos):
                value, end = self.read(pos + len(prefix))
                return [Symbol(_QUOTE_PREFIXES[prefix]), value], end
        if char == "#":
            # #s(...) records, #[...] byte code and friends: read what follows.
            return self.read(pos + 1)

        return self._read_atom(pos)

    def _skip_whitespace(self, pos: int) -> int:
        text = self.text
        while pos < len(text):
            char = text[pos]
            if char.isspace():
                pos += 1
            elif char == ";":
                newline = text.find("\n", pos)
                pos = len(text) if newline == -1 else newline + 1
            else:
                break
        return pos

    def _read_sequence(self, pos: int, closer: str, factory) -> Tuple[Any, int]:
        items: List[Any] = []
        while True:
            pos = self._skip_whitespace(pos)
            if pos >= len(self.text):
                raise SexpError(f"missing {closer!r} before end of input")
            char = self.text[pos]
            if char == closer:
                return factory(items), pos + 1
            if char in ")]":
                raise SexpError(f"mismatched {char!r} at offset {pos}")
            item, pos = self.read(pos)
            items.append(item)

    def _read_string(self, pos: int) -> Tuple[str, int]:
        text = self.text
        chunks: List[str] = []
        while pos < len(text):
            char = text[pos]
            if char == '"':
                return "".join(chunks), pos + 1
            if char == "\\":
                if pos + 1 >= len(text):
                    break
                escaped = text[pos + 1]
                if escaped != "\n":
                    chunks.append(_STRING_ESCAPES.get(escaped, escaped))
                pos += 2
                continue
            chunks.append(char)
            pos += 1
        raise SexpError("unterminated string literal")

    def _read_character(self, pos: int) -> Tuple[Symbol, int]:
        text = self.text
        if pos >= len(text):
            raise SexpError("unexpected end of input in character literal")
        end = pos + 1
        if text[pos] == "\\":
            if end >= len(text):
                raise SexpError("unexpected end of input in character literal")
            end += 1
            if text[end - 1] == "^" and end < len(text):
                end += 1
            # Modifier syntax such as ?\C-x or ?\M-\C-a.
            while end < len(text) and text[end] == "-" and end + 1 < len(text):
                end += 1
                if text[end] == "\\":
                    end += 1
                end += 1
        return Symbol("?" + text[pos:end]), end

    def _read_atom(self, pos: int) -> Tuple[Symbol, int]:
        text = self.text
        end = pos
        chunks: List[str] = []
        while end < len(text):
            char = text[end]
            if char == "\\" and end + 1 < len(text):
                chunks.append(text[end + 1])
                end += 2
                continue
            if char.isspace() or char in _DELIMITERS:
                break
            chunks.append(char)
            end += 1
        if end == pos:
            raise SexpError(f"unreadable character {text[pos]!r} at offset {pos}")
        return Symbol("".join(chunks)), end


__all__ = ["SexpError", "Symbol", "Vector", "read_form"]
