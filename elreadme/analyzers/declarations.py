"""Scan Lisp code for documented top-level declarations."""

from __future__ import annotations

import re
from typing import Any, Iterator, Optional

from ..logging import get_logger
from ..models import (
    CALLABLE,
    CONFIGURATION,
    MACRO,
    DeclarationDocs,
    DocEntry,
    DocRecord,
    ScanFailure,
)
from ..transform.lines import fix_symbol_references
from .sexp import SexpError, read_form
from .signature import describe

PRIVATE_MARKER = "--"

_DECLARATION = re.compile(r"^\((defun|defmacro|defcustom)[ \t\n]+([^\s()\[\]\"';]+)", re.MULTILINE)
_KINDS = {"defun": CALLABLE, "defmacro": MACRO, "defcustom": CONFIGURATION}

logger = get_logger("declarations")


def scan_declarations(code: str) -> Iterator[DocEntry]:
    """Yield documentation for each public, documented declaration in ``code``.

    The scan moves forward only. A form that cannot be read or understood is
    reported as a :class:`ScanFailure` and the scan carries on after it.
    """
    cursor = 0
    while True:
        match = _DECLARATION.search(code, cursor)
        if match is None:
            return
        head, name = match.group(1), match.group(2)
        kind = _KINDS[head]
        try:
            form, end = read_form(code, match.start())
        except SexpError as exc:
            cursor = match.end()
            if PRIVATE_MARKER in name:
                continue
            logger.warning("Skipping unreadable %s %s: %s", head, name, exc)
            yield ScanFailure(kind=kind, name=name, reason=str(exc))
            continue
        cursor = end

        try:
            entry = _document(kind, name, form)
        except ValueError as exc:
            logger.warning("Could not document %s %s: %s", head, name, exc)
            yield ScanFailure(kind=kind, name=name, reason=str(exc))
            continue
        if entry is not None:
            yield entry


def collect_declarations(code: str) -> DeclarationDocs:
    """Bucket scanned entries into configuration and callable docs."""
    docs = DeclarationDocs()
    for entry in scan_declarations(code):
        if entry.kind == CONFIGURATION:
            docs.configuration_docs.append(entry)
        else:
            docs.callable_docs.append(entry)
    logger.debug(
        "Collected %d configuration and %d callable entries",
        len(docs.configuration_docs),
        len(docs.callable_docs),
    )
    return docs


def _document(kind: str, name: str, form: Any) -> Optional[DocRecord]:
    if PRIVATE_MARKER in name:
        logger.debug("Skipping private declaration %s", name)
        return None
    if not isinstance(form, list) or len(form) < 3:
        raise ValueError("declaration is missing its argument list or value")

    if kind == CONFIGURATION:
        docstring = form[3] if len(form) > 3 else None
        if not isinstance(docstring, str) or not docstring.strip():
            logger.debug("Skipping undocumented option %s", name)
            return None
        body = fix_symbol_references(docstring).rstrip()
        return DocRecord(kind=kind, name=name, title=name, body=body)

    docstring = _callable_docstring(form[3:])
    if docstring is None:
        logger.debug("Skipping undocumented %s %s", kind, name)
        return None
    title, description = describe(name, form[2], docstring)
    if "(" not in title:
        logger.debug("Skipping %s: no signature could be rendered", name)
        return None
    body = fix_symbol_references(description).rstrip()
    return DocRecord(kind=kind, name=name, title=title, body=body)


def _callable_docstring(body: list) -> Optional[str]:
    if not body or not isinstance(body[0], str):
        return None
    docstring = body[0]
    return docstring if docstring.strip() else None


__all__ = ["PRIVATE_MARKER", "collect_declarations", "scan_declarations"]
