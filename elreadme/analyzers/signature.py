"""Render call signatures from declared argument lists."""

from __future__ import annotations

import re
from typing import Any, List, Optional, Tuple

from .sexp import Symbol

_USAGE_LINE = re.compile(r"\n\n\(fn(?P<args>(?: .*)?)\)\s*\Z")


class SignatureError(ValueError):
    """Raised when an argument list cannot be rendered."""


def render_signature(name: str, arglist: Any) -> str:
    """Return ``(NAME ARG [OPTIONAL] REST...)`` for a declared argument list."""
    params = render_parameters(arglist)
    return f"({' '.join([name] + params)})"


def render_parameters(arglist: Any) -> List[str]:
    if isinstance(arglist, Symbol):
        if arglist.name == "nil":
            return []
        # A bare symbol lambda list binds every argument to it.
        return [f"{arglist.name.upper()}..."]
    if not isinstance(arglist, list):
        raise SignatureError(f"argument list must be a list, got {arglist!r}")

    rendered: List[str] = []
    mode = "required"
    for param in arglist:
        if isinstance(param, Symbol) and param.name.startswith("&"):
            keyword = param.name
            if keyword == "&optional":
                mode = "optional"
            elif keyword in ("&rest", "&body"):
                mode = "rest"
            elif keyword == "&key":
                mode = "key"
            else:
                # &aux, &environment, &whole and similar are not part of the usage.
                mode = "skip"
            continue
        if mode == "skip":
            continue
        text = _render_parameter(param, mode)
        if mode == "optional":
            rendered.append(f"[{text}]")
        elif mode == "rest":
            rendered.append(f"{text}...")
        elif mode == "key":
            rendered.append(f"[:{text.lower()} {text}]")
        else:
            rendered.append(text)
    return rendered


def _render_parameter(param: Any, mode: str) -> str:
    if isinstance(param, Symbol):
        return param.name.upper()
    if isinstance(param, list) and param:
        if mode in ("optional", "key") and isinstance(param[0], Symbol):
            # (NAME DEFAULT) as accepted by cl-defun and friends.
            return param[0].name.upper()
        # Destructuring pattern in a macro lambda list.
        return f"({' '.join(render_parameters(param))})"
    raise SignatureError(f"unsupported parameter {param!r}")


def split_usage(name: str, docstring: str) -> Tuple[Optional[str], str]:
    """Split a trailing ``(fn ARGS)`` usage override off a docstring."""
    match = _USAGE_LINE.search(docstring)
    if not match:
        return None, docstring
    args = match.group("args").strip()
    signature = f"({name} {args})" if args else f"({name})"
    return signature, docstring[: match.start()]


def describe(name: str, arglist: Any, docstring: str) -> Tuple[str, str]:
    """Return the one-line signature and the remaining description."""
    usage, body = split_usage(name, docstring)
    signature = usage or render_signature(name, arglist)
    return signature, body


__all__ = [
    "SignatureError",
    "describe",
    "render_parameters",
    "render_signature",
    "split_usage",
]
