"""Tests for signature rendering."""

from __future__ import annotations

import pytest

from elreadme.analyzers.sexp import Symbol, read_form
from elreadme.analyzers.signature import SignatureError, describe, render_signature, split_usage


def _arglist(text: str):
    form, _ = read_form(text)
    return form


def test_empty_arglists() -> None:
    assert render_signature("widget-make", []) == "(widget-make)"
    assert render_signature("widget-make", Symbol("nil")) == "(widget-make)"


def test_optional_and_rest_parameters() -> None:
    arglist = _arglist("(name &optional size &rest props)")
    assert render_signature("widget-make", arglist) == "(widget-make NAME [SIZE] PROPS...)"


def test_body_parameters_use_ellipsis() -> None:
    assert render_signature("with-widget", _arglist("(w &body body)")) == "(with-widget W BODY...)"


def test_destructuring_macro_arguments() -> None:
    arglist = _arglist("((var list) &rest body)")
    assert render_signature("do-widgets", arglist) == "(do-widgets (VAR LIST) BODY...)"


def test_cl_style_defaults_and_keys() -> None:
    arglist = _arglist("(a &optional (b 2) &key name)")
    assert render_signature("f", arglist) == "(f A [B] [:name NAME])"


def test_bad_arglist_raises() -> None:
    with pytest.raises(SignatureError):
        render_signature("f", "not a list")


def test_split_usage_overrides_signature() -> None:
    signature, body = split_usage("foo", "Do it.\n\n(fn X Y)")
    assert signature == "(foo X Y)"
    assert body == "Do it."
    assert split_usage("foo", "No usage here.") == (None, "No usage here.")


def test_split_usage_keeps_nested_parameter_lists() -> None:
    signature, body = split_usage("widget-each", "Loop.\n\n(fn (VAR LIST) BODY...)")
    assert signature == "(widget-each (VAR LIST) BODY...)"
    assert body == "Loop."


def test_split_usage_needs_blank_line_before_usage() -> None:
    docstring = "Accepts a callback such as (fn)"
    assert split_usage("foo", docstring) == (None, docstring)
    docstring = "Call it.\n(fn X)"
    assert split_usage("foo", docstring) == (None, docstring)


def test_split_usage_without_arguments() -> None:
    assert split_usage("foo", "Reset.\n\n(fn)") == ("(foo)", "Reset.")


def test_describe_falls_back_to_arglist() -> None:
    assert describe("foo", _arglist("(x)"), "Doc.") == ("(foo X)", "Doc.")
