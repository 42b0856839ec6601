"""CLI behaviour tests."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from elreadme.cli import _build_parser, main


def test_cli_defaults_to_stdin() -> None:
    args = _build_parser().parse_args([])
    assert args.source == "-"
    assert args.offline is False
    assert args.verbose is False


def test_cli_accepts_flags() -> None:
    args = _build_parser().parse_args(["widget.el", "-o", "README.md", "--offline", "-v"])
    assert args.source == "widget.el"
    assert args.output == "README.md"
    assert args.offline is True
    assert args.verbose is True


def test_main_writes_output_file(tmp_path: Path, source_builder) -> None:
    source_builder.with_commentary([";; Widgets are great."])
    source_builder.with_code('(defun widget-make () "Makes a widget.")')
    source = source_builder.write(tmp_path)
    output = tmp_path / "README.md"

    main([str(source), "-o", str(output), "--offline", "--config", str(tmp_path)])

    markdown = output.read_text(encoding="utf-8")
    assert markdown.startswith("## widget.el\n*does widgets*\n")
    assert "#### `(widget-make)`" in markdown


def test_main_reads_stdin_and_writes_stdout(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path, source_builder
) -> None:
    source_builder.with_commentary([";; From stdin."])
    monkeypatch.setattr("sys.stdin", io.StringIO(source_builder.text()))

    main(["--offline", "--config", str(tmp_path)])

    captured = capsys.readouterr()
    assert "From stdin." in captured.out
    assert "From stdin." not in captured.err
    assert "No known license" in captured.err


def test_main_exits_when_source_missing(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.el"), "--offline", "--config", str(tmp_path)])
    assert excinfo.value.code == 1


def test_main_exits_on_bad_config(tmp_path: Path) -> None:
    (tmp_path / ".elreadme.yml").write_text("- nope\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["--offline", "--config", str(tmp_path)])
    assert excinfo.value.code == 1


def test_main_writes_diagnostics_to_log_file(tmp_path: Path, source_builder) -> None:
    source_builder.with_commentary([";; Logged run."])
    source = source_builder.write(tmp_path)
    output = tmp_path / "README.md"
    log_file = tmp_path / "elreadme.log"

    main([str(source), "-o", str(output), "--offline", "--config", str(tmp_path), "--log-file", str(log_file)])

    logger = logging.getLogger("elreadme")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    text = log_file.read_text(encoding="utf-8")
    assert "No known license" in text
    assert f"Read {len(source_builder.lines())} lines" in text
    assert f"README written to {output}" in text


def test_main_exits_when_log_file_unwritable(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--offline", "--config", str(tmp_path), "--log-file", str(tmp_path / "missing" / "x.log")])
    assert excinfo.value.code == 1
