"""CLI entrypoint for elreadme."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import CONFIG_FILENAME, ConfigError, load_config
from .logging import configure_logging, get_logger
from .renderer import ReadmeRenderer


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elreadme",
        description="Convert the headers and docstrings of an Emacs Lisp file to a Markdown README.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default="-",
        help="Emacs Lisp file to read (defaults to standard input).",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write the README here instead of standard output.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to a {CONFIG_FILENAME} file or the directory holding it (defaults to cwd).",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the MELPA and CI badge lookups.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write DEBUG-level diagnostics to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for elreadme."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(
            verbose=bool(args.verbose),
            log_file=Path(args.log_file) if args.log_file else None,
        )
    except OSError as exc:
        parser.exit(1, f"elreadme: cannot open log file {args.log_file}: {exc}\n")
    logger = get_logger("cli")

    try:
        config = load_config(Path(args.config) if args.config else Path.cwd())
    except (ConfigError, OSError) as exc:
        parser.exit(1, f"elreadme: {exc}\n")
    logger.debug("Using settings rooted at %s", config.root)
    if config.templates_dir is not None:
        logger.debug("Templates override directory: %s", config.templates_dir)
    if args.offline:
        config.badges.network = False

    try:
        lines = _read_lines(args.source)
    except OSError as exc:
        parser.exit(1, f"elreadme: cannot read {args.source}: {exc}\n")

    logger.debug("Read %d lines from %s", len(lines), args.source)
    markdown = ReadmeRenderer(config).render(lines)

    if args.output:
        try:
            Path(args.output).write_text(markdown, encoding="utf-8")
        except OSError as exc:
            parser.exit(1, f"elreadme: cannot write {args.output}: {exc}\n")
        logger.info("README written to %s", args.output)
    else:
        sys.stdout.write(markdown)


def _read_lines(source: str) -> List[str]:
    if source == "-":
        return sys.stdin.read().splitlines()
    return Path(source).read_text(encoding="utf-8").splitlines()


if __name__ == "__main__":
    main(sys.argv[1:])
