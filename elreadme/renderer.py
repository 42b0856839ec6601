"""Assemble the README from the analysed pieces of one source file."""

from __future__ import annotations

from typing import Iterable, List, Optional

from jinja2 import Environment

from . import __version__
from .analyzers.declarations import collect_declarations
from .analyzers.header import header_value, package_name, repository_path, split_source
from .analyzers.license import match_license
from .config import ElReadmeConfig
from .logging import get_logger
from .models import DocEntry, DocRecord, RenderedSection, ScanFailure, SourceDocument
from .postproc.badges import BadgeManager
from .templating import create_environment
from .transform.lines import transform_line

TITLE_LEVEL = 2
SECTION_LEVEL = 3
ENTRY_LEVEL = 4

CUSTOMIZATION_TITLE = "Customization Documentation"
CALLABLES_TITLE = "Function and Macro Documentation"
SEPARATOR = "---"


class ReadmeRenderer:
    """Orders title, badges, commentary and declaration docs into Markdown."""

    def __init__(
        self,
        config: ElReadmeConfig | None = None,
        *,
        badge_manager: BadgeManager | None = None,
        env: Environment | None = None,
    ) -> None:
        self.config = config
        self._env = env or create_environment(config.templates_dir if config is not None else None)
        badge_config = config.badges if config is not None else None
        self.badge_manager = badge_manager or BadgeManager(badge_config, env=self._env)
        self.logger = get_logger("renderer")

    def render(self, lines: Iterable[str]) -> str:
        """Render the README for a file given as a sequence of lines."""
        return self.render_document(split_source(list(lines)))

    def render_document(self, document: SourceDocument) -> str:
        out: List[str] = []
        out.extend(self._title_block(document))
        out.append(f"\n{SEPARATOR}\n")
        out.extend(self._badge_block(document))
        out.append("\n")
        out.extend(self._commentary_block(document))
        out.extend(self._declaration_blocks(document))
        out.append(self._footer() + "\n")
        return "".join(out)

    def _title_block(self, document: SourceDocument) -> List[str]:
        if document.title is None:
            self.logger.warning("No `;;; NAME --- SUMMARY` title line found")
            return []
        block = [RenderedSection(document.title, TITLE_LEVEL).render() + "\n"]
        if document.subtitle:
            block.append(f"*{document.subtitle}*\n")
        return block

    def _badge_block(self, document: SourceDocument) -> List[str]:
        license_match = match_license(document.license_lines)
        badges = self.badge_manager.collect(
            license_match,
            package=package_name(document.title),
            repository=repository_path(header_value(document.header_fields, "URL", "Homepage")),
        )
        return [line + "\n" for line in self.badge_manager.render(badges)]

    def _commentary_block(self, document: SourceDocument) -> List[str]:
        if not document.saw_commentary:
            self.logger.warning("No `;;; Commentary:` section found; README will have no description")
            return []
        rendered = [transform_line(line) for line in document.commentary_lines]
        while rendered and not rendered[0].strip():
            rendered.pop(0)
        while rendered and not rendered[-1].strip():
            rendered.pop()
        return rendered

    def _declaration_blocks(self, document: SourceDocument) -> List[str]:
        if not document.saw_code:
            self.logger.warning("No `;;; Code:` section found; skipping declaration docs")
            return []
        docs = collect_declarations(document.code_text)
        out: List[str] = []
        for title, entries in (
            (CUSTOMIZATION_TITLE, docs.configuration_docs),
            (CALLABLES_TITLE, docs.callable_docs),
        ):
            if not entries:
                continue
            out.append("\n" + RenderedSection(title, SECTION_LEVEL).render() + "\n")
            for entry in entries:
                out.append(render_entry(entry))
        return out

    def _footer(self) -> str:
        footer: Optional[str] = self.config.footer if self.config is not None else None
        if footer:
            template = self._env.from_string(footer)
        else:
            template = self._env.get_template("footer.md.j2")
        return template.render(version=__version__)


def render_entry(entry: DocEntry) -> str:
    """Render one declaration as a level-4 heading followed by its docstring."""
    if isinstance(entry, ScanFailure):
        return f"\n{entry.render()}\n"
    heading = RenderedSection(entry_title(entry), ENTRY_LEVEL).render()
    if entry.body:
        return f"\n{heading}\n\n{entry.body}\n"
    return f"\n{heading}\n"


def entry_title(record: DocRecord) -> str:
    title = f"`{record.title}`"
    if record.is_macro:
        title += " (macro)"
    return title


__all__ = ["ReadmeRenderer", "entry_title", "render_entry"]
