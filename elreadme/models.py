"""Core data models shared across elreadme components."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from .transform.lines import format_header

CALLABLE = "callable"
MACRO = "macro-callable"
CONFIGURATION = "configuration"

MAX_REASON_LENGTH = 120


@dataclass(frozen=True)
class DocRecord:
    """Documentation extracted from one public declaration."""

    kind: str
    name: str
    title: str
    body: str

    @property
    def is_macro(self) -> bool:
        return self.kind == MACRO


@dataclass(frozen=True)
class ScanFailure:
    """A declaration whose documentation could not be extracted."""

    kind: str
    name: str
    reason: str

    def render(self) -> str:
        reason = " ".join(self.reason.split())
        if len(reason) > MAX_REASON_LENGTH:
            reason = reason[:MAX_REASON_LENGTH].rstrip("-") + "..."
        return f"<!-- Could not document {_comment_safe(self.name)}: {_comment_safe(reason)} -->"


def _comment_safe(text: str) -> str:
    # HTML comments may not contain "--".
    return re.sub(r"-(?=-)", "- ", text)


DocEntry = Union[DocRecord, ScanFailure]


@dataclass
class DeclarationDocs:
    """Declaration docs bucketed by kind, each in discovery order."""

    configuration_docs: List[DocEntry] = field(default_factory=list)
    callable_docs: List[DocEntry] = field(default_factory=list)


@dataclass(frozen=True)
class Badge:
    """A linked image rendered in the badge block."""

    alt: str
    image: str
    link: str


@dataclass(frozen=True)
class LicenseCandidate:
    """Catalog entry pairing a license name with its normalized text pattern."""

    name: str
    pattern: str
    badge: Badge


@dataclass(frozen=True)
class LicenseMatch:
    """Outcome of fingerprinting a comment block against the license catalog."""

    candidates: Tuple[LicenseCandidate, ...] = ()

    @property
    def status(self) -> str:
        if not self.candidates:
            return "none"
        if len(self.candidates) == 1:
            return "unique"
        return "ambiguous"

    @property
    def license(self) -> Optional[LicenseCandidate]:
        return self.candidates[0] if len(self.candidates) == 1 else None


@dataclass(frozen=True)
class RenderedSection:
    """A heading emitted into the README."""

    title: str
    level: int

    def render(self) -> str:
        return format_header(self.title, self.level)


class Phase(Enum):
    """Where a forward scan of the source currently sits."""

    BEFORE_COMMENTARY = "before-commentary"
    IN_COMMENTARY = "in-commentary"
    IN_CODE = "in-code"
    DONE = "done"


@dataclass
class SourceDocument:
    """One source file split into the regions the renderer consumes."""

    lines: Tuple[str, ...]
    title: Optional[str] = None
    subtitle: Optional[str] = None
    header_fields: Dict[str, str] = field(default_factory=dict)
    license_lines: List[str] = field(default_factory=list)
    commentary_lines: List[str] = field(default_factory=list)
    code_text: str = ""
    saw_commentary: bool = False
    saw_code: bool = False
