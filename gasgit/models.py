"""Core data models shared across gasgit components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

_EVENT_RULE = "──────────────────────────"


class LineKind(str, Enum):
    """Classification assigned to a single line of source text."""

    BLANK = "blank"
    COMMENT = "comment"
    CANDIDATE = "candidate"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class SourceLine:
    """One line of a source file, split from its terminator."""

    raw: str
    ending: str
    trimmed: str
    number: int
    kind: LineKind


@dataclass(frozen=True)
class RedactionEvent:
    """Audit record for one rewritten line."""

    path: Path
    line_number: int
    original: str
    updated: str

    def describe(self) -> str:
        return (
            f"📄 File: {self.path}\n"
            f"🔢 Line: {self.line_number}\n"
            f"🧩 Match: {self.original}\n"
            f"✂️ Updated: {self.updated}\n"
            f"{_EVENT_RULE}"
        )


@dataclass
class SanitizeSummary:
    """Outcome of a sanitizer walk over a directory tree."""

    events: List[RedactionEvent] = field(default_factory=list)
    files_sanitized: List[Path] = field(default_factory=list)
    failures: Dict[Path, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RunConfig:
    """Answers collected from the operator before any side effects run."""

    script_id: str
    sanitize: bool
    repo_url: str


@dataclass(frozen=True)
class RepoControlState:
    """Control-state markers that block a pull/commit/push cycle."""

    rebase_markers: Tuple[Path, ...] = ()
    lock_file: Optional[Path] = None

    @property
    def clean(self) -> bool:
        return not self.rebase_markers and self.lock_file is None
