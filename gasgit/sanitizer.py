"""Line-oriented redaction of API paths and URLs in script sources."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List, Protocol, Sequence, Tuple

from .config import SanitizerConfig
from .logging import get_logger
from .models import LineKind, RedactionEvent, SanitizeSummary, SourceLine

# A path run starts at "/" and stops at a quote, backslash or whitespace.
_PATH_RUN = re.compile(r"(/[^'\"\\\s]*)")
_LINE = re.compile(r"([^\r\n]*)(\r\n|\r|\n)")


class RedactionMatcher(Protocol):
    """Decides which lines are redacted and how."""

    def is_redaction_candidate(self, line: str) -> bool:
        ...

    def redact(self, line: str) -> str:
        ...


class KeywordPathMatcher:
    """Flags lines that mention an API keyword and rewrites their tokens.

    Identifiers become ``placeholder`` first, then every ``/``-prefixed run becomes
    ``redaction_marker``. Placeholders already present are rewritten again like
    any other identifier.
    """

    def __init__(
        self,
        api_keywords: Sequence[str],
        identifier_pattern: str,
        *,
        placeholder: str = "Domain",
        redaction_marker: str = "/<REDACTED_PATH>/",
    ) -> None:
        self.api_keywords = tuple(api_keywords)
        # ASCII classes: a non-ASCII letter ends an identifier.
        self._identifier = re.compile(identifier_pattern, re.ASCII)
        self.placeholder = placeholder
        self.redaction_marker = redaction_marker

    @classmethod
    def from_config(cls, config: SanitizerConfig) -> "KeywordPathMatcher":
        return cls(
            config.api_keywords,
            config.identifier_pattern,
            placeholder=config.placeholder,
            redaction_marker=config.redaction_marker,
        )

    def is_redaction_candidate(self, line: str) -> bool:
        if not any(keyword in line for keyword in self.api_keywords):
            return False
        return self._identifier.search(line) is not None

    def redact(self, line: str) -> str:
        # Callables keep backslashes in the replacement text literal.
        updated = self._identifier.sub(lambda _match: self.placeholder, line)
        return _PATH_RUN.sub(lambda _match: self.redaction_marker, updated)


def split_lines(text: str) -> List[Tuple[str, str]]:
    """Split ``text`` into ``(content, terminator)`` pairs without losing bytes."""
    pairs: List[Tuple[str, str]] = []
    position = 0
    for match in _LINE.finditer(text):
        pairs.append((match.group(1), match.group(2)))
        position = match.end()
    if position < len(text):
        pairs.append((text[position:], ""))
    return pairs


def classify_line(
    raw: str,
    number: int,
    matcher: RedactionMatcher,
    comment_prefixes: Sequence[str],
    *,
    ending: str = "",
) -> SourceLine:
    """Return the classified form of a single line."""
    # A leading byte-order mark counts as whitespace.
    trimmed = raw.strip().strip("\ufeff").strip()
    if not trimmed:
        kind = LineKind.BLANK
    elif trimmed.startswith(tuple(comment_prefixes)):
        kind = LineKind.COMMENT
    elif matcher.is_redaction_candidate(trimmed):
        kind = LineKind.CANDIDATE
    else:
        kind = LineKind.UNCHANGED
    return SourceLine(raw=raw, ending=ending, trimmed=trimmed, number=number, kind=kind)


class Sanitizer:
    """Walks a directory tree and redacts candidate lines in place."""

    def __init__(
        self,
        config: SanitizerConfig | None = None,
        matcher: RedactionMatcher | None = None,
    ) -> None:
        self.config = config or SanitizerConfig()
        self.matcher = matcher or KeywordPathMatcher.from_config(self.config)
        self.logger = get_logger("sanitizer")

    def sanitize_text(self, text: str, path: Path) -> Tuple[str, List[RedactionEvent]]:
        """Return the redacted text and one event per rewritten line."""
        output: List[str] = []
        events: List[RedactionEvent] = []
        for index, (raw, ending) in enumerate(split_lines(text), start=1):
            line = classify_line(
                raw, index, self.matcher, self.config.comment_prefixes, ending=ending
            )
            if line.kind is not LineKind.CANDIDATE:
                output.append(line.raw + line.ending)
                continue
            updated = self.matcher.redact(line.trimmed)
            events.append(
                RedactionEvent(
                    path=path,
                    line_number=line.number,
                    original=line.trimmed,
                    updated=updated,
                )
            )
            output.append(updated + line.ending)
        return "".join(output), events

    def sanitize_file(self, path: Path) -> List[RedactionEvent]:
        """Redact a single file in place and log every change."""
        with path.open("r", encoding="utf-8", newline="") as handle:
            content = handle.read()
        updated, events = self.sanitize_text(content, path)
        for event in events:
            self.logger.info(event.describe())
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(updated)
        self.logger.info("✔️ File sanitized: %s", path)
        return events

    def sanitize_tree(self, root: Path) -> SanitizeSummary:
        """Sanitize every allow-listed file below ``root``.

        Directories are visited with an explicit stack and symlinks are skipped.
        A file that cannot be read or written is logged and skipped.
        """
        summary = SanitizeSummary()
        extensions = tuple(self.config.file_extensions)
        stack: List[Path] = [Path(root)]
        while stack:
            directory = stack.pop()
            try:
                with os.scandir(directory) as iterator:
                    entries = sorted(iterator, key=lambda entry: entry.name)
            except OSError as exc:
                self.logger.error("❌ ERROR: Could not read directory %s. Reason: %s", directory, exc)
                summary.failures[directory] = str(exc)
                continue

            subdirectories: List[Path] = []
            for entry in entries:
                path = Path(entry.path)
                if entry.is_symlink():
                    continue
                if entry.is_dir(follow_symlinks=False):
                    subdirectories.append(path)
                    continue
                if not entry.name.endswith(extensions):
                    continue
                try:
                    summary.events.extend(self.sanitize_file(path))
                except (OSError, UnicodeError) as exc:
                    self.logger.error(
                        "❌ ERROR: Could not sanitize file %s. Reason: %s", path, exc
                    )
                    summary.failures[path] = str(exc)
                    continue
                summary.files_sanitized.append(path)
            # Reverse so the alphabetically first directory is popped first.
            stack.extend(reversed(subdirectories))
        return summary


__all__ = [
    "KeywordPathMatcher",
    "RedactionMatcher",
    "Sanitizer",
    "classify_line",
    "split_lines",
]
