"""Configuration loading for gasgit (.gasgit.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".gasgit.yml"

DEFAULT_API_KEYWORDS = ("/api/", "/cm/", "/bots/", "/v1/", "/v2/")
DEFAULT_FILE_EXTENSIONS = (".js", ".gs")
DEFAULT_IDENTIFIER_PATTERN = r"\b([a-zA-Z_][a-zA-Z0-9_]*)\b"
DEFAULT_COMMENT_PREFIXES = ("//", "/*", "*")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PathsConfig:
    """Working directories used by a sync run."""

    clasp_root: Path
    repo_root: Path
    project_dir: str = "gas-project"
    log_file: Path = Path("SanitizingOutput.txt")

    @property
    def project_path(self) -> Path:
        return self.repo_root / self.project_dir


@dataclass
class SanitizerConfig:
    """Redaction heuristics applied to fetched script sources."""

    api_keywords: List[str] = field(default_factory=lambda: list(DEFAULT_API_KEYWORDS))
    file_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_FILE_EXTENSIONS))
    identifier_pattern: str = DEFAULT_IDENTIFIER_PATTERN
    placeholder: str = "Domain"
    redaction_marker: str = "/<REDACTED_PATH>/"
    comment_prefixes: List[str] = field(default_factory=lambda: list(DEFAULT_COMMENT_PREFIXES))


@dataclass
class GitConfig:
    """Remote, branch, and commit settings for the sync cycle."""

    remote: str = "origin"
    branch: str = "main"
    commit_message: str = "GAS export - auto update"


@dataclass
class FetchConfig:
    """Settings for the clasp fetch tool."""

    command: str = "clasp"
    insecure_tls: bool = False


@dataclass
class GasGitConfig:
    """Represents the settings defined in .gasgit.yml."""

    root: Path
    paths: PathsConfig
    sanitizer: SanitizerConfig = field(default_factory=SanitizerConfig)
    git: GitConfig = field(default_factory=GitConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)


def default_config(root: Path) -> GasGitConfig:
    """Return the configuration used when no .gasgit.yml exists."""
    return GasGitConfig(root=root, paths=_default_paths(root))


def load_config(config_path: Path) -> GasGitConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return default_config(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    paths = _default_paths(root)
    paths_data = _as_dict(data.get("paths"))
    if paths_data:
        clasp_root = _as_str(paths_data.get("clasp_root"))
        repo_root = _as_str(paths_data.get("repo_root"))
        project_dir = _as_str(paths_data.get("project_dir"))
        log_file = _as_str(paths_data.get("log_file"))
        if clasp_root:
            paths.clasp_root = _resolve_path(root, clasp_root)
        if repo_root:
            paths.repo_root = _resolve_path(root, repo_root)
        if project_dir:
            paths.project_dir = project_dir
        if log_file:
            paths.log_file = _resolve_path(root, log_file)

    sanitizer = SanitizerConfig()
    sanitizer_data = _as_dict(data.get("sanitizer"))
    if sanitizer_data:
        keywords = _as_str_list(sanitizer_data.get("api_keywords"))
        extensions = _as_str_list(sanitizer_data.get("file_extensions"))
        comment_prefixes = _as_str_list(sanitizer_data.get("comment_prefixes"))
        if keywords:
            sanitizer.api_keywords = keywords
        if extensions:
            sanitizer.file_extensions = extensions
        if comment_prefixes:
            sanitizer.comment_prefixes = comment_prefixes
        pattern = _as_str(sanitizer_data.get("identifier_pattern"))
        if pattern:
            sanitizer.identifier_pattern = pattern
        placeholder = _as_str(sanitizer_data.get("placeholder"))
        if placeholder:
            sanitizer.placeholder = placeholder
        marker = _as_str(sanitizer_data.get("redaction_marker"))
        if marker:
            sanitizer.redaction_marker = marker
    _validate_pattern(sanitizer.identifier_pattern)

    git = GitConfig()
    git_data = _as_dict(data.get("git"))
    if git_data:
        git.remote = _as_str(git_data.get("remote")) or git.remote
        git.branch = _as_str(git_data.get("branch")) or git.branch
        git.commit_message = _as_str(git_data.get("commit_message")) or git.commit_message

    fetch = FetchConfig()
    fetch_data = _as_dict(data.get("fetch"))
    if fetch_data:
        fetch.command = _as_str(fetch_data.get("command")) or fetch.command
        fetch.insecure_tls = _as_bool(fetch_data.get("insecure_tls")) or False

    return GasGitConfig(root=root, paths=paths, sanitizer=sanitizer, git=git, fetch=fetch)


def _default_paths(root: Path) -> PathsConfig:
    return PathsConfig(
        clasp_root=root / "temp-clasp",
        repo_root=root / "AppScripts",
        log_file=root / "SanitizingOutput.txt",
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _resolve_path(root: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else root / path


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _validate_pattern(pattern: str) -> None:
    try:
        re.compile(pattern, re.ASCII)
    except re.error as exc:
        raise ConfigError(f"Invalid identifier_pattern {pattern!r}: {exc}") from exc


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
