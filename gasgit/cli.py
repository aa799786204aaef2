"""CLI entrypoints for gasgit commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable

from .config import ConfigError, GasGitConfig, load_config
from .git.recovery import RepoRecovery
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator
from .prompts import PromptError, collect_run_config
from .sanitizer import Sanitizer


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gasgit",
        description="Export Google Apps Script projects to a git repository.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .gasgit.yml or the directory containing it (defaults to current directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser(
        "sync",
        help="Clone a script project, optionally sanitize it, and push it to git.",
    )
    _add_verbose_option(sync_parser, suppress_default=True)

    sanitize_parser = subparsers.add_parser(
        "sanitize",
        help="Redact API paths in script sources below a directory.",
    )
    _add_verbose_option(sanitize_parser, suppress_default=True)
    sanitize_parser.add_argument("path", help="Directory to sanitize in place.")

    recover_parser = subparsers.add_parser(
        "recover",
        help="Abort a stuck rebase and remove a stale index lock.",
    )
    _add_verbose_option(recover_parser, suppress_default=True)
    recover_parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Repository root (defaults to the configured repo_root).",
    )

    return parser


def main(argv: list[str] | None = None, *, ask: Callable[[str], str] = input) -> int:
    """CLI entrypoint for gasgit commands; returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(verbose=bool(args.verbose), log_file=config.paths.log_file)
    logger = get_logger("cli")

    if args.command == "sync":
        return _run_sync(config, ask)
    if args.command == "sanitize":
        summary = Sanitizer(config.sanitizer).sanitize_tree(Path(args.path))
        logger.info(
            "✅ Sanitized %d files, %d lines redacted.",
            len(summary.files_sanitized),
            len(summary.events),
        )
        return 1 if summary.failures else 0
    if args.command == "recover":
        repo_root = Path(args.path) if args.path else config.paths.repo_root
        if not RepoRecovery().recover(repo_root):
            logger.error("❌ Rebase cleanup failed. Please resolve manually.")
            return 1
        logger.info("✅ Repository is ready to sync.")
        return 0
    parser.exit(1, "Unknown command\n")  # pragma: no cover - argparse enforces choices
    return 1  # pragma: no cover


def _run_sync(config: GasGitConfig, ask: Callable[[str], str]) -> int:
    logger = get_logger("cli")
    try:
        run_config = collect_run_config(ask)
    except PromptError as exc:
        logger.error("❌ ERROR: %s", exc)
        return 1
    except (EOFError, KeyboardInterrupt):
        logger.error("❌ ERROR: Input aborted before all questions were answered.")
        return 1

    succeeded = Orchestrator(config).run(run_config)
    return 0 if succeeded else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
