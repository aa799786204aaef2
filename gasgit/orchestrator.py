"""One-shot pipeline: fetch, sanitize, copy, recover, and push."""

from __future__ import annotations

from datetime import datetime

from .config import GasGitConfig
from .copier import CopyError, replace_tree
from .fetch import ClaspFetcher, FetchError
from .git.recovery import RepoRecovery
from .git.sync import RepoSync
from .logging import get_logger
from .models import RunConfig
from .sanitizer import Sanitizer


class Orchestrator:
    """Coordinates a single export of an Apps Script project to git."""

    def __init__(
        self,
        config: GasGitConfig,
        fetcher: ClaspFetcher | None = None,
        sanitizer: Sanitizer | None = None,
        recovery: RepoRecovery | None = None,
        syncer: RepoSync | None = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher or ClaspFetcher(config.fetch)
        self.sanitizer = sanitizer or Sanitizer(config.sanitizer)
        self.recovery = recovery or RepoRecovery()
        self.syncer = syncer or RepoSync(config.git)
        self.logger = get_logger("orchestrator")

    def run(self, run_config: RunConfig) -> bool:
        """Execute the export; returns True only when the push succeeded."""
        self.logger.info("🚀 Operation started at %s", _timestamp())
        try:
            return self._run(run_config)
        except Exception as exc:
            self.logger.error("❌ UNEXPECTED ERROR: %s", exc)
            return False
        finally:
            self.logger.info("🕒 Finished at %s", _timestamp())

    def _run(self, run_config: RunConfig) -> bool:
        paths = self.config.paths

        self.logger.info("⚙️ STEP: Cloning GAS project...")
        try:
            self.fetcher.fetch(run_config.script_id, paths.clasp_root)
        except FetchError as exc:
            self.logger.error("❌ ERROR: %s", exc)
            self.logger.error("❌ Aborting operation.")
            return False

        if run_config.sanitize:
            self.logger.info("⚙️ STEP: Sanitizing files...")
            summary = self.sanitizer.sanitize_tree(paths.clasp_root)
            self.logger.debug(
                "Sanitized %d files with %d redactions (%d failures)",
                len(summary.files_sanitized),
                len(summary.events),
                len(summary.failures),
            )

        self.logger.info("📁 Copying files to GitHub directory...")
        try:
            copied = replace_tree(paths.clasp_root, paths.project_path, repo_root=paths.repo_root)
        except CopyError as exc:
            self.logger.error("❌ ERROR: %s", exc)
            return False
        self.logger.info("📂 Copied %s files:", "sanitized" if run_config.sanitize else "project")
        for name in copied:
            self.logger.info("   - %s", name)

        self.logger.info("⚙️ STEP: Git init or update...")
        self.syncer.ensure_repository(paths.repo_root, run_config.repo_url)

        if not self.recovery.recover(paths.repo_root):
            self.logger.error("❌ Rebase cleanup failed. Please resolve manually.")
            return False

        outcome = self.syncer.sync(paths.repo_root, sanitized=run_config.sanitize)
        if not outcome.pushed:
            self.logger.error("❌ DONE: Project failed to push. Resolve issues and retry.")
            return False

        self.logger.info("✅ DONE: Project pushed to GitHub!")
        return True


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


__all__ = ["Orchestrator"]
