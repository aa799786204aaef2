"""Clears a stuck rebase or stale index lock before a sync attempt."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable, Iterable

from ..logging import get_logger
from ..models import RepoControlState
from ..process import run_command

_REBASE_MARKERS = ("rebase-merge", "rebase-apply")
_LOCK_FILE = "index.lock"


class RepoRecovery:
    """Brings a repository's control state back to a sync-ready condition.

    Assumes no other process touches the repository while ``recover`` runs.
    """

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        remove_tree: Callable[[Path], None] | None = None,
        remove_file: Callable[[Path], None] | None = None,
    ) -> None:
        self._runner = runner or run_command
        self._remove_tree = remove_tree or self._default_remove_tree
        self._remove_file = remove_file or self._default_remove_file
        self.logger = get_logger("git.recovery")

    def inspect(self, repo_root: Path | str) -> RepoControlState:
        """Return the rebase markers and index lock currently present."""
        git_dir = Path(repo_root) / ".git"
        markers = tuple(git_dir / name for name in _REBASE_MARKERS if (git_dir / name).exists())
        lock = git_dir / _LOCK_FILE
        return RepoControlState(rebase_markers=markers, lock_file=lock if lock.exists() else None)

    def recover(self, repo_root: Path | str) -> bool:
        """Abort a stuck rebase and drop a stale lock.

        Returns False when the caller must not pull, commit, or push in this pass.
        """
        repo = Path(repo_root)
        state = self.inspect(repo)

        if state.rebase_markers:
            self.logger.warning("⚠️ Git rebase in progress. Attempting to abort...")
            try:
                self._runner(["git", "rebase", "--abort"], cwd=repo)
            except Exception as exc:
                self.logger.error(
                    "❌ Failed to abort rebase: %s. Attempting to clean up...", exc
                )
                self._force_clean(self.inspect(repo).rebase_markers)
                self.logger.warning("⚠️ Rebase state cleaned. Trying again.")
                return False
            self.logger.info("✅ Rebase aborted successfully.")

        lock = repo / ".git" / _LOCK_FILE
        if lock.exists():
            self.logger.warning("⚠️ Git lock file detected. Attempting to remove...")
            try:
                self._remove_file(lock)
            except OSError as exc:
                self.logger.error("❌ Failed to remove lock file: %s", exc)
                return False
            self.logger.info("✅ Lock file removed successfully.")

        return True

    # ------------------------------------------------------------------
    # Helpers

    def _force_clean(self, markers: Iterable[Path]) -> None:
        for marker in markers:
            self._remove_tree(marker)

    @staticmethod
    def _default_remove_tree(path: Path) -> None:
        shutil.rmtree(path, ignore_errors=True)

    @staticmethod
    def _default_remove_file(path: Path) -> None:
        path.unlink()


__all__ = ["RepoRecovery"]
