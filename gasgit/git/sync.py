"""Pull-rebase, commit, and push cycle for the export repository."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

from ..config import GitConfig
from ..logging import get_logger
from ..process import run_command


@dataclass(frozen=True)
class SyncOutcome:
    """Result of one sync attempt."""

    committed: bool
    pushed: bool


class RepoSync:
    """Initialises the export repository and pushes its contents."""

    def __init__(
        self,
        git_config: GitConfig | None = None,
        runner: Callable[..., str] | None = None,
    ) -> None:
        self.config = git_config or GitConfig()
        self._runner = runner or run_command
        self.logger = get_logger("git.sync")

    def ensure_repository(self, repo_root: Path | str, remote_url: str) -> bool:
        """Create the repository and register the remote if ``.git`` is missing.

        Returns True when a new repository was initialised.
        """
        repo = Path(repo_root)
        if (repo / ".git").exists():
            return False
        repo.mkdir(parents=True, exist_ok=True)
        self._run(["git", "init"], cwd=repo)
        self._run(["git", "checkout", "-B", self.config.branch], cwd=repo)
        self._run(["git", "remote", "add", self.config.remote, remote_url], cwd=repo)
        return True

    def commit_message(self, *, sanitized: bool) -> str:
        message = self.config.commit_message
        return f"{message} (sanitized)" if sanitized else message

    def sync(self, repo_root: Path | str, *, sanitized: bool = False) -> SyncOutcome:
        """Pull, stage, commit, and push.

        Pull and commit failures are logged and skipped; a push failure is
        reported through ``SyncOutcome.pushed``. Staging errors propagate.
        """
        repo = Path(repo_root)
        remote, branch = self.config.remote, self.config.branch

        try:
            self._run(["git", "pull", "--rebase", remote, branch], cwd=repo)
        except Exception:
            self.logger.warning("⚠️ WARNING: Pull failed. Proceeding anyway.")

        self._run(["git", "add", "-A"], cwd=repo)
        self.logger.info("📋 Git status:")
        self.logger.info(self._run(["git", "status"], cwd=repo, capture_output=True))

        committed = False
        try:
            self._run(
                ["git", "commit", "-am", self.commit_message(sanitized=sanitized)], cwd=repo
            )
            committed = True
        except Exception:
            self.logger.info("ℹ️ No changes to commit")

        try:
            self._run(["git", "pull", "--rebase", remote, branch], cwd=repo)
        except Exception:
            self.logger.warning("⚠️ WARNING: Merge conflict detected during rebase")

        try:
            self._run(["git", "push", remote, branch], cwd=repo)
        except Exception as exc:
            self.logger.error("❌ Push failed. Check logs above for Git conflict resolution.")
            self.logger.error("❌ Git error: %s", exc)
            return SyncOutcome(committed=committed, pushed=False)

        self.logger.info("✅ Push successful!")
        return SyncOutcome(committed=committed, pushed=True)

    # ------------------------------------------------------------------
    # Helpers

    def _run(
        self,
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        return self._runner(args, cwd=cwd, capture_output=capture_output)


__all__ = ["RepoSync", "SyncOutcome"]
