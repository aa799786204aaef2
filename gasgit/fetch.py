"""Wrapper around the clasp CLI used to pull Apps Script projects."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Callable

from .config import FetchConfig
from .logging import get_logger
from .process import run_command

_CLASP_PROJECT_FILE = ".clasp.json"


class FetchError(RuntimeError):
    """Raised when the Apps Script project cannot be cloned."""


class ClaspFetcher:
    """Populates a scratch directory with an Apps Script project's files."""

    def __init__(
        self,
        config: FetchConfig | None = None,
        runner: Callable[..., str] | None = None,
    ) -> None:
        self.config = config or FetchConfig()
        self._runner = runner or run_command
        self.logger = get_logger("fetch")

    def fetch(self, script_id: str, workdir: Path) -> Path:
        """Clone ``script_id`` into a freshly emptied ``workdir``."""
        if workdir.exists():
            shutil.rmtree(workdir)
        workdir.mkdir(parents=True)

        try:
            self._runner(
                [self.config.command, "clone", script_id],
                cwd=workdir,
                env=self._clone_env(),
            )
        except Exception as exc:
            raise FetchError(
                f"Cloning failed. Check Script ID or clasp auth.\n{exc}"
            ) from exc

        # The project binding would otherwise be published with the sources.
        project_file = workdir / _CLASP_PROJECT_FILE
        if project_file.exists():
            project_file.unlink()
        return workdir

    def _clone_env(self) -> dict[str, str] | None:
        if not self.config.insecure_tls:
            return None
        self.logger.warning("⚠️ TLS certificate verification disabled for this clone only.")
        env = os.environ.copy()
        env["NODE_TLS_REJECT_UNAUTHORIZED"] = "0"
        return env


__all__ = ["ClaspFetcher", "FetchError"]
