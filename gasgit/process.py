"""Blocking subprocess helper shared by the clasp and git wrappers."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable, Sequence

from .logging import get_logger

_LOGGER = get_logger("process")


class CommandError(RuntimeError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(
        self,
        args: Sequence[str],
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = (stderr or stdout).strip()
        message = f"Command failed ({returncode}): {' '.join(self.command)}"
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message)


def run_command(
    args: Iterable[str],
    *,
    cwd: Path,
    env: dict[str, str] | None = None,
    capture_output: bool = False,
) -> str:
    """Run ``args`` in ``cwd`` and return stripped stdout when requested.

    Output is always piped so it never interleaves with the console log. There is
    no timeout: a hung command hangs the caller.
    """
    command = list(args)
    _LOGGER.info("📦 CMD: %s (in %s)", " ".join(command), cwd)
    try:
        completed = subprocess.run(
            command,
            cwd=str(cwd),
            env=env,
            check=False,
            text=True,
            capture_output=True,
        )
    except OSError as exc:
        raise CommandError(command, -1, stderr=str(exc)) from exc
    if completed.returncode != 0:
        raise CommandError(command, completed.returncode, completed.stdout, completed.stderr)
    if capture_output:
        return completed.stdout.strip()
    return ""


__all__ = ["CommandError", "run_command"]
