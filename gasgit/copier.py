"""Full-replace copy of the fetched project into the repository tree."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List


class CopyError(RuntimeError):
    """Raised when the copy destination would clobber repository metadata."""


def check_destination(destination: Path, repo_root: Path) -> None:
    """Refuse destinations whose removal would delete the repository history.

    The destination must be a directory strictly inside ``repo_root`` and must not
    itself be a repository.
    """
    dest = destination.resolve()
    root = repo_root.resolve()
    if dest == root or dest in root.parents:
        raise CopyError(
            f"Destination {destination} contains the repository root {repo_root}; "
            "choose a project directory inside the repository."
        )
    if (dest / ".git").exists():
        raise CopyError(f"Destination {destination} holds a .git entry and will not be replaced.")


def replace_tree(source: Path, destination: Path, *, repo_root: Path) -> List[str]:
    """Delete ``destination`` and recreate it as a copy of ``source``.

    Returns the names of the copied top-level entries.
    """
    check_destination(destination, repo_root)
    if destination.exists():
        shutil.rmtree(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, destination)
    return sorted(entry.name for entry in destination.iterdir())


__all__ = ["CopyError", "check_destination", "replace_tree"]
