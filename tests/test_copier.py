"""Tests for the full-replace project copy."""

from __future__ import annotations

from pathlib import Path

import pytest

from gasgit.copier import CopyError, replace_tree
from tests._fixtures.tree_builder import TreeBuilder, make_git_dir


def test_replace_tree_replaces_destination(tree_builder: TreeBuilder, tmp_path: Path) -> None:
    tree_builder.write({"Code.gs": "a\n", "lib/util.js": "b\n"})
    repo = tmp_path / "repo"
    make_git_dir(repo)
    destination = repo / "script"
    (destination / "old").mkdir(parents=True)
    (destination / "old" / "stale.js").write_text("stale", encoding="utf-8")

    copied = replace_tree(tree_builder.path(), destination, repo_root=repo)

    assert copied == ["Code.gs", "lib"]
    assert not (destination / "old").exists()
    assert (destination / "lib" / "util.js").read_text(encoding="utf-8") == "b\n"
    assert (repo / ".git").is_dir()


def test_replace_tree_refuses_repo_root(tree_builder: TreeBuilder, tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    git_dir = make_git_dir(repo)

    with pytest.raises(CopyError):
        replace_tree(tree_builder.path(), repo, repo_root=repo)
    assert git_dir.is_dir()


def test_replace_tree_refuses_parent_of_repo(tree_builder: TreeBuilder, tmp_path: Path) -> None:
    repo = tmp_path / "outer" / "repo"
    make_git_dir(repo)

    with pytest.raises(CopyError):
        replace_tree(tree_builder.path(), tmp_path / "outer", repo_root=repo)
    assert (repo / ".git").is_dir()


def test_replace_tree_refuses_nested_repository(tree_builder: TreeBuilder, tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    make_git_dir(repo)
    nested = repo / "script"
    make_git_dir(nested)

    with pytest.raises(CopyError, match=".git"):
        replace_tree(tree_builder.path(), nested, repo_root=repo)
    assert (nested / ".git").is_dir()
