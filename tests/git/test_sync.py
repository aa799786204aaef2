"""Tests for the pull/commit/push cycle."""

from __future__ import annotations

from pathlib import Path

from gasgit.config import GitConfig
from gasgit.git.sync import RepoSync
from gasgit.process import CommandError
from tests._fixtures.tree_builder import make_git_dir


def _recording_runner(calls, failing=()):
    def runner(args, cwd, env=None, capture_output=False):
        command = list(args)
        calls.append((command, Path(cwd), capture_output))
        if tuple(command[:3]) in failing:
            raise CommandError(command, 1, stderr="boom")
        if command == ["git", "status"]:
            return "On branch main"
        return ""

    return runner


def test_ensure_repository_initialises_missing_repo(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    calls = []

    syncer = RepoSync(GitConfig(), runner=_recording_runner(calls))
    created = syncer.ensure_repository(repo, "https://github.com/acme/scripts.git")

    assert created is True
    assert repo.is_dir()
    assert [call[0] for call in calls] == [
        ["git", "init"],
        ["git", "checkout", "-B", "main"],
        ["git", "remote", "add", "origin", "https://github.com/acme/scripts.git"],
    ]
    assert all(call[1] == repo for call in calls)


def test_ensure_repository_skips_existing_repo(tmp_path: Path) -> None:
    make_git_dir(tmp_path)
    calls = []

    syncer = RepoSync(runner=_recording_runner(calls))

    assert syncer.ensure_repository(tmp_path, "url") is False
    assert calls == []


def test_sync_runs_full_cycle(tmp_path: Path) -> None:
    calls = []
    syncer = RepoSync(GitConfig(branch="trunk", remote="upstream"), runner=_recording_runner(calls))

    outcome = syncer.sync(tmp_path, sanitized=True)

    assert outcome.committed is True
    assert outcome.pushed is True
    assert [call[0] for call in calls] == [
        ["git", "pull", "--rebase", "upstream", "trunk"],
        ["git", "add", "-A"],
        ["git", "status"],
        ["git", "commit", "-am", "GAS export - auto update (sanitized)"],
        ["git", "pull", "--rebase", "upstream", "trunk"],
        ["git", "push", "upstream", "trunk"],
    ]
    assert calls[2][2] is True


def test_sync_tolerates_pull_and_commit_failures(tmp_path: Path) -> None:
    calls = []
    runner = _recording_runner(calls, failing={("git", "pull", "--rebase"), ("git", "commit", "-am")})

    outcome = RepoSync(runner=runner).sync(tmp_path)

    assert outcome.committed is False
    assert outcome.pushed is True
    assert calls[-1][0] == ["git", "push", "origin", "main"]
    assert ["git", "commit", "-am", "GAS export - auto update"] in [call[0] for call in calls]


def test_sync_reports_push_failure(tmp_path: Path) -> None:
    calls = []
    runner = _recording_runner(calls, failing={("git", "push", "origin")})

    outcome = RepoSync(runner=runner).sync(tmp_path)

    assert outcome.committed is True
    assert outcome.pushed is False


def test_commit_message_marks_sanitized_exports() -> None:
    syncer = RepoSync(GitConfig(commit_message="export"))

    assert syncer.commit_message(sanitized=False) == "export"
    assert syncer.commit_message(sanitized=True) == "export (sanitized)"
