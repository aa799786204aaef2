"""Tests for the clasp fetch wrapper."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from gasgit.config import FetchConfig
from gasgit.fetch import ClaspFetcher, FetchError
from gasgit.process import CommandError


def test_fetch_clones_into_clean_workdir(tmp_path: Path) -> None:
    workdir = tmp_path / "temp-clasp"
    workdir.mkdir()
    (workdir / "leftover.js").write_text("old", encoding="utf-8")
    calls = []

    def runner(args, cwd, env=None, capture_output=False):
        calls.append((list(args), Path(cwd), env))
        assert not (Path(cwd) / "leftover.js").exists()
        (Path(cwd) / "Code.js").write_text("function main() {}\n", encoding="utf-8")
        (Path(cwd) / ".clasp.json").write_text('{"scriptId": "abc"}', encoding="utf-8")
        return ""

    result = ClaspFetcher(runner=runner).fetch("abc", workdir)

    assert result == workdir
    assert calls == [(["clasp", "clone", "abc"], workdir, None)]
    assert (workdir / "Code.js").exists()
    assert not (workdir / ".clasp.json").exists()


def test_fetch_scopes_insecure_tls_to_the_clone_call(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("NODE_TLS_REJECT_UNAUTHORIZED", raising=False)
    envs = []

    def runner(args, cwd, env=None, capture_output=False):
        envs.append(env)
        return ""

    fetcher = ClaspFetcher(FetchConfig(insecure_tls=True), runner=runner)
    fetcher.fetch("abc", tmp_path / "work")

    assert envs[0]["NODE_TLS_REJECT_UNAUTHORIZED"] == "0"
    assert "NODE_TLS_REJECT_UNAUTHORIZED" not in os.environ


def test_fetch_wraps_command_failure(tmp_path: Path) -> None:
    def runner(args, cwd, env=None, capture_output=False):
        raise CommandError(args, 1, stderr="Could not find script.")

    with pytest.raises(FetchError, match="Check Script ID or clasp auth"):
        ClaspFetcher(runner=runner).fetch("missing", tmp_path / "work")
