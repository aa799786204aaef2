"""Tests for the interactive run configuration prompts."""

from __future__ import annotations

import pytest

from gasgit.models import RunConfig
from gasgit.prompts import QUESTIONS, PromptError, collect_run_config


def _scripted(answers):
    asked = []
    remaining = list(answers)

    def ask(prompt: str) -> str:
        asked.append(prompt)
        return remaining.pop(0)

    return ask, asked


def test_collect_run_config_returns_answers() -> None:
    ask, asked = _scripted(["  1AbCdEf  ", "y", "https://github.com/acme/scripts.git"])

    config = collect_run_config(ask)

    assert config == RunConfig(
        script_id="1AbCdEf",
        sanitize=True,
        repo_url="https://github.com/acme/scripts.git",
    )
    assert asked == [question.prompt for question in QUESTIONS]


@pytest.mark.parametrize("answer", ["N", "no", "yes", "x"])
def test_collect_run_config_only_y_enables_sanitize(answer: str) -> None:
    ask, _ = _scripted(["id", answer, "url"])

    assert collect_run_config(ask).sanitize is False


def test_collect_run_config_stops_at_first_blank_answer() -> None:
    ask, asked = _scripted(["   ", "y", "url"])

    with pytest.raises(PromptError, match="Script ID cannot be blank"):
        collect_run_config(ask)
    assert len(asked) == 1


def test_collect_run_config_requires_sanitize_answer() -> None:
    ask, _ = _scripted(["id", "", "url"])

    with pytest.raises(PromptError, match="whether to sanitize"):
        collect_run_config(ask)


def test_collect_run_config_requires_repo_url() -> None:
    ask, _ = _scripted(["id", "N", "\t"])

    with pytest.raises(PromptError, match="REPO URL cannot be blank"):
        collect_run_config(ask)
