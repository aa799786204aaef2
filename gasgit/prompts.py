"""Interactive questions that produce the run configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from .models import RunConfig


class PromptError(RuntimeError):
    """Raised when a required answer is left blank."""


@dataclass(frozen=True)
class Question:
    key: str
    prompt: str
    blank_error: str


QUESTIONS = (
    Question(
        key="script_id",
        prompt="📄 Enter the Google Apps Script ID: ",
        blank_error="Google Apps Script ID cannot be blank.",
    ),
    Question(
        key="sanitize",
        prompt="🧹 Sanitize code before pushing? (Y/N): ",
        blank_error="You must specify whether to sanitize or not.",
    ),
    Question(
        key="repo_url",
        prompt="🔗 Enter the GitHub REPO URL: ",
        blank_error="GitHub REPO URL cannot be blank.",
    ),
)


def collect_run_config(ask: Callable[[str], str] = input) -> RunConfig:
    """Ask every question in order and validate before returning.

    Stops at the first blank answer; later questions are not asked.
    """
    answers: Dict[str, str] = {}
    for question in QUESTIONS:
        answer = ask(question.prompt).strip()
        if not answer:
            raise PromptError(question.blank_error)
        answers[question.key] = answer
    return RunConfig(
        script_id=answers["script_id"],
        sanitize=answers["sanitize"].upper() == "Y",
        repo_url=answers["repo_url"],
    )


__all__ = ["PromptError", "QUESTIONS", "Question", "collect_run_config"]
