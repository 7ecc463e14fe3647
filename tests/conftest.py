"""Shared fixtures for the slsinit test suite."""

from __future__ import annotations

from collections.abc import Callable
import io
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

SERVERLESS_YML = """\
service: service
provider:
  name: aws
"""


class ScriptedPrompts:
    """Prompt engine answering from a script keyed by question.

    Asking a question that is not scripted fails the test. Text answers go
    through the validator, so an ``INVALID_ANSWER`` surfaces to the caller.
    """

    def __init__(
        self, select: dict[str, Any] | None = None, text: dict[str, str] | None = None
    ) -> None:
        self.select_answers = dict(select or {})
        self.text_answers = dict(text or {})
        self.asked: list[str] = []
        self.defaults: dict[str, str | None] = {}

    def select(self, question: str, options: list[Any], labels: list[str]) -> Any:
        self.asked.append(question)
        if question not in self.select_answers:
            raise AssertionError(f"Unexpected prompt: {question!r}")
        answer = self.select_answers[question]
        assert answer in options
        return answer

    def text(
        self,
        question: str,
        default: str | None = None,
        validate: Callable[[str], None] | None = None,
    ) -> str:
        self.asked.append(question)
        self.defaults[question] = default
        if question not in self.text_answers:
            raise AssertionError(f"Unexpected prompt: {question!r}")
        answer = self.text_answers[question]
        if validate is not None:
            validate(answer)
        return answer


class FakeFetcher:
    """Template fetcher recording calls and writing a minimal service."""

    def __init__(self, extra_files: dict[str, str] | None = None, error: Exception | None = None):
        self.extra_files = extra_files or {}
        self.error = error
        self.calls: list[tuple[str, str | None, Path]] = []

    def __call__(self, url: str, project_type: str | None, project_dir: Path) -> None:
        self.calls.append((url, project_type, project_dir))
        if self.error is not None:
            raise self.error
        project_dir.mkdir()
        (project_dir / "serverless.yml").write_text(SERVERLESS_YML)
        for name, content in self.extra_files.items():
            (project_dir / name).write_text(content)


class FakeProcessRunner:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, list[str], Path]] = []

    def __call__(self, command: str, args: Any, cwd: Path) -> None:
        self.calls.append((command, list(args), cwd))
        if self.error is not None:
            raise self.error


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    return Console(file=output, width=200, force_terminal=False)


@pytest.fixture
def local_template(tmp_path: Path) -> Path:
    """A local template directory outside the working directory."""
    template = tmp_path / "templates" / "aws-nodejs"
    template.mkdir(parents=True)
    (template / "serverless.yml").write_text(
        "service: aws-nodejs # NOTE: update this with your service name\n"
        "\n"
        "provider:\n"
        "  name: aws\n"
        "  runtime: nodejs14.x\n"
    )
    (template / "handler.js").write_text("module.exports.hello = async () => ({});\n")
    (template / ".gitignore").write_text("node_modules\n")
    return template


@pytest.fixture
def working_dir(tmp_path: Path) -> Path:
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    return cwd
