"""Project name and target directory validation."""

from __future__ import annotations

from pathlib import Path
import re

from slsinit.core.errors import SetupError, SetupErrorKind

_PROJECT_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

INVALID_PROJECT_NAME_MESSAGE = (
    "Project name is not valid.\n"
    "   - It should only contain alphanumeric characters, hyphens and underscores."
)


def is_valid_project_name(name: str) -> bool:
    # re's [A-Za-z0-9] is ASCII-only, so diacritics never match
    return _PROJECT_NAME_PATTERN.fullmatch(name) is not None


def validate_project_name(name: str) -> None:
    """Raise ``INVALID_PROJECT_NAME`` unless *name* is a usable project directory name."""
    if not is_valid_project_name(name):
        raise SetupError(SetupErrorKind.INVALID_PROJECT_NAME, INVALID_PROJECT_NAME_MESSAGE)


def ensure_available(project_dir: Path, *, interactive: bool) -> None:
    """
    Refuse to scaffold into an existing path.

    The error kind depends on where the name came from: an interactive answer is
    ``INVALID_ANSWER`` so the prompt asks again, a CLI flag is a hard
    ``TARGET_FOLDER_ALREADY_EXISTS``.
    """
    if project_dir.exists():
        kind = (
            SetupErrorKind.INVALID_ANSWER
            if interactive
            else SetupErrorKind.TARGET_FOLDER_ALREADY_EXISTS
        )
        raise SetupError(kind, f"Path {project_dir.name} is already taken")
