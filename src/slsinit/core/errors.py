"""Error taxonomy for the setup wizard."""

from __future__ import annotations

from enum import Enum


class SetupErrorKind(str, Enum):
    """Closed set of failures a setup step can signal."""

    NOT_APPLICABLE_SERVICE_OPTIONS = "NOT_APPLICABLE_SERVICE_OPTIONS"
    MULTIPLE_TEMPLATE_OPTIONS_PROVIDED = "MULTIPLE_TEMPLATE_OPTIONS_PROVIDED"
    INVALID_PROJECT_NAME = "INVALID_PROJECT_NAME"
    INVALID_ANSWER = "INVALID_ANSWER"
    TARGET_FOLDER_ALREADY_EXISTS = "TARGET_FOLDER_ALREADY_EXISTS"
    TEMPLATE_DOWNLOAD_FAILED = "TEMPLATE_DOWNLOAD_FAILED"
    INVALID_TEMPLATE = "INVALID_TEMPLATE"
    INVALID_TEMPLATE_URL = "INVALID_TEMPLATE_URL"
    INVALID_TEMPLATE_PATH = "INVALID_TEMPLATE_PATH"
    DEPENDENCIES_INSTALL_FAILED = "DEPENDENCIES_INSTALL_FAILED"


class SetupError(Exception):
    """
    A setup failure reported to the user.

    Attributes:
        kind: Which failure occurred.
        message: Human-readable explanation.
    """

    def __init__(self, kind: SetupErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def code(self) -> str:
        return self.kind.value

    def __repr__(self) -> str:
        return f"SetupError({self.kind.value}, {self.message!r})"


class TemplateFetchError(Exception):
    """Raised by template fetchers for failures other than a missing template."""
