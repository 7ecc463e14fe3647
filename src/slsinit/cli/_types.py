"""Types shared by the setup step and the CLI."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ProjectType(str, Enum):
    """Project types offered by the interactive template prompt."""

    AWS_NODEJS = "aws-nodejs"
    AWS_PYTHON3 = "aws-python3"
    OTHER = "other"

    @property
    def label(self) -> str:
        labels: dict[ProjectType, str] = {
            ProjectType.AWS_NODEJS: "AWS Node.js",
            ProjectType.AWS_PYTHON3: "AWS Python",
            ProjectType.OTHER: "Other",
        }
        return labels[self]

    @property
    def description(self) -> str:
        descriptions: dict[ProjectType, str] = {
            ProjectType.AWS_NODEJS: "Lambda function on Node.js with an HTTP endpoint.",
            ProjectType.AWS_PYTHON3: "Lambda function on Python 3 with an HTTP endpoint.",
            ProjectType.OTHER: "Browse more templates at https://github.com/serverless/examples",
        }
        return descriptions[self]


NAME_OPTION = "name"
TEMPLATE_OPTION = "template"
TEMPLATE_URL_OPTION = "template-url"
TEMPLATE_PATH_OPTION = "template-path"

TEMPLATE_OPTIONS: tuple[str, ...] = (TEMPLATE_OPTION, TEMPLATE_URL_OPTION, TEMPLATE_PATH_OPTION)
SERVICE_OPTIONS: tuple[str, ...] = (NAME_OPTION, *TEMPLATE_OPTIONS)


@dataclass(frozen=True, kw_only=True)
class SetupContext:
    """
    Input of a setup run.

    Attributes:
        service_dir: Directory of the service the user is in, if any.
        options: CLI flags by name (``name``, ``template``, ``template-url``, ``template-path``).
    """

    service_dir: Path | None = None
    options: Mapping[str, str | None] = field(default_factory=dict)

    def option(self, name: str) -> str | None:
        return self.options.get(name) or None


@dataclass(frozen=True)
class LocalPath:
    path: Path


@dataclass(frozen=True)
class NamedTemplate:
    """A template from the examples repository, carrying its name as the project type."""

    name: str
    url: str


@dataclass(frozen=True)
class RepoUrl:
    url: str
    project_type: None = None


@dataclass(frozen=True)
class Interactive:
    choice: ProjectType
    url: str


TemplateSource = LocalPath | NamedTemplate | RepoUrl | Interactive


@dataclass(frozen=True, kw_only=True)
class SetupResult:
    """Outcome of a completed setup run."""

    project_name: str
    project_dir: Path
    project_type: str | None
    dependencies_installed: bool = False
