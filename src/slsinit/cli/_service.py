"""Setup step creating a new service from a template."""

from __future__ import annotations

from functools import partial
from pathlib import Path

from rich.console import Console

from slsinit.cli._installer import ProcessRunner, install_dependencies, run_process
from slsinit.cli._prompts import Prompts
from slsinit.cli._templates import (
    TemplateCopier,
    TemplateFetcher,
    copy_local_template,
    download_template_from_repo,
    resolve_template_source,
)
from slsinit.cli._types import (
    NAME_OPTION,
    SERVICE_OPTIONS,
    Interactive,
    LocalPath,
    NamedTemplate,
    ProjectType,
    RepoUrl,
    SetupContext,
    SetupResult,
    TemplateSource,
)
from slsinit.cli._validation import ensure_available, validate_project_name
from slsinit.core.config import SetupConfig
from slsinit.core.errors import SetupError, SetupErrorKind

CONFIRM_CREATE_QUESTION = "No project detected. Do you want to create a new one?"
PROJECT_TYPE_QUESTION = "What do you want to make?"
PROJECT_NAME_QUESTION = "What do you want to call this project?"


class ServiceSetupStep:
    """
    Creates a new service in the working directory.

    Collaborators are injected so every external effect (prompting, template
    download, local copy, package manager) can be swapped.

    Args:
        prompts: Prompt engine used for interactive answers.
        fetch_template: Downloads a repository template into a directory.
        copy_template: Copies a local template into a directory.
        run_process: Runs the package manager.
        console: Output console.
        config: Template and install settings.
    """

    name = "service"

    def __init__(
        self,
        prompts: Prompts,
        *,
        fetch_template: TemplateFetcher | None = None,
        copy_template: TemplateCopier = copy_local_template,
        run_process: ProcessRunner = run_process,
        console: Console | None = None,
        config: SetupConfig | None = None,
    ) -> None:
        self.config = config or SetupConfig()
        self.prompts = prompts
        self.fetch_template = fetch_template or partial(
            download_template_from_repo, config=self.config.templates
        )
        self.copy_template = copy_template
        self.run_process = run_process
        self.console = console or Console()

    def is_applicable(self, context: SetupContext) -> bool:
        if context.service_dir is None:
            return True

        conflicting = [name for name in SERVICE_OPTIONS if context.option(name)]
        if conflicting:
            flags = ", ".join(f'"--{name}"' for name in conflicting)
            raise SetupError(
                SetupErrorKind.NOT_APPLICABLE_SERVICE_OPTIONS,
                "Cannot setup a new service when being in existing service context. "
                f"Remove conflicting options: {flags}.",
            )
        return False

    def run(self, context: SetupContext, working_dir: Path | None = None) -> SetupResult | None:
        """Create the project. Returns ``None`` when the user backs out."""
        working_dir = working_dir or Path.cwd()

        name_option = context.option(NAME_OPTION)
        if name_option is not None:
            validate_project_name(name_option)

        has_creation_flags = any(context.option(name) for name in SERVICE_OPTIONS)
        if not has_creation_flags and not self._confirm_create():
            return None

        source = resolve_template_source(context, self.config.templates)
        if source is None:
            project_type = self._prompt_project_type()
            if project_type is ProjectType.OTHER:
                return None
            source = Interactive(
                project_type, self.config.templates.template_url(project_type.value)
            )
        elif isinstance(source, LocalPath):
            source = LocalPath(_relative_to(working_dir, source.path))

        project_type_name = _project_type(source)
        if name_option is not None:
            project_name = name_option
            ensure_available(working_dir / project_name, interactive=False)
        else:
            project_name = self._prompt_project_name(working_dir, project_type_name)
        project_dir = working_dir / project_name

        self.console.print(f"[bold green]◇[/]  Creating {project_name}/...")
        self._materialize(source, project_dir)

        marker = project_dir / self.config.templates.marker_file
        if marker.is_file():
            marker.unlink()

        installed = install_dependencies(
            project_dir, project_name, self.run_process, self.console, self.config.install
        )

        self.console.print("[dim]│[/]")
        self.console.print(
            f"[bold cyan]●[/]  Project successfully created in [bold]'{project_name}'[/] folder."
        )
        return SetupResult(
            project_name=project_name,
            project_dir=project_dir,
            project_type=project_type_name,
            dependencies_installed=installed,
        )

    def _confirm_create(self) -> bool:
        return self.prompts.select(CONFIRM_CREATE_QUESTION, [True, False], ["Yes", "No"])

    def _prompt_project_type(self) -> ProjectType:
        project_types = list(ProjectType)
        labels = [t.label for t in project_types]
        return self.prompts.select(PROJECT_TYPE_QUESTION, project_types, labels)

    def _prompt_project_name(self, working_dir: Path, project_type: str | None) -> str:
        def validate(answer: str) -> None:
            answer = answer.strip()
            try:
                validate_project_name(answer)
            except SetupError as exc:
                raise SetupError(SetupErrorKind.INVALID_ANSWER, exc.message) from exc
            ensure_available(working_dir / answer, interactive=True)

        default = f"{project_type}-project" if project_type else None
        answer = self.prompts.text(PROJECT_NAME_QUESTION, default, validate)
        return answer.strip()

    def _materialize(self, source: TemplateSource, project_dir: Path) -> None:
        if isinstance(source, LocalPath):
            try:
                self.copy_template(source.path, project_dir)
            except FileNotFoundError as exc:
                raise SetupError(
                    SetupErrorKind.INVALID_TEMPLATE_PATH,
                    f"Could not find provided template path: {source.path}.",
                ) from exc
            except Exception as exc:
                raise SetupError(
                    SetupErrorKind.TEMPLATE_DOWNLOAD_FAILED,
                    f"Could not copy template from {source.path}: {exc}",
                ) from exc
        elif isinstance(source, NamedTemplate):
            try:
                self.fetch_template(source.url, source.name, project_dir)
            except FileNotFoundError as exc:
                raise SetupError(
                    SetupErrorKind.INVALID_TEMPLATE,
                    f'Could not find provided template "{source.name}".',
                ) from exc
            except Exception as exc:
                raise SetupError(
                    SetupErrorKind.TEMPLATE_DOWNLOAD_FAILED,
                    "Could not download template. "
                    "Ensure that you are using the latest version of slsinit.",
                ) from exc
        elif isinstance(source, RepoUrl):
            try:
                self.fetch_template(source.url, None, project_dir)
            except Exception as exc:
                raise SetupError(
                    SetupErrorKind.INVALID_TEMPLATE_URL,
                    "Could not download template. "
                    'Ensure that the template provided with "--template-url" exists.',
                ) from exc
        else:
            try:
                self.fetch_template(source.url, source.choice.value, project_dir)
            except Exception as exc:
                raise SetupError(
                    SetupErrorKind.TEMPLATE_DOWNLOAD_FAILED,
                    "Could not download template. "
                    "Ensure that you are using the latest version of slsinit.",
                ) from exc


def _project_type(source: TemplateSource) -> str | None:
    if isinstance(source, NamedTemplate):
        return source.name
    if isinstance(source, Interactive):
        return source.choice.value
    return None


def _relative_to(working_dir: Path, path: Path) -> Path:
    path = path.expanduser()
    return path if path.is_absolute() else working_dir / path
