"""Typer CLI application for slsinit."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typer import Exit, Option, Typer

import slsinit
from slsinit.cli._prompts import TerminalPrompts
from slsinit.cli._runner import find_service_dir, run_steps
from slsinit.cli._service import ServiceSetupStep
from slsinit.cli._types import (
    NAME_OPTION,
    TEMPLATE_OPTION,
    TEMPLATE_PATH_OPTION,
    TEMPLATE_URL_OPTION,
    ProjectType,
    SetupContext,
)
from slsinit.core.config import SetupConfig
from slsinit.core.errors import SetupError

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_console = Console()


def _show_project_types(value: bool) -> None:
    if not value:
        return

    table = Table(box=None, show_header=True, header_style="bold", pad_edge=False)
    table.add_column("--template", style="bold cyan", no_wrap=True)
    table.add_column("Project type")
    table.add_column("Description", style="dim")
    for project_type in ProjectType:
        if project_type is not ProjectType.OTHER:
            table.add_row(project_type.value, project_type.label, project_type.description)

    _console.print(table)
    _console.print(f"\n{ProjectType.OTHER.description}")
    raise Exit()


@app.command()
def setup(
    name: Annotated[
        str | None,
        Option("--name", "-n", help="Name for the new project directory", show_default=False),
    ] = None,
    template: Annotated[
        str | None,
        Option(
            "--template",
            "-t",
            help="Template from the serverless/examples repository.",
            show_default=False,
        ),
    ] = None,
    template_url: Annotated[
        str | None,
        Option("--template-url", help="GitHub url of a template directory.", show_default=False),
    ] = None,
    template_path: Annotated[
        Path | None,
        Option("--template-path", help="Local template directory.", show_default=False),
    ] = None,
    list_templates: Annotated[
        bool,
        Option(
            "--list-templates",
            "-l",
            help="List the interactive project types and exit.",
            callback=_show_project_types,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """Create a new serverless project in the current directory."""
    working_dir = Path.cwd()
    config = SetupConfig()
    context = SetupContext(
        service_dir=find_service_dir(working_dir, config.templates.manifest_files),
        options={
            NAME_OPTION: name,
            TEMPLATE_OPTION: template,
            TEMPLATE_URL_OPTION: template_url,
            TEMPLATE_PATH_OPTION: str(template_path) if template_path else None,
        },
    )

    # Header
    _console.print()
    _console.print(f"[bold cyan]●[/]  slsinit v{slsinit.__version__}")
    _console.print("[dim]│[/]")

    step = ServiceSetupStep(TerminalPrompts(_console), console=_console, config=config)
    try:
        results = run_steps(context, [step], working_dir)
    except SetupError as exc:
        _console.print()
        _console.print(f"[bold red]Error:[/] {escape(exc.message)} [dim]({exc.code})[/]")
        raise Exit(code=1) from None

    if step.name not in results:
        _console.print(f"[bold cyan]●[/]  Service already set up in {context.service_dir}")
    elif results[step.name] is None:
        _console.print("[bold cyan]●[/]  No project created.")
    _console.print()
