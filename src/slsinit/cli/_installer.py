"""Post-scaffold dependency installation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
import subprocess

from rich.console import Console

from slsinit.core.config import InstallConfig
from slsinit.core.errors import SetupError, SetupErrorKind

ProcessRunner = Callable[[str, Sequence[str], Path], None]
"""``(command, args, cwd)``: run to completion, raising on failure."""


def run_process(command: str, args: Sequence[str], cwd: Path) -> None:
    """Run *command* in *cwd*. Raises ``FileNotFoundError`` when it is not installed."""
    subprocess.run([command, *args], cwd=cwd, check=True)


def install_dependencies(
    project_dir: Path,
    project_name: str,
    run: ProcessRunner,
    console: Console,
    config: InstallConfig | None = None,
) -> bool:
    """
    Install the project's dependencies if it ships a dependency manifest.

    Returns:
        Whether the package manager ran successfully.

    Raises:
        SetupError: ``DEPENDENCIES_INSTALL_FAILED`` when the package manager fails.
    """
    config = config or InstallConfig()
    if not (project_dir / config.dependency_file).is_file():
        return False

    command = " ".join([config.command, *config.args])
    console.print(f"[bold green]◇[/]  Installing dependencies with [bold]{config.command}[/]")
    console.print("[dim]│[/]")

    try:
        run(config.command, list(config.args), project_dir)
    except FileNotFoundError:
        console.print(
            f'[yellow]Cannot install dependencies, "{config.command}" executable not found. '
            f'Please install it and run "{command}" in the "{project_name}" folder.[/]'
        )
        console.print("[dim]│[/]")
        return False
    except Exception as exc:
        raise SetupError(
            SetupErrorKind.DEPENDENCIES_INSTALL_FAILED,
            f"Cannot install dependencies: {exc}",
        ) from exc
    return True
