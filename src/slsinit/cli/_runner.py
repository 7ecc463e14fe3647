"""Runs the setup steps in order."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from slsinit.cli._types import SetupContext
from slsinit.core.config import TemplateConfig


class SetupStep(Protocol):
    name: str

    def is_applicable(self, context: SetupContext) -> bool: ...

    def run(self, context: SetupContext, working_dir: Path | None = None) -> object: ...


def find_service_dir(working_dir: Path, manifest_files: Iterable[str] | None = None) -> Path | None:
    """Return *working_dir* when it holds a service manifest, else ``None``."""
    manifest_files = manifest_files or TemplateConfig().manifest_files
    for filename in manifest_files:
        if (working_dir / filename).is_file():
            return working_dir
    return None


def run_steps(
    context: SetupContext, steps: Sequence[SetupStep], working_dir: Path | None = None
) -> dict[str, object]:
    """
    Run every applicable step in order.

    Errors raised by a step stop the run and propagate to the caller.

    Returns:
        Result of each step that ran, by step name.
    """
    results: dict[str, object] = {}
    for step in steps:
        if not step.is_applicable(context):
            continue
        results[step.name] = step.run(context, working_dir)
    return results
