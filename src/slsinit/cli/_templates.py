"""Template source resolution and template materialization."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import errno
import io
import os
from pathlib import Path, PurePosixPath
import re
import shutil
import tarfile
from urllib.parse import urlparse

import requests

from slsinit.cli._types import (
    TEMPLATE_OPTION,
    TEMPLATE_OPTIONS,
    TEMPLATE_PATH_OPTION,
    TEMPLATE_URL_OPTION,
    LocalPath,
    NamedTemplate,
    RepoUrl,
    SetupContext,
    TemplateSource,
)
from slsinit.core.config import TemplateConfig
from slsinit.core.errors import SetupError, SetupErrorKind, TemplateFetchError

TemplateFetcher = Callable[[str, str | None, Path], None]
"""``(url, project_type, project_dir)``: materialize a remote template into *project_dir*."""

TemplateCopier = Callable[[Path, Path], None]
"""``(template_path, project_dir)``: materialize a local template into *project_dir*."""


def resolve_template_source(
    context: SetupContext, config: TemplateConfig | None = None
) -> TemplateSource | None:
    """Pick the template source from CLI options. ``None`` means the user must be asked."""
    config = config or TemplateConfig()

    provided = [name for name in TEMPLATE_OPTIONS if context.option(name)]
    if len(provided) > 1:
        flags = ", ".join(f'"--{name}"' for name in provided)
        raise SetupError(
            SetupErrorKind.MULTIPLE_TEMPLATE_OPTIONS_PROVIDED,
            f"You can provide only one of the template options, got: {flags}.",
        )

    if template_path := context.option(TEMPLATE_PATH_OPTION):
        return LocalPath(Path(template_path))
    if template := context.option(TEMPLATE_OPTION):
        return NamedTemplate(template, config.template_url(template))
    if template_url := context.option(TEMPLATE_URL_OPTION):
        return RepoUrl(template_url)
    return None


# ---------------------------------------------------------------------------
# Service manifest
# ---------------------------------------------------------------------------

_SERVICE_SCALAR = re.compile(r"^(service:[ \t]*)([^#\s][^#\n]*?)([ \t]*(?:#.*)?)$", re.MULTILINE)
_SERVICE_MAPPING_NAME = re.compile(
    r"^(service:[ \t]*(?:#.*)?\n(?:[ \t]+.*\n)*?[ \t]+name:[ \t]*)"
    r"([^#\s][^#\n]*?)([ \t]*(?:#.*)?)$",
    re.MULTILINE,
)

_RENAMEABLE_MANIFESTS = ("serverless.yml", "serverless.yaml")


def rename_service(project_dir: Path, name: str) -> None:
    """Point the ``service`` key of the project's YAML manifest at *name*."""
    for filename in _RENAMEABLE_MANIFESTS:
        manifest = project_dir / filename
        if not manifest.is_file():
            continue

        content = manifest.read_text(encoding="utf-8")
        renamed, count = _SERVICE_SCALAR.subn(rf"\g<1>{name}\g<3>", content, count=1)
        if count == 0:
            renamed = _SERVICE_MAPPING_NAME.sub(rf"\g<1>{name}\g<3>", content, count=1)
        manifest.write_text(renamed, encoding="utf-8")
        return


# ---------------------------------------------------------------------------
# Local templates
# ---------------------------------------------------------------------------


def copy_local_template(template_path: Path, project_dir: Path) -> None:
    """Copy a template directory from disk into *project_dir* (which must not exist)."""
    template_path = template_path.expanduser()
    if not template_path.is_dir():
        raise FileNotFoundError(
            errno.ENOENT, "Template directory does not exist", str(template_path)
        )

    shutil.copytree(template_path, project_dir)
    rename_service(project_dir, project_dir.name)


# ---------------------------------------------------------------------------
# Remote templates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RepoLocation:
    """A directory inside a GitHub repository branch."""

    owner: str
    repo: str
    branch: str
    path: PurePosixPath

    def archive_url(self, codeload_url: str) -> str:
        return f"{codeload_url}/{self.owner}/{self.repo}/tar.gz/{self.branch}"


def parse_repo_url(url: str) -> RepoLocation:
    """
    Parse a GitHub url of the form ``https://github.com/<owner>/<repo>[/tree/<branch>/<path>]``.

    A url without ``/tree/`` points at the root of the ``master`` branch.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or parsed.hostname not in (
        "github.com",
        "www.github.com",
    ):
        raise TemplateFetchError(
            f"Unsupported template url {url!r}: only GitHub urls are supported."
        )

    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) < 2:
        raise TemplateFetchError(f"Template url {url!r} does not point at a repository.")

    owner, repo = parts[0], parts[1].removesuffix(".git")
    if len(parts) == 2:
        return RepoLocation(owner, repo, "master", PurePosixPath())
    if parts[2] != "tree" or len(parts) < 4:
        raise TemplateFetchError(f"Template url {url!r} does not point at a repository directory.")
    return RepoLocation(owner, repo, parts[3], PurePosixPath(*parts[4:]))


def _template_members(
    archive: tarfile.TarFile, subdir: PurePosixPath
) -> list[tuple[tarfile.TarInfo, PurePosixPath]]:
    """Return regular files under *subdir* with their paths relative to it."""
    members = []
    for member in archive.getmembers():
        if not member.isfile():
            continue
        # Skip the "<repo>-<branch>/" prefix GitHub puts on every entry
        path = PurePosixPath(*PurePosixPath(member.name).parts[1:])
        if subdir.parts and path.parts[: len(subdir.parts)] != subdir.parts:
            continue
        relative = PurePosixPath(*path.parts[len(subdir.parts) :])
        if not relative.parts or relative.is_absolute() or ".." in relative.parts:
            continue
        members.append((member, relative))
    return members


def _extract_template(content: bytes, subdir: PurePosixPath, project_dir: Path) -> None:
    try:
        with tarfile.open(fileobj=io.BytesIO(content), mode="r:gz") as archive:
            members = _template_members(archive, subdir)
            if not members:
                raise FileNotFoundError(
                    errno.ENOENT, "Template not found in repository", str(subdir)
                )

            project_dir.mkdir(parents=True)
            for member, relative in members:
                target = project_dir.joinpath(*relative.parts)
                target.parent.mkdir(parents=True, exist_ok=True)
                source = archive.extractfile(member)
                if source is None:
                    continue
                target.write_bytes(source.read())
                if member.mode & 0o111:
                    os.chmod(target, 0o755)
    except tarfile.TarError as exc:
        raise TemplateFetchError(f"Downloaded template archive is corrupted: {exc}") from exc


def download_template_from_repo(
    url: str,
    project_type: str | None,
    project_dir: Path,
    config: TemplateConfig | None = None,
) -> None:
    """
    Download the repository directory at *url* into *project_dir*.

    Args:
        url: GitHub tree url of the template.
        project_type: Template name when it comes from the examples catalog, else ``None``.
        project_dir: Destination directory. Must not exist.
        config: Download settings.

    Raises:
        FileNotFoundError: The repository, branch or directory does not exist.
        TemplateFetchError: Any other download failure.
    """
    config = config or TemplateConfig()
    location = parse_repo_url(url)
    archive_url = location.archive_url(config.codeload_url)

    try:
        response = requests.get(archive_url, timeout=config.timeout)
    except requests.RequestException as exc:
        raise TemplateFetchError(f"Could not download template from {archive_url}: {exc}") from exc

    if response.status_code == 404:
        raise FileNotFoundError(errno.ENOENT, "Template repository not found", project_type or url)
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        raise TemplateFetchError(f"Could not download template from {archive_url}: {exc}") from exc

    _extract_template(response.content, location.path, project_dir)
    rename_service(project_dir, project_dir.name)
