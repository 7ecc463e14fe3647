"""Configuration dataclasses for the setup wizard."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(kw_only=True)
class TemplateConfig:
    """
    Configuration for template resolution and download.

    Attributes:
        examples_url: Base url of the examples repository tree. Named templates
            are resolved as ``<examples_url>/<template>``.
        codeload_url: Host serving repository tarballs.
        timeout: Timeout in seconds for the template download request.
        marker_file: Incidental file shipped by some templates and removed after copy.
        manifest_files: Service manifest file names, in lookup order.
    """

    examples_url: str = "https://github.com/serverless/examples/tree/master"
    codeload_url: str = "https://codeload.github.com"
    timeout: float = 30.0
    marker_file: str = "serverless.template.yml"
    manifest_files: tuple[str, ...] = (
        "serverless.yml",
        "serverless.yaml",
        "serverless.json",
        "serverless.js",
        "serverless.ts",
    )

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}.")
        if not self.manifest_files:
            raise ValueError("manifest_files must contain at least one file name.")
        self.examples_url = self.examples_url.rstrip("/")
        self.codeload_url = self.codeload_url.rstrip("/")

    def template_url(self, template: str) -> str:
        return f"{self.examples_url}/{template}"


@dataclass(kw_only=True)
class InstallConfig:
    """
    Configuration for the post-scaffold dependency install.

    Attributes:
        command: Package manager executable.
        args: Arguments passed to the package manager.
        dependency_file: Manifest whose presence triggers the install.
    """

    command: str = "npm"
    args: tuple[str, ...] = ("install",)
    dependency_file: str = "package.json"

    def __post_init__(self) -> None:
        if not self.command:
            raise ValueError("command must not be empty.")


@dataclass(kw_only=True)
class SetupConfig:
    """Top-level configuration grouping template and install settings."""

    templates: TemplateConfig = field(default_factory=TemplateConfig)
    install: InstallConfig = field(default_factory=InstallConfig)
