"""Integration tests for the slsinit CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from conftest import FakeFetcher
import click
import pytest
from typer.testing import CliRunner

from slsinit.cli import app
from slsinit.cli._types import ProjectType

runner = CliRunner()


@pytest.fixture
def cwd(working_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(working_dir)
    return working_dir


class TestSetupCommand:
    def test_from_template_path(self, cwd: Path, local_template: Path) -> None:
        result = runner.invoke(
            app, ["--name", "my-service", "--template-path", str(local_template)]
        )

        assert result.exit_code == 0, result.output
        assert (cwd / "my-service" / "serverless.yml").read_text().startswith(
            "service: my-service"
        )
        assert (cwd / "my-service" / "handler.js").is_file()
        assert "Project successfully created" in result.output

    @patch("slsinit.cli._service.download_template_from_repo")
    def test_from_named_template(self, mock_download: MagicMock, cwd: Path) -> None:
        fetcher = FakeFetcher(extra_files={"serverless.template.yml": ""})
        mock_download.side_effect = lambda url, project_type, project_dir, config: fetcher(
            url, project_type, project_dir
        )

        result = runner.invoke(app, ["-n", "from-template", "-t", "aws-python3"])

        assert result.exit_code == 0, result.output
        assert fetcher.calls == [
            (
                "https://github.com/serverless/examples/tree/master/aws-python3",
                "aws-python3",
                Path.cwd() / "from-template",
            )
        ]
        assert not (cwd / "from-template" / "serverless.template.yml").exists()

    @patch("slsinit.cli._installer.subprocess.run", side_effect=FileNotFoundError("npm"))
    def test_missing_npm_still_succeeds(
        self, mock_run: MagicMock, cwd: Path, local_template: Path
    ) -> None:
        (local_template / "package.json").write_text("{}")

        result = runner.invoke(
            app, ["--name", "with-deps", "--template-path", str(local_template)]
        )

        assert result.exit_code == 0, result.output
        assert "Cannot install dependencies" in " ".join(result.output.split())
        mock_run.assert_called_once_with(
            ["npm", "install"], cwd=Path.cwd() / "with-deps", check=True
        )

    def test_invalid_name_exits_one(self, cwd: Path, local_template: Path) -> None:
        result = runner.invoke(
            app, ["--name", "bad name", "--template-path", str(local_template)]
        )

        assert result.exit_code == 1
        assert "INVALID_PROJECT_NAME" in result.output
        assert list(cwd.iterdir()) == []

    def test_existing_directory_exits_one(self, cwd: Path, local_template: Path) -> None:
        (cwd / "taken").mkdir()

        result = runner.invoke(app, ["--name", "taken", "--template-path", str(local_template)])

        assert result.exit_code == 1
        assert "TARGET_FOLDER_ALREADY_EXISTS" in result.output

    def test_multiple_template_options(self, cwd: Path) -> None:
        result = runner.invoke(
            app, ["--template", "some-template", "--template-url", "https://template.com"]
        )

        assert result.exit_code == 1
        assert "MULTIPLE_TEMPLATE_OPTIONS_PROVIDED" in result.output

    @patch("slsinit.cli._prompts.TerminalMenu")
    def test_decline_leaves_directory_empty(self, mock_menu_cls: MagicMock, cwd: Path) -> None:
        mock_menu_cls.return_value.show.return_value = 1  # No

        result = runner.invoke(app, [])

        assert result.exit_code == 0, result.output
        assert "No project created." in result.output
        assert list(cwd.iterdir()) == []


class TestServiceContext:
    def test_inside_service_is_skipped(self, cwd: Path) -> None:
        (cwd / "serverless.yml").write_text("service: existing\n")

        result = runner.invoke(app, [])

        assert result.exit_code == 0, result.output
        assert "Service already set up" in result.output

    def test_inside_service_with_options_fails(self, cwd: Path) -> None:
        (cwd / "serverless.yml").write_text("service: existing\n")

        result = runner.invoke(app, ["--template", "aws-nodejs"])

        assert result.exit_code == 1
        assert "NOT_APPLICABLE_SERVICE_OPTIONS" in result.output


class TestListTemplates:
    def test_list_templates_exits_zero(self) -> None:
        result = runner.invoke(app, ["--list-templates"])
        assert result.exit_code == 0

    def test_list_templates_shows_project_types(self) -> None:
        result = runner.invoke(app, ["-l"])
        for t in ProjectType:
            if t is not ProjectType.OTHER:
                assert t.value in result.output
        assert "github.com/serverless/examples" in result.output

    def test_list_templates_does_not_create_anything(self, cwd: Path) -> None:
        runner.invoke(app, ["--list-templates", "--name", "should-not-exist"])
        assert list(cwd.iterdir()) == []

    def test_help_mentions_template_options(self) -> None:
        result = runner.invoke(app, ["--help"])
        # Typer's Rich help can split option names with escape codes on CI
        output = click.unstyle(result.output)
        assert "--template-path" in output
        assert "--list-templates" in output
        assert result.exit_code == 0
