"""Tests for the CLI module."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from sourcelinks.cli import cli
from sourcelinks.cli.utils import build_overrides

pytestmark = pytest.mark.integration


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    """CliRunner working inside an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return CliRunner()


class TestResolve:
    def test_resolve_github(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["resolve", "-s", "github://org/repo/main", "src/app.py"])
        assert result.exit_code == 0
        assert result.output.strip() == "https://github.com/org/repo/blob/main/src/app.py"

    def test_resolve_line_and_edit(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["resolve", "-s", "github://org/repo", "-r", "v2", "-l", "12", "-o", "edit", "src/app.py"],
        )
        assert result.exit_code == 0
        assert result.output.strip() == "https://github.com/org/repo/edit/v2/src/app.py#L12"

    def test_resolve_multiple_paths(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            [
                "resolve",
                "-s",
                "docs=gitlab://org/site/main",
                "-s",
                "github://org/repo/main",
                "docs/index.md",
                "src/app.py",
            ],
        )
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "https://gitlab.com/org/site/-/blob/main/index.md",
            "https://github.com/org/repo/blob/main/src/app.py",
        ]

    def test_resolve_outside_project_root(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli,
            [
                "resolve",
                "-s",
                "github://org/repo/main",
                "--project-root",
                str(tmp_path / "project"),
                "/elsewhere/app.py",
            ],
        )
        assert result.exit_code == 1
        assert "No source link for /elsewhere/app.py" in result.output

    def test_resolve_absolute_inside_project_root(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            cli,
            ["resolve", "-s", "github://org/repo/main", str(tmp_path / "src" / "app.py")],
        )
        assert result.exit_code == 0
        assert result.output.strip() == "https://github.com/org/repo/blob/main/src/app.py"

    def test_resolve_json(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli,
            ["resolve", "-s", "docs=github://org/repo/main", "--json", "docs/a.md", "src/b.py"],
        )
        assert result.exit_code == 1
        assert json.loads(result.stdout) == [
            {"path": "docs/a.md", "url": "https://github.com/org/repo/blob/main/a.md"},
            {"path": "src/b.py", "url": None},
        ]

    def test_resolve_repeated_path(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["resolve", "-s", "github://org/repo/main", "a.py", "a.py"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "https://github.com/org/repo/blob/main/a.py",
            "https://github.com/org/repo/blob/main/a.py",
        ]

    def test_resolve_without_links(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["resolve", "src/app.py"])
        assert result.exit_code == 1

    def test_resolve_invalid_operation(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["resolve", "-s", "github://org/repo/main", "-o", "delete", "a.py"])
        assert result.exit_code != 0

    def test_resolve_from_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "links.yaml"
        config_file.write_text(
            yaml.safe_dump({"source_links": ["github://org/repo"], "revision": "release"})
        )
        result = runner.invoke(cli, ["--config", str(config_file), "resolve", "a.py"])
        assert result.exit_code == 0
        assert result.output.strip() == "https://github.com/org/repo/blob/release/a.py"

    def test_command_line_overrides_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "sourcelinks.yaml").write_text(
            yaml.safe_dump({"source_links": ["github://org/repo"], "revision": "release"})
        )
        result = runner.invoke(cli, ["resolve", "-r", "hotfix", "a.py"])
        assert result.exit_code == 0
        assert result.output.strip() == "https://github.com/org/repo/blob/hotfix/a.py"

    def test_invalid_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "sourcelinks.yaml").write_text("source_links: 5\n")
        result = runner.invoke(cli, ["resolve", "a.py"])
        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output


class TestCheck:
    def test_all_valid(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["check", "-s", "github://org/repo/main", "-s", "€{FILE_PATH_EXT}#L€{FILE_LINE}"]
        )
        assert result.exit_code == 0
        assert result.output.count("OK") == 2

    def test_invalid_directive(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "-s", "github://org/repo/main", "-s", "github://org/repo"])
        assert result.exit_code == 1
        assert "OK     github://org/repo/main" in result.output
        assert "ERROR  github://org/repo: No revision provided" in result.output

    def test_revision_option(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "-s", "github://org/repo", "-r", "main"])
        assert result.exit_code == 0

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", "-s", "€{TPL_NAME}", "--json"])
        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report == [
            {
                "directive": "€{TPL_NAME}",
                "valid": False,
                "error": "Unsupported patterns from scaladoc format are used: €{TPL_NAME}",
            }
        ]

    def test_nothing_configured(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "No source links configured." in result.output


def test_usage(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["usage"])
    assert result.exit_code == 0
    assert "Accepted formats:" in result.output
    assert "github://<organization>/<repository>" in result.output


def test_verbose_flag(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--verbose", "usage"])
    assert result.exit_code == 0


def test_log_level_option(runner: CliRunner) -> None:
    result = runner.invoke(
        cli, ["--log-level", "warning", "resolve", "-s", "github://org/repo/main", "a.py"]
    )
    assert result.exit_code == 0
    assert result.output.strip() == "https://github.com/org/repo/blob/main/a.py"


def test_invalid_log_level_option(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--log-level", "loud", "usage"])
    assert result.exit_code != 0


class TestBuildOverrides:
    def test_unset_options(self) -> None:
        assert build_overrides((), None) == {
            "source_links": None,
            "revision": None,
            "project_root": None,
            "logging.level": None,
        }

    def test_log_level_is_nested_override(self) -> None:
        overrides = build_overrides(("github://org/repo",), "main", "/srv/project", "debug")
        assert overrides["source_links"] == ["github://org/repo"]
        assert overrides["logging.level"] == "debug"
