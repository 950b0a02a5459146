"""Tests for the wicketry CLI."""

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner

from wicketry.cli.main import cli
from wicketry.cli.serve import FILES_SCOPE, register_directory
from wicketry.core.logging import configure_logging, get_log_file_path
from wicketry.resource.registry import ResourceReference, SharedResources

DATA = Path(__file__).parent.parent / "filter" / "data"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestFilterPathCommand:
    """wicketry filter-path."""

    def test_prints_mount(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["filter-path", str(DATA / "web1.xml"), "FilterTestApplication"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "filtertest/"

    def test_servlet_flag(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["filter-path", str(DATA / "web2.xml"), "FilterTestApplication", "--servlet"]
        )

        assert result.output.strip() == "servlet/"

    def test_resolution_failure_is_click_error(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["filter-path", str(DATA / "ambiguous.xml"), "FilterTestApplication"]
        )

        assert result.exit_code == 1
        assert "FILTER_PATH_AMBIGUOUS" in result.output


class TestCheckRedirectCommand:
    """wicketry check-redirect."""

    def test_redirect_target(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["check-redirect", "/filter", "--filter-path", "filter/", "--query", "a=1"]
        )

        assert result.exit_code == 0
        assert result.output.strip() == "/filter/?a=1"

    def test_no_redirect(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check-redirect", "/filter/x", "--filter-path", "filter/"])

        assert result.output.strip() == "no redirect"


class TestServeCommand:
    """wicketry serve."""

    def test_register_directory(self, tmp_path: Path) -> None:
        (tmp_path / "css").mkdir()
        (tmp_path / "css" / "site.css").write_text("body {}")
        (tmp_path / "index.html").write_text("<html></html>")
        shared = SharedResources()

        count = register_directory(shared, tmp_path)

        assert count == 2
        assert ResourceReference("css/site.css", FILES_SCOPE) in shared

    def test_runs_uvicorn_with_overrides(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "a.txt").write_text("a")

        with patch("wicketry.cli.serve.uvicorn.run") as run:
            result = runner.invoke(
                cli, ["serve", str(tmp_path), "--port", "9123", "--mount", "/static/*"]
            )

        assert result.exit_code == 0, result.output
        assert run.call_args.kwargs["port"] == 9123
        assert "Serving 1 files" in result.output
        assert "/static/wicket/resource/files/<path>" in result.output

    def test_invalid_mount_is_click_error(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)

        with patch("wicketry.cli.serve.uvicorn.run") as run:
            result = runner.invoke(cli, ["serve", str(tmp_path), "--mount", "static"])

        assert result.exit_code == 1
        assert "FILTER_MAPPING_INVALID" in result.output
        run.assert_not_called()


class TestServeLogging:
    """wicketry serve honours the logging section of the config."""

    @pytest.fixture(autouse=True)
    def _isolate(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("WICKETRY__LOGGING__LEVEL", raising=False)
        with patch("wicketry.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            yield
        configure_logging(level="WARNING")

    def test_file_output_from_project_config(self, runner: CliRunner, tmp_path: Path) -> None:
        # Given
        log_file = tmp_path / "logs" / "serve.log"
        (tmp_path / "wicketry.yaml").write_text(
            yaml.safe_dump(
                {
                    "logging": {
                        "level": "INFO",
                        "outputs": [{"destination": str(log_file), "format": "json"}],
                    }
                }
            )
        )
        (tmp_path / "a.txt").write_text("a")

        # When
        with patch("wicketry.cli.serve.uvicorn.run"):
            result = runner.invoke(cli, ["serve", str(tmp_path)])

        # Then
        assert result.exit_code == 0, result.output
        assert get_log_file_path() == log_file
        assert "Logs:" in result.output
        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert "serve_starting" in events

    def test_verbose_raises_configured_level(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "wicketry.yaml").write_text(yaml.safe_dump({"logging": {"level": "ERROR"}}))

        with (
            patch("wicketry.cli.serve.uvicorn.run"),
            patch("wicketry.cli.serve.configure_logging") as configure,
        ):
            result = runner.invoke(cli, ["-v", "serve", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert configure.call_args.kwargs["config"].level == "DEBUG"

    def test_without_verbose_keeps_configured_level(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        (tmp_path / "wicketry.yaml").write_text(yaml.safe_dump({"logging": {"level": "ERROR"}}))

        with (
            patch("wicketry.cli.serve.uvicorn.run"),
            patch("wicketry.cli.serve.configure_logging") as configure,
        ):
            result = runner.invoke(cli, ["serve", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert configure.call_args.kwargs["config"].level == "ERROR"
