"""Tests for ``baseline-scout scan`` command.

Verifies:
    - Scanning directories with nothing scannable (exit code 2).
    - JSON and diagnostics output formats.
    - --fail-on thresholds (exit code 1).
    - --offline never touches the network.
    - Invalid configuration (exit code 2).
"""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from baseline_scout.cli.main import cli
from baseline_scout.config import CONFIG_FILENAME
from baseline_scout.core.status import StatusLevel


class TestScanEmptyDirectory:
    """Tests for scanning directories with no supported files."""

    def test_empty_dir_exits_with_code_2(self, runner: CliRunner, empty_dir: Path) -> None:
        result = runner.invoke(cli, ["scan", str(empty_dir)])
        assert result.exit_code == 2
        assert "No scannable files" in result.output

    def test_empty_dir_json_format(self, runner: CliRunner, empty_dir: Path) -> None:
        result = runner.invoke(cli, ["scan", str(empty_dir), "--format", "json"])
        assert result.exit_code == 2
        data = json.loads(result.output)
        assert data["issues"] == []
        assert data["score"] == 100
        assert data["stats"] == {level.value: 0 for level in StatusLevel}

    def test_empty_dir_diagnostics_format(self, runner: CliRunner, empty_dir: Path) -> None:
        result = runner.invoke(cli, ["scan", str(empty_dir), "--format", "diagnostics"])
        assert result.exit_code == 2
        assert json.loads(result.output) == {}

    def test_missing_path_is_usage_error(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["scan", str(tmp_path / "nope")])
        assert result.exit_code == 2


class TestScanJson:
    """Tests for --format json."""

    def test_issues_and_score(self, runner: CliRunner, limited_project: Path, mock_catalog) -> None:
        result = runner.invoke(cli, ["scan", str(limited_project), "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["score"] == 50
        assert [(i["file"], i["featureId"]) for i in data["issues"]] == [
            ("app.js", "api-structuredClone"),
            ("index.html", "html-attribute-popover"),
        ]
        clone = data["issues"][0]
        assert clone["status"] == "limited availability"
        assert clone["priority"] == "High"
        assert (clone["line"], clone["column"]) == (1, 11)
        assert data["stats"]["limited availability"] == 1
        assert data["stats"]["newly available"] == 1

    def test_catalog_fetched_once_then_cached(
        self, runner: CliRunner, limited_project: Path, mock_catalog,
    ) -> None:
        runner.invoke(cli, ["scan", str(limited_project), "--format", "json"])
        runner.invoke(cli, ["scan", str(limited_project), "--format", "json"])
        assert mock_catalog.await_count == 1

    def test_priority_override_from_config(
        self, runner: CliRunner, limited_project: Path, mock_catalog,
    ) -> None:
        (limited_project / CONFIG_FILENAME).write_text("priority:\n  limited: low\n")
        result = runner.invoke(cli, ["scan", str(limited_project), "--format", "json"])
        data = json.loads(result.output)
        assert data["issues"][0]["priority"] == "Low"


class TestScanDiagnostics:
    """Tests for --format diagnostics."""

    def test_grouped_zero_indexed(self, runner: CliRunner, limited_project: Path, mock_catalog) -> None:
        result = runner.invoke(cli, ["scan", str(limited_project), "--format", "diagnostics"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert sorted(data) == ["app.js", "index.html"]
        [diag] = data["app.js"]
        assert diag["range"]["start"] == {"line": 0, "character": 10}
        assert diag["severity"] == "warning"
        assert diag["source"] == "Baseline Scout"
        assert data["index.html"][0]["severity"] == "information"


class TestScanFailOn:
    """Tests for --fail-on thresholds."""

    def test_fail_on_limited(self, runner: CliRunner, limited_project: Path, mock_catalog) -> None:
        result = runner.invoke(
            cli, ["scan", str(limited_project), "--format", "json", "--fail-on", "limited"],
        )
        assert result.exit_code == 1

    def test_fail_on_newly_clean_project(
        self, runner: CliRunner, clean_project: Path, mock_catalog,
    ) -> None:
        result = runner.invoke(
            cli, ["scan", str(clean_project), "--format", "json", "--fail-on", "newly"],
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["issues"] == []

    def test_default_never_fails(self, runner: CliRunner, limited_project: Path, mock_catalog) -> None:
        result = runner.invoke(cli, ["scan", str(limited_project), "--format", "json"])
        assert result.exit_code == 0


class TestScanOffline:
    """Tests for --offline."""

    def test_offline_without_cache(self, runner: CliRunner, limited_project: Path, mock_catalog) -> None:
        result = runner.invoke(cli, ["scan", str(limited_project), "--format", "json", "--offline"])
        mock_catalog.assert_not_awaited()
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["issues"] == []
        assert data["score"] == 100

    def test_offline_uses_cache(self, runner: CliRunner, limited_project: Path, mock_catalog) -> None:
        runner.invoke(cli, ["catalog"])
        mock_catalog.reset_mock()
        result = runner.invoke(cli, ["scan", str(limited_project), "--format", "json", "--offline"])
        mock_catalog.assert_not_awaited()
        assert len(json.loads(result.output)["issues"]) == 2


class TestScanText:
    """Tests for the default rich dashboard."""

    def test_dashboard(self, runner: CliRunner, limited_project: Path, mock_catalog) -> None:
        result = runner.invoke(cli, ["scan", str(limited_project)])
        assert result.exit_code == 0, result.output
        assert "Score" in result.output
        assert "Status Distribution" in result.output
        assert "2 feature usage(s) detected" in result.output

    def test_dashboard_clean(self, runner: CliRunner, clean_project: Path, mock_catalog) -> None:
        result = runner.invoke(cli, ["scan", str(clean_project)])
        assert result.exit_code == 0
        assert "No tracked web features detected" in result.output

    def test_single_file_target(self, runner: CliRunner, limited_project: Path, mock_catalog) -> None:
        result = runner.invoke(cli, ["scan", str(limited_project / "app.js"), "--format", "json"])
        data = json.loads(result.output)
        assert [i["file"] for i in data["issues"]] == ["app.js"]


class TestScanConfigErrors:
    """Tests for invalid configuration."""

    def test_invalid_config_exits_2(self, runner: CliRunner, limited_project: Path) -> None:
        (limited_project / CONFIG_FILENAME).write_text("max_attempts: many\n")
        result = runner.invoke(cli, ["scan", str(limited_project)])
        assert result.exit_code == 2
        assert "max_attempts" in result.output
