"""Integration tests for the check and rules commands.

Feeds are written as real protobuf files and run through the CLI end to end.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path
from unittest import mock

import pytest
from builders import MIN_POSIX_TIME
from click.testing import CliRunner
from google.transit import gtfs_realtime_pb2

from gtfsrt_validator.cli import cli
from gtfsrt_validator.validation import DEFAULT_REGISTRY


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def feed_file(
    pb_feed: gtfs_realtime_pb2.FeedMessage, write_feed: Callable[..., Path]
) -> Path:
    """A feed with no violations."""
    return write_feed(pb_feed)


@pytest.fixture
def bad_version_file(
    pb_feed: gtfs_realtime_pb2.FeedMessage, write_feed: Callable[..., Path]
) -> Path:
    """A feed whose header carries an unsupported version."""
    pb_feed.header.gtfs_realtime_version = "2.0"
    return write_feed(pb_feed, "bad_version.pb")


@pytest.fixture
def unpopulated_relationship_file(
    pb_feed: gtfs_realtime_pb2.FeedMessage, write_feed: Callable[..., Path]
) -> Path:
    """A feed that only triggers W009."""
    for update in pb_feed.entity[0].trip_update.stop_time_update:
        update.ClearField("schedule_relationship")
    return write_feed(pb_feed, "w009.pb")


class TestCheckCommand:
    """Tests for 'gtfsrt-validator check'."""

    @pytest.mark.integration
    def test_valid_feed_passes(self, runner: CliRunner, feed_file: Path) -> None:
        result = runner.invoke(cli, ["check", str(feed_file)])

        assert result.exit_code == 0, result.output
        assert "No violations found" in result.output

    @pytest.mark.integration
    def test_error_exits_with_1(self, runner: CliRunner, bad_version_file: Path) -> None:
        result = runner.invoke(cli, ["check", str(bad_version_file)])

        assert result.exit_code == 1
        assert "E038" in result.output
        assert "2.0" in result.output

    @pytest.mark.integration
    def test_warnings_do_not_fail(
        self, runner: CliRunner, unpopulated_relationship_file: Path
    ) -> None:
        result = runner.invoke(cli, ["check", str(unpopulated_relationship_file)])

        assert result.exit_code == 0, result.output
        assert "W009" in result.output
        assert "Validation passed with 1 warning" in result.output

    @pytest.mark.integration
    def test_ignore_option_skips_rule(
        self, runner: CliRunner, unpopulated_relationship_file: Path
    ) -> None:
        result = runner.invoke(
            cli, ["check", str(unpopulated_relationship_file), "--ignore", "w009"]
        )

        assert result.exit_code == 0
        assert "W009" not in result.output
        assert "No violations found" in result.output

    @pytest.mark.integration
    def test_ignore_from_config_file(
        self, runner: CliRunner, unpopulated_relationship_file: Path, tmp_path: Path
    ) -> None:
        (tmp_path / ".gtfsrt").mkdir()
        (tmp_path / ".gtfsrt" / "config.yaml").write_text("ignore:\n  - W009\n")

        result = runner.invoke(
            cli,
            ["check", str(unpopulated_relationship_file), "--config-dir", str(tmp_path)],
        )

        assert result.exit_code == 0
        assert "W009" not in result.output

    @pytest.mark.integration
    def test_missing_file_reports_error(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["check", str(tmp_path / "nope.pb")])

        assert result.exit_code == 1
        assert "Feed file not found" in result.output

    @pytest.mark.integration
    def test_bad_configured_timestamp_is_reported(
        self, runner: CliRunner, feed_file: Path, tmp_path: Path
    ) -> None:
        (tmp_path / ".gtfsrt").mkdir()
        (tmp_path / ".gtfsrt" / "config.yaml").write_text("timestamp: yesterday\n")

        result = runner.invoke(cli, ["check", str(feed_file), "--config-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert "Invalid value for timestamp: must be POSIX seconds" in result.output

    @pytest.mark.integration
    def test_unknown_ignored_rule_is_reported(self, runner: CliRunner, feed_file: Path) -> None:
        result = runner.invoke(cli, ["check", str(feed_file), "--ignore", "X999"])

        assert result.exit_code == 1
        assert "Unknown rule code 'X999'" in result.output


class TestCheckJsonOutput:
    """Tests for 'gtfsrt-validator check --json'."""

    @pytest.mark.integration
    def test_success_envelope(self, runner: CliRunner, feed_file: Path) -> None:
        result = runner.invoke(cli, ["check", str(feed_file), "--json"])

        assert result.exit_code == 0
        output = json.loads(result.output)
        assert output["success"] is True
        assert output["command"] == "check"
        assert output["data"]["passed"] is True
        assert output["data"]["timestamp"] == MIN_POSIX_TIME
        assert "E003" not in output["data"]["counts"]
        assert output["data"]["counts"]["E002"] == 0

    @pytest.mark.integration
    def test_error_envelope_keeps_report(
        self, runner: CliRunner, bad_version_file: Path
    ) -> None:
        result = runner.invoke(cli, ["--format", "json", "check", str(bad_version_file)])

        assert result.exit_code == 1
        output = json.loads(result.output)
        assert output["success"] is False
        assert output["errors"][0]["message"].startswith("E038")
        assert output["data"]["counts"]["E038"] == 1

    @pytest.mark.integration
    def test_rule_selection(self, runner: CliRunner, bad_version_file: Path) -> None:
        result = runner.invoke(
            cli, ["check", str(bad_version_file), "--json", "-r", "E002", "-r", "E036"]
        )

        assert result.exit_code == 0
        output = json.loads(result.output)
        assert [r["rule_code"] for r in output["data"]["results"]] == ["E002", "E036"]

    @pytest.mark.integration
    def test_explicit_timestamp(self, runner: CliRunner, feed_file: Path) -> None:
        result = runner.invoke(cli, ["check", str(feed_file), "--json", "--timestamp", "42"])

        assert json.loads(result.output)["data"]["timestamp"] == 42

    @pytest.mark.integration
    def test_unknown_rule_is_reported(self, runner: CliRunner, feed_file: Path) -> None:
        result = runner.invoke(cli, ["check", str(feed_file), "--json", "--rule", "X001"])

        assert result.exit_code == 1
        output = json.loads(result.output)
        assert output["success"] is False
        assert output["errors"][0]["type"] == "UnknownRuleError"
        assert output["errors"][0]["code"] == "GTFSRT-RUL001"

    @pytest.mark.integration
    def test_decode_error_is_reported(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        garbage = tmp_path / "garbage.pb"
        garbage.write_bytes(b"not a protobuf")

        result = runner.invoke(cli, ["check", str(garbage), "--json"])

        assert result.exit_code == 1
        assert json.loads(result.output)["errors"][0]["code"] == "GTFSRT-FED001"

    @pytest.mark.integration
    def test_bad_timestamp_setting_keeps_json_envelope(
        self, runner: CliRunner, feed_file: Path
    ) -> None:
        with mock.patch.dict(os.environ, {"GTFSRT_TIMESTAMP": "abc"}):
            result = runner.invoke(cli, ["check", str(feed_file), "--json"])

        assert result.exit_code == 1
        output = json.loads(result.output)
        assert output["success"] is False
        assert output["errors"][0]["type"] == "ConfigInvalidValueError"
        assert output["errors"][0]["code"] == "GTFSRT-CFG003"

    @pytest.mark.integration
    def test_unknown_ignored_rule_in_config_is_reported(
        self, runner: CliRunner, feed_file: Path, tmp_path: Path
    ) -> None:
        (tmp_path / ".gtfsrt").mkdir()
        (tmp_path / ".gtfsrt" / "config.yaml").write_text("ignore: [W009, X999]\n")

        result = runner.invoke(
            cli, ["check", str(feed_file), "--json", "--config-dir", str(tmp_path)]
        )

        assert result.exit_code == 1
        output = json.loads(result.output)
        assert output["success"] is False
        assert output["errors"][0]["code"] == "GTFSRT-RUL001"
        assert "X999" in output["errors"][0]["message"]


class TestRulesCommand:
    """Tests for 'gtfsrt-validator rules'."""

    @pytest.mark.integration
    def test_lists_every_rule(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["rules"])

        assert result.exit_code == 0
        for code in DEFAULT_REGISTRY.codes():
            assert code in result.output
        assert "needs GTFS schedule" in result.output

    @pytest.mark.integration
    def test_json_listing(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["rules", "--json"])

        rules = json.loads(result.output)["data"]["rules"]
        assert [r["code"] for r in rules] == list(DEFAULT_REGISTRY.codes())
        assert {"code", "severity", "title", "requires_reference"} <= set(rules[0])
