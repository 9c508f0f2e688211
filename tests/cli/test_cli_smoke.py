from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from freightcheck.cli.main import cli


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    for command in ("check", "countries"):
        assert command in result.output


def test_check_prints_result() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "check",
            "--origin", "New York, US",
            "--destination", "London, UK",
            "--description", "cotton t-shirts",
            "--value", "1000",
            "--weight", "10",
        ],
        catch_exceptions=False,
    )
    assert result.exit_code == 0
    body = json.loads(result.output)
    assert body["destination_country"] == "UK"
    assert body["total_additional_costs"] == pytest.approx(405.0)


def test_check_blocked_exits_nonzero() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli,
        [
            "check",
            "--origin", "New York, US",
            "--destination", "Los Angeles, US",
            "--description", "assault weapon parts",
        ],
    )
    assert result.exit_code == 1
    assert json.loads(result.output)["errors"] == ["weapons cannot be shipped domestically"]


def test_check_rejects_unknown_service_type() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli, ["check", "--origin", "a", "--destination", "b", "--service-type", "courier"]
    )
    assert result.exit_code == 2


def test_countries_listing() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["countries"], catch_exceptions=False)
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert len(lines) == 29
    assert lines[0] == "US\tUnited States"
    assert "CN\tChina (pre-inspection)" in lines

