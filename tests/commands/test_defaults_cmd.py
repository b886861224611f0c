"""Tests for the ``defaults`` command group."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from browdi.cli import cli

URL = "https://example.com/docs"


def _remember(runner: CliRunner, config_file: Path, handler: str, url: str = URL) -> None:
    result = runner.invoke(
        cli, ["-c", str(config_file), "--json", "open", "-H", handler, "--remember", url]
    )
    assert result.exit_code == 0, result.output


class TestDefaultsList:
    def test_empty(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-c", str(config_file), "--json", "defaults", "list"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["items"] == []

    def test_counts_repeats(
        self, cli_runner: CliRunner, config_file: Path, spawned: list[list[str]]
    ) -> None:
        _remember(cli_runner, config_file, "Firefox")
        _remember(cli_runner, config_file, "Firefox")
        result = cli_runner.invoke(cli, ["-c", str(config_file), "--json", "defaults", "list"])
        items = json.loads(result.stdout)["data"]["items"]
        assert items == [
            {"domain_key": "https://example.com", "handler": "Firefox", "count": 2, "active": True}
        ]

    def test_human(
        self, cli_runner: CliRunner, config_file: Path, spawned: list[list[str]]
    ) -> None:
        _remember(cli_runner, config_file, "Chromium")
        result = cli_runner.invoke(cli, ["-c", str(config_file), "defaults", "list"])
        assert result.exit_code == 0, result.output
        assert "https://example.com" in result.stdout
        assert "Chromium" in result.stdout


class TestDefaultsForget:
    def test_forget_by_url(
        self, cli_runner: CliRunner, config_file: Path, spawned: list[list[str]]
    ) -> None:
        _remember(cli_runner, config_file, "Firefox")
        result = cli_runner.invoke(
            cli, ["-c", str(config_file), "--json", "defaults", "forget", "https://example.com/a"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"] == {
            "domain_key": "https://example.com",
            "removed": 1,
        }

        listing = cli_runner.invoke(cli, ["-c", str(config_file), "--json", "defaults", "list"])
        assert json.loads(listing.stdout)["data"]["items"] == []

    def test_forget_unknown_is_ok(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["-c", str(config_file), "--json", "defaults", "forget", "https://nowhere.org"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["removed"] == 0

    def test_forget_invalid(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["-c", str(config_file), "--json", "defaults", "forget", "example.com"]
        )
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "INVALID_DOMAIN"
