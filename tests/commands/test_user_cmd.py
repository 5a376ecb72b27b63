"""Tests for the user CLI command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from taskctl.cli import cli


@pytest.mark.usefixtures("_isolated_workspace")
class TestUserCommands:
    def test_add(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "user", "add", "Ada Lovelace", "--email", "ada@example.com"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["message"] == "User created"
        assert payload["data"]["id"] == "USER-0001"
        assert payload["data"]["email"] == "ada@example.com"

    def test_add_blank_name(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "user", "add", "  "])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["code"] == "VALIDATION_FAILED"

    def test_list(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["user", "add", "Ada"])
        cli_runner.invoke(cli, ["user", "add", "Grace"])
        result = cli_runner.invoke(cli, ["user", "list"])
        assert result.exit_code == 0
        assert "count: 2" in result.stdout
        assert "Grace" in result.stdout

    def test_quiet_list(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["user", "add", "Ada"])
        result = cli_runner.invoke(cli, ["-q", "user", "list"])
        assert result.stdout.strip() == "USER-0001"

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["user", "--examples"])
        assert result.exit_code == 0
        assert "taskctl user add" in result.output
