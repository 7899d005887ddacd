"""Tests for the root taskrank CLI."""

import pytest
from click.testing import CliRunner

from taskrank import __version__
from taskrank.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "taskrank" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_board")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flags_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/missing.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_board")
def test_verbose_move_shows_telemetry(cli_runner: CliRunner) -> None:
    cli_runner.invoke(cli, ["story", "create", "Sprint"])
    cli_runner.invoke(cli, ["task", "create", "1", "First task"])
    cli_runner.invoke(cli, ["task", "create", "1", "Second task"])
    result = cli_runner.invoke(
        cli, ["-v", "task", "move", "1", "--from-story", "1", "--from-index", "1", "--to-index", "0"]
    )
    assert result.exit_code == 0, result.output
    assert "OrderingService.move_task" in result.stdout
    assert "neighbors" in result.stdout
