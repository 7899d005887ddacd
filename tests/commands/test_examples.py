"""Tests for the --examples flag."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from taskrank.cli import cli

EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["story", "--examples"], ["taskrank story create"]),
    (["task", "--examples"], ["taskrank task move", "--to-index 0"]),
    (["check", "--examples"], ["taskrank check"]),
    (["init", "--examples"], ["taskrank init --name"]),
]


@pytest.mark.parametrize(("args", "keywords"), EXAMPLES_COMMANDS)
def test_examples(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


def test_help_stays_short(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["task", "--help"])
    assert "taskrank task move" not in result.output
    assert "--examples" in result.output
