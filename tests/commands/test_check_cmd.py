"""Tests for the check command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.conftest import create_story, insert_task
from taskrank.cli import cli
from taskrank.config.settings import TaskrankSettings
from taskrank.infrastructure.board import Board


@pytest.mark.usefixtures("_isolated_board")
class TestCheckCommand:
    def test_clean_board(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0
        assert "No issues found." in result.output

    def test_json_counts(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check"])
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["count"] == 0

    def test_invalid_rank_fails(self, cli_runner: CliRunner, board_root: Path) -> None:
        board = Board(TaskrankSettings.from_cli(board_root=board_root))
        try:
            insert_task(board, create_story(board), "bad", "ma")
        finally:
            board.close()

        result = cli_runner.invoke(cli, ["--json", "check"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["error"]["code"] == "CORRUPTED_STATE"
        assert data["data"]["issues"][0]["kind"] == "invalid_rank"
