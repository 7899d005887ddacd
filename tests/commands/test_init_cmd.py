"""Tests for the init command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from taskrank.cli import cli


@pytest.mark.usefixtures("_isolated_board")
class TestInit:
    def test_creates_config_and_database(self, cli_runner: CliRunner, board_root: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "init", "--name", "Team board"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)["data"]
        assert data["created_config"] is True
        assert (board_root / ".taskrank" / "taskrank.db").is_file()
        assert 'name = "Team board"' in (board_root / "taskrank.toml").read_text()

    def test_keeps_existing_config(self, cli_runner: CliRunner, board_root: Path) -> None:
        (board_root / "taskrank.toml").write_text('[board]\nname = "kept"\n')
        result = cli_runner.invoke(cli, ["--json", "init", "--name", "ignored"])
        data = json.loads(result.stdout)["data"]
        assert data["created_config"] is False
        assert "kept" in (board_root / "taskrank.toml").read_text()

    def test_config_name_used_by_default(self, cli_runner: CliRunner, board_root: Path) -> None:
        cli_runner.invoke(cli, ["init"])
        assert 'name = "my-board"' in (board_root / "taskrank.toml").read_text()
