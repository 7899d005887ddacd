"""Shared pytest fixtures and test helpers for taskrank tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from taskrank.config.settings import TaskrankSettings
from taskrank.infrastructure.board import Board
from taskrank.infrastructure.database.engine import init_database
from taskrank.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer-level TASKRANK_* variables out of tests."""
    for name in ("TASKRANK_CONFIG", "TASKRANK_BOARD_ROOT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_global_state() -> Iterator[None]:
    """Undo logging and telemetry changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    taskrank_level = logging.getLogger("taskrank").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("taskrank").setLevel(taskrank_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def board_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def board(board_root: Path) -> Iterator[Board]:
    """Board on a temp directory with an initialized database."""
    b = Board(TaskrankSettings.from_cli(board_root=board_root))
    try:
        yield b
    finally:
        b.close()


@pytest.fixture
def _isolated_board(board_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp board root so the CLI opens an isolated board."""
    monkeypatch.chdir(board_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def create_story(board: Board, title: str = "Story") -> int:
    """Create a story via BoardService, asserting success; return its id."""
    from taskrank.services.board import BoardService

    result = BoardService(board).create_story(title)
    assert result.ok, result.error
    return int(result.data["id"])


def create_task(board: Board, story_id: int, title: str, **kwargs: Any) -> dict[str, Any]:
    """Create a task via OrderingService, asserting success."""
    from taskrank.services.ordering import OrderingService

    result = OrderingService(board).create_task(story_id, title, **kwargs)
    assert result.ok, result.error
    return result.data


def insert_task(board: Board, story_id: int, title: str, rank: str) -> int:
    """Insert a task with an explicit rank, bypassing the generator."""
    with board.transaction() as txn:
        row = txn.tasks.insert(
            story_id=story_id,
            title=title,
            description="",
            rank=rank,
            created="2026-01-01T00:00:00+00:00",
        )
    return int(row["id"])


def ordered_ids(board: Board, story_id: int) -> list[int]:
    """Task ids of *story_id* in rank order."""
    with board.transaction() as txn:
        return [int(row["id"]) for row in txn.tasks.list_ordered(story_id)]


def ranks(board: Board, story_id: int) -> dict[int, str]:
    """Task id -> rank for *story_id*."""
    with board.transaction() as txn:
        return {int(row["id"]): row["rank"] for row in txn.tasks.list_ordered(story_id)}
