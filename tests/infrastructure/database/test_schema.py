"""Tests for table definitions and rank constraints."""

import pytest
from sqlalchemy import insert, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from taskrank.infrastructure.database.schema import stories, tasks

_NOW = "2026-01-01T00:00:00+00:00"


def _story(conn, story_id: int) -> None:  # type: ignore[no-untyped-def]
    conn.execute(insert(stories).values(id=story_id, title=f"S{story_id}", created=_NOW))


def _task(conn, story_id: int, rank: str) -> None:  # type: ignore[no-untyped-def]
    conn.execute(
        insert(tasks).values(
            story_id=story_id, title="t", rank=rank, created=_NOW, modified=_NOW
        )
    )


class TestTasksTable:
    def test_columns(self, db_engine: Engine) -> None:
        cols = {c["name"] for c in inspect(db_engine).get_columns("tasks")}
        assert {"id", "story_id", "title", "description", "rank", "version"} <= cols

    def test_version_defaults_to_one(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            _story(conn, 1)
            _task(conn, 1, "n")
            assert conn.execute(tasks.select()).mappings().one()["version"] == 1

    def test_duplicate_rank_in_story_rejected(self, db_engine: Engine) -> None:
        with pytest.raises(IntegrityError):
            with db_engine.begin() as conn:
                _story(conn, 1)
                _task(conn, 1, "n")
                _task(conn, 1, "n")

    def test_same_rank_in_different_stories_allowed(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            _story(conn, 1)
            _story(conn, 2)
            _task(conn, 1, "n")
            _task(conn, 2, "n")

    def test_story_must_exist(self, db_engine: Engine) -> None:
        with pytest.raises(IntegrityError):
            with db_engine.begin() as conn:
                _task(conn, 42, "n")

    def test_story_rank_index(self, db_engine: Engine) -> None:
        names = {ix["name"] for ix in inspect(db_engine).get_indexes("tasks")}
        assert "ix_tasks_story_rank" in names
