"""Story rows — the collections tasks are ordered within."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import func, insert, select

from taskrank.infrastructure.database.schema import stories, tasks

if TYPE_CHECKING:
    from sqlalchemy import Connection


class StoryRepository:
    """Encapsulates SQL for story reads and inserts.

    Bound to a caller-owned connection; commit or rollback is the
    caller's responsibility.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def insert(self, *, title: str, created: str) -> dict[str, Any]:
        """Insert a story and return its row."""
        row = self._conn.execute(
            insert(stories).values(title=title, created=created).returning(*stories.c)
        ).mappings().one()
        return dict(row)

    def get(self, story_id: int) -> dict[str, Any] | None:
        row = self._conn.execute(select(stories).where(stories.c.id == story_id)).mappings().first()
        return dict(row) if row is not None else None

    def exists(self, story_id: int) -> bool:
        return (
            self._conn.execute(select(stories.c.id).where(stories.c.id == story_id)).first()
            is not None
        )

    def list_all(self) -> list[dict[str, Any]]:
        """All stories by id, each with its ``task_count``."""
        task_count = func.count(tasks.c.id).label("task_count")
        stmt = (
            select(stories.c.id, stories.c.title, stories.c.created, task_count)
            .select_from(stories.outerjoin(tasks, tasks.c.story_id == stories.c.id))
            .group_by(stories.c.id)
            .order_by(stories.c.id)
        )
        return [dict(row) for row in self._conn.execute(stmt).mappings().all()]
