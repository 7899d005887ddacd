"""Task rows — the ordered neighbor query and the atomic placement update.

Every read of a story's ordering goes through :meth:`TaskRepository.list_ordered`:
neighbor lookups for moves, the head lookup for ``destination_index == 0``,
and the first-task lookup for prepend-on-create.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select, update

from taskrank.infrastructure.database.schema import tasks

if TYPE_CHECKING:
    from sqlalchemy import Connection


class TaskRepository:
    """Encapsulates SQL for task ordering reads and writes.

    Bound to a caller-owned connection (e.g. from ``engine.begin()``) so
    the neighbor read and the commit participate in one transaction.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_ordered(
        self,
        story_id: int,
        *,
        skip: int = 0,
        limit: int | None = None,
        exclude_id: int | None = None,
    ) -> list[dict[str, Any]]:
        """Tasks of *story_id* ascending by rank, after *skip*, at most *limit*.

        *exclude_id* leaves one task out of the ordering before offsets
        apply (the task being moved).
        """
        stmt = select(tasks).where(tasks.c.story_id == story_id)
        if exclude_id is not None:
            stmt = stmt.where(tasks.c.id != exclude_id)
        stmt = stmt.order_by(tasks.c.rank.asc(), tasks.c.id.asc()).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return [dict(row) for row in self._conn.execute(stmt).mappings().all()]

    def first(self, story_id: int) -> dict[str, Any] | None:
        """The lowest-ranked task of *story_id*, or None if the story is empty."""
        rows = self.list_ordered(story_id, limit=1)
        return rows[0] if rows else None

    def count(self, story_id: int, *, exclude_id: int | None = None) -> int:
        stmt = select(func.count(tasks.c.id)).where(tasks.c.story_id == story_id)
        if exclude_id is not None:
            stmt = stmt.where(tasks.c.id != exclude_id)
        return int(self._conn.execute(stmt).scalar_one() or 0)

    def get(self, task_id: int) -> dict[str, Any] | None:
        row = self._conn.execute(select(tasks).where(tasks.c.id == task_id)).mappings().first()
        return dict(row) if row is not None else None

    def position(self, task_id: int, story_id: int, rank: str) -> int:
        """Zero-based index of a task within its story's ordering."""
        stmt = select(func.count(tasks.c.id)).where(
            tasks.c.story_id == story_id,
            (tasks.c.rank < rank) | ((tasks.c.rank == rank) & (tasks.c.id < task_id)),
        )
        return int(self._conn.execute(stmt).scalar_one() or 0)

    def duplicate_ranks(self) -> list[dict[str, Any]]:
        """``(story_id, rank)`` pairs held by more than one task."""
        holders = func.count(tasks.c.id).label("holders")
        stmt = (
            select(tasks.c.story_id, tasks.c.rank, holders)
            .group_by(tasks.c.story_id, tasks.c.rank)
            .having(func.count(tasks.c.id) > 1)
            .order_by(tasks.c.story_id, tasks.c.rank)
        )
        return [dict(row) for row in self._conn.execute(stmt).mappings().all()]

    def all_ranks(self) -> list[dict[str, Any]]:
        """Every task's id, story and rank (for integrity checks)."""
        stmt = select(tasks.c.id, tasks.c.story_id, tasks.c.rank).order_by(tasks.c.id)
        return [dict(row) for row in self._conn.execute(stmt).mappings().all()]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(
        self,
        *,
        story_id: int,
        title: str,
        description: str,
        rank: str,
        created: str,
    ) -> dict[str, Any]:
        """Insert a task and return its row."""
        row = self._conn.execute(
            insert(tasks)
            .values(
                story_id=story_id,
                title=title,
                description=description,
                rank=rank,
                created=created,
                modified=created,
            )
            .returning(*tasks.c)
        ).mappings().one()
        return dict(row)

    def update_placement(
        self,
        task_id: int,
        *,
        rank: str,
        expected_version: int,
        modified: str,
        story_id: int | None = None,
    ) -> bool:
        """Set rank (and story, for cross-story moves) in one statement.

        Guarded by ``version == expected_version``.  Returns False when
        another writer changed the task since it was read.
        """
        values: dict[str, Any] = {
            "rank": rank,
            "version": tasks.c.version + 1,
            "modified": modified,
        }
        if story_id is not None:
            values["story_id"] = story_id
        result = self._conn.execute(
            update(tasks)
            .where(tasks.c.id == task_id, tasks.c.version == expected_version)
            .values(**values)
        )
        return result.rowcount == 1

    def delete(self, task_id: int) -> bool:
        result = self._conn.execute(delete(tasks).where(tasks.c.id == task_id))
        return result.rowcount == 1
