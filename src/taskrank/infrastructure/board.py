"""Board — repository facade with transaction coordination.

The Board is the single dependency injected into every service.  It owns
the database engine.  :meth:`Board.transaction` wraps ``engine.begin()``:
every statement issued inside the block commits together, or none do.
That covers a move's neighbor read and its rank/story update.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from taskrank.infrastructure.database.engine import init_database
from taskrank.infrastructure.repositories import StoryRepository, TaskRepository

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from taskrank.config.settings import TaskrankSettings

logger = logging.getLogger(__name__)


@dataclass
class BoardTransaction:
    """Active transaction with repositories bound to its connection."""

    conn: Connection

    @property
    def tasks(self) -> TaskRepository:
        return TaskRepository(self.conn)

    @property
    def stories(self) -> StoryRepository:
        return StoryRepository(self.conn)


class Board:
    """Database-backed store of stories and their rank-ordered tasks.

    Constructed once at CLI startup from :class:`TaskrankSettings` and
    stored in ``click.Context.obj``.  Services receive the Board via their
    :class:`BaseService` constructor.
    """

    def __init__(self, settings: TaskrankSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(self.root)

    @property
    def root(self) -> Path:
        """The board root directory."""
        return self._settings.board_root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> TaskrankSettings:
        return self._settings

    @contextmanager
    def transaction(self) -> Iterator[BoardTransaction]:
        """Atomic unit of work.

        Commits when the block exits normally.  Any exception, including
        ``KeyboardInterrupt`` or a cancelled caller, rolls back every
        statement issued in the block.

        Usage::

            with board.transaction() as txn:
                rows = txn.tasks.list_ordered(story_id, limit=2)
                txn.tasks.update_placement(task_id, rank=..., expected_version=...)
        """
        with self._engine.begin() as conn:
            try:
                yield BoardTransaction(conn=conn)
            except BaseException:
                logger.debug("Board transaction rolled back", exc_info=True)
                raise

    def close(self) -> None:
        """Dispose the engine's connection pool."""
        self._engine.dispose()
