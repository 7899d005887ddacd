"""Database engine setup for SQLite with WAL mode.

The DB is stored at {board_root}/.taskrank/taskrank.db.  SQLAlchemy Core
(not ORM) is used: every operation is a handful of statements inside
one ``engine.begin()`` block, with no use for an identity map.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from taskrank.infrastructure.database.schema import metadata

DATA_DIRNAME = ".taskrank"
DB_FILENAME = "taskrank.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine: WAL mode, foreign keys, IMMEDIATE transactions."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        # Hand BEGIN over to SQLAlchemy so it can be made IMMEDIATE below.
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn: Any) -> None:
        # Take the write lock up front: a move's neighbor read and its
        # commit then see no interleaved writer.
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def database_path(board_root: Path) -> Path:
    """Location of the board database under *board_root*."""
    return board_root / DATA_DIRNAME / DB_FILENAME


def init_database(board_root: Path) -> Engine:
    """Initialize the database at ``{board_root}/.taskrank/taskrank.db``.

    Idempotent — safe to call on an existing board.
    Returns the engine ready for use.
    """
    db_path = database_path(board_root)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
