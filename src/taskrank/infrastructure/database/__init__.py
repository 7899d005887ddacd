"""SQLite database engine and schema via SQLAlchemy Core."""

from taskrank.infrastructure.database.engine import (
    create_db_engine,
    database_path,
    init_database,
)
from taskrank.infrastructure.database.schema import metadata, stories, tasks

__all__ = [
    "create_db_engine",
    "database_path",
    "init_database",
    "metadata",
    "stories",
    "tasks",
]
