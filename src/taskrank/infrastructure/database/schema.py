"""SQLAlchemy Core table definitions for the taskrank database.

Tasks are ordered within a story by ``rank`` under SQLite's default
BINARY collation, which matches Python string comparison.
``UNIQUE(story_id, rank)`` makes a rank collision a rejected write
instead of a silent duplicate.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

stories = Table(
    "stories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("created", Text, nullable=False),
)

tasks = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("story_id", Integer, ForeignKey("stories.id"), nullable=False),
    Column("title", Text, nullable=False),
    Column("description", Text, nullable=False, default="", server_default=""),
    Column("rank", Text, nullable=False),
    # Bumped on every placement change; guards optimistic commits.
    Column("version", Integer, nullable=False, default=1, server_default="1"),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
    UniqueConstraint("story_id", "rank", name="uq_tasks_story_rank"),
)

Index("ix_tasks_story_rank", tasks.c.story_id, tasks.c.rank)
