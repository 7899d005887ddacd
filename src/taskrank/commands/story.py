"""Command group: stories."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskrank.commands._base import TaskrankGroup
from taskrank.services.board import BoardService

if TYPE_CHECKING:
    from taskrank.commands._context import AppContext


@click.group(
    cls=TaskrankGroup,
    examples="""\
  taskrank story create "Sprint 12"
  taskrank story list
  taskrank --json story list""",
)
def story() -> None:
    """Create and list stories."""


@story.command("create")
@click.argument("title")
@click.pass_obj
def create_story(app: AppContext, title: str) -> None:
    """Create a story."""
    app.emit(BoardService(app.board).create_story(title))


@story.command("list")
@click.pass_obj
def list_stories(app: AppContext) -> None:
    """List stories with their task counts."""
    app.emit(BoardService(app.board).list_stories())
