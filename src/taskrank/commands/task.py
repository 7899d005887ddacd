"""Command group: tasks — create, move, list, show, delete."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskrank.commands._base import TaskrankGroup
from taskrank.services.board import BoardService
from taskrank.services.ordering import OrderingService

if TYPE_CHECKING:
    from taskrank.commands._context import AppContext

_TASK_EXAMPLES = """\
  taskrank task create 1 "Write release notes" --description "for v2"
  taskrank task list 1
  taskrank task move 7 --from-story 1 --from-index 3 --to-story 1 --to-index 0
  taskrank task move 7 --from-story 1 --from-index 0 --to-story 2 --to-index 1
  taskrank task show 7
  taskrank task delete 7"""


@click.group(cls=TaskrankGroup, examples=_TASK_EXAMPLES)
def task() -> None:
    """Create, reorder, and inspect tasks."""


@task.command("create")
@click.argument("story_id", type=int)
@click.argument("title")
@click.option("--description", default="", help="Task description.")
@click.pass_obj
def create_task(app: AppContext, story_id: int, title: str, description: str) -> None:
    """Create a task at the top of a story."""
    app.emit(OrderingService(app.board).create_task(story_id, title, description))


@task.command("move")
@click.argument("task_id", type=int)
@click.option("--from-story", "source_story_id", type=int, required=True, help="Current story.")
@click.option("--from-index", "source_index", type=int, required=True, help="Current position.")
@click.option(
    "--to-story",
    "destination_story_id",
    type=int,
    default=None,
    help="Target story (default: same story).",
)
@click.option("--to-index", "destination_index", type=int, required=True, help="Target position.")
@click.pass_obj
def move_task(
    app: AppContext,
    task_id: int,
    source_story_id: int,
    source_index: int,
    destination_story_id: int | None,
    destination_index: int,
) -> None:
    """Move a task to a position, optionally in another story."""
    if destination_story_id is None:
        destination_story_id = source_story_id
    app.emit(
        OrderingService(app.board).move_task(
            task_id,
            source_index,
            destination_index,
            source_story_id,
            destination_story_id,
        )
    )


@task.command("list")
@click.argument("story_id", type=int)
@click.pass_obj
def list_tasks(app: AppContext, story_id: int) -> None:
    """List a story's tasks in rank order."""
    app.emit(BoardService(app.board).list_tasks(story_id))


@task.command("show")
@click.argument("task_id", type=int)
@click.pass_obj
def show_task(app: AppContext, task_id: int) -> None:
    """Show one task with its position."""
    app.emit(OrderingService(app.board).get_task(task_id))


@task.command("delete")
@click.argument("task_id", type=int)
@click.pass_obj
def delete_task(app: AppContext, task_id: int) -> None:
    """Delete a task."""
    app.emit(OrderingService(app.board).delete_task(task_id))
