"""Command: rank integrity check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskrank.commands._base import TaskrankCommand

if TYPE_CHECKING:
    from taskrank.commands._context import AppContext


@click.command(cls=TaskrankCommand, examples="  taskrank check\n  taskrank --json check")
@click.pass_obj
def check(app: AppContext) -> None:
    """Report duplicate or malformed ranks. Never modifies data."""
    from taskrank.services.check import CheckService

    app.emit(CheckService(app.board).check())
