"""Command: initialize a board in the current directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskrank.commands._base import TaskrankCommand
from taskrank.config.discovery import CONFIG_FILENAME
from taskrank.infrastructure.database.engine import database_path
from taskrank.services.result import ServiceResult

if TYPE_CHECKING:
    from taskrank.commands._context import AppContext

_DEFAULT_TOML = """\
[board]
name = "{name}"

[ordering]
max_retries = 3
"""


@click.command(
    "init",
    cls=TaskrankCommand,
    examples='  taskrank init\n  taskrank init --name "Team board"',
)
@click.option("--name", default=None, help="Board name written to taskrank.toml.")
@click.pass_obj
def init_cmd(app: AppContext, name: str | None) -> None:
    """Create the board database and a taskrank.toml if missing."""
    root = app.settings.board_root
    toml_path = root / CONFIG_FILENAME
    created_config = False
    if not toml_path.exists():
        toml_path.write_text(
            _DEFAULT_TOML.format(name=name or app.settings.board.name),
            encoding="utf-8",
        )
        created_config = True

    # Opening the board creates the schema.
    board = app.board
    app.emit(
        ServiceResult(
            ok=True,
            op="init",
            data={
                "root": str(board.root),
                "database": str(database_path(board.root)),
                "config": str(toml_path),
                "created_config": created_config,
            },
        )
    )
