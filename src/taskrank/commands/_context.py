"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``.  The Board is opened lazily so ``--help`` and
``--version`` never touch the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from taskrank.config.logging import configure_logging
from taskrank.output.formatters import OutputSettings, format_result
from taskrank.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from taskrank.config.settings import TaskrankSettings
    from taskrank.infrastructure.board import Board
    from taskrank.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: TaskrankSettings) -> None:
        self.settings = settings
        self._board: Board | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def board(self) -> Board:
        """The board (opened on first access)."""
        if self._board is None:
            from taskrank.infrastructure.board import Board

            self._board = Board(self.settings)
        return self._board

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult; exit 1 on failure.

        Success goes to stdout, failure to stderr.  Warnings go to stderr
        unless they are already part of the JSON payload.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
