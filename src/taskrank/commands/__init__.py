"""Subcommand modules for taskrank.

Provides register_commands() which attaches every group and standalone
command to the root CLI group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    from taskrank.commands.check import check
    from taskrank.commands.init_cmd import init_cmd
    from taskrank.commands.story import story
    from taskrank.commands.task import task

    cli.add_command(story)
    cli.add_command(task)
    cli.add_command(check)
    cli.add_command(init_cmd)
