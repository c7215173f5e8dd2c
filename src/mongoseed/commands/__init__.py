"""Subcommand modules for mongoseed.

register_commands() uses deferred imports to keep ``mongoseed --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    from mongoseed.commands.list_cmd import list_cmd
    from mongoseed.commands.load import load
    from mongoseed.commands.plan import plan

    cli.add_command(list_cmd)
    cli.add_command(plan)
    cli.add_command(load)
