"""Command: print import commands without running them."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mongoseed.commands._base import SeedCommand

if TYPE_CHECKING:
    from mongoseed.commands._context import AppContext


@click.command(
    cls=SeedCommand,
    examples="""\
  mongoseed plan
  mongoseed plan --no-drop""",
)
@click.option(
    "--drop/--no-drop",
    default=None,
    help="Override whether collections are dropped before import.",
)
@click.pass_obj
def plan(app: AppContext, drop: bool | None) -> None:
    """Show the import command synthesized for each fixture."""
    from mongoseed.services.seed import SeedService

    app.emit(SeedService(app.settings).plan(drop=drop))
