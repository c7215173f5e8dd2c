"""Command: list the fixture files that would be loaded."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mongoseed.commands._base import SeedCommand

if TYPE_CHECKING:
    from mongoseed.commands._context import AppContext


@click.command(
    "list",
    cls=SeedCommand,
    examples="""\
  mongoseed list
  mongoseed --json list
  mongoseed -c ci/mongoseed.toml list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List resolved fixtures with their database and collection."""
    from mongoseed.services.seed import SeedService

    app.emit(SeedService(app.settings).list_fixtures())
