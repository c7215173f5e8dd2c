"""Command: import fixtures with a locally installed mongoimport."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mongoseed.commands._base import SeedCommand

if TYPE_CHECKING:
    from mongoseed.commands._context import AppContext


@click.command(
    cls=SeedCommand,
    examples="""\
  mongoseed load --staging-dir .mongoseed
  mongoseed -v load --staging-dir /tmp/seed --uri mongodb://localhost:27017""",
)
@click.option(
    "--staging-dir",
    type=click.Path(file_okay=False, path_type=Path, resolve_path=True),
    required=True,
    help="Directory fixture copies and command scripts are written to.",
)
@click.option("--uri", default=None, help="Connection string passed to mongoimport.")
@click.pass_obj
def load(app: AppContext, staging_dir: Path, uri: str | None) -> None:
    """Stage fixtures locally and import each one. Exits 1 if any import fails."""
    from mongoseed.services.seed import SeedService

    app.emit(SeedService(app.settings).load(staging_dir, uri=uri))
