"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns logging setup and result emission.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mongoseed.output.renderers import render_result

if TYPE_CHECKING:
    from mongoseed.config.settings import MongoseedSettings
    from mongoseed.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: MongoseedSettings) -> None:
        self.settings = settings

        from mongoseed.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit(self, result: ServiceResult) -> None:
        """Render a ServiceResult with correct exit semantics.

        * Success: writes to stdout, warnings to stderr.
        * Failure: writes to stderr, exits with code 1.
        """
        output = render_result(
            result,
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            return
        click.echo(output, err=True)
        raise SystemExit(1)
