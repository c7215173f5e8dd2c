"""Pluggy hook specifications for fixture-loader lifecycle events.

Events fire synchronously on the loader's thread, in pipeline order:
``post_resolve`` at construction, ``post_provision`` after staging,
``post_load`` after dispatch.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("mongoseed")


class MongoseedHookSpec:
    """Hook specifications for the mongoseed plugin system."""

    @hookspec
    def post_resolve(
        self,
        resource_path: str,
        fixtures: list[str],
        status: str,
    ) -> None:
        """Called once the fixture set is resolved (``found``, ``empty``, ``failed``)."""

    @hookspec
    def post_provision(
        self,
        staged: list[str],
        failed: list[str],
    ) -> None:
        """Called after fixture files were staged into the service."""

    @hookspec
    def post_load(
        self,
        summary: dict[str, Any],
        failed_commands: list[str],
    ) -> None:
        """Called after every import command was dispatched."""
