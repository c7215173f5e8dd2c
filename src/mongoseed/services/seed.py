"""SeedService — CLI-facing operations over a FixtureLoader.

Each method returns a ServiceResult. Unlike the loader itself, these
operations report a missing resource root as an error, since a CLI user
asked for that root explicitly.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from mongoseed.config.models import CONFIGURATION_ERROR, build_config
from mongoseed.infrastructure.handles import LocalServiceHandle
from mongoseed.plugins.manager import PluginManager
from mongoseed.services.loader import FixtureLoader, ResolutionStatus
from mongoseed.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from mongoseed.config.settings import MongoseedSettings

RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
LOAD_FAILED = "LOAD_FAILED"


class SeedService:
    """List, plan, and load fixtures described by CLI settings."""

    def __init__(
        self,
        settings: MongoseedSettings,
        *,
        plugins: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        self._plugins = plugins

    def list_fixtures(self) -> ServiceResult:
        loader = self._build("list", {})
        if isinstance(loader, ServiceResult):
            return loader
        items: list[dict[str, Any]] = []
        for fixture in loader.fixtures:
            items.append(
                {
                    "path": str(fixture),
                    "database": fixture.relative.parent.name,
                    "collection": fixture.collection,
                }
            )
        return ServiceResult(
            ok=True,
            op="list",
            warnings=loader.warnings,
            data={
                "resource_path": loader.config.resource_path,
                "status": str(loader.resolution.status),
                "count": len(items),
                "items": items,
            },
        )

    def plan(self, *, drop: bool | None = None) -> ServiceResult:
        overrides: dict[str, Any] = {}
        if drop is not None:
            overrides["drop_collections"] = drop
        loader = self._build("plan", overrides)
        if isinstance(loader, ServiceResult):
            return loader
        commands = loader.commands()
        return ServiceResult(
            ok=True,
            op="plan",
            warnings=loader.warnings,
            data={
                "drop": loader.config.drop_collections,
                "count": len(commands),
                "commands": [c.text for c in commands],
            },
        )

    def load(self, staging_dir: Path, *, uri: str | None = None) -> ServiceResult:
        """Stage fixtures under *staging_dir* and run the import tool locally."""
        overrides: dict[str, Any] = {
            "container_base_path": str(staging_dir / "fixtures"),
            "script_dir": str(staging_dir / "scripts"),
            "service": LocalServiceHandle(),
        }
        if uri:
            overrides["import_options"] = (
                *self._settings.mongoimport.options,
                "--uri",
                uri,
            )
        loader = self._build("load", overrides)
        if isinstance(loader, ServiceResult):
            return loader

        report = loader.before_all()
        data = {
            "summary": report.summary(),
            "outcomes": [
                {
                    "command": o.command,
                    "ok": o.ok,
                    "exit_code": o.exit_code,
                    "error": o.error.message if o.error else None,
                }
                for o in [*report.staging, *report.outcomes]
            ],
        }
        if report.ok:
            return ServiceResult(ok=True, op="load", data=data, warnings=loader.warnings)
        return ServiceResult(
            ok=False,
            op="load",
            data=data,
            warnings=loader.warnings,
            error=ServiceError(
                code=LOAD_FAILED,
                message=f"{len(report.failed) + len(report.staging)} fixture import(s) failed",
                detail=report.summary(),
            ),
        )

    def _build(self, op: str, overrides: dict[str, Any]) -> FixtureLoader | ServiceResult:
        result = build_config(**self._settings.to_loader_options(**overrides))
        if not result.ok or result.config is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=result.code or CONFIGURATION_ERROR,
                    message=result.message,
                    detail={"problems": result.problems},
                ),
            )
        loader = FixtureLoader(result.config, plugins=self._plugin_manager())
        if loader.resolution.status is ResolutionStatus.FAILED:
            return ServiceResult(
                ok=False,
                op=op,
                warnings=loader.warnings,
                error=ServiceError(
                    code=RESOURCE_NOT_FOUND,
                    message=loader.resolution.error or "Resource not found",
                    detail={"resource_dirs": [str(d) for d in loader.config.resource_dirs]},
                ),
            )
        return loader

    def _plugin_manager(self) -> PluginManager:
        """Entry-point plugins, discovered once per service."""
        if self._plugins is None:
            self._plugins = PluginManager()
        if not self._plugins.is_loaded:
            self._plugins.discover_and_load()
        return self._plugins
