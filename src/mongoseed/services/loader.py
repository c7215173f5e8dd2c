"""FixtureLoader — resolve, provision, and import fixtures into a service.

Lifecycle::

    configuring -> resolved -> provisioned -> loaded

The fixture set is resolved eagerly in ``__init__`` so configuration
problems surface before any service is started. A resolution failure (a
missing resource root, an unreadable tree, a failing resolver) is not fatal:
it yields an empty fixture set with status ``failed``, which keeps
suites that configure no fixtures running. Staging and import failures are
sent to the log sink and reported in the LoadReport, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from mongoseed.config.models import LoaderConfig, build_config
from mongoseed.domain.commands import CommandSynthesizer, container_location
from mongoseed.domain.errors import FixturePathError, ResourceNotFoundError
from mongoseed.domain.fixtures import (
    DispatchOutcome,
    FixturePath,
    ImportCommand,
    LoadReport,
    OutcomeError,
)
from mongoseed.infrastructure.catalog import CatalogFileResolver, FileResolver
from mongoseed.infrastructure.handles import ServiceHandle, import_options_for
from mongoseed.infrastructure.resources import DirectoryResourceLookup, ResourceLookup
from mongoseed.services.dispatch import ImportDispatcher

if TYPE_CHECKING:
    from mongoseed.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

STAGING_FAILURE = "STAGING_FAILURE"
INVALID_FIXTURE_PATH = "INVALID_FIXTURE_PATH"


class LoaderState(StrEnum):
    CONFIGURING = "configuring"
    RESOLVED = "resolved"
    PROVISIONED = "provisioned"
    LOADED = "loaded"


class ResolutionStatus(StrEnum):
    FOUND = "found"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class ResolutionReport:
    """How fixture resolution went: distinguishes "no fixtures" from "broken root"."""

    status: ResolutionStatus
    count: int = 0
    error: str | None = None


class FixtureLoader:
    """Seed a service with the fixtures found under a resource root.

    Usage::

        loader = FixtureLoader.create(service=handle, excludes=["draft.*"])
        report = loader.before_all()
        report.raise_for_failures()
    """

    def __init__(
        self,
        config: LoaderConfig,
        *,
        plugins: PluginManager | None = None,
        lookup: ResourceLookup | None = None,
    ) -> None:
        self._config = config
        self._plugins = plugins
        self._lookup = lookup or DirectoryResourceLookup(config.resource_dirs)
        self._service: ServiceHandle | None = config.service
        self._state = LoaderState.CONFIGURING
        self._warnings: list[str] = []
        self._staging_failures: list[DispatchOutcome] = []
        self._report: LoadReport | None = None

        self._fixtures, self._resolution = self._resolve()
        self._state = LoaderState.RESOLVED
        for fixture in self._fixtures:
            self._emit(f"Found: {fixture}")
        self._dispatch_event(
            "post_resolve",
            {
                "resource_path": config.resource_path,
                "fixtures": [str(f) for f in self._fixtures],
                "status": str(self._resolution.status),
            },
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, *, plugins: PluginManager | None = None, **options: Any) -> FixtureLoader:
        """Validate *options* and build a loader.

        Raises ConfigurationError for invalid options. Resolution failures
        never raise; they show up in ``resolution``.
        """
        return cls(build_config(**options).unwrap(), plugins=plugins)

    @classmethod
    def standard(cls, service: ServiceHandle | None = None) -> FixtureLoader:
        """A loader with every option at its default."""
        return cls.create(service=service)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def config(self) -> LoaderConfig:
        return self._config

    @property
    def state(self) -> LoaderState:
        return self._state

    @property
    def fixtures(self) -> tuple[FixturePath, ...]:
        return self._fixtures

    @property
    def resolution(self) -> ResolutionReport:
        return self._resolution

    @property
    def report(self) -> LoadReport | None:
        return self._report

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)

    @property
    def service(self) -> ServiceHandle:
        """The service handle, creating a MongoDB container handle if none was given.

        The container is not started here; its lifecycle belongs to the caller.
        """
        if self._service is None:
            from mongoseed.infrastructure.container import MongoContainerHandle

            self._service = MongoContainerHandle(self._config.mongo_version)
        return self._service

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def provision(self) -> list[DispatchOutcome]:
        """Stage every fixture file at the location its command will reference.

        Returns the staging failures. Idempotent.
        """
        if self._state in (LoaderState.PROVISIONED, LoaderState.LOADED):
            return list(self._staging_failures)

        service = self.service
        staged: list[str] = []
        failures: list[DispatchOutcome] = []
        for fixture in self._fixtures:
            destination = container_location(self._config.container_base_path, fixture)
            try:
                service.stage_file(self._read_source(fixture), destination)
            except Exception as exc:
                logger.debug("Staging %s at %s failed", fixture, destination, exc_info=True)
                self._emit(f"Failed: stage {fixture} ({exc})", logging.WARNING)
                failures.append(
                    DispatchOutcome(
                        ok=False,
                        command=f"stage {fixture}",
                        script_path=destination,
                        error=OutcomeError(code=STAGING_FAILURE, message=str(exc)),
                    )
                )
                continue
            staged.append(str(fixture))

        self._staging_failures = failures
        self._state = LoaderState.PROVISIONED
        self._dispatch_event(
            "post_provision",
            {"staged": staged, "failed": [f.command for f in failures]},
        )
        return list(failures)

    def load(self) -> LoadReport:
        """Provision if needed, then import every fixture, in fixture-set order.

        Runs at most once; later calls return the first report.
        """
        if self._report is not None:
            return self._report

        staging = self.provision()
        service = self.service
        synthesizer = self._synthesizer(service)
        dispatcher = ImportDispatcher(script_dir=self._config.script_dir, shell=self._config.shell)

        outcomes: list[DispatchOutcome] = []
        for fixture in self._fixtures:
            try:
                command = synthesizer.synthesize(fixture, self._config.drop_collections)
            except FixturePathError as exc:
                self._emit(f"Failed: {fixture} ({exc})", logging.WARNING)
                outcomes.append(
                    DispatchOutcome(
                        ok=False,
                        command=str(fixture),
                        error=OutcomeError(code=INVALID_FIXTURE_PATH, message=str(exc)),
                    )
                )
                continue
            self._emit(f"Command: {command}")
            outcome = dispatcher.dispatch(command, service)
            if not outcome.ok and outcome.error is not None:
                self._emit(f"Failed: {command} ({outcome.error.message})", logging.WARNING)
            outcomes.append(outcome)

        report = LoadReport(outcomes=outcomes, staging=staging)
        self._report = report
        self._state = LoaderState.LOADED
        if not report.ok:
            logger.warning("Fixture load finished with failures: %s", report.summary())
        self._dispatch_event(
            "post_load",
            {
                "summary": report.summary(),
                "failed_commands": [o.command for o in report.failed],
            },
        )
        return report

    def commands(self) -> list[ImportCommand]:
        """Synthesize every import command without running anything.

        Fixtures without a database directory are skipped with a warning.
        """
        synthesizer = self._synthesizer(self._service)
        commands: list[ImportCommand] = []
        for fixture in self._fixtures:
            try:
                commands.append(synthesizer.synthesize(fixture, self._config.drop_collections))
            except FixturePathError as exc:
                logger.warning("Skipping fixture %s: %s", fixture, exc)
        return commands

    def before_all(self) -> LoadReport:
        """Test-lifecycle entry point, invoked once before any test runs."""
        return self.load()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self) -> tuple[tuple[FixturePath, ...], ResolutionReport]:
        resolver: FileResolver = self._config.file_resolver or CatalogFileResolver(self._lookup)
        try:
            resolved = resolver.resolve(
                self._config.resource_path,
                self._config.includes,
                self._config.excludes,
            )
            fixtures = tuple(FixturePath.of(p) for p in resolved)
        except ResourceNotFoundError as exc:
            self._emit(f"No fixtures loaded: {exc}", logging.WARNING)
            return (), ResolutionReport(ResolutionStatus.FAILED, error=str(exc))
        except Exception as exc:
            logger.debug("Fixture resolution failed", exc_info=True)
            reason = f"{type(exc).__name__}: {exc}"
            self._emit(f"No fixtures loaded: {reason}", logging.WARNING)
            return (), ResolutionReport(ResolutionStatus.FAILED, error=reason)

        status = ResolutionStatus.FOUND if fixtures else ResolutionStatus.EMPTY
        return fixtures, ResolutionReport(status, count=len(fixtures))

    def _synthesizer(self, service: object | None) -> CommandSynthesizer:
        return CommandSynthesizer(
            self._config.container_base_path,
            tool=self._config.import_tool,
            options=self._config.import_options or import_options_for(service),
        )

    def _read_source(self, fixture: FixturePath) -> bytes:
        source = fixture.source or self._lookup.locate(str(fixture.relative))
        return source.read_bytes()

    def _emit(self, line: str, level: int = logging.INFO) -> None:
        logger.log(level, line)
        if self._config.log_sink is not None:
            self._config.log_sink(line)

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any]) -> None:
        """Dispatch a lifecycle event. No-op without a plugin manager.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        warning = self._plugins.dispatch(hook_name, payload)
        if warning is not None:
            self._warnings.append(warning)
