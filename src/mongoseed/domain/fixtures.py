"""Fixture value types: paths, import commands, and dispatch outcomes.

Fixture layout on disk::

    <root>/<database>/<collection>.json

INVARIANT: A FixturePath is relative and immutable. Its first segment is the
resource root name, so the parent directory always names the database.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

from pydantic import BaseModel, Field

from mongoseed.domain.errors import DispatchFailure, FixturePathError


@dataclass(frozen=True)
class FixturePath:
    """A fixture file, relative to the parent of the resource root.

    Attributes:
        relative: POSIX path such as ``mongodb/inventorydb/inventory.json``.
        source: Absolute location on the local filesystem, if known.
    """

    relative: PurePosixPath
    source: Path | None = None

    @classmethod
    def of(
        cls, value: str | PurePosixPath | FixturePath, source: Path | None = None
    ) -> FixturePath:
        """Coerce a string or path into a FixturePath."""
        if isinstance(value, FixturePath):
            return value
        return cls(relative=PurePosixPath(value), source=source)

    @property
    def name(self) -> str:
        return self.relative.name

    @property
    def database(self) -> str:
        """Name of the parent directory.

        Raises FixturePathError when the path has no parent component.
        """
        parent = self.relative.parent
        if parent == PurePosixPath(".") or not parent.name:
            msg = f"Fixture path has no database directory: {self.relative}"
            raise FixturePathError(msg)
        return parent.name

    @property
    def collection(self) -> str:
        """File name up to the first dot: ``a.b.json`` gives ``a``."""
        return self.relative.name.split(".")[0]

    def __str__(self) -> str:
        return str(self.relative)


class ImportCommand(BaseModel):
    """A single ``mongoimport`` directive for one fixture file."""

    model_config = {"frozen": True}

    tool: str = "mongoimport"
    database: str
    collection: str
    drop: bool = True
    file: str
    options: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        drop = " --drop" if self.drop else ""
        text = (
            f"{self.tool} --db {self.database} --collection {self.collection}"
            f"{drop} --file {self.file}"
        )
        if self.options:
            text = f"{text} {' '.join(self.options)}"
        return text

    def __str__(self) -> str:
        return self.text


class OutcomeError(BaseModel):
    """Structured failure detail within a DispatchOutcome."""

    model_config = {"frozen": True}

    code: str
    message: str


class DispatchOutcome(BaseModel):
    """Result of submitting one command (or staging one file) to the service."""

    model_config = {"frozen": True}

    ok: bool
    command: str
    script_path: str | None = None
    exit_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    error: OutcomeError | None = None


class LoadReport(BaseModel):
    """Aggregate of every outcome produced by one ``FixtureLoader.load`` call.

    Attributes:
        outcomes: One entry per fixture, in fixture-set order.
        staging: Failed provisioning steps, if any.
    """

    model_config = {"frozen": True}

    outcomes: list[DispatchOutcome] = Field(default_factory=list)
    staging: list[DispatchOutcome] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed and not self.staging

    @property
    def failed(self) -> list[DispatchOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def succeeded(self) -> list[DispatchOutcome]:
        return [o for o in self.outcomes if o.ok]

    def summary(self) -> dict[str, Any]:
        return {
            "total": len(self.outcomes),
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "staging_failed": len(self.staging),
        }

    def raise_for_failures(self) -> None:
        """Raise DispatchFailure if any command or staging step failed."""
        failures = [*self.staging, *self.failed]
        if failures:
            raise DispatchFailure(failures)
