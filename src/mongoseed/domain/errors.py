"""Error taxonomy for the fixture pipeline.

Only ConfigurationError and PatternError are fatal. Resolution and dispatch
errors are logged and reported, never raised from the load path.
"""

from __future__ import annotations

from typing import Any


class MongoseedError(Exception):
    """Base class for all mongoseed errors."""


class ConfigurationError(MongoseedError):
    """Invalid or missing loader configuration.

    Carries every validation message collected by the config factory.
    """

    def __init__(self, message: str, *, problems: list[str] | None = None) -> None:
        super().__init__(message)
        self.problems = problems or []


class ResourceNotFoundError(MongoseedError):
    """A resource label does not name an existing directory or file."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Resource not found: {label!r}")
        self.label = label


class PatternError(MongoseedError):
    """An include or exclude pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern


class FixturePathError(MongoseedError, ValueError):
    """A fixture path has no parent directory to name its database."""


class DispatchFailure(MongoseedError):
    """One or more import commands failed.

    Raised only on request (see ``LoadReport.raise_for_failures``).
    """

    def __init__(self, failures: list[Any]) -> None:
        count = len(failures)
        super().__init__(f"{count} import command(s) failed")
        self.failures = failures
