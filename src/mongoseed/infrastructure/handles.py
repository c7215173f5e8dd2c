"""Managed service handles: where fixtures are staged and commands run.

A handle exposes two capabilities, ``stage_file`` and ``run_command``.
The container lifecycle behind it is owned by the caller.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import NamedTuple, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class CommandResult(NamedTuple):
    """Exit status and captured output of one executed script."""

    exit_code: int
    stdout: str
    stderr: str


@runtime_checkable
class ServiceHandle(Protocol):
    """The execution environment fixtures are imported into."""

    def stage_file(self, content: bytes, destination: str) -> None: ...

    def run_command(self, shell: str, script_path: str) -> CommandResult: ...


def import_options_for(service: object) -> tuple[str, ...]:
    """Extra ``mongoimport`` arguments a handle requires (e.g. credentials)."""
    return tuple(getattr(service, "import_options", ()) or ())


class LocalServiceHandle:
    """Stage files on the local filesystem and run scripts via subprocess.

    With a *root*, every destination is mapped beneath it (``/etc/x`` becomes
    ``<root>/etc/x``) and scripts run with *root* as working directory.
    Without one, destinations are used as-is.
    """

    def __init__(self, root: Path | None = None, *, timeout: float | None = None) -> None:
        self._root = root
        self._timeout = timeout

    @property
    def root(self) -> Path | None:
        return self._root

    def local_path(self, destination: str) -> Path:
        """Map a service-side destination to a local path."""
        if self._root is None:
            return Path(destination)
        result = (self._root / destination.lstrip("/")).resolve()
        if not result.is_relative_to(self._root.resolve()):
            msg = f"Path escapes handle root: {destination}"
            raise ValueError(msg)
        return result

    def stage_file(self, content: bytes, destination: str) -> None:
        """Write *content* to *destination*, creating parent directories."""
        path = self.local_path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        logger.debug("Staged %d bytes at %s", len(content), path)

    def run_command(self, shell: str, script_path: str) -> CommandResult:
        """Run *script_path* with *shell*. Raises OSError if *shell* is missing."""
        completed = subprocess.run(
            [shell, str(self.local_path(script_path))],
            cwd=self._root,
            capture_output=True,
            text=True,
            check=False,
            timeout=self._timeout,
        )
        return CommandResult(completed.returncode, completed.stdout, completed.stderr)
