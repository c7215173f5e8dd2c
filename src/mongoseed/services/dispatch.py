"""Sequential, best-effort dispatch of import commands.

Each command is written to a uniquely named script inside the service and
run there. A failing command is recorded and the next one still runs, so the
outcome list always has one entry per command.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable

from mongoseed.domain.fixtures import DispatchOutcome, ImportCommand, OutcomeError
from mongoseed.infrastructure.handles import ServiceHandle

logger = logging.getLogger(__name__)

DISPATCH_FAILURE = "DISPATCH_FAILURE"
NON_ZERO_EXIT = "NON_ZERO_EXIT"


def script_name(script_dir: str) -> str:
    """Return a fresh ``<script_dir>/mongo-<uuid>`` path."""
    return f"{script_dir.rstrip('/')}/mongo-{uuid.uuid4()}"


class ImportDispatcher:
    """Run ImportCommands through a ServiceHandle, one at a time."""

    def __init__(self, *, script_dir: str = "/etc", shell: str = "/bin/bash") -> None:
        self._script_dir = script_dir
        self._shell = shell

    def dispatch(self, command: ImportCommand | str, handle: ServiceHandle) -> DispatchOutcome:
        """Stage and run a single command. Never raises for executor errors."""
        text = str(command)
        script_path = script_name(self._script_dir)
        try:
            handle.stage_file(text.encode("utf-8"), script_path)
            result = handle.run_command(self._shell, script_path)
        except Exception as exc:
            logger.warning("Import command failed: %s", text, exc_info=True)
            message = f"{type(exc).__name__}: {exc}"
            return DispatchOutcome(
                ok=False,
                command=text,
                script_path=script_path,
                error=OutcomeError(code=DISPATCH_FAILURE, message=message),
            )

        if result.exit_code != 0:
            logger.warning("Import command exited with %d: %s", result.exit_code, text)
            return DispatchOutcome(
                ok=False,
                command=text,
                script_path=script_path,
                exit_code=result.exit_code,
                stdout=result.stdout,
                stderr=result.stderr,
                error=OutcomeError(
                    code=NON_ZERO_EXIT,
                    message=f"Exited with status {result.exit_code}",
                ),
            )

        logger.debug("Imported: %s", text)
        return DispatchOutcome(
            ok=True,
            command=text,
            script_path=script_path,
            exit_code=result.exit_code,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def dispatch_all(
        self,
        commands: Iterable[ImportCommand | str],
        handle: ServiceHandle,
    ) -> list[DispatchOutcome]:
        """Dispatch *commands* in order, collecting one outcome each."""
        return [self.dispatch(command, handle) for command in commands]
