"""Shared pytest fixtures and test doubles for mongoseed tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from mongoseed.infrastructure.handles import CommandResult

pytest_plugins = ["pytester"]


class RecordingHandle:
    """In-memory ServiceHandle that records staged files and executed scripts.

    ``exit_codes`` maps a substring of the command text to the exit status
    returned when a script containing it runs; ``raise_on`` substrings make
    ``run_command`` raise OSError instead.
    """

    def __init__(
        self,
        *,
        exit_codes: dict[str, int] | None = None,
        raise_on: tuple[str, ...] = (),
        fail_staging: tuple[str, ...] = (),
    ) -> None:
        self.files: dict[str, bytes] = {}
        self.runs: list[tuple[str, str]] = []
        self._exit_codes = exit_codes or {}
        self._raise_on = raise_on
        self._fail_staging = fail_staging

    def stage_file(self, content: bytes, destination: str) -> None:
        if any(needle in destination for needle in self._fail_staging):
            raise OSError(f"disk full: {destination}")
        self.files[destination] = content

    def run_command(self, shell: str, script_path: str) -> CommandResult:
        self.runs.append((shell, script_path))
        text = self.files[script_path].decode("utf-8")
        if any(needle in text for needle in self._raise_on):
            raise OSError("connection reset")
        for needle, code in self._exit_codes.items():
            if needle in text:
                return CommandResult(code, "", f"failed: {needle}")
        return CommandResult(0, "imported 5 documents", "")

    @property
    def commands(self) -> list[str]:
        """Command text of every executed script, in execution order."""
        return [self.files[path].decode("utf-8") for _, path in self.runs]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def handle() -> RecordingHandle:
    return RecordingHandle()


@pytest.fixture
def make_handle() -> Callable[..., RecordingHandle]:
    """Factory for RecordingHandles with scripted failures."""
    return RecordingHandle


@pytest.fixture
def resources_dir(tmp_path: Path) -> Path:
    """Resource search directory holding ``mongodb/inventorydb/*.json``.

    This is the single source of truth for the fixture tree layout.
    """
    base = tmp_path / "resources"
    db = base / "mongodb" / "inventorydb"
    db.mkdir(parents=True)
    (db / "inventory.json").write_text('{"item": "journal", "qty": 25}\n', encoding="utf-8")
    (db / "collection.json").write_text('{"name": "first"}\n', encoding="utf-8")
    (db / "anotherCollection.json").write_text('{"name": "other"}\n', encoding="utf-8")
    return base


@pytest.fixture
def loader_options(resources_dir: Path, handle: RecordingHandle) -> dict[str, object]:
    """build_config options pointing at *resources_dir* and the recording handle."""
    return {"resource_dirs": (resources_dir,), "service": handle}


@pytest.fixture
def seed_project(resources_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Project directory whose ``mongoseed.toml`` points at *resources_dir*.

    The import tool is ``echo`` so ``load`` runs without a MongoDB install.
    """
    monkeypatch.delenv("MONGOSEED_CONFIG", raising=False)
    root = resources_dir.parent
    (root / "mongoseed.toml").write_text(
        '[fixtures]\nresource_dirs = ["resources"]\n\n[mongoimport]\ntool = "echo"\n',
        encoding="utf-8",
    )
    return root


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """CLI invocations reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
