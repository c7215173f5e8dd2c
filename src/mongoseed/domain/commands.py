"""Import-command synthesis from fixture path structure."""

from __future__ import annotations

from mongoseed.domain.fixtures import FixturePath, ImportCommand

DEFAULT_IMPORT_TOOL = "mongoimport"


def container_location(base_path: str, path: FixturePath) -> str:
    """Join *base_path* and the fixture's relative path.

    Used both when staging files and when building commands, so the two
    locations always agree.
    """
    return f"{base_path.rstrip('/')}/{path.relative.as_posix()}"


class CommandSynthesizer:
    """Build ImportCommands for fixtures staged under *base_path*."""

    def __init__(
        self,
        base_path: str,
        *,
        tool: str = DEFAULT_IMPORT_TOOL,
        options: tuple[str, ...] = (),
    ) -> None:
        self._base_path = base_path
        self._tool = tool
        self._options = tuple(options)

    @property
    def base_path(self) -> str:
        return self._base_path

    def synthesize(self, path: FixturePath, drop: bool) -> ImportCommand:
        """Map ``<db>/<collection>.<ext>`` to an import command.

        Raises FixturePathError if *path* has no parent directory.
        """
        return ImportCommand(
            tool=self._tool,
            database=path.database,
            collection=path.collection,
            drop=drop,
            file=container_location(self._base_path, path),
            options=self._options,
        )
