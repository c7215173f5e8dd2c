"""Fixture discovery: walk a resource root and filter its files.

INVARIANT: Traversal order is deterministic. Paths are sorted by their
relative segments, so repeated runs yield the same sequence.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PurePosixPath
from typing import Protocol, runtime_checkable

from mongoseed.domain.errors import ResourceNotFoundError
from mongoseed.domain.filtering import FixtureFilter
from mongoseed.domain.fixtures import FixturePath
from mongoseed.infrastructure.resources import ResourceLookup


@runtime_checkable
class FileResolver(Protocol):
    """Strategy that produces the fixture set for a resource root."""

    def resolve(
        self,
        root: str,
        includes: Sequence[str],
        excludes: Sequence[str],
    ) -> Sequence[FixturePath | PurePosixPath | str]: ...


class PathCatalog:
    """List every regular file below a resource root."""

    def __init__(self, lookup: ResourceLookup) -> None:
        self._lookup = lookup

    def resolve(self, root_label: str) -> list[FixturePath]:
        """Return files under *root_label*, relative to the root's parent.

        The root directory name becomes the first path segment, e.g.
        ``mongodb/inventorydb/inventory.json``. Raises ResourceNotFoundError
        if the label does not name a directory.
        """
        root = self._lookup.locate(root_label)
        if not root.is_dir():
            raise ResourceNotFoundError(root_label)

        base = root.parent
        results: list[FixturePath] = []
        for path in root.rglob("*"):
            if not path.is_file():
                continue
            relative = PurePosixPath(path.relative_to(base).as_posix())
            results.append(FixturePath(relative=relative, source=path))

        return sorted(results, key=lambda p: p.relative.parts)


class CatalogFileResolver:
    """Default FileResolver: PathCatalog traversal plus FixtureFilter."""

    def __init__(self, lookup: ResourceLookup) -> None:
        self._catalog = PathCatalog(lookup)

    def resolve(
        self,
        root: str,
        includes: Sequence[str],
        excludes: Sequence[str],
    ) -> list[FixturePath]:
        return FixtureFilter(includes, excludes).filter(self._catalog.resolve(root))
