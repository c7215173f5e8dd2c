"""Resource namespace lookup: map a label such as ``mongodb`` to a directory.

Labels are resolved against an ordered list of search directories, much like
a classpath. A leading ``/`` on a label is ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from mongoseed.domain.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_DIRS: tuple[Path, ...] = (Path("tests/resources"), Path("resources"))


@runtime_checkable
class ResourceLookup(Protocol):
    """Resolve a resource label to an existing local path."""

    def locate(self, label: str) -> Path: ...


class DirectoryResourceLookup:
    """Look labels up beneath each search directory, first match wins."""

    def __init__(self, search_dirs: Sequence[Path] = DEFAULT_SEARCH_DIRS) -> None:
        self._search_dirs = tuple(Path(d) for d in search_dirs)

    @property
    def search_dirs(self) -> tuple[Path, ...]:
        return self._search_dirs

    def locate(self, label: str) -> Path:
        """Return the first existing ``<search_dir>/<label>``.

        Raises ResourceNotFoundError if no search directory contains it,
        or if the label escapes its search directory.
        """
        relative = label.lstrip("/")
        if not relative:
            raise ResourceNotFoundError(label)
        for base in self._search_dirs:
            candidate = (base / relative).resolve()
            # Guard against path traversal via a crafted label
            if not candidate.is_relative_to(base.resolve()):
                logger.debug("Resource label %r escapes %s", label, base)
                continue
            if candidate.exists():
                return candidate
        raise ResourceNotFoundError(label)
