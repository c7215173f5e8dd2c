"""Include/exclude filtering of fixture files by base name.

Patterns are regular expressions matched against the whole base name
(``re.fullmatch``), never the relative path. Exclusion always wins: a file
matching both an include and an exclude pattern is rejected.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from mongoseed.domain.errors import PatternError
from mongoseed.domain.fixtures import FixturePath


def normalize_patterns(patterns: Iterable[str | None] | None) -> tuple[str, ...]:
    """Drop ``None`` and empty entries, de-duplicate, keep first-seen order."""
    if patterns is None:
        return ()
    seen: dict[str, None] = {}
    for pattern in patterns:
        if pattern:
            seen.setdefault(pattern, None)
    return tuple(seen)


def compile_patterns(patterns: Sequence[str]) -> tuple[re.Pattern[str], ...]:
    """Compile every pattern, raising PatternError on the first invalid one."""
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise PatternError(pattern, str(exc)) from exc
    return tuple(compiled)


@dataclass(frozen=True)
class FilterRule:
    """A set of compiled patterns. An empty rule matches nothing."""

    patterns: tuple[str, ...] = ()
    compiled: tuple[re.Pattern[str], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "compiled", compile_patterns(self.patterns))

    @classmethod
    def of(cls, patterns: Iterable[str | None] | None) -> FilterRule:
        return cls(normalize_patterns(patterns))

    @property
    def is_empty(self) -> bool:
        return not self.patterns

    def any_match(self, name: str) -> bool:
        return any(p.fullmatch(name) for p in self.compiled)


class FixtureFilter:
    """Decide fixture-set membership from include and exclude rules."""

    def __init__(
        self,
        includes: Iterable[str | None] | None = None,
        excludes: Iterable[str | None] | None = None,
    ) -> None:
        self._includes = FilterRule.of(includes)
        self._excludes = FilterRule.of(excludes)

    @property
    def includes(self) -> tuple[str, ...]:
        return self._includes.patterns

    @property
    def excludes(self) -> tuple[str, ...]:
        return self._excludes.patterns

    def is_included(self, name: str) -> bool:
        return self._includes.is_empty or self._includes.any_match(name)

    def is_not_excluded(self, name: str) -> bool:
        return self._excludes.is_empty or not self._excludes.any_match(name)

    def accepts(self, path: FixturePath) -> bool:
        name = path.name
        return self.is_included(name) and self.is_not_excluded(name)

    def filter(self, paths: Iterable[FixturePath]) -> list[FixturePath]:
        """Return accepted paths, preserving input order."""
        return [p for p in paths if self.accepts(p)]
