"""pytest integration: seed fixtures once before the tests of a scope run.

Requires pytest, installed with the ``pytest`` extra (``pip install mongoseed[pytest]``).

Usage in a ``conftest.py``::

    from mongoseed.testing import fixture_loader_fixture

    mongo_fixtures = fixture_loader_fixture(
        lambda: FixtureLoader.create(service=handle, excludes=["draft.json"]),
        fail_on_error=True,
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Literal

import pytest

from mongoseed.services.loader import FixtureLoader

Scope = Literal["session", "package", "module", "class", "function"]


def fixture_loader_fixture(
    loader: FixtureLoader | Callable[[], FixtureLoader],
    *,
    scope: Scope = "session",
    name: str | None = None,
    fail_on_error: bool = False,
) -> Callable[..., Iterator[FixtureLoader]]:
    """Build a pytest fixture that runs ``loader.before_all()`` and yields the loader.

    *loader* may be an instance or a zero-argument factory; a factory defers
    construction (and its configuration errors) to fixture setup.
    With *fail_on_error*, any failed import aborts setup with DispatchFailure.
    """

    @pytest.fixture(scope=scope, name=name)
    def _seeded() -> Iterator[FixtureLoader]:
        instance = loader if isinstance(loader, FixtureLoader) else loader()
        report = instance.before_all()
        if fail_on_error:
            report.raise_for_failures()
        yield instance

    return _seeded
