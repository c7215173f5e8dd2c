"""Tests for fixture value types and LoadReport aggregation."""

from pathlib import Path, PurePosixPath

import pytest

from mongoseed.domain.errors import DispatchFailure, FixturePathError
from mongoseed.domain.fixtures import (
    DispatchOutcome,
    FixturePath,
    ImportCommand,
    LoadReport,
    OutcomeError,
)


class TestFixturePath:
    def test_of_string(self) -> None:
        path = FixturePath.of("mongodb/inventorydb/inventory.json")
        assert path.relative == PurePosixPath("mongodb/inventorydb/inventory.json")
        assert path.source is None
        assert str(path) == "mongodb/inventorydb/inventory.json"

    def test_of_is_identity_for_fixture_path(self) -> None:
        path = FixturePath.of("mongodb/db/a.json", source=Path("/tmp/a.json"))
        assert FixturePath.of(path) is path

    def test_database_is_parent_directory(self) -> None:
        assert FixturePath.of("mongodb/inventorydb/inventory.json").database == "inventorydb"

    def test_collection_stops_at_first_dot(self) -> None:
        assert FixturePath.of("mongodb/db/a.b.json").collection == "a"
        assert FixturePath.of("mongodb/db/noext").collection == "noext"

    def test_database_without_parent_raises(self) -> None:
        with pytest.raises(FixturePathError, match="no database directory"):
            _ = FixturePath.of("orphan.json").database

    def test_fixture_path_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            _ = FixturePath.of("orphan.json").database

    def test_frozen(self) -> None:
        path = FixturePath.of("mongodb/db/a.json")
        with pytest.raises(AttributeError):
            path.relative = PurePosixPath("x")  # type: ignore[misc]


class TestImportCommand:
    def test_text_with_drop(self) -> None:
        cmd = ImportCommand(database="db", collection="c", drop=True, file="/base/db/c.json")
        assert cmd.text == "mongoimport --db db --collection c --drop --file /base/db/c.json"
        assert str(cmd) == cmd.text

    def test_text_without_drop_omits_token_only(self) -> None:
        kwargs = {"database": "db", "collection": "c", "file": "/f.json"}
        with_drop = ImportCommand(drop=True, **kwargs).text
        without = ImportCommand(drop=False, **kwargs).text
        assert without == "mongoimport --db db --collection c --file /f.json"
        assert with_drop.replace(" --drop", "") == without

    def test_options_are_appended(self) -> None:
        cmd = ImportCommand(
            database="db",
            collection="c",
            file="/f.json",
            options=("--username", "root"),
        )
        assert cmd.text.endswith("--file /f.json --username root")


def _outcome(ok: bool, command: str = "cmd") -> DispatchOutcome:
    error = None if ok else OutcomeError(code="NON_ZERO_EXIT", message="Exited with status 1")
    return DispatchOutcome(ok=ok, command=command, exit_code=0 if ok else 1, error=error)


class TestLoadReport:
    def test_empty_report_is_ok(self) -> None:
        report = LoadReport()
        assert report.ok
        assert report.summary() == {"total": 0, "succeeded": 0, "failed": 0, "staging_failed": 0}
        report.raise_for_failures()

    def test_partitions_outcomes(self) -> None:
        outcomes = [_outcome(True, "a"), _outcome(False, "b"), _outcome(True, "c")]
        report = LoadReport(outcomes=outcomes)
        assert not report.ok
        assert [o.command for o in report.failed] == ["b"]
        assert [o.command for o in report.succeeded] == ["a", "c"]
        assert report.summary()["failed"] == 1

    def test_staging_failure_makes_report_not_ok(self) -> None:
        report = LoadReport(outcomes=[_outcome(True)], staging=[_outcome(False, "stage x")])
        assert not report.ok
        assert report.summary()["staging_failed"] == 1

    def test_raise_for_failures(self) -> None:
        report = LoadReport(outcomes=[_outcome(False, "b")], staging=[_outcome(False, "s")])
        with pytest.raises(DispatchFailure, match="2 import command") as exc_info:
            report.raise_for_failures()
        assert [o.command for o in exc_info.value.failures] == ["s", "b"]
