"""Tests for PathCatalog traversal and the default file resolver."""

from pathlib import Path, PurePosixPath

import pytest

from mongoseed.domain.errors import ResourceNotFoundError
from mongoseed.infrastructure.catalog import CatalogFileResolver, FileResolver, PathCatalog
from mongoseed.infrastructure.resources import DirectoryResourceLookup

EXPECTED = [
    "mongodb/inventorydb/anotherCollection.json",
    "mongodb/inventorydb/collection.json",
    "mongodb/inventorydb/inventory.json",
]


class TestPathCatalog:
    def test_lists_files_relative_to_root_parent(self, resources_dir: Path) -> None:
        catalog = PathCatalog(DirectoryResourceLookup([resources_dir]))
        assert [str(p) for p in catalog.resolve("mongodb")] == EXPECTED

    def test_sources_point_at_local_files(self, resources_dir: Path) -> None:
        catalog = PathCatalog(DirectoryResourceLookup([resources_dir]))
        for path in catalog.resolve("mongodb"):
            assert path.source is not None
            assert path.source.read_bytes()

    def test_deterministic_order(self, resources_dir: Path) -> None:
        catalog = PathCatalog(DirectoryResourceLookup([resources_dir]))
        assert catalog.resolve("mongodb") == catalog.resolve("mongodb")

    def test_nested_root_label(self, resources_dir: Path) -> None:
        catalog = PathCatalog(DirectoryResourceLookup([resources_dir]))
        paths = catalog.resolve("mongodb/inventorydb")
        assert paths[0].relative == PurePosixPath("inventorydb/anotherCollection.json")

    def test_directories_are_skipped(self, resources_dir: Path) -> None:
        (resources_dir / "mongodb" / "emptydb").mkdir()
        catalog = PathCatalog(DirectoryResourceLookup([resources_dir]))
        assert len(catalog.resolve("mongodb")) == 3

    def test_missing_root_raises(self, resources_dir: Path) -> None:
        catalog = PathCatalog(DirectoryResourceLookup([resources_dir]))
        with pytest.raises(ResourceNotFoundError):
            catalog.resolve("postgres")

    def test_file_root_raises(self, resources_dir: Path) -> None:
        catalog = PathCatalog(DirectoryResourceLookup([resources_dir]))
        with pytest.raises(ResourceNotFoundError):
            catalog.resolve("mongodb/inventorydb/inventory.json")


class TestCatalogFileResolver:
    def test_applies_filters(self, resources_dir: Path) -> None:
        resolver = CatalogFileResolver(DirectoryResourceLookup([resources_dir]))
        result = resolver.resolve("mongodb", [], ["collection.json", "anotherCollection.json"])
        assert [str(p) for p in result] == ["mongodb/inventorydb/inventory.json"]

    def test_satisfies_protocol(self, resources_dir: Path) -> None:
        resolver = CatalogFileResolver(DirectoryResourceLookup([resources_dir]))
        assert isinstance(resolver, FileResolver)
