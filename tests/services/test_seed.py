"""Tests for SeedService — list, plan, and load over CLI settings."""

import shutil
from pathlib import Path

import pytest

from mongoseed.config.models import CONFIGURATION_ERROR
from mongoseed.config.settings import MongoseedSettings
from mongoseed.plugins.manager import PluginManager, hookimpl
from mongoseed.services.seed import LOAD_FAILED, RESOURCE_NOT_FOUND, SeedService


def _service(root: Path) -> SeedService:
    return SeedService(MongoseedSettings.from_cli(project_root=root))


class TestListFixtures:
    def test_lists_items(self, seed_project: Path) -> None:
        result = _service(seed_project).list_fixtures()
        assert result.ok
        assert result.op == "list"
        assert result.data["status"] == "found"
        assert result.data["count"] == 3
        assert result.data["items"][2] == {
            "path": "mongodb/inventorydb/inventory.json",
            "database": "inventorydb",
            "collection": "inventory",
        }

    def test_missing_root(self, seed_project: Path) -> None:
        (seed_project / "mongoseed.toml").write_text(
            '[fixtures]\nresource_path = "postgres"\nresource_dirs = ["resources"]\n'
        )
        result = _service(seed_project).list_fixtures()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == RESOURCE_NOT_FOUND
        assert result.error.detail["resource_dirs"] == [str(seed_project / "resources")]

    def test_invalid_config(self, seed_project: Path) -> None:
        (seed_project / "mongoseed.toml").write_text('[fixtures]\nexcludes = ["[bad"]\n')
        result = _service(seed_project).list_fixtures()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == CONFIGURATION_ERROR
        assert result.error.detail["problems"]


class TestPlan:
    def test_commands(self, seed_project: Path) -> None:
        result = _service(seed_project).plan()
        assert result.ok
        assert result.data["drop"] is True
        assert result.data["count"] == 3
        assert result.data["commands"][2] == (
            "echo --db inventorydb --collection inventory --drop "
            "--file /docker-entrypoint-initdb.d/mongodb/inventorydb/inventory.json"
        )

    def test_drop_override(self, seed_project: Path) -> None:
        result = _service(seed_project).plan(drop=False)
        assert result.data["drop"] is False
        assert all("--drop" not in c for c in result.data["commands"])


@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not available")
class TestLoad:
    def test_stages_and_runs(self, seed_project: Path, tmp_path: Path) -> None:
        staging = tmp_path / "staging"
        result = _service(seed_project).load(staging)
        assert result.ok, result.error
        assert result.data["summary"]["succeeded"] == 3
        staged = staging / "fixtures" / "mongodb" / "inventorydb" / "inventory.json"
        assert staged.is_file()
        assert len(list((staging / "scripts").iterdir())) == 3

    def test_uri_appended(self, seed_project: Path, tmp_path: Path) -> None:
        result = _service(seed_project).load(tmp_path / "staging", uri="mongodb://db:27017")
        commands = [o["command"] for o in result.data["outcomes"]]
        assert all(c.endswith("--uri mongodb://db:27017") for c in commands)

    def test_failed_import(self, seed_project: Path, tmp_path: Path) -> None:
        (seed_project / "mongoseed.toml").write_text(
            '[fixtures]\nresource_dirs = ["resources"]\n[mongoimport]\ntool = "false"\n'
        )
        result = _service(seed_project).load(tmp_path / "staging")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == LOAD_FAILED
        assert result.error.detail["failed"] == 3
        assert result.data["outcomes"][0]["exit_code"] == 1


class _FailingResolvePlugin:
    @hookimpl
    def post_resolve(self, resource_path: str, fixtures: list[str], status: str) -> None:
        raise RuntimeError("plugin exploded")


class TestPlugins:
    def test_entry_point_plugins_discovered(
        self, seed_project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        discovered: list[PluginManager] = []

        def fake_discover(self: PluginManager) -> list[str]:
            discovered.append(self)
            self.register_plugin(_FailingResolvePlugin())
            self._loaded = True
            return self.list_plugin_names()

        monkeypatch.setattr(PluginManager, "discover_and_load", fake_discover)
        service = _service(seed_project)
        result = service.list_fixtures()
        service.plan()

        assert result.ok
        assert result.warnings == ["Plugin hook post_resolve failed"]
        assert len(discovered) == 1

    def test_explicit_plugin_manager(self, seed_project: Path) -> None:
        plugins = PluginManager()
        plugins.register_plugin(_FailingResolvePlugin())
        settings = MongoseedSettings.from_cli(project_root=seed_project)
        result = SeedService(settings, plugins=plugins).plan()
        assert plugins.is_loaded
        assert result.warnings == ["Plugin hook post_resolve failed"]
