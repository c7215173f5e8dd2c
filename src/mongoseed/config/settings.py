"""CLI settings — flags, env vars, and mongoseed.toml in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``MONGOSEED_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``mongoseed.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from mongoseed.config.discovery import find_config
from mongoseed.config.models import ContainerConfig, FixturesConfig, MongoimportConfig
from mongoseed.domain.errors import ConfigurationError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``mongoseed.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigurationError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class MongoseedSettings(BaseSettings):
    """Unified settings for the mongoseed CLI.

    Attributes:
        project_root: Directory relative resource dirs resolve against
            (parent of ``mongoseed.toml``, or CWD if no config found).
        config_path: The TOML file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MONGOSEED_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    fixtures: FixturesConfig = Field(default_factory=FixturesConfig)
    container: ContainerConfig = Field(default_factory=ContainerConfig)
    mongoimport: MongoimportConfig = Field(default_factory=MongoimportConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> MongoseedSettings:
        """Construct settings from a CLI invocation.

        Discovers ``mongoseed.toml`` via walk-up (or explicit *config_path*)
        and resolves *project_root* from the config file's parent directory.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    def to_loader_options(self, **overrides: Any) -> dict[str, Any]:
        """Flatten the TOML sections into ``build_config`` keyword options.

        Relative resource directories are anchored at *project_root*.
        """
        resource_dirs = tuple(
            p if p.is_absolute() else self.project_root / p
            for p in (Path(d) for d in self.fixtures.resource_dirs)
        )
        options: dict[str, Any] = {
            "resource_path": self.fixtures.resource_path,
            "resource_dirs": resource_dirs,
            "includes": tuple(self.fixtures.includes),
            "excludes": tuple(self.fixtures.excludes),
            "drop_collections": self.fixtures.drop_collections,
            "mongo_version": self.container.mongo_version,
            "container_base_path": self.container.container_base_path,
            "script_dir": self.container.script_dir,
            "shell": self.container.shell,
            "import_tool": self.mongoimport.tool,
            "import_options": tuple(self.mongoimport.options),
        }
        options.update(overrides)
        return options
