"""Pydantic configuration models with code-baked defaults.

``LoaderConfig`` is the immutable input to ``FixtureLoader``. Build it with
:func:`build_config`, which never raises: validation problems come back as a
tagged ``ConfigResult``. The TOML section models below feed the CLI settings.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from mongoseed.domain.commands import DEFAULT_IMPORT_TOOL
from mongoseed.domain.errors import ConfigurationError, PatternError
from mongoseed.domain.filtering import compile_patterns, normalize_patterns
from mongoseed.infrastructure.resources import DEFAULT_SEARCH_DIRS

DEFAULT_RESOURCE_PATH = "mongodb"
DEFAULT_MONGO_VERSION = "latest"
DEFAULT_CONTAINER_BASE_PATH = "/docker-entrypoint-initdb.d"
DEFAULT_SCRIPT_DIR = "/etc"
DEFAULT_SHELL = "/bin/bash"

CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


def _as_pattern_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    return normalize_patterns(value)


class LoaderConfig(BaseModel):
    """Everything a FixtureLoader needs, frozen after construction.

    Attributes:
        resource_path: Label of the fixture root in the resource namespace.
        resource_dirs: Search directories of the resource namespace.
        mongo_version: Image tag used when no service handle is supplied.
        container_base_path: Service-side directory fixtures are staged under.
        drop_collections: Drop each target collection before importing.
        includes: Regexes a base name must match (empty means all).
        excludes: Regexes a base name must not match (empty means none).
        import_tool: Executable named in every import command.
        import_options: Extra arguments appended to every import command.
        script_dir: Service-side directory for transient command scripts.
        shell: Interpreter used to run command scripts.
        log_sink: Receives ``Found: ...`` and ``Command: ...`` audit lines.
        file_resolver: FileResolver overriding catalog traversal.
        service: ServiceHandle the fixtures are loaded into.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    resource_path: str = DEFAULT_RESOURCE_PATH
    resource_dirs: tuple[Path, ...] = DEFAULT_SEARCH_DIRS
    mongo_version: str = DEFAULT_MONGO_VERSION
    container_base_path: str = DEFAULT_CONTAINER_BASE_PATH
    drop_collections: bool = True
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    import_tool: str = DEFAULT_IMPORT_TOOL
    import_options: tuple[str, ...] = ()
    script_dir: str = DEFAULT_SCRIPT_DIR
    shell: str = DEFAULT_SHELL
    log_sink: Callable[[str], None] | None = None
    file_resolver: Any = None
    service: Any = None

    @field_validator(
        "resource_path",
        "mongo_version",
        "container_base_path",
        "import_tool",
        "script_dir",
        "shell",
    )
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            msg = f"{info.field_name} must not be blank"
            raise ValueError(msg)
        return value

    @field_validator("includes", "excludes", mode="before")
    @classmethod
    def _normalize_patterns(cls, value: Any) -> tuple[str, ...]:
        if value is None:
            return ()
        return _as_pattern_tuple(value)

    @field_validator("includes", "excludes")
    @classmethod
    def _valid_patterns(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        try:
            compile_patterns(value)
        except PatternError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("file_resolver")
    @classmethod
    def _resolver_shape(cls, value: Any) -> Any:
        if value is not None and not callable(getattr(value, "resolve", None)):
            msg = "file_resolver must provide a resolve(root, includes, excludes) method"
            raise ValueError(msg)
        return value

    @field_validator("service")
    @classmethod
    def _service_shape(cls, value: Any) -> Any:
        if value is None:
            return value
        for method in ("stage_file", "run_command"):
            if not callable(getattr(value, method, None)):
                msg = f"service must provide a {method}() method"
                raise ValueError(msg)
        return value


class ConfigResult(BaseModel):
    """Tagged result of :func:`build_config`.

    Exactly one of ``config`` (when ``ok``) or ``problems`` is meaningful.
    """

    model_config = {"frozen": True}

    ok: bool
    config: LoaderConfig | None = None
    code: str | None = None
    problems: list[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        if self.ok:
            return ""
        return "Invalid loader configuration: " + "; ".join(self.problems)

    def unwrap(self) -> LoaderConfig:
        """Return the config or raise ConfigurationError."""
        if not self.ok or self.config is None:
            raise ConfigurationError(self.message, problems=list(self.problems))
        return self.config


def build_config(**options: Any) -> ConfigResult:
    """Validate *options* into a LoaderConfig without raising.

    All checks run here, before any service is created or contacted.
    """
    try:
        config = LoaderConfig(**options)
    except ValidationError as exc:
        problems = [_describe(error) for error in exc.errors()]
        return ConfigResult(ok=False, code=CONFIGURATION_ERROR, problems=problems)
    return ConfigResult(ok=True, config=config)


def _describe(error: Any) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "config"
    message = str(error.get("msg", "invalid value"))
    message = message.removeprefix("Value error, ")
    return f"{location}: {message}"


# --- mongoseed.toml sections ---


class FixturesConfig(BaseModel):
    """[fixtures] section."""

    model_config = {"frozen": True}

    resource_path: str = DEFAULT_RESOURCE_PATH
    resource_dirs: list[str] = Field(
        default_factory=lambda: [str(p) for p in DEFAULT_SEARCH_DIRS]
    )
    includes: list[str] = Field(default_factory=list)
    excludes: list[str] = Field(default_factory=list)
    drop_collections: bool = True


class ContainerConfig(BaseModel):
    """[container] section."""

    model_config = {"frozen": True}

    mongo_version: str = DEFAULT_MONGO_VERSION
    container_base_path: str = DEFAULT_CONTAINER_BASE_PATH
    script_dir: str = DEFAULT_SCRIPT_DIR
    shell: str = DEFAULT_SHELL


class MongoimportConfig(BaseModel):
    """[mongoimport] section."""

    model_config = {"frozen": True}

    tool: str = DEFAULT_IMPORT_TOOL
    options: list[str] = Field(default_factory=list)
