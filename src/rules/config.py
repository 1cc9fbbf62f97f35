from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scan.files import DEFAULT_SKIP_DIRS
from sniffs.abort_message import ABORT_MINIMUM_ARGUMENTS
from sniffs.template_paths import DEFAULT_TEMPLATE_EXTENSION, DEFAULT_TEMPLATE_PATHS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "sniffs.toml"


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


def _validate_minimums(value: Any) -> Any:
    if value is None:
        return {}

    if not isinstance(value, dict):
        msg = "minimum argument tables must be a mapping of name -> count"
        raise TypeError(msg)

    for name, count in value.items():
        if not isinstance(name, str) or not name.strip():
            msg = "minimum argument table keys must be non-empty strings"
            raise TypeError(msg)
        if isinstance(count, bool) or not isinstance(count, int):
            msg = f"Minimum argument count for '{name}' must be an integer"
            raise TypeError(msg)
        if count < 0:
            msg = f"Minimum argument count for '{name}' must be >= 0, got {count}"
            raise ValueError(msg)

    return value


class MissingArgumentConfig(_StrictModel):
    """Minimum argument counts for functions and static methods."""

    functions: dict[str, int] = Field(
        default_factory=dict,
        description="Function name -> minimum argument count",
    )
    static_methods: dict[str, int] = Field(
        default_factory=dict,
        alias="staticMethods",
        description="'Type::method' -> minimum argument count",
    )

    @field_validator("functions", mode="before")
    @classmethod
    def validate_functions(cls, v: Any) -> Any:
        return _validate_minimums(v)

    @field_validator("static_methods", mode="before")
    @classmethod
    def validate_static_methods(cls, v: Any) -> Any:
        value = _validate_minimums(v)
        for name in value:
            if "::" not in name:
                msg = f"Static method key '{name}' must look like 'Type::method'"
                raise ValueError(msg)
        return value


class AbortMessageConfig(_StrictModel):
    """Configuration for the abort() message check."""

    enabled: bool = Field(default=True, description="Enable the abort() check")
    functions: dict[str, int] = Field(
        default_factory=lambda: dict(ABORT_MINIMUM_ARGUMENTS),
        description="abort helper -> minimum argument count",
    )

    @field_validator("functions", mode="before")
    @classmethod
    def validate_functions(cls, v: Any) -> Any:
        return _validate_minimums(v)


class BladeTemplatesConfig(_StrictModel):
    """Configuration for Blade template existence checks."""

    enabled: bool = Field(default=True, description="Enable the template check")
    base_dir: str | None = Field(
        default=None,
        alias="baseDir",
        description="Directory template paths are relative to (default: root)",
    )
    template_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TEMPLATE_PATHS),
        alias="templatePaths",
        description="Ordered default search paths for unnamespaced templates",
    )
    template_extension: str = Field(
        default=DEFAULT_TEMPLATE_EXTENSION,
        alias="templateExtension",
        description="Template file extension without the leading dot",
    )
    view_namespaces: dict[str, str] = Field(
        default_factory=dict,
        alias="viewNamespaces",
        description="View namespace -> directory",
    )

    @field_validator("template_extension")
    @classmethod
    def validate_template_extension(cls, v: str) -> str:
        extension = v.lstrip(".")
        if not extension:
            msg = "template_extension must not be empty"
            raise ValueError(msg)
        return extension


class SniffsConfig(_StrictModel):
    """Configuration for a sniffs run over a repository."""

    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all PHP files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    skip_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SKIP_DIRS),
        description="Directories, relative to the root, that are never scanned",
    )
    include_stubs: bool = Field(
        default=False,
        description="Also check *.stub generator templates",
    )
    report_file: str | None = Field(
        default=None,
        description="JSONL findings report, relative to the repository root",
    )
    missing_argument: MissingArgumentConfig = Field(
        default_factory=MissingArgumentConfig,
        description="Minimum argument policy",
    )
    abort_message: AbortMessageConfig = Field(
        default_factory=AbortMessageConfig,
        description="abort() message policy",
    )
    blade_templates: BladeTemplatesConfig = Field(
        default_factory=BladeTemplatesConfig,
        description="Blade template existence checks",
    )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_report_path(root: Path, report_file: str) -> Path:
    """Resolve a config-provided report_file safely within the repo root.

    The report_file must be a non-empty relative path that remains within
    the repository root after resolution. Absolute paths and paths that
    escape the root are rejected.
    """
    if not report_file:
        msg = "report_file must be a non-empty relative path"
        raise ConfigError(msg)

    if report_file.startswith("~"):
        msg = "report_file must be a relative path within the repo root"
        raise ConfigError(msg)

    report_path = Path(report_file)
    if report_path.is_absolute():
        msg = "report_file must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_report = (resolved_root / report_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve report_file '{report_file}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_report.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"report_file '{report_file}' escapes the repository root"
        raise ConfigError(msg) from exc

    return resolved_report


def resolve_base_dir(root: Path, config: BladeTemplatesConfig) -> Path:
    """Template base directory: configured value relative to root, else root."""
    if config.base_dir is None:
        return root.resolve()
    base_dir = Path(config.base_dir).expanduser()
    if not base_dir.is_absolute():
        base_dir = root / base_dir
    return base_dir.resolve()


def load_config(root: Path) -> SniffsConfig:
    """Load configuration from sniffs.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        logger.debug("No %s in %s, using defaults", CONFIG_FILENAME, root)
        return SniffsConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        config = SniffsConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e

    logger.debug("Loaded configuration from %s", config_path)
    return config
