"""Configuration for the sniffs."""

from rules.config import (
    AbortMessageConfig,
    BladeTemplatesConfig,
    ConfigError,
    MissingArgumentConfig,
    SniffsConfig,
    load_config,
    resolve_base_dir,
    resolve_report_path,
)

__all__ = [
    "AbortMessageConfig",
    "BladeTemplatesConfig",
    "ConfigError",
    "MissingArgumentConfig",
    "SniffsConfig",
    "load_config",
    "resolve_base_dir",
    "resolve_report_path",
]
