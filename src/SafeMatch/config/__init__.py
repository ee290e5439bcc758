from __future__ import annotations

"""Public configuration API for SafeMatch."""

from SafeMatch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from SafeMatch.config.pattern import PatternConfig
from SafeMatch.config.runtime import RuntimeConfig
from SafeMatch.config.storage import StorageConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "StorageConfig",
    "PatternConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
