from __future__ import annotations

"""Storage domain configuration: which database the CLI opens."""

import os
from dataclasses import dataclass
from typing import Any, Mapping

from SafeMatch.config.common import (
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Storage configuration.

    Attributes:
        db_path: Effective database path (``:memory:`` allowed).
        db_path_env: Environment variable that overrides ``storage.db_path``.
    """

    db_path: str
    db_path_env: str


def load_storage(raw: Mapping[str, Any]) -> StorageConfig:
    """Load storage domain config from raw mapping."""
    section = get_section(raw, "storage", required=True)
    db_path = expect_str(get_required_value(section, "db_path", "storage.db_path"), "storage.db_path")
    db_path_env = expect_str(get_optional_value(section, "db_path_env", ""), "storage.db_path_env")
    return StorageConfig(
        db_path=_load_db_path_from_env(db_path_env) or db_path,
        db_path_env=db_path_env,
    )


def check_storage(config: StorageConfig) -> None:
    """Validate storage domain constraints."""
    if not config.db_path.strip():
        raise ValueError("storage.db_path must not be empty")


def _load_db_path_from_env(db_path_env: str) -> str:
    """Load database path override from environment variable."""
    if not db_path_env:
        return ""
    return os.getenv(db_path_env, "").strip()
