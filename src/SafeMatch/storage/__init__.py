"""Storage layer for SafeMatch.

Provides the connection holder, catalog lookups and foreign key
introspection over SQLite databases.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from SafeMatch.storage.db import DatabaseManager
from SafeMatch.storage.foreign_keys import check_foreign_keys, foreign_key_violations, foreign_keys
from SafeMatch.utils.log import log

if TYPE_CHECKING:
    from SafeMatch.config import AppConfig


def create_storage(config: AppConfig) -> DatabaseManager:
    """Create the database manager described by configuration.

    Args:
        config: Application configuration containing storage settings.

    Returns:
        Open DatabaseManager.
    """
    db_manager = DatabaseManager(config.storage.db_path)
    log.info("Database opened: %s", config.storage.db_path)
    return db_manager


__all__ = [
    "DatabaseManager",
    "create_storage",
    "foreign_keys",
    "foreign_key_violations",
    "check_foreign_keys",
]
