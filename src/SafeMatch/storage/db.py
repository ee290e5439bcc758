"""SQLite database utilities."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from SafeMatch.utils.log import log

MEMORY_PATH = ":memory:"
_MIN_SQLITE_VERSION = (3, 9, 0)


class DatabaseManager:
    """Connection holder for one SQLite database.

    Owns a single connection for its lifetime. Callers that share the
    manager across threads must serialize statement preparation and
    execution themselves.

    Supports context manager protocol for automatic connection cleanup.
    """

    def __init__(self, db_path: Path | str = MEMORY_PATH) -> None:
        """Open the database connection.

        Args:
            db_path: Database file path, or ``:memory:``.
        """
        self.db_path = str(db_path)
        self.conn: sqlite3.Connection | None = ensure_db(db_path)

    def get_connection(self) -> sqlite3.Connection:
        """Get the database connection.

        Returns:
            SQLite connection.

        Raises:
            RuntimeError: If the manager has been closed.
        """
        if self.conn is None:
            raise RuntimeError(f"Database connection already closed: {self.db_path}")
        return self.conn

    def close(self) -> None:
        """Close the database connection."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> DatabaseManager:
        """Enter context manager.

        Returns:
            Self for use in with statement.
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close connection."""
        self.close()


def ensure_db(db_path: Path | str) -> sqlite3.Connection:
    """Open a connection, creating the parent directory for file databases.

    Args:
        db_path: Database file path, or ``:memory:``.

    Returns:
        SQLite connection.

    Raises:
        OSError: If directory creation fails.
        sqlite3.Error: If database connection fails.
        RuntimeError: If the SQLite library is too old for FTS5.
    """
    if sqlite3.sqlite_version_info < _MIN_SQLITE_VERSION:
        raise RuntimeError(
            f"SQLite {sqlite3.sqlite_version} is too old, "
            f"{'.'.join(map(str, _MIN_SQLITE_VERSION))} or newer is required for FTS5"
        )
    if str(db_path) != MEMORY_PATH:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    log.debug("Opened database %s (SQLite %s)", db_path, sqlite3.sqlite_version)
    return conn
