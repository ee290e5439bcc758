"""Foreign key introspection and integrity checks.

Reads ``PRAGMA foreign_key_list`` and ``PRAGMA foreign_key_check`` and turns
their rows into `ForeignKey` / `ForeignKeyViolation` records.
"""

from __future__ import annotations

import sqlite3
from typing import Any

from SafeMatch.core.errors import ForeignKeyViolationError
from SafeMatch.core.models import ForeignKey, ForeignKeyMapping, ForeignKeyViolation
from SafeMatch.storage.catalog import (
    ensure_schema,
    primary_key_columns,
    quote_identifier,
    resolve_table_schema,
)
from SafeMatch.utils.log import log


def foreign_keys(conn: sqlite3.Connection, table: str, schema: str | None = None) -> list[ForeignKey]:
    """Return foreign keys declared on ``table``.

    Keys are listed in ``PRAGMA foreign_key_list`` order. References without
    explicit destination columns map to the destination primary key.

    Args:
        conn: SQLite connection.
        table: Origin table name (case-insensitive).
        schema: Schema name. None follows SQLite name resolution.

    Returns:
        Foreign keys of the table, possibly empty.

    Raises:
        SchemaError: If the schema or the table does not exist.
    """
    resolved = resolve_table_schema(conn, table, schema)
    rows = conn.execute(
        f"PRAGMA {quote_identifier(resolved)}.foreign_key_list({quote_identifier(table)})"
    ).fetchall()

    # foreign_key_list: id, seq, table, from, to, on_update, on_delete, match
    grouped: dict[int, list[tuple[Any, ...]]] = {}
    for row in rows:
        grouped.setdefault(row[0], []).append(row)

    keys: list[ForeignKey] = []
    for key_id, key_rows in grouped.items():
        key_rows.sort(key=lambda row: row[1])
        destination_table = key_rows[0][2]
        destinations = [row[4] for row in key_rows]
        if any(column is None for column in destinations):
            destinations = primary_key_columns(conn, destination_table, resolved)
        mapping = tuple(
            ForeignKeyMapping(origin=row[3], destination=destination)
            for row, destination in zip(key_rows, destinations)
        )
        keys.append(
            ForeignKey(
                id=key_id,
                destination_table=destination_table,
                mapping=mapping,
                on_update=key_rows[0][5],
                on_delete=key_rows[0][6],
                match=key_rows[0][7],
            )
        )

    log.debug("Found %d foreign keys on %s.%s", len(keys), resolved, table)
    return keys


def foreign_key_violations(
    conn: sqlite3.Connection,
    table: str | None = None,
    schema: str | None = None,
) -> list[ForeignKeyViolation]:
    """Return rows that violate foreign key constraints.

    Args:
        conn: SQLite connection.
        table: Restrict the check to this table. None checks the whole schema.
        schema: Schema name. None follows SQLite name resolution for
            ``table``, or checks ``main`` when no table is given.

    Returns:
        Violations in engine order.

    Raises:
        SchemaError: If the schema or the table does not exist.
    """
    _, rows = _foreign_key_check(conn, table, schema)
    return [_violation_from_row(row) for row in rows]


def check_foreign_keys(
    conn: sqlite3.Connection,
    table: str | None = None,
    schema: str | None = None,
) -> None:
    """Raise for the first foreign key violation, if any.

    Args:
        conn: SQLite connection.
        table: Restrict the check to this table.
        schema: Schema name.

    Raises:
        ForeignKeyViolationError: If a violation exists.
        SchemaError: If the schema or the table does not exist.
    """
    resolved, rows = _foreign_key_check(conn, table, schema)
    if not rows:
        return
    violation = _violation_from_row(rows[0])
    message = describe_violation(conn, violation, resolved)
    log.debug("Foreign key check failed: %s", message)
    raise ForeignKeyViolationError(message, violation)


def describe_violation(conn: sqlite3.Connection, violation: ForeignKeyViolation, schema: str) -> str:
    """Build a human-readable message for ``violation``.

    Example:
        ``FOREIGN KEY constraint violation - from child(parentId) to parent(id), in [id:13 parentId:"1"]``
    """
    key = next(
        (
            candidate
            for candidate in foreign_keys(conn, violation.origin_table, schema)
            if candidate.id == violation.foreign_key_id
        ),
        None,
    )
    message = "FOREIGN KEY constraint violation"
    if key is not None:
        message += (
            f" - from {violation.origin_table}({', '.join(key.origin_columns)})"
            f" to {key.destination_table}({', '.join(key.destination_columns)})"
        )
    if violation.origin_rowid is not None:
        row = _fetch_row(conn, violation.origin_table, schema, violation.origin_rowid)
        if row:
            message += f", in [{_describe_row(row)}]"
    return message


def _foreign_key_check(
    conn: sqlite3.Connection,
    table: str | None,
    schema: str | None,
) -> tuple[str, list[tuple[Any, ...]]]:
    """Run ``PRAGMA foreign_key_check`` and return ``(schema, rows)``."""
    if table is not None:
        resolved = resolve_table_schema(conn, table, schema)
        pragma = f"PRAGMA {quote_identifier(resolved)}.foreign_key_check({quote_identifier(table)})"
    else:
        resolved = ensure_schema(conn, schema) if schema is not None else "main"
        pragma = f"PRAGMA {quote_identifier(resolved)}.foreign_key_check"
    return resolved, conn.execute(pragma).fetchall()


def _violation_from_row(row: tuple[Any, ...]) -> ForeignKeyViolation:
    # foreign_key_check: table, rowid, parent, fkid
    return ForeignKeyViolation(
        origin_table=row[0],
        origin_rowid=row[1],
        destination_table=row[2],
        foreign_key_id=row[3],
    )


def _fetch_row(conn: sqlite3.Connection, table: str, schema: str, rowid: int) -> list[tuple[str, Any]]:
    """Return ``(column, value)`` pairs of one row."""
    cursor = conn.execute(
        f"SELECT * FROM {quote_identifier(schema)}.{quote_identifier(table)} WHERE rowid = ?",
        (rowid,),
    )
    values = cursor.fetchone()
    if values is None:
        return []
    return [(column[0], value) for column, value in zip(cursor.description, values)]


def _describe_row(row: list[tuple[str, Any]]) -> str:
    return " ".join(f"{column}:{_describe_value(value)}" for column, value in row)


def _describe_value(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, str):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    if isinstance(value, bytes):
        return "X'" + value.hex().upper() + "'"
    return str(value)
