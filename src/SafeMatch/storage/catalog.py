"""Schema catalog helpers over SQLite metadata tables and pragmas."""

from __future__ import annotations

import sqlite3

from SafeMatch.core.errors import SchemaError


def quote_identifier(name: str) -> str:
    """Quote an SQL identifier, doubling embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


def schema_names(conn: sqlite3.Connection) -> list[str]:
    """Return schema names in SQLite's unqualified-name resolution order.

    ``temp`` comes first, then ``main``, then attached databases in
    attachment order.
    """
    attached = [row[1] for row in conn.execute("PRAGMA database_list")]
    ordered = ["temp", "main"]
    ordered.extend(name for name in attached if name.lower() not in ("temp", "main"))
    return ordered


def ensure_schema(conn: sqlite3.Connection, schema: str) -> str:
    """Return the canonical name of ``schema``.

    Args:
        conn: SQLite connection.
        schema: Schema name, matched case-insensitively.

    Returns:
        Schema name as known by the connection.

    Raises:
        SchemaError: If no such schema is attached.
    """
    for name in schema_names(conn):
        if name.lower() == schema.lower():
            return name
    raise SchemaError(f"no such schema: {schema}")


def table_exists(conn: sqlite3.Connection, table: str, schema: str) -> bool:
    """Return whether ``schema`` holds a table or view named ``table``."""
    row = conn.execute(
        f"SELECT 1 FROM {quote_identifier(schema)}.sqlite_master "
        "WHERE type IN ('table', 'view') AND name = ? COLLATE NOCASE",
        (table,),
    ).fetchone()
    return row is not None


def resolve_table_schema(conn: sqlite3.Connection, table: str, schema: str | None = None) -> str:
    """Find the schema that holds ``table``.

    Without an explicit schema, the first schema in resolution order wins,
    so ``main.t`` shadows ``attached.t``.

    Raises:
        SchemaError: If the schema or the table does not exist.
    """
    if schema is not None:
        canonical = ensure_schema(conn, schema)
        if table_exists(conn, table, canonical):
            return canonical
        raise SchemaError(f"no such table: {schema}.{table}")

    for name in schema_names(conn):
        if table_exists(conn, table, name):
            return name
    raise SchemaError(f"no such table: {table}")


def table_sql(conn: sqlite3.Connection, table: str, schema: str) -> str:
    """Return the CREATE statement stored for ``table``."""
    row = conn.execute(
        f"SELECT sql FROM {quote_identifier(schema)}.sqlite_master "
        "WHERE type = 'table' AND name = ? COLLATE NOCASE",
        (table,),
    ).fetchone()
    return row[0] if row and row[0] else ""


def primary_key_columns(conn: sqlite3.Connection, table: str, schema: str) -> list[str]:
    """Return primary key columns of ``table`` in key order.

    Tables without a declared primary key are keyed by ``rowid``.
    """
    rows = conn.execute(
        f"PRAGMA {quote_identifier(schema)}.table_info({quote_identifier(table)})"
    ).fetchall()
    # table_info: cid, name, type, notnull, dflt_value, pk
    keyed = sorted((row[5], row[1]) for row in rows if row[5])
    if not keyed:
        return ["rowid"]
    return [name for _, name in keyed]
