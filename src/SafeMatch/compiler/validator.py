"""Grammar validation through the engine's own FTS5 query parser.

The FTS5 grammar (operator precedence, quoting, prefix, NEAR, column
filters) is owned by SQLite. Rather than re-implementing it, candidates are
matched against an empty probe table: the parser runs when the statement is
first stepped, and any syntax error surfaces there.
"""

from __future__ import annotations

import hashlib
import re
import sqlite3
from typing import Sequence

from SafeMatch.core.errors import GrammarError, SchemaError
from SafeMatch.core.models import FTS5Pattern
from SafeMatch.storage.catalog import quote_identifier, resolve_table_schema, table_sql
from SafeMatch.utils.log import log

_PROBE_PREFIX = "safematch_probe_"
_DEFAULT_COLUMNS = ("content",)
_FTS5_DECL_RE = re.compile(r"\busing\s+fts5\b", re.IGNORECASE)
_SCHEMA_MESSAGES = ("no such table", "unknown database", "no such module")
_GRAMMAR_MESSAGES = ("fts5:", "unknown special query", "no such column", "unterminated string")


class GrammarValidator:
    """Validate candidate expressions with SQLite's FTS5 parser.

    By default a private FTS5 table in the ``temp`` schema is used as the
    probe. Passing ``table`` validates against an existing FTS5 table instead,
    which makes column filters (``title: moby``) check against real columns.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        table: str | None = None,
        schema: str | None = None,
        columns: Sequence[str] = (),
    ) -> None:
        """Initialize validator.

        Args:
            conn: Connection whose FTS5 parser validates expressions.
            table: Existing FTS5 table used as probe. None for a private probe.
            schema: Schema of ``table``. None follows SQLite name resolution.
            columns: Column names of the private probe table.

        Raises:
            ValueError: If ``schema`` or ``columns`` are given along with an
                incompatible probe choice.
        """
        if table is None and schema is not None:
            raise ValueError("schema requires a probe table")
        if table is not None and columns:
            raise ValueError("columns only apply to the private probe table")
        self.conn = conn
        self.table = table
        self.schema = schema
        self.columns = tuple(columns) or _DEFAULT_COLUMNS
        self._target: tuple[str, str] | None = None

    def validate(self, expression: str) -> FTS5Pattern:
        """Validate ``expression`` and wrap it unchanged.

        Args:
            expression: Candidate FTS5 expression.

        Returns:
            Validated pattern.

        Raises:
            GrammarError: If the FTS5 parser rejects the expression.
            SchemaError: If the probe table or its schema does not exist.
            sqlite3.OperationalError: Any other engine failure, such as a
                locked database, unchanged.
        """
        source, match_column = self._probe()
        try:
            self.conn.execute(
                f"SELECT rowid FROM {source} WHERE {match_column} MATCH ?",
                (expression,),
            ).fetchone()
        except sqlite3.OperationalError as error:
            message = str(error)
            if message.startswith(_SCHEMA_MESSAGES):
                self._target = None
                raise SchemaError(message) from error
            if not message.startswith(_GRAMMAR_MESSAGES):
                raise
            log.debug("Rejected pattern %r: %s", expression, message)
            raise GrammarError.from_sqlite(expression, error) from error
        return FTS5Pattern(expression)

    def _probe(self) -> tuple[str, str]:
        """Return ``(qualified table, match column)`` for the probe statement."""
        if self._target is None:
            if self.table is None:
                self._target = self._create_private_probe()
            else:
                self._target = self._locate_table_probe(self.table, self.schema)
        return self._target

    def _create_private_probe(self) -> tuple[str, str]:
        digest = hashlib.sha1("\x00".join(self.columns).encode("utf-8")).hexdigest()[:12]
        table = quote_identifier(_PROBE_PREFIX + digest)
        column_list = ", ".join(quote_identifier(column) for column in self.columns)
        try:
            self.conn.execute(f"CREATE VIRTUAL TABLE IF NOT EXISTS temp.{table} USING fts5({column_list})")
        except sqlite3.OperationalError as error:
            raise SchemaError(f"cannot create FTS5 probe table: {error}") from error
        log.debug("Created FTS5 probe table temp.%s columns=%s", table, self.columns)
        return f"temp.{table}", table

    def _locate_table_probe(self, table: str, schema: str | None) -> tuple[str, str]:
        resolved = resolve_table_schema(self.conn, table, schema)
        if not _FTS5_DECL_RE.search(table_sql(self.conn, table, resolved)):
            raise SchemaError(f"not an fts5 table: {resolved}.{table}")
        quoted = quote_identifier(table)
        return f"{quote_identifier(resolved)}.{quoted}", quoted
