from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

Token = str


class ConstructionMode(str, Enum):
    """How user input maps to an FTS5 expression.

    - `RAW`: the input already is an FTS5 expression
    - `ANY_TOKEN`: tokens joined with OR
    - `ALL_TOKENS`: tokens joined with AND
    - `PHRASE`: tokens joined into one quoted phrase
    """

    RAW = "raw"
    ANY_TOKEN = "any"
    ALL_TOKENS = "all"
    PHRASE = "phrase"


@dataclass(frozen=True, slots=True)
class FTS5Pattern:
    """Validated FTS5 full-text query expression.

    Instances are produced by `PatternCompiler`, which only returns patterns
    the SQLite FTS5 parser has accepted. The wrapped string is never
    transformed after validation.

    A pattern binds directly as an SQL parameter::

        conn.execute("SELECT * FROM books WHERE books MATCH ?", (pattern,))

    Attributes:
        raw_pattern: The accepted expression text.
    """

    raw_pattern: str

    def serialize(self) -> str:
        """Return the engine-bindable text form."""
        return self.raw_pattern

    def __conform__(self, protocol: object) -> Optional[str]:
        if protocol is sqlite3.PrepareProtocol:
            return self.raw_pattern
        return None

    def __str__(self) -> str:
        return self.raw_pattern


@dataclass(frozen=True, slots=True)
class ForeignKeyMapping:
    """One column pair of a foreign key."""

    origin: str
    destination: str


@dataclass(frozen=True, slots=True)
class ForeignKey:
    """Foreign key declared on a table.

    Attributes:
        id: Engine-assigned key id (as reported by ``PRAGMA foreign_key_list``).
        destination_table: Referenced table name.
        mapping: Column pairs ordered by key sequence.
        on_update: ON UPDATE action.
        on_delete: ON DELETE action.
        match: MATCH clause (usually ``NONE``).
    """

    id: int
    destination_table: str
    mapping: Sequence[ForeignKeyMapping]
    on_update: str = "NO ACTION"
    on_delete: str = "NO ACTION"
    match: str = "NONE"

    @property
    def origin_columns(self) -> list[str]:
        return [arrow.origin for arrow in self.mapping]

    @property
    def destination_columns(self) -> list[str]:
        return [arrow.destination for arrow in self.mapping]


@dataclass(frozen=True, slots=True)
class ForeignKeyViolation:
    """Row that violates a foreign key, as reported by ``PRAGMA foreign_key_check``.

    Attributes:
        origin_table: Table holding the offending row.
        origin_rowid: Rowid of that row, None for WITHOUT ROWID tables.
        destination_table: Referenced table.
        foreign_key_id: Key id, matches `ForeignKey.id` of the origin table.
    """

    origin_table: str
    origin_rowid: Optional[int]
    destination_table: str
    foreign_key_id: int
