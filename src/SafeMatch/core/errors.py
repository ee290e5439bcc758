"""Error taxonomy shared by the pattern compiler and schema introspection."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from SafeMatch.core.models import ForeignKeyViolation

SQLITE_ERROR = 1
SQLITE_CONSTRAINT = 19
SQLITE_CONSTRAINT_FOREIGNKEY = 787


class DatabaseError(Exception):
    """Engine-level failure carrying SQLite result codes.

    Attributes:
        message: Engine diagnostic, preserved verbatim.
        result_code: Primary SQLite result code.
        extended_result_code: Extended SQLite result code.
    """

    def __init__(
        self,
        message: str,
        *,
        result_code: int = SQLITE_ERROR,
        extended_result_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.result_code = result_code
        self.extended_result_code = result_code if extended_result_code is None else extended_result_code

    def __str__(self) -> str:
        return f"SQLite error {self.result_code}: {self.message}"


class GrammarError(DatabaseError):
    """Candidate expression rejected by the FTS5 query parser."""

    def __init__(self, expression: str, message: str, *, result_code: int = SQLITE_ERROR) -> None:
        super().__init__(message, result_code=result_code & 0xFF, extended_result_code=result_code)
        self.expression = expression

    @classmethod
    def from_sqlite(cls, expression: str, error: sqlite3.Error) -> GrammarError:
        """Wrap a driver exception raised while parsing ``expression``."""
        code = getattr(error, "sqlite_errorcode", None) or SQLITE_ERROR
        return cls(expression, str(error), result_code=code)


class SchemaError(DatabaseError):
    """A referenced schema or table does not exist (or has the wrong kind)."""


class ForeignKeyViolationError(DatabaseError):
    """Raised by ``check_foreign_keys`` for the first violated constraint."""

    def __init__(self, message: str, violation: ForeignKeyViolation) -> None:
        super().__init__(
            message,
            result_code=SQLITE_CONSTRAINT,
            extended_result_code=SQLITE_CONSTRAINT_FOREIGNKEY,
        )
        self.violation = violation
