"""Tokenizer adapter backed by the SQLite ``fts3tokenize`` virtual table.

Tokens must be exactly the ones the engine indexes, so splitting and case
folding are delegated to an engine tokenizer instead of a Python regex.
"""

from __future__ import annotations

import hashlib
import re
import sqlite3
from typing import Sequence

from SafeMatch.core.models import Token
from SafeMatch.storage.catalog import quote_identifier
from SafeMatch.utils.log import log

_TABLE_PREFIX = "safematch_tokens_"
_TOKENIZER_NAME_RE = re.compile(r"^[A-Za-z0-9_]+$")


class EngineTokenizer:
    """Split text into tokens with an SQLite full-text tokenizer.

    The helper table lives in the connection's ``temp`` schema and is created
    on first use. Tokenizer failures never propagate: they are logged and
    reported as an empty token list.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        tokenizer: str = "simple",
        arguments: Sequence[str] = (),
    ) -> None:
        """Initialize tokenizer adapter.

        Args:
            conn: Connection whose engine performs tokenization.
            tokenizer: FTS3 tokenizer name (``simple``, ``porter``, ``unicode61``...).
            arguments: Tokenizer arguments, e.g. ``["remove_diacritics=0"]``.

        Raises:
            ValueError: If the tokenizer name is not a plain identifier.
        """
        if not _TOKENIZER_NAME_RE.match(tokenizer):
            raise ValueError(f"Invalid tokenizer name: {tokenizer!r}")
        self.conn = conn
        self.tokenizer = tokenizer
        self.arguments = tuple(arguments)
        self._table: str | None = None

    @property
    def descriptor(self) -> str:
        """Tokenizer declaration as written in ``fts3tokenize(...)``."""
        parts = [self.tokenizer, *(_quote_argument(arg) for arg in self.arguments)]
        return ", ".join(parts)

    def tokenize(self, text: str) -> list[Token]:
        """Return tokens of ``text`` in order of occurrence.

        Args:
            text: Input text, expected in NFC form.

        Returns:
            Token list; empty when the input holds no indexable characters
            or when the engine tokenizer fails.
        """
        if not text:
            return []
        try:
            table = self._ensure_table()
            cursor = self.conn.execute(
                f"SELECT token FROM temp.{table} WHERE input = ? ORDER BY position",
                (text,),
            )
            tokens = [row[0] for row in cursor]
        except sqlite3.Error as error:
            log.warning("Tokenizer failed: tokenizer=%s error=%s", self.descriptor, error)
            return []
        log.debug("Tokenized %r into %d tokens", text, len(tokens))
        return tokens

    def _ensure_table(self) -> str:
        """Create the helper table if needed and return its quoted name."""
        if self._table is None:
            digest = hashlib.sha1(self.descriptor.encode("utf-8")).hexdigest()[:12]
            table = quote_identifier(_TABLE_PREFIX + digest)
            self.conn.execute(
                f"CREATE VIRTUAL TABLE IF NOT EXISTS temp.{table} USING fts3tokenize({self.descriptor})"
            )
            self._table = table
        return self._table


def _quote_argument(argument: str) -> str:
    """Quote a tokenizer argument as an SQL string literal."""
    return "'" + argument.replace("'", "''") + "'"
