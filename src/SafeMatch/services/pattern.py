"""Pattern compiler service: user text in, validated FTS5 pattern out."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Sequence

from SafeMatch.compiler.builder import PatternBuilder
from SafeMatch.compiler.tokenizer import EngineTokenizer
from SafeMatch.compiler.validator import GrammarValidator
from SafeMatch.core.models import ConstructionMode, FTS5Pattern, Token
from SafeMatch.utils.log import log


@dataclass(slots=True)
class PatternCompiler:
    """Compile user input into FTS5 patterns.

    Token-based modes return None when the input holds no token; callers
    must branch on it rather than fall back to a match-everything query.
    Engine errors propagate unchanged.
    """

    builder: PatternBuilder
    validator: GrammarValidator

    @classmethod
    def for_connection(
        cls,
        conn: sqlite3.Connection,
        *,
        tokenizer: str = "simple",
        tokenizer_args: Sequence[str] = (),
        probe_table: str | None = None,
        probe_schema: str | None = None,
        columns: Sequence[str] = (),
    ) -> PatternCompiler:
        """Create a compiler whose tokenizer and validator share ``conn``.

        Args:
            conn: SQLite connection with FTS3/FTS5 support.
            tokenizer: FTS3 tokenizer name.
            tokenizer_args: Tokenizer arguments.
            probe_table: Existing FTS5 table used for validation, if any.
            probe_schema: Schema of ``probe_table``.
            columns: Columns of the private probe table.

        Returns:
            Configured PatternCompiler.
        """
        engine_tokenizer = EngineTokenizer(conn, tokenizer=tokenizer, arguments=tokenizer_args)
        validator = GrammarValidator(conn, table=probe_table, schema=probe_schema, columns=columns)
        return cls(builder=PatternBuilder(engine_tokenizer), validator=validator)

    def compile(self, raw_pattern: str) -> FTS5Pattern:
        """Validate a raw FTS5 expression written by the caller.

        Raises:
            GrammarError: If the expression is not valid FTS5 syntax.
        """
        log.debug("Validating raw pattern %r", raw_pattern)
        return self.validator.validate(raw_pattern)

    def compile_any_token(self, text: str) -> FTS5Pattern | None:
        """Pattern matching rows that contain any token of ``text``."""
        return self.compile_mode(ConstructionMode.ANY_TOKEN, text)

    def compile_all_tokens(self, text: str) -> FTS5Pattern | None:
        """Pattern matching rows that contain all tokens of ``text``."""
        return self.compile_mode(ConstructionMode.ALL_TOKENS, text)

    def compile_phrase(self, text: str) -> FTS5Pattern | None:
        """Pattern matching rows that contain the tokens of ``text`` as a phrase."""
        return self.compile_mode(ConstructionMode.PHRASE, text)

    def compile_mode(self, mode: ConstructionMode, text: str) -> FTS5Pattern | None:
        """Compile ``text`` with an explicit construction mode.

        Args:
            mode: Construction mode.
            text: User input.

        Returns:
            Validated pattern, or None when a token-based mode finds no token.

        Raises:
            GrammarError: If the candidate is rejected by the FTS5 parser.
            SchemaError: If the validation probe is misconfigured.
        """
        candidate = self.builder.build(mode, text)
        if candidate is None:
            return None
        log.debug("Validating candidate mode=%s pattern=%r", mode.value, candidate)
        return self.validator.validate(candidate)

    def tokenize(self, text: str) -> list[Token]:
        """Return the engine tokens the token-based modes would use."""
        return self.builder.tokens(text)

    def deserialize(self, value: str) -> FTS5Pattern:
        """Decode a stored pattern, re-validating it with the FTS5 parser."""
        return self.compile(value)
