"""Command implementations for SafeMatch CLI.

Encapsulates business logic for each command, separated from CLI parameter
handling and output formatting.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from SafeMatch.core.models import ConstructionMode
from SafeMatch.renderers import Renderer
from SafeMatch.services.pattern import PatternCompiler
from SafeMatch.storage.foreign_keys import foreign_key_violations, foreign_keys
from SafeMatch.utils.log import log


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Rendered command output and whether the command found what it looked for."""

    output: str
    ok: bool = True


@dataclass(slots=True)
class CompileCommand:
    """Compile one input string into an FTS5 pattern."""

    compiler: PatternCompiler
    renderer: Renderer
    text: str
    mode: ConstructionMode

    def execute(self) -> CommandResult:
        """Compile and render the pattern.

        Returns:
            Result with ``ok`` false when a token-based mode found no token.

        Raises:
            GrammarError: If the pattern is rejected by the FTS5 parser.
        """
        log.debug("Compiling mode=%s text=%r", self.mode.value, self.text)
        pattern = self.compiler.compile_mode(self.mode, self.text)
        if pattern is None:
            log.warning("No searchable token in input (mode=%s)", self.mode.value)
        return CommandResult(
            output=self.renderer.render_pattern(self.text, self.mode, pattern),
            ok=pattern is not None,
        )


@dataclass(slots=True)
class TokenizeCommand:
    """Show the engine tokens of one input string."""

    compiler: PatternCompiler
    renderer: Renderer
    text: str

    def execute(self) -> CommandResult:
        tokens = self.compiler.tokenize(self.text)
        log.debug("Tokenized into %d tokens", len(tokens))
        return CommandResult(output=self.renderer.render_tokens(self.text, tokens), ok=bool(tokens))


@dataclass(slots=True)
class ForeignKeysCommand:
    """List foreign keys declared on a table."""

    conn: sqlite3.Connection
    renderer: Renderer
    table: str
    schema: str | None = None

    def execute(self) -> CommandResult:
        keys = foreign_keys(self.conn, self.table, self.schema)
        log.debug("Table %s has %d foreign keys", self.table, len(keys))
        return CommandResult(output=self.renderer.render_foreign_keys(self.table, keys))


@dataclass(slots=True)
class ForeignKeyCheckCommand:
    """Report foreign key violations."""

    conn: sqlite3.Connection
    renderer: Renderer
    table: str | None = None
    schema: str | None = None

    def execute(self) -> CommandResult:
        """List violations.

        Returns:
            Result with ``ok`` false when at least one violation exists.
        """
        violations = foreign_key_violations(self.conn, self.table, self.schema)
        if violations:
            log.warning("Found %d foreign key violations", len(violations))
        return CommandResult(output=self.renderer.render_violations(violations), ok=not violations)
