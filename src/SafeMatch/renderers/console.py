"""Console text output renderer."""

from __future__ import annotations

from typing import Sequence

from SafeMatch.core.models import ConstructionMode, FTS5Pattern, ForeignKey, ForeignKeyViolation, Token
from SafeMatch.renderers.base import Renderer


class ConsoleRenderer(Renderer):
    """Render results as human-friendly text."""

    def render_pattern(self, text: str, mode: ConstructionMode, pattern: FTS5Pattern | None) -> str:
        if pattern is None:
            return f"No searchable token in {text!r} (mode={mode.value})\n"
        return pattern.serialize() + "\n"

    def render_tokens(self, text: str, tokens: Sequence[Token]) -> str:
        if not tokens:
            return f"No token in {text!r}\n"
        lines = [f"{idx}. {token}" for idx, token in enumerate(tokens, start=1)]
        return "\n".join(lines) + "\n"

    def render_foreign_keys(self, table: str, keys: Sequence[ForeignKey]) -> str:
        if not keys:
            return f"{table}: no foreign key\n"
        lines: list[str] = []
        for key in keys:
            origin = ", ".join(key.origin_columns)
            destination = ", ".join(key.destination_columns)
            lines.append(f"#{key.id} {table}({origin}) -> {key.destination_table}({destination})")
            lines.append(f"   ON UPDATE {key.on_update}  ON DELETE {key.on_delete}")
        return "\n".join(lines) + "\n"

    def render_violations(self, violations: Sequence[ForeignKeyViolation]) -> str:
        if not violations:
            return "No foreign key violation\n"
        lines: list[str] = []
        for violation in violations:
            rowid = "-" if violation.origin_rowid is None else str(violation.origin_rowid)
            lines.append(
                f"{violation.origin_table} rowid={rowid} -> {violation.destination_table}"
                f" (key #{violation.foreign_key_id})"
            )
        return "\n".join(lines) + "\n"
