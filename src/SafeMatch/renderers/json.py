"""JSON output renderer.

Produces one JSON document per command, suitable for scripting.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from SafeMatch.core.models import ConstructionMode, FTS5Pattern, ForeignKey, ForeignKeyViolation, Token
from SafeMatch.renderers.base import Renderer


def foreign_key_to_dict(key: ForeignKey) -> dict[str, Any]:
    """Convert a foreign key into JSON-serializable Python objects."""
    return {
        "id": key.id,
        "destination_table": key.destination_table,
        "mapping": [{"origin": arrow.origin, "destination": arrow.destination} for arrow in key.mapping],
        "on_update": key.on_update,
        "on_delete": key.on_delete,
        "match": key.match,
    }


def violation_to_dict(violation: ForeignKeyViolation) -> dict[str, Any]:
    """Convert a violation into JSON-serializable Python objects."""
    return {
        "origin_table": violation.origin_table,
        "origin_rowid": violation.origin_rowid,
        "destination_table": violation.destination_table,
        "foreign_key_id": violation.foreign_key_id,
    }


class JsonRenderer(Renderer):
    """Render results as indented JSON."""

    def render_pattern(self, text: str, mode: ConstructionMode, pattern: FTS5Pattern | None) -> str:
        return _dump(
            {
                "input": text,
                "mode": mode.value,
                "pattern": pattern.serialize() if pattern is not None else None,
            }
        )

    def render_tokens(self, text: str, tokens: Sequence[Token]) -> str:
        return _dump({"input": text, "tokens": list(tokens)})

    def render_foreign_keys(self, table: str, keys: Sequence[ForeignKey]) -> str:
        return _dump({"table": table, "foreign_keys": [foreign_key_to_dict(key) for key in keys]})

    def render_violations(self, violations: Sequence[ForeignKeyViolation]) -> str:
        return _dump({"violations": [violation_to_dict(violation) for violation in violations]})


def _dump(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
