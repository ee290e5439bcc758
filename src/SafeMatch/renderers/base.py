"""Base class for command output renderers.

Separates command logic from output formatting so commands can be tested
without parsing printed text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from SafeMatch.core.models import ConstructionMode, FTS5Pattern, ForeignKey, ForeignKeyViolation, Token


class Renderer(ABC):
    """Turn command results into printable text."""

    @abstractmethod
    def render_pattern(self, text: str, mode: ConstructionMode, pattern: FTS5Pattern | None) -> str:
        """Render the outcome of one compilation."""

    @abstractmethod
    def render_tokens(self, text: str, tokens: Sequence[Token]) -> str:
        """Render engine tokens of ``text``."""

    @abstractmethod
    def render_foreign_keys(self, table: str, keys: Sequence[ForeignKey]) -> str:
        """Render foreign keys declared on ``table``."""

    @abstractmethod
    def render_violations(self, violations: Sequence[ForeignKeyViolation]) -> str:
        """Render foreign key violations."""
