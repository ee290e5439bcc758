"""Service layer for SafeMatch.

Exposes the pattern compiler and the factory that builds it from
configuration.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

from SafeMatch.services.pattern import PatternCompiler
from SafeMatch.utils.log import log

if TYPE_CHECKING:
    from SafeMatch.config import AppConfig


def create_pattern_compiler(config: AppConfig, conn: sqlite3.Connection) -> PatternCompiler:
    """Create a pattern compiler from the ``pattern`` config section.

    Args:
        config: Application configuration containing pattern settings.
        conn: Connection used for tokenization and validation.

    Returns:
        Configured PatternCompiler instance.
    """
    settings = config.pattern
    log.debug(
        "Creating pattern compiler tokenizer=%s args=%s probe_table=%s",
        settings.tokenizer,
        settings.tokenizer_args,
        settings.probe_table,
    )
    return PatternCompiler.for_connection(
        conn,
        tokenizer=settings.tokenizer,
        tokenizer_args=settings.tokenizer_args,
        probe_table=settings.probe_table,
        probe_schema=settings.probe_schema,
        columns=settings.columns,
    )


__all__ = [
    "PatternCompiler",
    "create_pattern_compiler",
]
