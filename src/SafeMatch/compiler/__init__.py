"""FTS5 pattern compilation pipeline.

normalize -> tokenize (engine) -> build (per mode) -> validate (engine).
"""

from __future__ import annotations

from SafeMatch.compiler.builder import PatternBuilder, join_all, join_any, join_phrase, quote_token
from SafeMatch.compiler.normalize import normalize
from SafeMatch.compiler.tokenizer import EngineTokenizer
from SafeMatch.compiler.validator import GrammarValidator

__all__ = [
    "normalize",
    "EngineTokenizer",
    "PatternBuilder",
    "GrammarValidator",
    "join_any",
    "join_all",
    "join_phrase",
    "quote_token",
]
