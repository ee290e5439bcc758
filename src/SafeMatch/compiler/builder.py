"""Candidate expression construction for each construction mode.

The builder never looks at raw whitespace or punctuation: token extraction
is entirely up to the engine tokenizer. It only decides how tokens are
joined and quoted so the result reads as intended by the FTS5 grammar.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from SafeMatch.compiler.normalize import normalize
from SafeMatch.core.models import ConstructionMode, Token
from SafeMatch.utils.log import log

# sqlite3Fts5IsBareword: ASCII alphanumerics, underscore, 0x1A and every
# non-ASCII code point.
_BAREWORD_ASCII = frozenset("0123456789_ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz\x1a")
_KEYWORDS = frozenset({"AND", "OR", "NOT", "NEAR"})


class Tokenizer(Protocol):
    """Anything that splits text into engine tokens."""

    def tokenize(self, text: str) -> list[Token]:
        """Return tokens in order of occurrence."""
        ...


class PatternBuilder:
    """Assemble candidate FTS5 expressions from user text."""

    def __init__(self, tokenizer: Tokenizer) -> None:
        """Initialize builder.

        Args:
            tokenizer: Engine tokenizer used by the token-based modes.
        """
        self.tokenizer = tokenizer

    def tokens(self, text: str) -> list[Token]:
        """Return engine tokens of the NFC-normalized ``text``."""
        return self.tokenizer.tokenize(normalize(text))

    def build(self, mode: ConstructionMode, text: str) -> str | None:
        """Build a candidate expression.

        Args:
            mode: Construction mode.
            text: User input.

        Returns:
            Candidate expression, or None when a token-based mode finds no
            token in ``text``.
        """
        if mode is ConstructionMode.RAW:
            return text

        tokens = self.tokens(text)
        if not tokens:
            log.debug("No tokens in %r (mode=%s)", text, mode.value)
            return None

        if mode is ConstructionMode.ANY_TOKEN:
            return join_any(tokens)
        if mode is ConstructionMode.ALL_TOKENS:
            return join_all(tokens)
        if mode is ConstructionMode.PHRASE:
            return join_phrase(tokens)
        raise ValueError(f"Unsupported construction mode: {mode!r}")


def join_any(tokens: Sequence[Token]) -> str:
    """Join tokens with the OR operator."""
    return " OR ".join(quote_token(token) for token in tokens)


def join_all(tokens: Sequence[Token]) -> str:
    """Join tokens with the AND operator."""
    return " AND ".join(quote_token(token) for token in tokens)


def join_phrase(tokens: Sequence[Token]) -> str:
    """Join tokens into a single quoted phrase.

    Embedded double quotes are doubled so they cannot end the phrase early.
    """
    return '"' + " ".join(token.replace('"', '""') for token in tokens) + '"'


def quote_token(token: Token) -> str:
    """Render one token as an FTS5 string.

    Tokens that are plain barewords (and not operator keywords) are kept as
    they are; anything else becomes a quoted string.

    Examples:
        ``years`` -> ``years``; ``NOT`` -> ``"NOT"``; ``a"b`` -> ``"a""b"``
    """
    if token and token not in _KEYWORDS and all(_is_bareword_char(char) for char in token):
        return token
    return '"' + token.replace('"', '""') + '"'


def _is_bareword_char(char: str) -> bool:
    return char in _BAREWORD_ASCII or ord(char) >= 0x80
