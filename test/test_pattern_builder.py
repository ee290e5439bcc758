"""Tests for candidate expression construction."""

from __future__ import annotations

import sqlite3
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SafeMatch.compiler import GrammarValidator, PatternBuilder, join_all, join_any, join_phrase, quote_token
from SafeMatch.compiler.normalize import normalize
from SafeMatch.core.models import ConstructionMode


class _StubTokenizer:
    def __init__(self, tokens: list[str]) -> None:
        self.tokens = tokens
        self.calls: list[str] = []

    def tokenize(self, text: str) -> list[str]:
        self.calls.append(text)
        return list(self.tokens)


class TestPatternBuilder(unittest.TestCase):
    def test_raw_mode_returns_text_without_tokenizing(self) -> None:
        tokenizer = _StubTokenizer(["ignored"])
        builder = PatternBuilder(tokenizer)

        self.assertEqual(builder.build(ConstructionMode.RAW, "  a OR b  "), "  a OR b  ")
        self.assertEqual(tokenizer.calls, [])

    def test_token_modes_return_none_without_tokens(self) -> None:
        builder = PatternBuilder(_StubTokenizer([]))
        for mode in (ConstructionMode.ANY_TOKEN, ConstructionMode.ALL_TOKENS, ConstructionMode.PHRASE):
            with self.subTest(mode=mode):
                self.assertIsNone(builder.build(mode, "?!"))

    def test_token_modes_join_in_order_and_keep_duplicates(self) -> None:
        builder = PatternBuilder(_StubTokenizer(["b", "a", "b"]))
        self.assertEqual(builder.build(ConstructionMode.ANY_TOKEN, "x"), "b OR a OR b")
        self.assertEqual(builder.build(ConstructionMode.ALL_TOKENS, "x"), "b AND a AND b")
        self.assertEqual(builder.build(ConstructionMode.PHRASE, "x"), '"b a b"')

    def test_tokenizer_receives_nfc_text(self) -> None:
        tokenizer = _StubTokenizer(["x"])
        builder = PatternBuilder(tokenizer)
        builder.build(ConstructionMode.ANY_TOKEN, "e\u0301te\u0301")
        self.assertEqual(tokenizer.calls, ["\u00e9t\u00e9"])


class TestJoinHelpers(unittest.TestCase):
    def test_quote_token_keeps_barewords(self) -> None:
        for token in ["years", "a_b", "x1", "\u00e9carlates", "\U0001F468", "\x1a"]:
            with self.subTest(token=token):
                self.assertEqual(quote_token(token), token)

    def test_quote_token_quotes_keywords_and_punctuation(self) -> None:
        cases = {
            "NOT": '"NOT"',
            "AND": '"AND"',
            "OR": '"OR"',
            "NEAR": '"NEAR"',
            "a-b": '"a-b"',
            "it's": "\"it's\"",
            'a"b': '"a""b"',
            "": '""',
        }
        for token, expected in cases.items():
            with self.subTest(token=token):
                self.assertEqual(quote_token(token), expected)

    def test_join_any_and_all(self) -> None:
        self.assertEqual(join_any(["years", "NOT"]), 'years OR "NOT"')
        self.assertEqual(join_all(["years", "a.b"]), 'years AND "a.b"')

    def test_join_phrase_doubles_quotes(self) -> None:
        self.assertEqual(join_phrase(['a"b']), '"a""b"')
        self.assertEqual(join_phrase(["x", '"', "y"]), '"x "" y"')

    def test_quoted_outputs_pass_the_engine_parser(self) -> None:
        conn = sqlite3.connect(":memory:")
        try:
            validator = GrammarValidator(conn)
            for expression in [
                join_phrase(['a"b']),
                join_any(["NOT", "it's", 'x"y']),
                join_all(["OR", "NEAR", "a-b"]),
            ]:
                with self.subTest(expression=expression):
                    self.assertEqual(validator.validate(expression).raw_pattern, expression)
        finally:
            conn.close()


class TestNormalize(unittest.TestCase):
    def test_composes_decomposed_text(self) -> None:
        self.assertEqual(normalize("e\u0301"), "\u00e9")

    def test_is_idempotent(self) -> None:
        for text in ["", "plain", "e\u0301", "\u00e9", "\ufb01"]:
            with self.subTest(text=text):
                self.assertEqual(normalize(normalize(text)), normalize(text))


if __name__ == "__main__":
    unittest.main()
