"""Tests for the engine tokenizer adapter."""

from __future__ import annotations

import sqlite3
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SafeMatch.compiler.tokenizer import EngineTokenizer


class TestEngineTokenizer(unittest.TestCase):
    def setUp(self) -> None:
        self.conn = sqlite3.connect(":memory:")

    def tearDown(self) -> None:
        self.conn.close()

    def test_simple_tokenizer_folds_ascii_only(self) -> None:
        tokenizer = EngineTokenizer(self.conn)
        self.assertEqual(
            tokenizer.tokenize("Call me Ishmael. \u00c9DEN"),
            ["call", "me", "ishmael", "\u00c9den"],
        )

    def test_tokens_keep_order_and_duplicates(self) -> None:
        tokenizer = EngineTokenizer(self.conn)
        self.assertEqual(tokenizer.tokenize("mer, marins, mer"), ["mer", "marins", "mer"])

    def test_input_without_token_characters(self) -> None:
        tokenizer = EngineTokenizer(self.conn)
        for text in ["", " \t\n", "?!", "()", '"', "*^"]:
            with self.subTest(text=text):
                self.assertEqual(tokenizer.tokenize(text), [])

    def test_porter_tokenizer_stems(self) -> None:
        tokenizer = EngineTokenizer(self.conn, tokenizer="porter")
        self.assertEqual(tokenizer.tokenize("running"), ["run"])

    def test_tokenizer_arguments(self) -> None:
        folding = EngineTokenizer(self.conn, tokenizer="unicode61")
        keeping = EngineTokenizer(self.conn, tokenizer="unicode61", arguments=["remove_diacritics=0"])

        self.assertEqual(folding.tokenize("\u00c9den"), ["eden"])
        self.assertEqual(keeping.tokenize("\u00c9den"), ["\u00e9den"])

    def test_descriptor_quotes_arguments(self) -> None:
        tokenizer = EngineTokenizer(self.conn, tokenizer="unicode61", arguments=["tokenchars=.'"])
        self.assertEqual(tokenizer.descriptor, "unicode61, 'tokenchars=.'''")

    def test_helper_table_lives_in_temp_schema(self) -> None:
        EngineTokenizer(self.conn).tokenize("hello")
        main_tables = self.conn.execute("SELECT name FROM main.sqlite_master").fetchall()
        temp_tables = self.conn.execute("SELECT name FROM temp.sqlite_master").fetchall()
        self.assertEqual(main_tables, [])
        self.assertTrue(any(name.startswith("safematch_tokens_") for (name,) in temp_tables))

    def test_invalid_tokenizer_name_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "Invalid tokenizer name"):
            EngineTokenizer(self.conn, tokenizer="simple); DROP TABLE x; --")

    def test_engine_failure_yields_no_tokens(self) -> None:
        tokenizer = EngineTokenizer(self.conn, tokenizer="no_such_tokenizer")
        with self.assertLogs("SafeMatch", level="WARNING") as captured:
            self.assertEqual(tokenizer.tokenize("hello"), [])
        self.assertIn("Tokenizer failed", captured.output[0])


if __name__ == "__main__":
    unittest.main()
