"""End-to-end tests for the click CLI."""

from __future__ import annotations

import json
import os
import sqlite3
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SafeMatch.cli import cli


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._cwd = os.getcwd()
        os.chdir(REPO_ROOT)
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.db_path = self.tmp / "app.db"
        conn = sqlite3.connect(self.db_path)
        try:
            conn.executescript(
                """
                CREATE TABLE parent(id TEXT NOT NULL PRIMARY KEY);
                CREATE TABLE child(id INTEGER NOT NULL PRIMARY KEY, parentId TEXT REFERENCES parent(id));
                CREATE TABLE clean(id INTEGER PRIMARY KEY);
                INSERT INTO child (id, parentId) VALUES (13, '1');
                CREATE VIRTUAL TABLE books USING fts5(title, body);
                """
            )
        finally:
            conn.close()
        self.runner = CliRunner()

    def tearDown(self) -> None:
        os.chdir(self._cwd)
        self._tmp.cleanup()

    def _config(self, extra: str = "") -> Path:
        path = self.tmp / "config.yml"
        path.write_text(
            "log:\n"
            "  level: ERROR\n"
            "storage:\n"
            f"  db_path: '{self.db_path.as_posix()}'\n"
            "  db_path_env: ''\n" + extra,
            encoding="utf-8",
        )
        return path

    def invoke(self, *args: str, extra: str = ""):
        return self.runner.invoke(cli, ["--config", str(self._config(extra)), *args])

    def test_compile_any_token_by_default(self) -> None:
        result = self.invoke("compile", "  years, months!  ")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "years OR months\n")

    def test_compile_modes(self) -> None:
        expected = {
            "raw": "years months\n",
            "any": "years OR months\n",
            "all": "years AND months\n",
            "phrase": '"years months"\n',
        }
        for mode, output in expected.items():
            with self.subTest(mode=mode):
                result = self.invoke("compile", "years months", "--mode", mode)
                self.assertEqual(result.exit_code, 0, result.output)
                self.assertEqual(result.output, output)

    def test_compile_json(self) -> None:
        result = self.invoke("compile", "Moby Dick", "--mode", "phrase", "--format", "json")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(
            json.loads(result.output),
            {"input": "Moby Dick", "mode": "phrase", "pattern": '"moby dick"'},
        )

    def test_compile_without_tokens_exits_non_zero(self) -> None:
        result = self.invoke("compile", "?!")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No searchable token", result.output)

    def test_compile_invalid_raw_pattern_aborts(self) -> None:
        result = self.invoke("compile", "years AND", "--mode", "raw")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("compile failed", result.output)

    def test_compile_against_probe_table(self) -> None:
        extra = "pattern:\n  probe_table: books\n"
        ok = self.invoke("compile", "title: moby", "--mode", "raw", extra=extra)
        self.assertEqual(ok.exit_code, 0, ok.output)
        self.assertEqual(ok.output, "title: moby\n")

        rejected = self.invoke("compile", "author: melville", "--mode", "raw", extra=extra)
        self.assertEqual(rejected.exit_code, 1)

    def test_tokenize(self) -> None:
        result = self.invoke("tokenize", "Call me Ishmael")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "1. call\n2. me\n3. ishmael\n")

    def test_foreign_keys(self) -> None:
        result = self.invoke("foreign-keys", "child", "--format", "json")
        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.output)
        self.assertEqual(payload["table"], "child")
        self.assertEqual(len(payload["foreign_keys"]), 1)
        self.assertEqual(payload["foreign_keys"][0]["destination_table"], "parent")
        self.assertEqual(
            payload["foreign_keys"][0]["mapping"],
            [{"origin": "parentId", "destination": "id"}],
        )

    def test_foreign_keys_missing_table_aborts(self) -> None:
        result = self.invoke("foreign-keys", "missing")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("no such table: missing", result.output)

    def test_fk_check_reports_violations(self) -> None:
        result = self.invoke("fk-check")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("child rowid=13 -> parent (key #0)", result.output)

    def test_fk_check_clean_table(self) -> None:
        result = self.invoke("fk-check", "--table", "clean")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "No foreign key violation\n")


if __name__ == "__main__":
    unittest.main()
