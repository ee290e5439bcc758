"""Tests for config override behavior with defaults."""

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SafeMatch.config import load_config, load_config_with_defaults


_BASE_YAML = """
log:
  level: INFO
  to_file: false
  dir: log

storage:
  db_path: ":memory:"
  db_path_env: SAFEMATCH_TEST_DB_PATH

pattern:
  tokenizer: simple
  tokenizer_args: []
  probe_table: null
  probe_schema: null
  columns: []
"""


class TestConfigOverride(unittest.TestCase):
    def _write(self, tmp: str, name: str, text: str) -> Path:
        path = Path(tmp) / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_override_merges_with_defaults(self) -> None:
        override_yaml = """
log:
  level: debug

pattern:
  tokenizer: unicode61
  tokenizer_args: ["remove_diacritics=0"]
"""
        with tempfile.TemporaryDirectory() as tmp:
            default_path = self._write(tmp, "default.yml", _BASE_YAML)
            override_path = self._write(tmp, "override.yml", override_yaml)
            with patch.dict(os.environ, {}, clear=True):
                cfg = load_config_with_defaults(override_path, default_path=default_path)

        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertFalse(cfg.runtime.to_file)
        self.assertEqual(cfg.storage.db_path, ":memory:")
        self.assertEqual(cfg.pattern.tokenizer, "unicode61")
        self.assertEqual(cfg.pattern.tokenizer_args, ("remove_diacritics=0",))
        self.assertIsNone(cfg.pattern.probe_table)

    def test_empty_override_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = self._write(tmp, "default.yml", _BASE_YAML)
            override_path = self._write(tmp, "override.yml", "{}")
            with patch.dict(os.environ, {}, clear=True):
                cfg = load_config_with_defaults(override_path, default_path=default_path)

        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertEqual(cfg.pattern.tokenizer, "simple")
        self.assertEqual(cfg.pattern.columns, ())

    def test_environment_overrides_db_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = self._write(tmp, "default.yml", _BASE_YAML)
            with patch.dict(os.environ, {"SAFEMATCH_TEST_DB_PATH": " data/app.db "}, clear=True):
                cfg = load_config(default_path)

        self.assertEqual(cfg.storage.db_path, "data/app.db")
        self.assertEqual(cfg.storage.db_path_env, "SAFEMATCH_TEST_DB_PATH")

    def test_override_root_must_be_mapping(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            default_path = self._write(tmp, "default.yml", _BASE_YAML)
            override_path = self._write(tmp, "override.yml", "- a\n- b\n")
            with self.assertRaisesRegex(ValueError, "mapping"):
                load_config_with_defaults(override_path, default_path=default_path)

    def test_repository_default_config_is_valid(self) -> None:
        default_path = REPO_ROOT / "config" / "default.yml"
        with patch.dict(os.environ, {}, clear=True):
            cfg = load_config(default_path)
        self.assertEqual(cfg.storage.db_path, ":memory:")
        self.assertEqual(cfg.pattern.tokenizer, "simple")


if __name__ == "__main__":
    unittest.main()
