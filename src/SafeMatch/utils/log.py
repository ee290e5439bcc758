"""Logging for SafeMatch.

Library modules (compiler, validator, storage) log through the shared
``SafeMatch`` logger: rejected FTS5 candidates at DEBUG, tokenizer failures
at WARNING. They never configure handlers themselves. The CLI calls
:func:`configure_logging` once per action, which attaches a console handler
and, optionally, a per-action DEBUG log file.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final


_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}
_LINE_FORMAT: Final[str] = "%(asctime)s [%(levelabbr)s] %(message)s"
_DATE_FORMAT: Final[str] = "%m-%d %H:%M:%S"


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        """Render a record as ``mm-dd HH:MM:SS [LVL] message``."""
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("SafeMatch")


def _action_log_path(log_dir: str, action: str) -> Path:
    """Return a fresh ``<log_dir>/<action>/<action>_<mmddHHMMSS>.log`` path."""
    action_dir = Path(log_dir or "log") / action
    action_dir.mkdir(parents=True, exist_ok=True)
    return action_dir / f"{action}_{datetime.now().strftime('%m%d%H%M%S')}.log"


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Attach SafeMatch's handlers, replacing any from a previous action.

    The console handler follows ``level``. The file handler, written only
    when ``log_to_file`` is set and an ``action`` is known, records DEBUG so
    every candidate the FTS5 parser rejected can be read back after a run.

    Args:
        level: Console level name (e.g., INFO, DEBUG). Unknown names fall
            back to INFO.
        action: CLI command name; selects the log file's directory.
        log_to_file: Whether to mirror logs to a per-action file.
        log_dir: Base directory for log files.

    Returns:
        Path of the log file, or None when logging to the console only.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _AbbrevLevelFormatter(fmt=_LINE_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(resolved_level)
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    log_path = None
    if log_to_file and action:
        log_path = _action_log_path(log_dir, action)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for handler in log.handlers:
        handler.close()
    log.handlers.clear()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if log_path is not None else resolved_level)
    log.propagate = False
    return log_path
