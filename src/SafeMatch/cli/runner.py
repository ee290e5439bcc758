"""Command runner for coordinating CLI execution.

Manages component lifecycle, resource cleanup, logging configuration,
and error handling for command execution.
"""

from __future__ import annotations

import sqlite3
from typing import Callable, Protocol

import click

from SafeMatch.cli.commands import (
    CommandResult,
    CompileCommand,
    ForeignKeyCheckCommand,
    ForeignKeysCommand,
    TokenizeCommand,
)
from SafeMatch.config import AppConfig
from SafeMatch.core.models import ConstructionMode
from SafeMatch.renderers import create_renderer
from SafeMatch.services import create_pattern_compiler
from SafeMatch.storage import create_storage
from SafeMatch.utils.log import configure_logging, log


class Command(Protocol):
    def execute(self) -> CommandResult:
        """Run the command and return its rendered result."""
        ...


class CommandRunner:
    """Orchestrates command execution with proper resource management.

    Handles logging configuration, component creation, database context
    management, and error handling for CLI commands.
    """

    def __init__(self, config: AppConfig, *, output_format: str = "text") -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
            output_format: Renderer name (``text`` or ``json``).
        """
        self.config = config
        self.renderer = create_renderer(output_format)

    def run_compile(self, action: str, text: str, mode: ConstructionMode) -> CommandResult:
        """Compile ``text`` with ``mode``."""
        return self._run(
            action,
            lambda conn: CompileCommand(
                compiler=create_pattern_compiler(self.config, conn),
                renderer=self.renderer,
                text=text,
                mode=mode,
            ),
        )

    def run_tokenize(self, action: str, text: str) -> CommandResult:
        """Tokenize ``text`` with the configured engine tokenizer."""
        return self._run(
            action,
            lambda conn: TokenizeCommand(
                compiler=create_pattern_compiler(self.config, conn),
                renderer=self.renderer,
                text=text,
            ),
        )

    def run_foreign_keys(self, action: str, table: str, schema: str | None) -> CommandResult:
        """List foreign keys of ``table``."""
        return self._run(
            action,
            lambda conn: ForeignKeysCommand(conn=conn, renderer=self.renderer, table=table, schema=schema),
        )

    def run_fk_check(self, action: str, table: str | None, schema: str | None) -> CommandResult:
        """List foreign key violations."""
        return self._run(
            action,
            lambda conn: ForeignKeyCheckCommand(conn=conn, renderer=self.renderer, table=table, schema=schema),
        )

    def _run(self, action: str, build: Callable[[sqlite3.Connection], Command]) -> CommandResult:
        """Execute one command with full resource management.

        Args:
            action: The CLI command name (e.g., 'compile').
            build: Factory creating the command from an open connection.

        Returns:
            Command result.

        Raises:
            click.Abort: When the command fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            with create_storage(self.config) as db_manager:
                command = build(db_manager.get_connection())
                return command.execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action, e)
            raise click.Abort from e
