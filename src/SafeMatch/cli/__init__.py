"""CLI package for SafeMatch command orchestration.

This package contains the modular CLI components, factored into separate
modules for better maintainability and testability.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from SafeMatch.cli.runner import CommandRunner
from SafeMatch.cli.ui import cli


def main() -> None:
    """Run SafeMatch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
