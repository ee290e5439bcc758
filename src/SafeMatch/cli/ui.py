"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from SafeMatch.cli.commands import CommandResult
from SafeMatch.cli.runner import CommandRunner
from SafeMatch.config import DEFAULT_CONFIG_PATH, load_config_with_defaults
from SafeMatch.core.models import ConstructionMode
from SafeMatch.renderers import OUTPUT_FORMATS

_format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    show_default=True,
    help="Output format.",
)


@click.group(help="SafeMatch: compile user text into validated FTS5 queries and inspect foreign keys.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (merged over the default config).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()

    ctx.obj = load_config_with_defaults(config_path)


@cli.command("compile")
@click.argument("text")
@click.option(
    "--mode",
    type=click.Choice([mode.value for mode in ConstructionMode]),
    default=ConstructionMode.ANY_TOKEN.value,
    show_default=True,
    help="raw: TEXT is FTS5 syntax; any/all: tokens joined with OR/AND; phrase: tokens as one phrase.",
)
@_format_option
@click.pass_context
def compile_cmd(ctx: click.Context, text: str, mode: str, output_format: str) -> None:
    """Compile TEXT into a validated FTS5 pattern.

    Exits with status 1 when TEXT holds no searchable token.
    """
    runner = CommandRunner(ctx.obj, output_format=output_format)
    _finish(ctx, runner.run_compile(ctx.command.name, text, ConstructionMode(mode)))


@cli.command("tokenize")
@click.argument("text")
@_format_option
@click.pass_context
def tokenize_cmd(ctx: click.Context, text: str, output_format: str) -> None:
    """Print the tokens the engine tokenizer extracts from TEXT."""
    runner = CommandRunner(ctx.obj, output_format=output_format)
    _finish(ctx, runner.run_tokenize(ctx.command.name, text))


@cli.command("foreign-keys")
@click.argument("table")
@click.option("--schema", default=None, help="Schema name (main, temp, or an attached database).")
@_format_option
@click.pass_context
def foreign_keys_cmd(ctx: click.Context, table: str, schema: str | None, output_format: str) -> None:
    """List foreign keys declared on TABLE."""
    runner = CommandRunner(ctx.obj, output_format=output_format)
    _finish(ctx, runner.run_foreign_keys(ctx.command.name, table, schema))


@cli.command("fk-check")
@click.option("--table", default=None, help="Only check this table.")
@click.option("--schema", default=None, help="Schema name (main, temp, or an attached database).")
@_format_option
@click.pass_context
def fk_check_cmd(ctx: click.Context, table: str | None, schema: str | None, output_format: str) -> None:
    """Report foreign key violations. Exits with status 1 when any exist."""
    runner = CommandRunner(ctx.obj, output_format=output_format)
    _finish(ctx, runner.run_fk_check(ctx.command.name, table, schema))


def _finish(ctx: click.Context, result: CommandResult) -> None:
    click.echo(result.output, nl=False)
    if not result.ok:
        ctx.exit(1)
