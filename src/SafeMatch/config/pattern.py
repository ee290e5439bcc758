from __future__ import annotations

"""Pattern compiler configuration: tokenizer and validation probe."""

from dataclasses import dataclass
from typing import Any, Mapping

from SafeMatch.config.common import (
    check_identifier,
    expect_optional_str,
    expect_str,
    expect_str_list,
    get_optional_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class PatternConfig:
    """Store validated pattern compiler settings.

    Attributes:
        tokenizer: FTS3 tokenizer name used to split user input.
        tokenizer_args: Tokenizer arguments.
        probe_table: Existing FTS5 table to validate against, or None.
        probe_schema: Schema of ``probe_table``.
        columns: Columns of the private probe table.
    """

    tokenizer: str
    tokenizer_args: tuple[str, ...]
    probe_table: str | None
    probe_schema: str | None
    columns: tuple[str, ...]


def load_pattern(raw: Mapping[str, Any]) -> PatternConfig:
    """Load pattern domain config from raw mapping.

    Every key is optional; defaults select the ``simple`` tokenizer and a
    private single-column probe.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "pattern", required=False)
    return PatternConfig(
        tokenizer=expect_str(get_optional_value(section, "tokenizer", "simple"), "pattern.tokenizer"),
        tokenizer_args=tuple(
            expect_str_list(get_optional_value(section, "tokenizer_args", []), "pattern.tokenizer_args")
        ),
        probe_table=expect_optional_str(get_optional_value(section, "probe_table", None), "pattern.probe_table"),
        probe_schema=expect_optional_str(
            get_optional_value(section, "probe_schema", None), "pattern.probe_schema"
        ),
        columns=tuple(expect_str_list(get_optional_value(section, "columns", []), "pattern.columns")),
    )


def check_pattern(config: PatternConfig) -> None:
    """Validate pattern domain constraints.

    Raises:
        ValueError: If values violate pattern constraints.
    """
    check_identifier(config.tokenizer, "pattern.tokenizer")
    if config.probe_table is not None:
        if not config.probe_table.strip():
            raise ValueError("pattern.probe_table must not be empty")
        if config.columns:
            raise ValueError("pattern.columns only applies when pattern.probe_table is not set")
    elif config.probe_schema is not None:
        raise ValueError("pattern.probe_schema requires pattern.probe_table")
    for idx, column in enumerate(config.columns):
        if not column.strip():
            raise ValueError(f"pattern.columns[{idx}] must not be empty")
    if len(set(column.lower() for column in config.columns)) != len(config.columns):
        raise ValueError("pattern.columns must not contain duplicates")
