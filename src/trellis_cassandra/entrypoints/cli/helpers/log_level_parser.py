"""Helpers for parsing logger-level CLI options.

Options take the form NAME=LEVEL, either repeated or as one comma/space
separated string (as read from an environment variable).
"""

import logging
import re

import click

# The driver logs every reconnection attempt at WARNING and above
DEFAULT_LIB_LEVELS = {"cassandra": logging.ERROR}


def _normalize_items(value: str | list[str] | tuple[str, ...]) -> list[str]:
    """Flatten a Click option value into non-empty NAME=LEVEL items.

    Args:
        value (str | list[str] | tuple[str, ...]): One string (possibly comma
            or space separated) or the tuple a repeatable option collects.

    Returns:
        list[str]: The individual items, in order.
    """
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in re.split(r"[,\s]+", chunk) if item]


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...],
) -> dict[str, int]:
    """Click callback that parses NAME=LEVEL pairs into a name->level dict.

    Starts from DEFAULT_LIB_LEVELS; later items override earlier ones.

    Args:
        ctx (click.Context): Click context (unused).
        param (click.Parameter | None): Click parameter (unused).
        value (str | list[str] | tuple[str, ...]): The raw option value(s).

    Returns:
        dict[str, int]: Mapping of logger names to numeric logging levels.

    Raises:
        click.BadParameter: If an item is not NAME=LEVEL or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _normalize_items(value):
        name, sep, level_str = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        lvl = logging.getLevelNamesMapping().get(level_str.strip().upper())
        if lvl is None:
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name.strip()] = lvl
    return levels
