"""Unit tests for the CLI log level parser.

These tests exercise trellis_cassandra.entrypoints.cli.helpers.log_level_parser.parse_log_level,
covering default behavior, override semantics, input normalization (commas/spaces),
case-insensitivity, and error handling for malformed input.
"""

import logging
import types

import click
import pytest

from trellis_cassandra.entrypoints.cli.helpers.log_level_parser import parse_log_level


def make_ctx():
    """Create a minimal Click context stub.

    The parser callback expects a Click context argument but does not use it;
    a lightweight SimpleNamespace is sufficient for testing.
    """
    return types.SimpleNamespace()


def test_empty_uses_defaults():
    """With no levels provided, the driver is limited to ERROR."""
    assert parse_log_level(make_ctx(), None, ()) == {"cassandra": logging.ERROR}


def test_repeated_flags_override_order():
    """Later repeated CLI flags override earlier ones for the same logger."""
    value = ("cassandra=INFO", "cassandra.pool=DEBUG", "cassandra=WARNING")
    out = parse_log_level(make_ctx(), None, value)
    # later entries win
    assert out["cassandra"] == logging.WARNING
    assert out["cassandra.pool"] == logging.DEBUG


def test_envvar_string_with_commas_and_spaces():
    """Accept a plain string (e.g. from an env var) with commas and spaces."""
    value = "cassandra=INFO,  urllib3=WARNING trellis_cassandra=DEBUG"
    out = parse_log_level(make_ctx(), None, value)
    assert out["cassandra"] == logging.INFO
    assert out["urllib3"] == logging.WARNING
    assert out["trellis_cassandra"] == logging.DEBUG


def test_case_insensitive_levels():
    """Level names should be parsed case-insensitively."""
    out = parse_log_level(make_ctx(), None, ("cassandra=info", "cassandra.cluster=WaRnInG"))
    assert out["cassandra"] == logging.INFO
    assert out["cassandra.cluster"] == logging.WARNING


@pytest.mark.parametrize("item", ["not-a-pair", "=INFO"])
def test_invalid_pair_raises(item):
    """Malformed NAME=LEVEL pairs should raise click.BadParameter."""
    with pytest.raises(click.BadParameter, match="Expected NAME=LEVEL"):
        parse_log_level(make_ctx(), None, (item,))


def test_invalid_level_raises():
    """Unknown level names should raise click.BadParameter."""
    with pytest.raises(click.BadParameter, match="Invalid log level"):
        parse_log_level(make_ctx(), None, ("cassandra=LOUD",))
