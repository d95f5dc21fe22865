"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits structured log
messages, fixtures to register that command, obtain a CliRunner and run
tests within an isolated filesystem, and a fixture that points the
``connect`` command at the in-process fake cluster.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from tests.helpers.fake_cassandra import FakeCassandra, RecordingSleep
from trellis_cassandra.bootstrap import build_session_provider
from trellis_cassandra.entrypoints.cli import commands
from trellis_cassandra.entrypoints.cli.main import trellis_cassandra

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit representative log messages for CLI/flight-recorder tests.

    Emits DEBUG/INFO/WARNING/ERROR/CRITICAL messages on the
    'trellis_cassandra.demo' logger and additional messages on a
    'some.thirdparty' logger to exercise logger-level filtering and
    flight-recorder behavior.
    """
    logger = logging.getLogger("trellis_cassandra.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and its internal sections.

    Ensures the test-only command is removed from the group and any internal
    registries Click may use so cleanup is robust across Click versions.
    """
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command for the duration of a test."""
    trellis_cassandra.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(trellis_cassandra, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def cluster_env(monkeypatch):
    """Cluster location variables for the ``connect`` command."""
    env = {
        "TRELLIS_CASSANDRA_ADDRESS": "127.0.0.1",
        "TRELLIS_CASSANDRA_PORT": "9042",
        "TRELLIS_CASSANDRA_BINARY_SERVICE": "true",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


@pytest.fixture
def fake_node(monkeypatch):
    """Route the CLI's session provider to a fake node.

    Returns the `FakeCassandra` so tests can shape availability and inspect
    what the command did; recorded sleeps are exposed as ``fake_node.sleeps``.
    """
    node = FakeCassandra()
    node.sleeps = RecordingSleep()

    def provider(**kwargs):
        return build_session_provider(
            cluster_factory=node.cluster, sleep=node.sleeps, **kwargs
        )

    monkeypatch.setattr(commands, "build_session_provider", provider)
    return node
