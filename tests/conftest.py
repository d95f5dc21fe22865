"""Global pytest fixtures for trellis-cassandra."""

from __future__ import annotations

import pytest

from tests.helpers.fake_cassandra import FakeCassandra, RecordingSleep
from trellis_cassandra.adapters.cassandra.connection import ConnectionManager
from trellis_cassandra.config import ClusterConfig

pytest_plugins = [
    "tests.fixtures.cassandra",
]

# pylint: disable=redefined-outer-name


@pytest.fixture
def cluster_config() -> ClusterConfig:
    """Configuration pointing at the fake node, cluster binary service on."""
    return ClusterConfig(address="127.0.0.1", port=9042, binary_service_enabled=True)


@pytest.fixture
def fake_cassandra() -> FakeCassandra:
    """A reachable fake node with no keyspaces."""
    return FakeCassandra()


@pytest.fixture
def sleeps() -> RecordingSleep:
    """Non-blocking sleep that records every requested delay."""
    return RecordingSleep()


@pytest.fixture
def connections(
    fake_cassandra: FakeCassandra, sleeps: RecordingSleep
) -> ConnectionManager:
    """Connection manager wired to the fake node with the default retry policy."""
    return ConnectionManager(cluster_factory=fake_cassandra.cluster, sleep=sleeps)
