"""Compose the session provider and the storage-backed services."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

from cassandra.cluster import Cluster

from trellis_cassandra.adapters.cassandra.connection import (
    ClusterFactory,
    ConnectionManager,
)
from trellis_cassandra.adapters.cassandra.schema import SchemaBootstrapper
from trellis_cassandra.config import BINARY_SERVICE_KEY, ConfigurationError

from .session_provider import SessionProvider

if TYPE_CHECKING:
    from cassandra.cluster import Session

    from trellis_cassandra.config import ClusterConfig
    from trellis_cassandra.interfaces.retry_policy import RetryPolicy

R = TypeVar("R")
B = TypeVar("B")

#: Size of the segments binaries are split into in the ``Binarydata`` table.
BINARY_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True)
class ClusterBinaryStorage:
    """Binaries live in the cluster, split into fixed-size chunks."""

    chunk_size: int = BINARY_CHUNK_SIZE


@dataclass(frozen=True)
class ExternalBinaryStorage(Generic[B]):
    """Binaries are handled by an externally supplied service."""

    service: B


BinaryStorage = Union[ClusterBinaryStorage, ExternalBinaryStorage[Any]]


def select_binary_storage(
    config: ClusterConfig, external_service: object | None = None
) -> BinaryStorage:
    """Resolve where binaries are stored.

    Raises:
        ConfigurationError: The cluster binary service is disabled and no
            external service was supplied.
    """
    if config.binary_service_enabled:
        return ClusterBinaryStorage()
    if external_service is None:
        raise ConfigurationError(
            f"{BINARY_SERVICE_KEY} is false but no external binary service was supplied."
        )
    return ExternalBinaryStorage(external_service)


@dataclass(frozen=True)
class Services(Generic[R, B]):
    """The storage-backed services handed to the rest of the application."""

    resource_service: R
    binary_service: B


class ServiceFactory(Generic[R, B]):
    """Builds the resource and binary services on top of a session.

    The binary storage variant is fixed when the factory is created.

    Args:
        config: Cluster settings; only the binary service flag is consulted.
        resource_service: Builds the cluster-backed resource service.
        cluster_binary_service: Builds the cluster-backed binary service from
            a session and a chunk size.
        default_binary_service: Service used when the cluster binary service
            is disabled.
    """

    def __init__(
        self,
        config: ClusterConfig,
        *,
        resource_service: Callable[[Session], R],
        cluster_binary_service: Callable[[Session, int], B],
        default_binary_service: B | None = None,
    ) -> None:
        self._resource_service = resource_service
        self._cluster_binary_service = cluster_binary_service
        self.binary_storage = select_binary_storage(config, default_binary_service)

    def build(self, session: Session) -> Services[R, B]:
        """Construct the services for *session*."""
        storage = self.binary_storage
        if isinstance(storage, ClusterBinaryStorage):
            binary_service = self._cluster_binary_service(session, storage.chunk_size)
        else:
            binary_service = storage.service
        return Services(
            resource_service=self._resource_service(session),
            binary_service=binary_service,
        )


@dataclass(frozen=True)
class AppContainer(Generic[R, B]):
    """A class to hold the application's long-lived collaborators."""

    config: ClusterConfig
    sessions: SessionProvider
    services: Services[R, B]


def build_session_provider(
    *,
    retry_policy: RetryPolicy | None = None,
    cluster_factory: ClusterFactory = Cluster,
    sleep: Callable[[float], None] = time.sleep,
) -> SessionProvider:
    """Build a session provider whose bootstrapper shares its connection manager."""
    connections = ConnectionManager(
        retry_policy=retry_policy, cluster_factory=cluster_factory, sleep=sleep
    )
    return SessionProvider(connections, SchemaBootstrapper(connections))


def bootstrap(
    config: ClusterConfig,
    *,
    resource_service: Callable[[Session], R],
    cluster_binary_service: Callable[[Session, int], B],
    default_binary_service: B | None = None,
    sessions: SessionProvider | None = None,
) -> AppContainer[R, B]:
    """Establish the shared session and build the services on top of it.

    Blocks until the cluster is reachable and the schema exists.

    Raises:
        ConfigurationError: The binary service selection is impossible.
        FatalStartupError: The session could not be established.
    """
    factory = ServiceFactory(
        config,
        resource_service=resource_service,
        cluster_binary_service=cluster_binary_service,
        default_binary_service=default_binary_service,
    )
    sessions = sessions or build_session_provider()
    session = sessions.get_session(config)
    return AppContainer(config=config, sessions=sessions, services=factory.build(session))
