"""Process-lifetime Cassandra session.

`SessionProvider` owns the single session the application shares. The first
`get_session` call connects to the Trellis keyspace, bootstrapping the schema
once if the keyspace is missing; later calls return the same session.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from trellis_cassandra.adapters.cassandra.errors import (
    KeyspaceMissingError,
    SchemaBootstrapError,
)
from trellis_cassandra.adapters.cassandra.schema import KEYSPACE, KEYSPACE_NAME

if TYPE_CHECKING:
    from cassandra.cluster import Session

    from trellis_cassandra.adapters.cassandra.connection import ConnectionManager
    from trellis_cassandra.adapters.cassandra.schema import SchemaBootstrapper
    from trellis_cassandra.config import ClusterConfig

logger = logging.getLogger(__name__)


class SessionProvider:
    """Lazily establishes and then caches the shared session.

    Initialisation is serialized by a lock, so concurrent first callers all
    receive the one session that was opened. Once set, the session is never
    replaced; only `close` empties the slot.
    """

    def __init__(
        self, connections: ConnectionManager, bootstrapper: SchemaBootstrapper
    ) -> None:
        self._connections = connections
        self._bootstrapper = bootstrapper
        self._session: Session | None = None
        self._lock = threading.Lock()

    @property
    def session(self) -> Session | None:
        """The cached session, or None before the first `get_session`."""
        return self._session

    def get_session(self, config: ClusterConfig) -> Session:
        """Return the shared session, establishing it on first use.

        Raises:
            FatalStartupError: Any unrecoverable connection or schema error.
        """
        if self._session is not None:
            return self._session
        with self._lock:
            if self._session is None:
                self._session = self._establish(config)
        return self._session

    def close(self) -> None:
        """Shut down the cluster behind the cached session, if any.

        The slot is cleared, so a later `get_session` opens a new session.
        """
        with self._lock:
            session, self._session = self._session, None
        if session is not None:
            session.cluster.shutdown()

    def _establish(self, config: ClusterConfig) -> Session:
        bootstrapped = False
        try:
            session = self._connections.connect(config, KEYSPACE_NAME)
        except KeyspaceMissingError:
            logger.info("Keyspace '%s' not found; creating the schema.", KEYSPACE)
            bootstrapped = True
            try:
                self._bootstrapper.ensure_schema(config)
                session = self._connections.connect(config, KEYSPACE_NAME)
            except KeyspaceMissingError as e:
                raise SchemaBootstrapError(
                    f"Keyspace '{KEYSPACE}' is still missing after the schema bootstrap."
                ) from e

        metadata = session.cluster.metadata
        logger.info("Connecting to cluster: %s", metadata.cluster_name)
        logger.info("with nodes: %s", [str(host) for host in metadata.all_hosts()])
        if not bootstrapped:
            logger.info("Using the existing '%s' keyspace.", KEYSPACE)
        return session
