"""Cassandra connection manager.

Opens sessions against the configured contact point and keeps trying while
no host is reachable. Each attempt builds a fresh `Cluster` handle with the
driver's metrics and monitor reporting switched off; handles that fail to
produce a session are shut down before the next attempt.

Keyspace binding happens after the unscoped connect. The driver turns a
missing keyspace passed to `Cluster.connect(keyspace)` into a generic
`NoHostAvailable`, which would be retried forever; binding with
`Session.set_keyspace` surfaces the server's invalid-query response instead,
so it can be classified.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from cassandra import InvalidRequest
from cassandra.cluster import Cluster, NoHostAvailable

from trellis_cassandra.adapters.retry_policies import FixedDelayRetry

from .codecs import DEFAULT_CODECS, CodecRegistry
from .errors import (
    BootstrapInterruptedError,
    ClusterUnavailableError,
    classify_invalid_request,
)

if TYPE_CHECKING:
    from cassandra.cluster import Session

    from trellis_cassandra.config import ClusterConfig
    from trellis_cassandra.interfaces.retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

ClusterFactory = Callable[..., Any]


def build_cluster(config: ClusterConfig, factory: ClusterFactory = Cluster) -> Any:
    """Build a cluster handle for the configured contact point.

    Client-side metrics and monitor (insights) reporting are disabled.
    """
    return factory(
        contact_points=[config.address],
        port=config.port,
        metrics_enabled=False,
        monitor_reporting_enabled=False,
    )


class ConnectionManager:
    """Opens Cassandra sessions, retrying while the cluster is unreachable.

    Args:
        codec_registry: Registry receiving the default codecs on the first
            attempt; shared by every session this manager opens.
        retry_policy: Decides the wait between attempts. Defaults to a fixed
            5 second delay with no attempt cap.
        cluster_factory: Callable building a `Cluster`-like handle from keyword
            arguments. Defaults to `cassandra.cluster.Cluster`.
        sleep: Blocking wait used between attempts.
    """

    def __init__(
        self,
        *,
        codec_registry: CodecRegistry | None = None,
        retry_policy: RetryPolicy | None = None,
        cluster_factory: ClusterFactory = Cluster,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.codec_registry = codec_registry or CodecRegistry()
        self.retry_policy = retry_policy or FixedDelayRetry()
        self._cluster_factory = cluster_factory
        self._sleep = sleep
        self._codecs_registered = False
        self._lock = threading.Lock()

    def connect(self, config: ClusterConfig, keyspace: str | None = None) -> Session:
        """Open a session, optionally bound to *keyspace*.

        Blocks until a host is reachable or the retry policy gives up.

        Args:
            config: Cluster address and port.
            keyspace: Keyspace to bind the session to, or None for a
                cluster-level session.

        Returns:
            The open session.

        Raises:
            KeyspaceMissingError: The keyspace does not exist.
            MalformedQueryError: Binding the keyspace failed for another reason.
            BootstrapInterruptedError: The wait between attempts was interrupted.
            ClusterUnavailableError: The retry policy gave up.
        """
        attempt = 1
        waited = 0.0
        while True:
            cluster = build_cluster(config, self._cluster_factory)
            self._register_codecs_once()
            try:
                session = self._open(cluster, keyspace)
            except NoHostAvailable as e:
                cluster.shutdown()
                delay = self.retry_policy.delay_for(attempt)
                if delay is None:
                    raise ClusterUnavailableError(attempt) from e
                attempt += 1
                logger.warning(
                    "Cassandra hosts are unavailable, waiting %g seconds for attempt %d..",
                    delay,
                    attempt,
                )
                logger.debug("Cassandra hosts unavailable", exc_info=e)
                self._wait(delay)
                waited += delay
            else:
                break

        self.codec_registry.install(session)
        if attempt > 1:
            logger.info(
                "Cassandra connection established, after %g seconds and %d attempts.",
                waited,
                attempt,
            )
        return session

    def _register_codecs_once(self) -> None:
        with self._lock:
            if self._codecs_registered:
                return
            self.codec_registry.register(*DEFAULT_CODECS)
            self._codecs_registered = True
        logger.debug("Registered codecs: %s", DEFAULT_CODECS)

    @staticmethod
    def _open(cluster: Any, keyspace: str | None) -> Session:
        session = cluster.connect()
        if keyspace is None:
            return session
        try:
            session.set_keyspace(keyspace)
        except InvalidRequest as e:
            cluster.shutdown()
            raise classify_invalid_request(e, keyspace) from e
        return session

    def _wait(self, delay: float) -> None:
        try:
            self._sleep(delay)
        except (KeyboardInterrupt, InterruptedError) as e:
            raise BootstrapInterruptedError(
                "Interrupted while attempting to connect to Cassandra."
            ) from e
