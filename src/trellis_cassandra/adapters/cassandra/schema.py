"""Trellis keyspace and table definitions, and the schema bootstrapper.

Every statement is guarded with ``IF NOT EXISTS``, so bootstrapping an
already provisioned cluster is a no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import KeyspaceMissingError, SchemaBootstrapError

if TYPE_CHECKING:
    from cassandra.cluster import Session

    from trellis_cassandra.config import ClusterConfig

    from .connection import ConnectionManager

logger = logging.getLogger(__name__)

#: Keyspace name as written in the DDL.
KEYSPACE = "Trellis"
#: Name the cluster stores; CQL folds unquoted identifiers to lower case.
KEYSPACE_NAME = KEYSPACE.lower()

CQL_KEYSPACE = (
    f"CREATE KEYSPACE IF NOT EXISTS {KEYSPACE}"
    " WITH replication = {'class':'SimpleStrategy', 'replication_factor':1};"
)


@dataclass(frozen=True)
class TableDefinition:
    """One table of the Trellis schema.

    Attributes:
        name: Logical table name.
        cql: The ``CREATE TABLE IF NOT EXISTS`` statement.
        binary_only: Only created when the cluster binary service is enabled.
    """

    name: str
    cql: str
    binary_only: bool = False


METADATA = TableDefinition(
    "Metadata",
    "CREATE TABLE IF NOT EXISTS Metadata"
    " (identifier text PRIMARY KEY, interactionModel text, hasAcl boolean,"
    " binaryIdentifier text, mimeType text, size bigint, parent text);",
)
MUTABLEDATA = TableDefinition(
    "Mutabledata",
    "CREATE TABLE IF NOT EXISTS Mutabledata (identifier text PRIMARY KEY, quads text);",
)
IMMUTABLEDATA = TableDefinition(
    "Immutabledata",
    "CREATE TABLE IF NOT EXISTS Immutabledata (identifier text PRIMARY KEY, quads text);",
)
BINARYDATA = TableDefinition(
    "Binarydata",
    "CREATE TABLE IF NOT EXISTS Binarydata"
    " (identifier text, chunk_index int, chunk blob,"
    " PRIMARY KEY (identifier, chunk_index)) WITH CLUSTERING ORDER BY (chunk_index ASC);",
    binary_only=True,
)

#: All tables, in creation order.
SCHEMA: tuple[TableDefinition, ...] = (METADATA, MUTABLEDATA, IMMUTABLEDATA, BINARYDATA)


def tables_for(binary_service_enabled: bool) -> tuple[TableDefinition, ...]:
    """Return the tables to create for the given binary service setting."""
    return tuple(t for t in SCHEMA if binary_service_enabled or not t.binary_only)


def ddl_statements(binary_service_enabled: bool) -> list[str]:
    """Return every bootstrap statement, keyspace first, in issue order."""
    return [CQL_KEYSPACE, *(t.cql for t in tables_for(binary_service_enabled))]


def _close(session: Session) -> None:
    session.cluster.shutdown()


class SchemaBootstrapper:
    """Creates the Trellis keyspace and tables."""

    def __init__(self, connections: ConnectionManager) -> None:
        self._connections = connections

    def ensure_schema(self, config: ClusterConfig) -> bool:
        """Create the keyspace and tables if they do not exist.

        Args:
            config: Cluster settings; `binary_service_enabled` decides whether
                ``Binarydata`` is created.

        Returns:
            True if the keyspace was newly created, False if it already existed.

        Raises:
            SchemaBootstrapError: The keyspace is not visible after creating it.
        """
        session = self._connections.connect(config)
        try:
            existed = KEYSPACE_NAME in session.cluster.metadata.keyspaces
            session.execute(CQL_KEYSPACE)
        finally:
            _close(session)

        try:
            session = self._connections.connect(config, KEYSPACE_NAME)
        except KeyspaceMissingError as e:
            raise SchemaBootstrapError(
                f"Keyspace '{KEYSPACE}' is not visible after CREATE KEYSPACE."
            ) from e
        try:
            for table in tables_for(config.binary_service_enabled):
                logger.debug("Ensuring table %s", table.name)
                session.execute(table.cql)
        finally:
            _close(session)

        if existed:
            logger.info("Using the existing '%s' keyspace.", KEYSPACE)
        else:
            logger.info("Created the keyspace '%s' and associated tables.", KEYSPACE)
        return not existed
