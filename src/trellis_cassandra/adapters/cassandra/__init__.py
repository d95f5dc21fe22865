"""Cassandra adapters: codecs, connection management and schema bootstrap."""

from .codecs import DEFAULT_CODECS, CodecRegistry
from .connection import ConnectionManager
from .errors import (
    BootstrapInterruptedError,
    CassandraBootstrapError,
    ClusterUnavailableError,
    CodecRegistrationError,
    FatalStartupError,
    KeyspaceMissingError,
    MalformedQueryError,
    SchemaBootstrapError,
)
from .schema import KEYSPACE, KEYSPACE_NAME, SchemaBootstrapper

__all__ = [
    "BootstrapInterruptedError",
    "CassandraBootstrapError",
    "ClusterUnavailableError",
    "CodecRegistrationError",
    "CodecRegistry",
    "ConnectionManager",
    "DEFAULT_CODECS",
    "FatalStartupError",
    "KEYSPACE",
    "KEYSPACE_NAME",
    "KeyspaceMissingError",
    "MalformedQueryError",
    "SchemaBootstrapError",
    "SchemaBootstrapper",
]
