"""Errors raised while establishing the Cassandra substrate.

Taxonomy
- Transient host unavailability is handled inside the connection manager
  and only surfaces as `ClusterUnavailableError` when a bounded retry policy
  gives up.
- `KeyspaceMissingError` is the one recoverable signal: it triggers the
  schema bootstrap.
- Everything deriving from `FatalStartupError` aborts startup.
"""

from __future__ import annotations

import re

from cassandra import InvalidRequest

_KEYSPACE_MISSING = re.compile(
    r"Keyspace ['\"]?(?P<keyspace>[^'\s\"]+)['\"]? does not exist", re.IGNORECASE
)


class CassandraBootstrapError(Exception):
    """Base class for bootstrap errors."""


class FatalStartupError(CassandraBootstrapError):
    """Unrecoverable error; the process must not start."""


class ClusterUnavailableError(FatalStartupError):
    """Raised when the retry policy gives up waiting for a reachable host.

    Attributes:
        attempts (int): Number of connection attempts made.
    """

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"No Cassandra host became reachable after {attempts} attempts."
        )
        self.attempts = attempts


class BootstrapInterruptedError(FatalStartupError):
    """Raised when the wait between connection attempts is interrupted."""


class CodecRegistrationError(FatalStartupError):
    """Raised when a codec cannot be registered (e.g. duplicate Python type)."""


class SchemaBootstrapError(FatalStartupError):
    """Raised when the keyspace is still missing after the schema bootstrap."""


class InvalidQueryError(CassandraBootstrapError):
    """Base class for invalid-query responses from the server."""


class KeyspaceMissingError(InvalidQueryError):
    """The requested keyspace does not exist on the cluster.

    Attributes:
        keyspace (str): The keyspace that could not be bound.
    """

    def __init__(self, keyspace: str) -> None:
        super().__init__(f"Keyspace '{keyspace}' does not exist.")
        self.keyspace = keyspace


class MalformedQueryError(InvalidQueryError, FatalStartupError):
    """Any invalid-query response other than a missing keyspace."""


def classify_invalid_request(exc: InvalidRequest, keyspace: str) -> InvalidQueryError:
    """Map a driver `InvalidRequest` onto the bootstrap error taxonomy.

    Only a server message reporting that *keyspace* does not exist counts as
    a missing keyspace; every other invalid request is malformed.

    Args:
        exc: The exception raised by the driver.
        keyspace: The keyspace the caller tried to bind.

    Returns:
        `KeyspaceMissingError` or `MalformedQueryError` (not raised).
    """
    match = _KEYSPACE_MISSING.search(str(exc))
    if match and match.group("keyspace").lower() == keyspace.lower():
        return KeyspaceMissingError(keyspace)
    return MalformedQueryError(f"Invalid query while binding '{keyspace}': {exc}")
