"""Configuration utilities for trellis-cassandra.

This module centralizes the cluster configuration consumed by the bootstrap
and the helpers that resolve it, either from an already-parsed mapping (the
application's configuration object) or from the process environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

ADDRESS_KEY = "cassandraAddress"  # pragma: no mutate
PORT_KEY = "cassandraPort"  # pragma: no mutate
BINARY_SERVICE_KEY = "enableCassandraBinaryService"  # pragma: no mutate

ADDRESS_ENV = "TRELLIS_CASSANDRA_ADDRESS"  # pragma: no mutate
PORT_ENV = "TRELLIS_CASSANDRA_PORT"  # pragma: no mutate
BINARY_SERVICE_ENV = "TRELLIS_CASSANDRA_BINARY_SERVICE"  # pragma: no mutate

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigurationError(Exception):
    """Raised when the cluster configuration is missing or invalid."""


@dataclass(frozen=True)
class ClusterConfig:
    """Resolved connection settings for the Cassandra cluster.

    Attributes:
        address: Host name or IP address of a contact point.
        port: Native protocol port of the contact point.
        binary_service_enabled: When True, binaries are stored in the cluster
            (the ``Binarydata`` table is created and the cluster-backed binary
            service is wired).
    """

    address: str
    port: int
    binary_service_enabled: bool

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> ClusterConfig:
        """Build a config from an application configuration mapping.

        Args:
            values: Mapping holding ``cassandraAddress``, ``cassandraPort`` and
                ``enableCassandraBinaryService``.

        Returns:
            The validated configuration.

        Raises:
            ConfigurationError: If a key is missing or has the wrong type.
        """
        address = _require(values, ADDRESS_KEY)
        port = _require(values, PORT_KEY)
        enabled = _require(values, BINARY_SERVICE_KEY)

        if not isinstance(address, str) or not address.strip():
            raise ConfigurationError(f"{ADDRESS_KEY} must be a non-empty string.")
        # bool is an int subclass; reject it explicitly
        if isinstance(port, bool) or not isinstance(port, int):
            raise ConfigurationError(f"{PORT_KEY} must be an integer, got {port!r}.")
        if not 0 < port < 65536:
            raise ConfigurationError(f"{PORT_KEY} out of range: {port}.")
        if not isinstance(enabled, bool):
            raise ConfigurationError(
                f"{BINARY_SERVICE_KEY} must be a boolean, got {enabled!r}."
            )
        return cls(address=address.strip(), port=port, binary_service_enabled=enabled)


def _require(values: Mapping[str, Any], key: str) -> Any:
    if (value := values.get(key)) is None:
        raise ConfigurationError(f"{key} is not set.")
    return value


def parse_bool(raw: str, *, name: str) -> bool:
    """Parse a textual boolean as found in environment variables.

    Args:
        raw: The raw value (case-insensitive, surrounding whitespace ignored).
        name: Variable name used in the error message.

    Returns:
        The parsed boolean.

    Raises:
        ConfigurationError: If the value is not a recognised boolean.
    """
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}.")


def load_cluster_config(environ: Mapping[str, str] | None = None) -> ClusterConfig:
    """Resolve the cluster configuration from environment variables.

    Reads `TRELLIS_CASSANDRA_ADDRESS`, `TRELLIS_CASSANDRA_PORT` and
    `TRELLIS_CASSANDRA_BINARY_SERVICE`.

    Args:
        environ: Mapping to read from; defaults to `os.environ`.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: If a variable is unset or cannot be parsed.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    if address := env.get(ADDRESS_ENV):
        values[ADDRESS_KEY] = address
    if raw_port := env.get(PORT_ENV):
        try:
            values[PORT_KEY] = int(raw_port)
        except ValueError as e:
            raise ConfigurationError(
                f"{PORT_ENV} must be an integer, got {raw_port!r}."
            ) from e
    if raw_enabled := env.get(BINARY_SERVICE_ENV):
        values[BINARY_SERVICE_KEY] = parse_bool(raw_enabled, name=BINARY_SERVICE_ENV)

    try:
        return ClusterConfig.from_mapping(values)
    except ConfigurationError as e:
        # report the environment variable rather than the mapping key
        message = (
            str(e)
            .replace(ADDRESS_KEY, ADDRESS_ENV)
            .replace(PORT_KEY, PORT_ENV)
            .replace(BINARY_SERVICE_KEY, BINARY_SERVICE_ENV)
        )
        raise ConfigurationError(message) from e
