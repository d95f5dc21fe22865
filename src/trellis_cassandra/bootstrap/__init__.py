"""Bootstrap (composition root) for trellis-cassandra.

Assembles the application at runtime: builds the connection manager, schema
bootstrapper and session provider, obtains the shared session, and selects
the storage-backed services built on top of it.

Import rules:
- Entry points import *this* package (not adapters/interfaces/domain).
- This package may import: `trellis_cassandra.adapters`,
  `trellis_cassandra.interfaces`, `trellis_cassandra.domain`, and
  `trellis_cassandra.config`.
- Inner layers must not import `trellis_cassandra.bootstrap`.

Public surface:
- Re-export composition factories from this module; keep wiring helpers internal.
- No business rules live here; this is assembly and lifecycle only.
"""

from .bootstrap import (
    BINARY_CHUNK_SIZE,
    AppContainer,
    ClusterBinaryStorage,
    ExternalBinaryStorage,
    ServiceFactory,
    Services,
    bootstrap,
    build_session_provider,
)
from .session_provider import SessionProvider

__all__ = [
    "AppContainer",
    "BINARY_CHUNK_SIZE",
    "ClusterBinaryStorage",
    "ExternalBinaryStorage",
    "ServiceFactory",
    "Services",
    "SessionProvider",
    "bootstrap",
    "build_session_provider",
]
