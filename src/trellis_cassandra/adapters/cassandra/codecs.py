"""Value codecs for the Trellis Cassandra tables.

A codec maps an application value type to the primitive the driver knows how
to put on the wire, and back. The registry collects codecs once per process
and installs them on the parameter encoder of every session it is asked to
prepare, so statements can bind `IRI`, `Dataset`, 64-bit integers and UTC
instants directly.

Only the encoding side is wired into the driver. Result rows come back as the
driver's own primitives; callers turn them into application values with
`CodecRegistry.codec_for(python_type).decode(value)`.
"""

from __future__ import annotations

import abc
import threading
from datetime import datetime, timezone
from functools import partial
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from cassandra.encoder import Encoder

from trellis_cassandra.domain.value_objects import IRI, Dataset

from .errors import CodecRegistrationError

if TYPE_CHECKING:
    from cassandra.cluster import Session

__all__ = [
    "BigintCodec",
    "Codec",
    "CodecRegistry",
    "DEFAULT_CODECS",
    "DatasetCodec",
    "InstantCodec",
    "IRICodec",
]

T = TypeVar("T")

BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1

# Untouched encoder used to render the primitives codecs produce.
_PRIMITIVES = Encoder()


class Codec(abc.ABC, Generic[T]):
    """Encode/decode rule between a Python type and a CQL column type."""

    python_type: type
    cql_type: str

    @abc.abstractmethod
    def encode(self, value: T) -> Any:
        """Return the driver primitive for *value*."""

    @abc.abstractmethod
    def decode(self, value: Any) -> T | None:
        """Return the application value for a driver primitive (None passes through)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.python_type.__name__} <-> {self.cql_type})"


class IRICodec(Codec[IRI]):
    """Resource identifiers stored as ``text``."""

    python_type = IRI
    cql_type = "text"

    def encode(self, value: IRI) -> str:
        return value.value

    def decode(self, value: Any) -> IRI | None:
        return None if value is None else IRI(value)


class DatasetCodec(Codec[Dataset]):
    """Quad snapshots stored as N-Quads ``text``."""

    python_type = Dataset
    cql_type = "text"

    def encode(self, value: Dataset) -> str:
        return value.to_nquads()

    def decode(self, value: Any) -> Dataset | None:
        return None if value is None else Dataset.from_nquads(value)


class BigintCodec(Codec[int]):
    """Python integers bound as ``bigint``; values outside 64 bits are rejected."""

    python_type = int
    cql_type = "bigint"

    def encode(self, value: int) -> int:
        if not BIGINT_MIN <= value <= BIGINT_MAX:
            raise ValueError(f"{value} does not fit in a 64-bit bigint")
        return value

    def decode(self, value: Any) -> int | None:
        return None if value is None else int(value)


class InstantCodec(Codec[datetime]):
    """Timezone-aware UTC instants stored as ``timestamp``.

    Naive datetimes are treated as UTC; aware ones are converted to UTC. The
    driver hands back naive UTC values, which are declared UTC on decode.
    """

    python_type = datetime
    cql_type = "timestamp"

    def encode(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def decode(self, value: Any) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def _encode_literal(codec: Codec[Any], value: Any) -> str:
    return _PRIMITIVES.cql_encode_all_types(codec.encode(value))


class CodecRegistry:
    """Process-wide set of codecs, keyed by Python type.

    Registration is all-or-nothing per call and a Python type can be claimed
    by one codec only.
    """

    def __init__(self) -> None:
        self._codecs: dict[type, Codec[Any]] = {}
        self._lock = threading.Lock()

    @property
    def codecs(self) -> tuple[Codec[Any], ...]:
        """Registered codecs in registration order."""
        return tuple(self._codecs.values())

    def register(self, *codecs: Codec[Any]) -> None:
        """Register codecs.

        Raises:
            CodecRegistrationError: If a Python type is already claimed, either
                by a registered codec or twice within *codecs*.
        """
        with self._lock:
            claimed = set(self._codecs)
            for codec in codecs:
                if codec.python_type in claimed:
                    raise CodecRegistrationError(
                        f"A codec for {codec.python_type.__name__} is already registered."
                    )
                claimed.add(codec.python_type)
            for codec in codecs:
                self._codecs[codec.python_type] = codec

    def codec_for(self, python_type: type) -> Codec[Any]:
        """Return the codec registered for *python_type*.

        Raises:
            KeyError: If no codec claims the type.
        """
        return self._codecs[python_type]

    def install(self, session: Session) -> None:
        """Route the session's parameter encoding through the registered codecs."""
        mapping = session.encoder.mapping
        for codec in self.codecs:
            mapping[codec.python_type] = partial(_encode_literal, codec)


DEFAULT_CODECS: tuple[Codec[Any], ...] = (
    IRICodec(),
    DatasetCodec(),
    BigintCodec(),
    InstantCodec(),
)
