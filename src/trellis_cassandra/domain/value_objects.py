"""Value objects stored through the Cassandra codecs.

Terms are kept in their N-Triples lexical form (``<http://ex/a>``,
``_:b0``, ``"text"@en``, ``"1"^^<http://www.w3.org/2001/XMLSchema#int>``), so a
`Dataset` serializes to N-Quads without a separate RDF library.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

_TERM = re.compile(
    r"""
    <[^<>"{}|^`\\\s]*>                                 # IRI
    | _:[A-Za-z0-9_][A-Za-z0-9_.\-]*                   # blank node
    | "(?:[^"\\\n\r]|\\.)*"(?:@[A-Za-z]+(?:-[A-Za-z0-9]+)*|\^\^<[^<>\s]*>)?  # literal
    """,
    re.VERBOSE,
)


class InvalidTermError(ValueError):
    """Raised when a value is not a valid N-Triples term or N-Quads line."""


@dataclass(frozen=True)
class IRI:
    """An absolute IRI used as a resource identifier.

    Attributes:
        value: The IRI string without angle brackets (e.g. ``trellis:data/a``).
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or ":" not in self.value:
            raise InvalidTermError(f"Not an absolute IRI: {self.value!r}")
        if any(ch.isspace() or ch in '<>"' for ch in self.value):
            raise InvalidTermError(f"Illegal character in IRI: {self.value!r}")

    def n3(self) -> str:
        """Return the N-Triples form ``<value>``."""
        return f"<{self.value}>"

    def __str__(self) -> str:
        return self.value


def _check_term(term: str, *, allow_literal: bool = True) -> str:
    match = _TERM.fullmatch(term)
    if match is None or (not allow_literal and term.startswith('"')):
        raise InvalidTermError(f"Invalid term: {term!r}")
    return term


@dataclass(frozen=True)
class Quad:
    """A single RDF statement, optionally in a named graph.

    All terms are N-Triples strings; ``graph`` is None for the default graph.
    """

    subject: str
    predicate: str
    object: str
    graph: str | None = None

    def __post_init__(self) -> None:
        _check_term(self.subject, allow_literal=False)
        if not self.predicate.startswith("<"):
            raise InvalidTermError(f"Predicate must be an IRI: {self.predicate!r}")
        _check_term(self.predicate)
        _check_term(self.object)
        if self.graph is not None:
            _check_term(self.graph, allow_literal=False)

    def to_nquad(self) -> str:
        """Render the quad as one N-Quads line (without the newline)."""
        terms = [self.subject, self.predicate, self.object]
        if self.graph is not None:
            terms.append(self.graph)
        return " ".join(terms) + " ."

    @classmethod
    def from_nquad(cls, line: str) -> Quad:
        """Parse one N-Quads line.

        Raises:
            InvalidTermError: If the line does not hold 3 or 4 terms followed by
                a terminating ``.``.
        """
        body = line.strip()
        if not body.endswith("."):
            raise InvalidTermError(f"Missing terminating '.': {line!r}")
        body = body[:-1]
        terms: list[str] = []
        pos = 0
        while pos < len(body):
            if body[pos].isspace():
                pos += 1
                continue
            match = _TERM.match(body, pos)
            if match is None:
                raise InvalidTermError(f"Cannot parse term at {pos}: {line!r}")
            terms.append(match.group(0))
            pos = match.end()
        if len(terms) not in (3, 4):
            raise InvalidTermError(f"Expected 3 or 4 terms, got {len(terms)}: {line!r}")
        return cls(*terms)


@dataclass(frozen=True)
class Dataset:
    """An immutable snapshot of quads, the unit stored in ``quads`` columns.

    Quads are deduplicated and kept in first-seen order so serialization is
    deterministic.
    """

    quads: tuple[Quad, ...] = ()

    @classmethod
    def of(cls, quads: Iterable[Quad]) -> Dataset:
        """Build a dataset from any iterable of quads, dropping duplicates."""
        return cls(tuple(dict.fromkeys(quads)))

    def __iter__(self) -> Iterator[Quad]:
        return iter(self.quads)

    def __len__(self) -> int:
        return len(self.quads)

    def to_nquads(self) -> str:
        """Serialize the dataset as N-Quads text."""
        return "".join(f"{quad.to_nquad()}\n" for quad in self.quads)

    @classmethod
    def from_nquads(cls, text: str) -> Dataset:
        """Parse N-Quads text; blank lines and ``#`` comment lines are skipped."""
        return cls.of(
            Quad.from_nquad(line)
            for line in text.splitlines()
            if line.strip() and not line.lstrip().startswith("#")
        )
