"""Unit tests for trellis_cassandra.domain.value_objects."""

import pytest

from trellis_cassandra.domain.value_objects import IRI, Dataset, InvalidTermError, Quad

# pylint: disable=magic-value-comparison

S = "<http://example.com/s>"
P = "<http://example.com/p>"
G = "<http://example.com/g>"


def test_iri_n3_and_str():
    """IRIs render bare via str() and bracketed via n3()."""
    iri = IRI("trellis:data/resource")
    assert str(iri) == "trellis:data/resource"
    assert iri.n3() == "<trellis:data/resource>"


@pytest.mark.parametrize("value", ["", "relative/path", "http://ex/a b", "http://ex/<a>"])
def test_iri_rejects_invalid(value):
    """Relative IRIs and illegal characters are rejected."""
    with pytest.raises(InvalidTermError):
        IRI(value)


def test_quad_to_nquad_default_graph():
    """A triple in the default graph has three terms."""
    quad = Quad(S, P, '"hello"@en')
    assert quad.to_nquad() == f'{S} {P} "hello"@en .'


def test_quad_to_nquad_named_graph():
    """A named graph adds a fourth term."""
    quad = Quad("_:b0", P, S, G)
    assert quad.to_nquad() == f"_:b0 {P} {S} {G} ."


@pytest.mark.parametrize(
    "args",
    [
        ('"literal"', P, S),
        (S, "_:b0", S),
        (S, P, "not a term"),
        (S, P, S, '"graph"'),
    ],
)
def test_quad_rejects_misplaced_terms(args):
    """Literals cannot be subjects or graphs and predicates must be IRIs."""
    with pytest.raises(InvalidTermError):
        Quad(*args)


def test_quad_from_nquad_parses_typed_literal_with_spaces():
    """Literals may contain spaces and escaped quotes."""
    line = f'{S} {P} "a \\"quoted\\" value"^^<http://www.w3.org/2001/XMLSchema#string> {G} .'
    quad = Quad.from_nquad(line)
    assert quad.object == '"a \\"quoted\\" value"^^<http://www.w3.org/2001/XMLSchema#string>'
    assert quad.graph == G


@pytest.mark.parametrize("line", [f"{S} {P} {S}", f"{S} {P} .", f"{S} {P} {S} {G} {G} ."])
def test_quad_from_nquad_rejects_malformed(line):
    """Lines need a terminating dot and 3 or 4 terms."""
    with pytest.raises(InvalidTermError):
        Quad.from_nquad(line)


def test_dataset_deduplicates_in_first_seen_order():
    """Dataset.of keeps the first occurrence of each quad."""
    a = Quad(S, P, '"a"')
    b = Quad(S, P, '"b"')
    dataset = Dataset.of([a, b, a])
    assert list(dataset) == [a, b]
    assert len(dataset) == 2


def test_dataset_nquads_text():
    """Every quad is one line terminated by a newline."""
    dataset = Dataset.of([Quad(S, P, '"a"'), Quad(S, P, '"b"', G)])
    assert dataset.to_nquads() == f'{S} {P} "a" .\n{S} {P} "b" {G} .\n'


def test_dataset_from_nquads_skips_blanks_and_comments():
    """Blank lines and comment lines are ignored when parsing."""
    text = f'# exported\n\n{S} {P} "a" .\n   \n{S} {P} "b" {G} .\n'
    dataset = Dataset.from_nquads(text)
    assert [q.object for q in dataset] == ['"a"', '"b"']


def test_empty_dataset_serializes_to_empty_text():
    """An empty dataset is the empty string."""
    assert Dataset().to_nquads() == ""
    assert len(Dataset.from_nquads("")) == 0
