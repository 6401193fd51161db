from __future__ import annotations

from rdflib import Literal, URIRef
from rdflib.namespace import RDFS

from ontoParser.config import ParserConfig
from ontoParser.handlers.ntriples import NTriplesHandler

S = "<http://example.org/s>"
P = "<http://example.org/p>"
O = "<http://example.org/o>"


def test_can_handle_detects_triple_lines() -> None:
    handler = NTriplesHandler()
    assert handler.can_handle(f"# leading comment\n\n{S} {P} {O} .")
    assert handler.can_handle(f'_:b0 {P} "literal" . # trailing')
    assert handler.can_handle(f"{S} {P} {O} .trailing garbage ignored")


def test_can_handle_rejects_turtle_and_noise() -> None:
    handler = NTriplesHandler()
    assert not handler.can_handle("ex:a ex:b ex:c .")
    assert not handler.can_handle("just some text")
    assert not handler.can_handle("")


def test_can_handle_only_scans_first_lines() -> None:
    noise = "\n".join(f"noise line {i}" for i in range(10))
    content = f"{noise}\n{S} {P} {O} ."
    assert not NTriplesHandler().can_handle(content)
    assert NTriplesHandler(ParserConfig(detection_line_limit=11)).can_handle(content)


def test_can_handle_never_raises() -> None:
    assert NTriplesHandler().can_handle(None) is False  # type: ignore[arg-type]


def test_parse_minimal_line() -> None:
    doc = NTriplesHandler().parse(f"{S} {P} {O} .")
    assert doc.format == "n-triples"
    assert doc.metadata["parser"] == "ntriples_handler"
    assert doc.metadata["resource_count"] == 1
    assert set(doc.graph.subjects()) == {URIRef("http://example.org/s")}


def test_parse_fixture(load_fixture) -> None:
    content = load_fixture("sample.nt")
    doc = NTriplesHandler().parse(content)
    assert len(doc.graph) == 5
    s = URIRef("http://example.org/s")
    assert doc.graph.value(s, RDFS.label) == Literal("Subject", lang="en")
    labels = {str(o) for o in doc.graph.objects(None, RDFS.label)}
    assert 'anon "quoted" value' in labels
    assert doc.raw_content == content


def test_every_accepted_line_yields_one_triple() -> None:
    lines = [
        f"{S} {P} {O} .",
        f'{S} {P} "plain" .',
        f'{S} {P} "tagged"@en .',
        f'{S} {P} "7"^^<http://www.w3.org/2001/XMLSchema#integer> .',
        f"_:a {P} _:b .",
        f"<http://example.org/x> {P} {O} . # note",
    ]
    content = "\n# comment\n\n".join(lines)
    doc = NTriplesHandler().parse(content)
    assert len(doc.graph) == len(lines)


def test_crlf_input_is_accepted() -> None:
    content = f"{S} {P} {O} .\r\n{S} {P} \"x\" .\r\n"
    doc = NTriplesHandler().parse(content)
    assert len(doc.graph) == 2
