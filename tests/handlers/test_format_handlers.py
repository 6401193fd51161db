from __future__ import annotations

import json

import pytest
from rdflib import URIRef
from rdflib.namespace import OWL, RDF, RDFS

from ontoParser.errors import ParseError
from ontoParser.handlers import (
    JsonLdHandler,
    NTriplesHandler,
    RdfXmlHandler,
    TurtleHandler,
    default_handlers,
)
from ontoParser.handlers import rdfxml
from ontoParser.handlers.base import normalize_format
from ontoParser.kg.document import XmlDocument


def test_default_handler_order() -> None:
    names = [h.format_name() for h in default_handlers()]
    assert names == ["json-ld", "turtle", "n-triples", "rdf/xml"]


@pytest.mark.parametrize(
    "alias, expected",
    [
        ("ttl", "turtle"),
        ("TURTLE", "turtle"),
        ("xml", "rdf/xml"),
        ("jsonld", "json-ld"),
        ("nt", "n-triples"),
        ("n-triples", "n-triples"),
        ("rdfa", "rdfa"),
    ],
)
def test_normalize_format(alias: str, expected: str) -> None:
    assert normalize_format(alias) == expected


def test_turtle_detection() -> None:
    handler = TurtleHandler()
    assert handler.can_handle("@prefix ex: <http://example.org/> .\nex:a ex:b ex:c .")
    assert handler.can_handle("@base <http://example.org/> .")
    assert handler.can_handle("PREFIX ex: <http://example.org/>\nex:a ex:b ex:c .")
    assert not handler.can_handle("<http://example.org/s> <http://example.org/p> <http://example.org/o> .")


def test_turtle_parse(load_fixture) -> None:
    doc = TurtleHandler().parse(load_fixture("library.ttl"))
    assert doc.format == "turtle"
    assert doc.metadata["parser"] == "turtle_handler"
    assert (URIRef("http://example.org/library#Book"), RDF.type, OWL.Class) in doc.graph
    assert doc.metadata["resource_count"] == doc.resource_count


def test_turtle_parse_error_is_wrapped() -> None:
    with pytest.raises(ParseError) as excinfo:
        TurtleHandler().parse("@prefix ex: <http://example.org/> .\nex:a ex:b .")
    assert str(excinfo.value).startswith("Turtle parsing failed: ")
    assert excinfo.value.__cause__ is not None


def test_jsonld_detection() -> None:
    handler = JsonLdHandler()
    assert handler.can_handle('  {"@context": {}, "@id": "http://example.org/a"}')
    assert handler.can_handle('[{"@context": {}}]')
    assert not handler.can_handle('{"id": 1}')
    assert not handler.can_handle("@context")


def test_jsonld_parse_with_named_graph(load_fixture) -> None:
    doc = JsonLdHandler().parse(load_fixture("catalog.jsonld"))
    assert doc.format == "json-ld"
    assert (URIRef("http://example.org/vocab#Dataset"), RDF.type, OWL.Class) in doc.graph
    assert (URIRef("http://example.org/vocab#Catalog"), RDF.type, OWL.Class) in doc.graph

    extra = doc.metadata["additional_graphs"]["http://example.org/graphs/extra"]
    assert (URIRef("http://example.org/vocab#Catalog"), RDF.type, OWL.Class) in extra.graph
    assert extra.graph_key == "http://example.org/graphs/extra"
    assert doc.metadata["context"]["ex"] == "http://example.org/vocab#"


def test_jsonld_top_level_graph_is_in_primary_graph() -> None:
    content = json.dumps(
        {
            "@context": {
                "ex": "http://example.org/onto#",
                "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
            },
            "@id": "http://example.org/onto",
            "@graph": [{"@id": "ex:Person", "@type": "rdfs:Class"}],
        }
    )
    doc = JsonLdHandler().parse(content)
    assert (URIRef("http://example.org/onto#Person"), RDF.type, RDFS.Class) in doc.graph
    assert doc.metadata["resource_count"] == 1
    assert list(doc.metadata["additional_graphs"]) == ["http://example.org/onto"]


def test_jsonld_invalid_json() -> None:
    with pytest.raises(ParseError, match="Invalid JSON"):
        JsonLdHandler().parse('{"@context": {')


def test_jsonld_requires_context() -> None:
    with pytest.raises(ParseError, match="@context"):
        JsonLdHandler().parse('{"@id": "http://example.org/a"}')


def test_rdfxml_detection() -> None:
    handler = RdfXmlHandler()
    assert handler.can_handle('<?xml version="1.0"?><rdf:RDF/>')
    assert handler.can_handle("<rdf:RDF xmlns:rdf='http://www.w3.org/1999/02/22-rdf-syntax-ns#'/>")
    assert not handler.can_handle("<html><body/></html>")


def test_rdfxml_parse(load_fixture) -> None:
    doc = RdfXmlHandler().parse(load_fixture("vocab.rdf"))
    assert doc.format == "rdf/xml"
    assert "xml_element" not in doc.metadata
    assert (URIRef("http://example.org/vocab#Agent"), RDF.type, OWL.Class) in doc.graph


def test_rdfxml_falls_back_to_element_tree(monkeypatch, load_fixture) -> None:
    def _fail(content: str):
        raise ValueError("unsupported construct")

    monkeypatch.setattr(rdfxml, "_load_graph", _fail)
    doc = RdfXmlHandler().parse(load_fixture("vocab.rdf"))
    assert doc.metadata["fallback"] is True
    assert len(doc.graph) == 0
    xml_doc = doc.metadata["xml_element"]
    assert isinstance(xml_doc, XmlDocument)
    assert doc.xml_document is xml_doc
    assert xml_doc.namespaces["owl"] == "http://www.w3.org/2002/07/owl#"
    assert xml_doc.root.tag == "{http://www.w3.org/1999/02/22-rdf-syntax-ns#}RDF"


def test_rdfxml_malformed_xml_is_parse_error() -> None:
    with pytest.raises(ParseError) as excinfo:
        RdfXmlHandler().parse('<?xml version="1.0"?><rdf:RDF><unclosed></rdf:RDF>')
    assert str(excinfo.value).startswith("RDF/XML parsing failed: ")
    assert excinfo.value.__cause__ is not None


def test_handler_repr_names_format() -> None:
    assert repr(NTriplesHandler()) == "NTriplesHandler(format='n-triples')"
