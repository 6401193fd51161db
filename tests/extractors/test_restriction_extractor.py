from __future__ import annotations

from ontoParser.extractors import RestrictionExtractor
from ontoParser.handlers import RdfXmlHandler, TurtleHandler
from ontoParser.handlers import rdfxml

EX = "http://example.org/library#"

HEADER = """
@prefix ex: <http://example.org/> .
@prefix owl: <http://www.w3.org/2002/07/owl#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
"""


def _restrictions(content: str) -> list:
    return RestrictionExtractor().extract(TurtleHandler().parse(content))


def test_some_values_from_union(load_fixture) -> None:
    assert _restrictions(load_fixture("library.ttl")) == [
        {
            "source_class": f"{EX}Book",
            "property": f"{EX}writtenBy",
            "allowed_targets": [f"{EX}Person", f"{EX}Organization"],
            "restriction_type": "someValuesFrom",
        }
    ]


def test_named_target_and_all_values_from() -> None:
    records = _restrictions(
        HEADER
        + """
ex:Order rdfs:subClassOf [ a owl:Restriction ; owl:onProperty ex:placedBy ; owl:someValuesFrom ex:Customer ] ,
    [ a owl:Restriction ; owl:onProperty ex:hasLine ; owl:allValuesFrom ex:OrderLine ] .
"""
    )
    by_property = {r["property"]: r for r in records}
    assert by_property["http://example.org/placedBy"]["allowed_targets"] == ["http://example.org/Customer"]
    assert by_property["http://example.org/placedBy"]["restriction_type"] == "someValuesFrom"
    assert by_property["http://example.org/hasLine"]["restriction_type"] == "allValuesFrom"


def test_restrictions_without_usable_targets_are_skipped() -> None:
    records = _restrictions(
        HEADER
        + """
ex:A rdfs:subClassOf [ owl:onProperty ex:p ; owl:minCardinality 1 ] ,
    [ owl:onProperty ex:q ; owl:someValuesFrom [ owl:intersectionOf ( ex:B ex:C ) ] ] ,
    [ owl:onProperty [ owl:inverseOf ex:r ] ; owl:someValuesFrom ex:D ] ,
    ex:Parent .
[] rdfs:subClassOf [ owl:onProperty ex:p ; owl:someValuesFrom ex:E ] .
"""
    )
    assert records == []


def test_union_targets_are_deduplicated() -> None:
    records = _restrictions(
        HEADER
        + """
ex:A rdfs:subClassOf [ owl:onProperty ex:p ; owl:someValuesFrom [ owl:unionOf ( ex:B ex:B ex:C ) ] ] .
"""
    )
    assert records[0]["allowed_targets"] == ["http://example.org/B", "http://example.org/C"]


def test_fallback_documents_yield_nothing(monkeypatch, load_fixture) -> None:
    def _fail(content: str):
        raise ValueError("rejected")

    monkeypatch.setattr(rdfxml, "_load_graph", _fail)
    doc = RdfXmlHandler().parse(load_fixture("vocab.rdf"))
    assert RestrictionExtractor().extract(doc) == []
