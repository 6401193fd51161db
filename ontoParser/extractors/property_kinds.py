from __future__ import annotations

"""Property typing rules shared by the graph and XML extraction paths."""

import re
from typing import Iterable, List, Tuple

from rdflib.namespace import OWL, RDF, XSD

from ontoParser.extractors.resources import dedupe

PROPERTY_TYPES = (
    RDF.Property,
    OWL.DatatypeProperty,
    OWL.ObjectProperty,
    OWL.AnnotationProperty,
    OWL.FunctionalProperty,
)
FUNCTIONAL_PROPERTY = str(OWL.FunctionalProperty)

# Prose range hints, tried in order; the first match wins per comment.
# Dublin Core in particular states its ranges only in rdfs:comment.
_RANGE_PATTERNS: Tuple[Tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"range.*(?:plain literal|rdf literal|language-tagged|lang.*string)"),
        str(RDF.langString),
    ),
    (re.compile(r"range.*(?:rdfs:literal|is.*literal)"), str(XSD.string)),
    (re.compile(r"range.*(?:xsd:string|string)"), str(XSD.string)),
    (re.compile(r"range.*(?:xsd:datetime|datetime)"), str(XSD.dateTime)),
    (re.compile(r"range.*(?:xsd:boolean|boolean)"), str(XSD.boolean)),
    (re.compile(r"range.*(?:xsd:integer|integer)"), str(XSD.integer)),
)


def property_type_from_types(types: Iterable[str]) -> str | None:
    for rdf_type in types:
        if "ObjectProperty" in rdf_type:
            return "object"
        if "DatatypeProperty" in rdf_type:
            return "datatype"
        if "AnnotationProperty" in rdf_type:
            return "annotation"
    return None


def property_type(types: Iterable[str]) -> str:
    """``object``, ``datatype`` or ``annotation``; plain ``rdf:Property`` is ``datatype``."""

    return property_type_from_types(types) or "datatype"


def range_from_comment(text: str) -> str | None:
    lowered = text.strip().lower()
    for pattern, datatype in _RANGE_PATTERNS:
        if pattern.search(lowered):
            return datatype
    return None


def ranges_from_comments(comments: Iterable[str]) -> List[str]:
    found = (range_from_comment(text) for text in comments)
    return dedupe(uri for uri in found if uri)


__all__ = [
    "FUNCTIONAL_PROPERTY",
    "PROPERTY_TYPES",
    "property_type",
    "property_type_from_types",
    "range_from_comment",
    "ranges_from_comments",
]
