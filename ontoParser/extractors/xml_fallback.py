from __future__ import annotations

"""Class and property extraction straight from an RDF/XML element tree.

Used when rdflib could not build a graph from an RDF/XML document but the
document is still well-formed XML. Records have the same shape as the graph
path; ``metadata.source`` is ``fallback_rdf_xml``.
"""

import xml.etree.ElementTree as ET
from typing import Any, Dict, Iterable, Iterator, List

from rdflib.namespace import OWL, RDF, RDFS

from ontoParser.extractors.property_kinds import (
    FUNCTIONAL_PROPERTY,
    PROPERTY_TYPES,
    property_type_from_types,
    ranges_from_comments,
)
from ontoParser.extractors.resources import STANDARD_PREDICATES, best_match, dedupe
from ontoParser.kg.document import XmlDocument
from ontoParser.kg.namespaces import RDF_NS, XML_NS, XML_TAG_PREFIXES, NamespaceRegistry

SOURCE = "fallback_rdf_xml"

CLASS_TYPES = (RDFS.Class, OWL.Class)

_ABOUT = f"{{{RDF_NS}}}about"
_RESOURCE = f"{{{RDF_NS}}}resource"
_LANG = f"{{{XML_NS}}}lang"
_STANDARD = frozenset(str(p) for p in STANDARD_PREDICATES)


def tag_uri(tag: str) -> str:
    """``{ns}local`` -> ``nslocal``; unqualified tags pass through."""

    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace + local
    return tag


def clark(uri: str) -> str:
    """Full IRI -> ElementTree ``{ns}local`` tag."""

    for sep in ("#", "/"):
        idx = uri.rfind(sep)
        if idx != -1:
            return f"{{{uri[: idx + 1]}}}{uri[idx + 1:]}"
    return uri


def element_name(element: ET.Element) -> str:
    uri = tag_uri(element.tag)
    for prefix, namespace in XML_TAG_PREFIXES.items():
        if uri.startswith(namespace):
            return f"{prefix}:{uri[len(namespace):]}"
    return uri


def _text(element: ET.Element) -> str:
    return "".join(element.itertext()).strip()


class XmlFallbackExtractor:
    """Walks the element tree of an RDF/XML document."""

    def __init__(self, registry: NamespaceRegistry | None = None) -> None:
        self.registry = registry if registry is not None else NamespaceRegistry()

    # -- element discovery ----------------------------------------------

    def find_elements(self, root: ET.Element, type_uris: Iterable[Any]) -> Iterator[ET.Element]:
        """Elements declared by tag name or by an ``rdf:type`` child, in document order."""

        wanted = frozenset(str(uri) for uri in type_uris)
        for element in root.iter():
            if not element.get(_ABOUT):
                continue
            if tag_uri(element.tag) in wanted or wanted.intersection(self.types(element)):
                yield element

    def types(self, element: ET.Element) -> List[str]:
        found: List[str] = []
        own = tag_uri(element.tag)
        if own != f"{RDF_NS}Description":
            found.append(own)
        found.extend(self.resources(element, RDF.type))
        return dedupe(found)

    # -- child readers ----------------------------------------------------

    def texts_with_lang(self, element: ET.Element, predicate: Any) -> Dict[str, str]:
        """``xml:lang`` keyed texts; the first untagged value is filed under ``en``."""

        texts: Dict[str, str] = {}
        for child in element.findall(clark(str(predicate))):
            lang = child.get(_LANG)
            value = _text(child)
            if lang:
                texts[lang] = value
            elif not texts.get("en"):
                texts["en"] = value
        return texts

    def resources(self, element: ET.Element, predicate: Any) -> List[str]:
        return [
            child.get(_RESOURCE)
            for child in element.findall(clark(str(predicate)))
            if child.get(_RESOURCE)
        ]

    def annotations(self, element: ET.Element) -> List[Dict[str, Any]]:
        records: List[Dict[str, Any]] = []
        for child in element:
            uri = tag_uri(child.tag)
            if uri in _STANDARD:
                continue
            record: Dict[str, Any] = {"property": self.registry.shorten(uri)}
            resource = child.get(_RESOURCE)
            if resource:
                record["value"] = self.registry.shorten(resource)
            else:
                record["value"] = _text(child)
                if child.get(_LANG):
                    record["language"] = child.get(_LANG)
            records.append(record)
        return records

    def _base_record(self, element: ET.Element, preferred_language: str | None) -> Dict[str, Any]:
        labels = self.texts_with_lang(element, RDFS.label)
        descriptions = self.texts_with_lang(element, RDFS.comment)
        return {
            "uri": element.get(_ABOUT),
            "label": best_match(labels, preferred_language),
            "labels": labels,
            "description": best_match(descriptions, preferred_language),
            "descriptions": descriptions,
        }

    def _metadata(self, element: ET.Element, types: List[str]) -> Dict[str, Any]:
        return {
            "source": SOURCE,
            "element_name": element_name(element),
            "types": types,
            "see_also": self.resources(element, RDFS.seeAlso),
            "is_defined_by": self.resources(element, RDFS.isDefinedBy),
            "annotations": self.annotations(element),
        }

    # -- records ----------------------------------------------------------

    def classes(self, document: XmlDocument, preferred_language: str | None = None) -> List[Dict[str, Any]]:
        records = []
        for element in self.find_elements(document.root, CLASS_TYPES):
            record = self._base_record(element, preferred_language)
            record["parent_classes"] = self.resources(element, RDFS.subClassOf)
            record["metadata"] = self._metadata(element, self.types(element))
            records.append(record)
        return records

    def properties(self, document: XmlDocument, preferred_language: str | None = None) -> List[Dict[str, Any]]:
        records = []
        for element in self.find_elements(document.root, PROPERTY_TYPES):
            types = self.types(element)
            # The element name decides first, then any rdf:type children.
            kind = property_type_from_types([tag_uri(element.tag)]) or property_type_from_types(types)
            ranges = dedupe(self.resources(element, RDFS.range))
            if not ranges:
                comments = [_text(c) for c in element.findall(clark(str(RDFS.comment)))]
                ranges = ranges_from_comments(comments)

            record = self._base_record(element, preferred_language)
            record.update(
                {
                    "property_type": kind or "datatype",
                    "domain": dedupe(self.resources(element, RDFS.domain)),
                    "range": ranges,
                    "parent_properties": self.resources(element, RDFS.subPropertyOf),
                    "inverse_of": self.resources(element, OWL.inverseOf),
                    "is_functional": FUNCTIONAL_PROPERTY in types,
                    "metadata": self._metadata(element, types),
                }
            )
            records.append(record)
        return records


__all__ = ["SOURCE", "XmlFallbackExtractor", "clark", "element_name", "tag_uri"]
