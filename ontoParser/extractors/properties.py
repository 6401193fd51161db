from __future__ import annotations

from typing import Any, Dict, List

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import OWL, RDF, RDFS
from rdflib.term import Node

from ontoParser.extractors.property_kinds import (
    FUNCTIONAL_PROPERTY,
    PROPERTY_TYPES,
    property_type,
    ranges_from_comments,
)
from ontoParser.extractors.resources import ResourceHelper, dedupe
from ontoParser.extractors.xml_fallback import XmlFallbackExtractor
from ontoParser.kg.document import ParsedDocument


class PropertyExtractor(ResourceHelper):
    """Extract RDF/OWL property declarations with domain, range and typing."""

    def extract(
        self,
        document: ParsedDocument,
        *,
        include_skolemized_blank_nodes: bool = False,
        preferred_language: str | None = None,
    ) -> List[Dict[str, Any]]:
        xml_doc = document.xml_document
        if document.format == "rdf/xml" and xml_doc is not None:
            return XmlFallbackExtractor(self.registry).properties(xml_doc, preferred_language)

        graph = document.graph
        records = []
        for resource in self.typed_resources(graph, PROPERTY_TYPES):
            if self.is_anonymous_owl_expression(graph, resource):
                continue
            key = self.resource_key(resource, skolemize=include_skolemized_blank_nodes)
            if key is None:
                continue
            records.append(self._record(graph, resource, key, preferred_language))
        return records

    def class_expressions(self, graph: Graph, resource: Node, predicate: URIRef) -> List[str]:
        """Named classes and named ``owl:unionOf`` members of each ``predicate`` value."""

        found: List[str] = []
        for value in graph.objects(resource, predicate):
            found.extend(self.class_expression_targets(graph, value))
        return dedupe(found)

    def _record(
        self, graph: Graph, resource: Node, key: str, preferred_language: str | None
    ) -> Dict[str, Any]:
        types = self.values(graph, resource, RDF.type)
        ranges = self.class_expressions(graph, resource, RDFS.range)
        if not ranges:
            comments = [str(c) for c in graph.objects(resource, RDFS.comment) if isinstance(c, Literal)]
            ranges = ranges_from_comments(comments)

        metadata: Dict[str, Any] = {
            "source": "rdflib",
            "types": types,
            "see_also": self.values(graph, resource, RDFS.seeAlso),
            "is_defined_by": self.values(graph, resource, RDFS.isDefinedBy),
            "annotations": self.annotations(graph, resource),
        }
        if isinstance(resource, BNode):
            metadata["blank_node_id"] = str(resource)
        return {
            "uri": key,
            "label": self.label(graph, resource, preferred_language),
            "labels": self.labels(graph, resource),
            "description": self.description(graph, resource, preferred_language),
            "descriptions": self.descriptions(graph, resource),
            "property_type": property_type(types),
            "domain": self.class_expressions(graph, resource, RDFS.domain),
            "range": ranges,
            "parent_properties": self.named_values(graph, resource, RDFS.subPropertyOf),
            "inverse_of": self.named_values(graph, resource, OWL.inverseOf),
            "is_functional": FUNCTIONAL_PROPERTY in types,
            "metadata": metadata,
        }


__all__ = ["PropertyExtractor"]
