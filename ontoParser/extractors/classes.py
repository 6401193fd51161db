from __future__ import annotations

from typing import Any, Dict, List

from rdflib import BNode, Graph
from rdflib.namespace import OWL, RDF, RDFS
from rdflib.term import Node

from ontoParser.extractors.resources import ResourceHelper
from ontoParser.extractors.xml_fallback import XmlFallbackExtractor
from ontoParser.kg.document import ParsedDocument

CLASS_TYPES = (RDFS.Class, OWL.Class, RDFS.Datatype, RDFS.Container, RDFS.Literal)


class ClassExtractor(ResourceHelper):
    """Extract RDFS/OWL class declarations as records keyed by URI."""

    def extract(
        self,
        document: ParsedDocument,
        *,
        include_skolemized_blank_nodes: bool = False,
        preferred_language: str | None = None,
    ) -> List[Dict[str, Any]]:
        xml_doc = document.xml_document
        if document.format == "rdf/xml" and xml_doc is not None:
            return XmlFallbackExtractor(self.registry).classes(xml_doc, preferred_language)

        graph = document.graph
        records = []
        for resource in self.typed_resources(graph, CLASS_TYPES):
            if self.is_anonymous_owl_expression(graph, resource):
                continue
            key = self.resource_key(resource, skolemize=include_skolemized_blank_nodes)
            if key is None:
                continue
            records.append(self._record(graph, resource, key, preferred_language))
        return records

    def _record(
        self, graph: Graph, resource: Node, key: str, preferred_language: str | None
    ) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {
            "source": "rdflib",
            "types": self.values(graph, resource, RDF.type),
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
            # Blank-node parents (restrictions, unions) have no URI to list.
            "parent_classes": self.named_values(graph, resource, RDFS.subClassOf),
            "metadata": metadata,
        }


__all__ = ["CLASS_TYPES", "ClassExtractor"]
