from __future__ import annotations

from typing import Any, Dict, List

from rdflib import Graph, URIRef
from rdflib.namespace import RDF
from rdflib.term import Node

from ontoParser.extractors.resources import ResourceHelper
from ontoParser.kg.document import ParsedDocument
from ontoParser.kg.namespaces import DCTERMS_NS, SH, SHACL_NS

SHAPE_TYPES = (SH.NodeShape, SH.PropertyShape)

CONSTRAINTS = (
    "minCount",
    "maxCount",
    "minLength",
    "maxLength",
    "pattern",
    "datatype",
    "nodeKind",
    "class",
    "node",
    "minInclusive",
    "maxInclusive",
    "minExclusive",
    "maxExclusive",
)

# sh: properties copied onto nested property-shape records.
PROPERTY_SHAPE_FIELDS = (
    "datatype",
    "nodeKind",
    "minCount",
    "maxCount",
    "minLength",
    "maxLength",
    "pattern",
    "class",
    "message",
    "name",
    "description",
)


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == {} or value == []


class ShapeExtractor(ResourceHelper):
    """Extract SHACL node and property shape declarations.

    Shapes are not validated against data; only their declarations are read.
    """

    def extract(
        self,
        document: ParsedDocument,
        *,
        preferred_language: str | None = None,
    ) -> List[Dict[str, Any]]:
        # SHACL is authored in Turtle or JSON-LD in practice.
        if document.format == "rdf/xml":
            return []

        self.registry.register("sh", SHACL_NS)
        self.registry.register("dct", DCTERMS_NS)

        graph = document.graph
        records = []
        for resource in self.typed_resources(graph, SHAPE_TYPES):
            if not isinstance(resource, URIRef):
                continue
            records.append(self._record(graph, resource, preferred_language))
        return records

    def _record(self, graph: Graph, shape: Node, preferred_language: str | None) -> Dict[str, Any]:
        return {
            "uri": str(shape),
            "label": self.label(graph, shape, preferred_language),
            "labels": self.labels(graph, shape),
            "description": self.description(graph, shape, preferred_language),
            "descriptions": self.descriptions(graph, shape),
            "target_class": self.value(graph, shape, SH.targetClass),
            "target_node": self.value(graph, shape, SH.targetNode),
            "target_subjects_of": self.value(graph, shape, SH.targetSubjectsOf),
            "target_objects_of": self.value(graph, shape, SH.targetObjectsOf),
            "target_property": self.value(graph, shape, SH.path),
            "property_shapes": self.property_shapes(graph, shape, preferred_language),
            "constraints": self.constraints(graph, shape),
            "metadata": {
                "source": "rdflib",
                "types": self.values(graph, shape, RDF.type),
                "annotations": self.annotations(graph, shape),
            },
        }

    def property_shapes(
        self, graph: Graph, shape: Node, preferred_language: str | None = None
    ) -> List[Dict[str, Any]]:
        shapes = []
        for node in graph.objects(shape, SH.property):
            path = self.value(graph, node, SH.path)
            if not path:
                continue
            record: Dict[str, Any] = {
                "path": path,
                "label": self.label(graph, node, preferred_language),
                "labels": self.labels(graph, node),
            }
            for field in PROPERTY_SHAPE_FIELDS:
                record[field] = self.value(graph, node, SH[field])
            record["descriptions"] = self.descriptions(graph, node)
            shapes.append({k: v for k, v in record.items() if not _is_empty(v)})
        return shapes

    def constraints(self, graph: Graph, shape: Node) -> Dict[str, str]:
        found: Dict[str, str] = {}
        for name in CONSTRAINTS:
            value = self.value(graph, shape, SH[name])
            if value is not None:
                found[name] = value
        return found


__all__ = ["CONSTRAINTS", "SHAPE_TYPES", "ShapeExtractor"]
