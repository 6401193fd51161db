from __future__ import annotations

from typing import Any, Dict, List

from rdflib import URIRef
from rdflib.namespace import OWL, RDFS

from ontoParser.extractors.resources import ResourceHelper, dedupe
from ontoParser.kg.document import ParsedDocument, graph_resources

# Quantifier predicate -> restriction_type.
QUANTIFIERS = (
    (OWL.someValuesFrom, "someValuesFrom"),
    (OWL.allValuesFrom, "allValuesFrom"),
)


class RestrictionExtractor(ResourceHelper):
    """Turn ``rdfs:subClassOf [ owl:onProperty ...; owl:someValuesFrom ... ]``
    into allowed-relationship records between named classes."""

    def extract(self, document: ParsedDocument) -> List[Dict[str, Any]]:
        if document.xml_document is not None:
            return []

        graph = document.graph
        records: List[Dict[str, Any]] = []
        for resource in graph_resources(graph):
            if not isinstance(resource, URIRef):
                continue
            for restriction in graph.objects(resource, RDFS.subClassOf):
                if not self.is_blank(restriction):
                    continue
                on_property = graph.value(restriction, OWL.onProperty)
                if not isinstance(on_property, URIRef):
                    continue
                for predicate, kind in QUANTIFIERS:
                    target = graph.value(restriction, predicate)
                    if target is None:
                        continue
                    allowed = dedupe(self.class_expression_targets(graph, target))
                    if not allowed:
                        continue
                    records.append(
                        {
                            "source_class": str(resource),
                            "property": str(on_property),
                            "allowed_targets": allowed,
                            "restriction_type": kind,
                        }
                    )
        return records


__all__ = ["QUANTIFIERS", "RestrictionExtractor"]
