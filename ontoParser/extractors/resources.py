from __future__ import annotations

"""Graph traversal helpers shared by the entity extractors."""

import logging
from typing import Any, Dict, Iterable, Iterator, List

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import OWL, RDF, RDFS
from rdflib.term import Node

from ontoParser.kg.document import graph_resources
from ontoParser.kg.namespaces import NamespaceRegistry

logger = logging.getLogger(__name__)

SKOLEM_PREFIX = "urn:bnode:"
NO_LANGUAGE = "none"

# Predicates mapped to dedicated record fields; everything else on a
# resource is kept as a custom annotation.
STANDARD_PREDICATES = frozenset(
    {
        RDF.type,
        RDFS.label,
        RDFS.comment,
        RDFS.subClassOf,
        OWL.equivalentClass,
        OWL.disjointWith,
        RDFS.domain,
        RDFS.range,
        RDFS.subPropertyOf,
        OWL.equivalentProperty,
        OWL.inverseOf,
        OWL.deprecated,
    }
)


def skolem_uri(node: BNode) -> str:
    return f"{SKOLEM_PREFIX}{node}"


def render_node(node: Node) -> str:
    """Plain string form of a term: IRI, lexical form, or ``_:id``."""

    if isinstance(node, BNode):
        return f"_:{node}"
    return str(node)


def dedupe(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def best_match(values: Dict[str, str], preferred_language: str | None = None) -> str | None:
    """Pick preferred language, then ``en``, then the first entry."""

    if not values:
        return None
    if preferred_language and preferred_language in values:
        return values[preferred_language]
    if "en" in values:
        return values["en"]
    return next(iter(values.values())) or None


class ResourceHelper:
    """Mixin giving extractors label, annotation and RDF-list helpers."""

    def __init__(
        self,
        registry: NamespaceRegistry | None = None,
        *,
        max_list_length: int = 10_000,
    ) -> None:
        self.registry = registry if registry is not None else NamespaceRegistry()
        self.max_list_length = max_list_length

    # -- discovery -------------------------------------------------------

    def typed_resources(self, graph: Graph, type_uris: Iterable[URIRef]) -> Iterator[Node]:
        """Yield each graph resource having at least one type in ``type_uris``."""

        wanted = frozenset(type_uris)
        for resource in graph_resources(graph):
            for rdf_type in graph.objects(resource, RDF.type):
                if rdf_type in wanted:
                    yield resource
                    break

    def resource_key(self, node: Node, *, skolemize: bool) -> str | None:
        if isinstance(node, URIRef):
            return str(node)
        if isinstance(node, BNode) and skolemize:
            return skolem_uri(node)
        return None

    # -- labels and descriptions ----------------------------------------

    def literal_map(self, graph: Graph, node: Node, predicate: URIRef) -> Dict[str, str]:
        values: Dict[str, str] = {}
        for obj in graph.objects(node, predicate):
            if isinstance(obj, Literal):
                values[obj.language or NO_LANGUAGE] = str(obj)
        return values

    def labels(self, graph: Graph, node: Node) -> Dict[str, str]:
        # Only rdfs:label; skos:prefLabel and friends stay annotations.
        return self.literal_map(graph, node, RDFS.label)

    def descriptions(self, graph: Graph, node: Node) -> Dict[str, str]:
        return self.literal_map(graph, node, RDFS.comment)

    def label(self, graph: Graph, node: Node, preferred_language: str | None = None) -> str | None:
        return best_match(self.labels(graph, node), preferred_language)

    def description(
        self, graph: Graph, node: Node, preferred_language: str | None = None
    ) -> str | None:
        return best_match(self.descriptions(graph, node), preferred_language)

    # -- values -----------------------------------------------------------

    def values(self, graph: Graph, node: Node, predicate: URIRef) -> List[str]:
        return [render_node(obj) for obj in graph.objects(node, predicate)]

    def named_values(self, graph: Graph, node: Node, predicate: URIRef) -> List[str]:
        return [str(obj) for obj in graph.objects(node, predicate) if isinstance(obj, URIRef)]

    def value(self, graph: Graph, node: Node, predicate: URIRef) -> str | None:
        obj = graph.value(node, predicate)
        return None if obj is None else render_node(obj)

    def shorten(self, uri: str) -> str:
        return self.registry.shorten(uri)

    def annotations(self, graph: Graph, node: Node) -> List[Dict[str, Any]]:
        """One record per non-standard (predicate, value) pair."""

        records: List[Dict[str, Any]] = []
        for predicate, obj in graph.predicate_objects(node):
            if predicate in STANDARD_PREDICATES:
                continue
            record: Dict[str, Any] = {"property": self.shorten(str(predicate))}
            if isinstance(obj, Literal):
                record["value"] = str(obj)
                if obj.language:
                    record["language"] = obj.language
            elif isinstance(obj, BNode):
                record["value"] = render_node(obj)
            else:
                record["value"] = self.shorten(str(obj))
            records.append(record)
        return records

    # -- blank nodes and OWL expressions --------------------------------

    def is_blank(self, node: Node) -> bool:
        return isinstance(node, BNode)

    def is_anonymous_owl_expression(self, graph: Graph, node: Node) -> bool:
        """Blank restrictions, unions and intersections are OWL syntax, not entities."""

        if not self.is_blank(node):
            return False
        if (node, RDF.type, OWL.Restriction) in graph:
            return True
        return any(
            graph.value(node, predicate) is not None
            for predicate in (OWL.unionOf, OWL.intersectionOf)
        )

    def list_members(self, graph: Graph, head: Node | None) -> List[Node]:
        """Walk an RDF list from ``head`` until ``rdf:nil`` or a missing ``rdf:rest``."""

        members: List[Node] = []
        visited: set[Node] = set()
        current = head
        while current is not None and current != RDF.nil:
            if current in visited:
                logger.debug("cyclic RDF list at %s", current)
                break
            if len(visited) >= self.max_list_length:
                logger.debug("RDF list truncated after %d items", self.max_list_length)
                break
            visited.add(current)
            first = graph.value(current, RDF.first)
            if first is not None:
                members.append(first)
            current = graph.value(current, RDF.rest)
        return members

    def union_members(self, graph: Graph, node: Node) -> List[str]:
        """Named members of ``node``'s ``owl:unionOf`` list; nested expressions are skipped."""

        head = graph.value(node, OWL.unionOf)
        if head is None:
            return []
        return [str(m) for m in self.list_members(graph, head) if isinstance(m, URIRef)]

    def class_expression_targets(self, graph: Graph, node: Node) -> List[str]:
        if isinstance(node, URIRef):
            return [str(node)]
        if self.is_blank(node):
            return self.union_members(graph, node)
        return []


__all__ = [
    "NO_LANGUAGE",
    "SKOLEM_PREFIX",
    "STANDARD_PREDICATES",
    "ResourceHelper",
    "best_match",
    "dedupe",
    "render_node",
    "skolem_uri",
]
