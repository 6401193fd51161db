from __future__ import annotations

"""Value objects passed between handlers, extractors and the parser."""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

from rdflib import BNode, Graph, Literal
from rdflib.term import Identifier, Node

DEFAULT_GRAPH_KEY = "_:default"


def new_graph(identifier: Identifier | str | None = None) -> Graph:
    """Return an empty graph without rdflib's built-in prefix bindings.

    Only prefixes bound by a serialization parser end up in the namespace
    table, which is what the prefix extractor reads back.
    """

    return Graph(identifier=identifier, bind_namespaces="none")


def graph_resources(graph: Graph) -> Iterator[Node]:
    """Yield every distinct subject and non-literal object in first-seen order."""

    seen: set[Node] = set()
    for s, _, o in graph:
        if s not in seen:
            seen.add(s)
            yield s
        if not isinstance(o, Literal) and o not in seen:
            seen.add(o)
            yield o


def stable_blank_nodes(graph: Graph) -> Graph:
    """Return a copy of ``graph`` whose blank nodes are labelled ``b0``, ``b1`` ...

    Labels follow :func:`graph_resources` order, so parsing the same text
    twice yields the same blank-node ids and skolem URIs.
    """

    labels: Dict[BNode, BNode] = {}
    for node in graph_resources(graph):
        if isinstance(node, BNode):
            labels[node] = BNode(f"b{len(labels)}")

    stable = new_graph(graph.identifier)
    for prefix, namespace in graph.namespaces():
        stable.bind(prefix, namespace)
    for s, p, o in graph:
        stable.add((labels.get(s, s), p, labels.get(o, o)))
    return stable


def subject_count(graph: Graph) -> int:
    return len(set(graph.subjects()))


@dataclass(frozen=True)
class XmlDocument:
    """Parsed RDF/XML tree used by the extractor fallback path."""

    root: ET.Element
    namespaces: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class ParsedDocument:
    """A handler's output: graph, format name, raw text and side-channel metadata."""

    graph: Graph
    format: str
    raw_content: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def resource_count(self) -> int:
        return subject_count(self.graph)

    @property
    def xml_document(self) -> XmlDocument | None:
        candidate = self.metadata.get("xml_element")
        if isinstance(candidate, XmlDocument):
            return candidate
        return None

    @property
    def graph_key(self) -> str:
        identifier = self.graph.identifier
        if identifier is None or isinstance(identifier, BNode) or not str(identifier):
            return DEFAULT_GRAPH_KEY
        return str(identifier)


@dataclass
class OntologyResult:
    classes: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    properties: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    prefixes: Dict[str, str] = field(default_factory=dict)
    shapes: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    restrictions: List[Dict[str, Any]] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    raw_content: str = ""
    graphs: Dict[str, ParsedDocument] = field(default_factory=dict)

    def to_dict(self, *, include_raw: bool = False) -> Dict[str, Any]:
        """Return a JSON-friendly view; graph handles are listed by key only."""

        metadata = {
            key: value
            for key, value in self.metadata.items()
            if isinstance(value, (str, int, float, bool, list, dict)) or value is None
        }
        payload: Dict[str, Any] = {
            "classes": self.classes,
            "properties": self.properties,
            "prefixes": self.prefixes,
            "shapes": self.shapes,
            "restrictions": self.restrictions,
            "metadata": metadata,
            "graphs": sorted(self.graphs),
        }
        if include_raw:
            payload["raw_content"] = self.raw_content
        return payload


__all__ = [
    "DEFAULT_GRAPH_KEY",
    "new_graph",
    "graph_resources",
    "stable_blank_nodes",
    "subject_count",
    "XmlDocument",
    "ParsedDocument",
    "OntologyResult",
]
