"""Graph model helpers: namespaces and document value objects."""

__all__ = [
    "NamespaceRegistry",
    "ParsedDocument",
    "OntologyResult",
    "XmlDocument",
    "new_graph",
    "graph_resources",
]

from .namespaces import NamespaceRegistry
from .document import (
    OntologyResult,
    ParsedDocument,
    XmlDocument,
    graph_resources,
    new_graph,
)
