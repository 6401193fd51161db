from __future__ import annotations

"""Recover namespace prefixes for a parsed document.

rdflib stores only resolved IRIs, so prefixes are collected from four
places and merged in order: the graph's namespace table, the raw text
(format specific), the XML root of fallback documents, and finally
well-known prefixes whose namespace is actually used by the graph.
Explicit declarations come later in that order and so win conflicts.
"""

import json
import re
from typing import Any, Dict, Iterable
from urllib.parse import urlparse

from rdflib import Graph, URIRef

from ontoParser.handlers.base import normalize_format
from ontoParser.kg.document import ParsedDocument, XmlDocument, graph_resources
from ontoParser.kg.namespaces import COMMON_PREFIXES

_TURTLE_PREFIX_RE = re.compile(r"@prefix\s+([^:]+):\s*<([^>]+)>", re.IGNORECASE)
_SPARQL_PREFIX_RE = re.compile(r"PREFIX\s+([^:]+):\s*<([^>]+)>", re.IGNORECASE)
_XMLNS_RE = re.compile(r'xmlns:([^=]+)="([^"]+)"', re.IGNORECASE)


def _pairs(matches: Iterable[re.Match[str]]) -> Dict[str, str]:
    found: Dict[str, str] = {}
    for match in matches:
        prefix = match.group(1).strip()
        namespace = match.group(2).strip()
        if prefix and namespace:
            found[prefix] = namespace
    return found


def _is_url(value: str) -> bool:
    if not value or any(ch.isspace() for ch in value):
        return False
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


class PrefixExtractor:
    """Build a prefix -> namespace map for one document."""

    def extract(self, document: ParsedDocument) -> Dict[str, str]:
        prefixes: Dict[str, str] = {}
        prefixes.update(self.from_graph(document.graph))
        prefixes.update(self.from_content(document.raw_content, document.format))
        xml_doc = document.xml_document
        if normalize_format(document.format) == "rdf/xml" and xml_doc is not None:
            prefixes.update(self.from_xml(xml_doc))
        prefixes.update(self.common_prefixes(document.graph, prefixes))
        return prefixes

    def from_graph(self, graph: Graph) -> Dict[str, str]:
        return {
            prefix: str(namespace)
            for prefix, namespace in graph.namespaces()
            if prefix and str(namespace)
        }

    def from_content(self, content: str, format_name: str) -> Dict[str, str]:
        fmt = normalize_format(format_name)
        if fmt == "turtle":
            return self.from_turtle(content)
        if fmt == "rdf/xml":
            return self.from_rdfxml(content)
        if fmt == "json-ld":
            return self.from_jsonld(content)
        return {}

    def from_turtle(self, content: str) -> Dict[str, str]:
        found = _pairs(_TURTLE_PREFIX_RE.finditer(content))
        found.update(_pairs(_SPARQL_PREFIX_RE.finditer(content)))
        return found

    def from_rdfxml(self, content: str) -> Dict[str, str]:
        return _pairs(_XMLNS_RE.finditer(content))

    def from_jsonld(self, content: str) -> Dict[str, str]:
        try:
            decoded = json.loads(content)
        except ValueError:
            return {}
        contexts: list[Any] = []
        if isinstance(decoded, dict):
            context = decoded.get("@context")
            contexts = context if isinstance(context, list) else [context]
        found: Dict[str, str] = {}
        for context in contexts:
            if not isinstance(context, dict):
                continue
            for key, value in context.items():
                # Compact-IRI aliases such as "name": "schema:name" are not namespaces.
                if isinstance(value, str) and _is_url(value):
                    found[key] = value
        return found

    def from_xml(self, document: XmlDocument) -> Dict[str, str]:
        return {prefix: ns for prefix, ns in document.namespaces.items() if prefix and ns}

    def common_prefixes(self, graph: Graph, existing: Dict[str, str]) -> Dict[str, str]:
        missing = {p: ns for p, ns in COMMON_PREFIXES.items() if p not in existing}
        if not missing:
            return {}
        uris = [str(node) for node in graph_resources(graph) if isinstance(node, URIRef)]
        return {
            prefix: namespace
            for prefix, namespace in missing.items()
            if any(uri.startswith(namespace) for uri in uris)
        }


__all__ = ["PrefixExtractor"]
