from __future__ import annotations

"""Namespace constants and the per-parser namespace registry.

The registry replaces a process-wide prefix table: every
:class:`~ontoParser.parser.OntologyParser` owns one and hands it to its
extractors, so compact names resolve consistently within that parser.
"""

import threading
from typing import Dict, Iterator, Mapping, Tuple

from rdflib import Namespace
from rdflib.namespace import OWL, RDF, RDFS, XSD

RDF_NS = str(RDF)
RDFS_NS = str(RDFS)
OWL_NS = str(OWL)
XSD_NS = str(XSD)
SHACL_NS = "http://www.w3.org/ns/shacl#"
SKOS_NS = "http://www.w3.org/2004/02/skos/core#"
DC_NS = "http://purl.org/dc/elements/1.1/"
DCTERMS_NS = "http://purl.org/dc/terms/"
FOAF_NS = "http://xmlns.com/foaf/0.1/"
SCHEMA_NS = "https://schema.org/"
XML_NS = "http://www.w3.org/XML/1998/namespace"

# rdflib Namespace helper for SHACL terms.
SH = Namespace(SHACL_NS)

# Well-known prefixes added to a prefix map when the graph uses them.
COMMON_PREFIXES: Dict[str, str] = {
    "rdf": RDF_NS,
    "rdfs": RDFS_NS,
    "owl": OWL_NS,
    "xsd": XSD_NS,
    "dc": DC_NS,
    "dcterms": DCTERMS_NS,
    "dct": DCTERMS_NS,
    "foaf": FOAF_NS,
    "skos": SKOS_NS,
    "sh": SHACL_NS,
    "schema": SCHEMA_NS,
}

# Prefixes a fresh registry knows before any extractor runs.
DEFAULT_REGISTRY_PREFIXES: Dict[str, str] = {
    "rdf": RDF_NS,
    "rdfs": RDFS_NS,
    "owl": OWL_NS,
    "xsd": XSD_NS,
    "dc": DC_NS,
    "dcterms": DCTERMS_NS,
    "foaf": FOAF_NS,
    "skos": SKOS_NS,
    "schema": SCHEMA_NS,
}

# Prefixes used by the RDF/XML fallback path when naming elements.
XML_TAG_PREFIXES: Dict[str, str] = {
    "rdf": RDF_NS,
    "rdfs": RDFS_NS,
    "owl": OWL_NS,
    "skos": SKOS_NS,
    "dc": DC_NS,
    "dcterms": DCTERMS_NS,
}


class NamespaceRegistry:
    """Prefix table used to render compact names for annotations.

    Registration is idempotent and guarded by a lock so one registry can be
    shared by threads parsing independent documents.
    """

    def __init__(self, prefixes: Mapping[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._prefixes: Dict[str, str] = dict(
            DEFAULT_REGISTRY_PREFIXES if prefixes is None else prefixes
        )

    def register(self, prefix: str, namespace: str) -> None:
        with self._lock:
            if self._prefixes.get(prefix) == namespace:
                return
            self._prefixes[prefix] = namespace

    def items(self) -> Iterator[Tuple[str, str]]:
        with self._lock:
            snapshot = list(self._prefixes.items())
        return iter(snapshot)

    def shorten(self, uri: str) -> str:
        """Return ``prefix:local`` for ``uri`` or ``uri`` when nothing matches.

        The longest matching namespace wins so that e.g. ``dcterms`` is
        preferred over a shorter overlapping namespace.
        """

        best: Tuple[str, str] | None = None
        for prefix, namespace in self.items():
            if not namespace or not uri.startswith(namespace):
                continue
            if best is None or len(namespace) > len(best[1]):
                best = (prefix, namespace)
        if best is None:
            return uri
        return f"{best[0]}:{uri[len(best[1]):]}"


__all__ = [
    "RDF_NS",
    "RDFS_NS",
    "OWL_NS",
    "XSD_NS",
    "SHACL_NS",
    "SKOS_NS",
    "DC_NS",
    "DCTERMS_NS",
    "FOAF_NS",
    "SCHEMA_NS",
    "XML_NS",
    "SH",
    "COMMON_PREFIXES",
    "DEFAULT_REGISTRY_PREFIXES",
    "XML_TAG_PREFIXES",
    "NamespaceRegistry",
]
