from __future__ import annotations

"""RDF/XML handler with a structural XML fallback.

rdflib's RDF/XML parser rejects some real-world vocabularies (old Dublin
Core dumps, documents mixing RDF and plain XML). When that happens but the
text is still well-formed XML, the handler returns an empty graph and
attaches the parsed element tree so the extractors can walk it directly.
"""

import logging
import xml.etree.ElementTree as ET
from io import StringIO
from typing import Dict

from rdflib import Graph

from ontoParser.errors import ParseError
from ontoParser.handlers.base import FormatHandler
from ontoParser.kg.document import (
    ParsedDocument,
    XmlDocument,
    new_graph,
    stable_blank_nodes,
    subject_count,
)
from ontoParser.utils.log_json import JsonLogger

FORMAT_NAME = "rdf/xml"

logger = logging.getLogger(__name__)
_logger = JsonLogger("rdfxml")


def _load_graph(content: str) -> Graph:
    graph = new_graph()
    graph.parse(data=content, format="xml")
    return stable_blank_nodes(graph)


def read_xml_document(content: str) -> XmlDocument:
    """Parse ``content`` with ElementTree, keeping the root's namespace declarations."""

    namespaces: Dict[str, str] = {}
    root = None
    for event, item in ET.iterparse(StringIO(content), events=("start-ns", "start")):
        if root is not None:
            continue
        if event == "start-ns":
            prefix, uri = item
            namespaces.setdefault(prefix, uri)
        else:
            root = item
    if root is None:  # pragma: no cover - iterparse raises on empty documents
        raise ET.ParseError("no root element")
    return XmlDocument(root=root, namespaces=namespaces)


class RdfXmlHandler(FormatHandler):
    """RDF/XML documents; checked last because ``<`` is ambiguous."""

    def can_handle(self, content: str) -> bool:
        try:
            trimmed = content.lstrip()
            return trimmed.startswith("<?xml") or "<rdf:RDF" in trimmed
        except Exception:  # pragma: no cover - detection must never raise
            return False

    def parse(self, content: str) -> ParsedDocument:
        metadata: Dict[str, object] = {"parser": "rdfxml_handler", "format": FORMAT_NAME}
        try:
            graph = _load_graph(content)
        except Exception as exc:
            logger.debug("rdflib RDF/XML parse failed: %s", exc)
            try:
                xml_doc = read_xml_document(content)
            except ET.ParseError as xml_exc:
                raise ParseError(f"RDF/XML parsing failed: {exc}") from xml_exc
            _logger.warning("rdfxml.fallback", format=FORMAT_NAME, error=str(exc))
            graph = new_graph()
            metadata["xml_element"] = xml_doc
            metadata["fallback"] = True
            metadata["fallback_reason"] = str(exc)

        metadata["resource_count"] = subject_count(graph)
        return ParsedDocument(
            graph=graph,
            format=FORMAT_NAME,
            raw_content=content,
            metadata=metadata,
        )

    def format_name(self) -> str:
        return FORMAT_NAME


__all__ = ["FORMAT_NAME", "RdfXmlHandler", "read_xml_document"]
