from __future__ import annotations

"""JSON-LD handler backed by an rdflib :class:`~rdflib.Dataset`.

The primary document holds the union of the default and named graphs;
each named graph is also returned as its own :class:`ParsedDocument` under
``metadata["additional_graphs"]``.
"""

import json
from typing import Any, Dict

from rdflib import Dataset
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID

from ontoParser.errors import ParseError
from ontoParser.handlers.base import FormatHandler
from ontoParser.kg.document import ParsedDocument, new_graph, stable_blank_nodes, subject_count

FORMAT_NAME = "json-ld"


def _context_of(data: Any) -> Any:
    if isinstance(data, dict):
        return data.get("@context")
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and "@context" in item:
                return item["@context"]
    return None


def _has_context(data: Any) -> bool:
    if isinstance(data, dict):
        return "@context" in data
    if isinstance(data, list):
        return any(isinstance(item, dict) and "@context" in item for item in data)
    return False


class JsonLdHandler(FormatHandler):
    """JSON-LD documents carrying an ``@context``."""

    def can_handle(self, content: str) -> bool:
        try:
            trimmed = content.strip()
            return trimmed[:1] in ("{", "[") and "@context" in trimmed
        except Exception:  # pragma: no cover - detection must never raise
            return False

    def parse(self, content: str) -> ParsedDocument:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ParseError(f"JSON-LD parsing failed: Invalid JSON: {exc}") from exc
        if not _has_context(data):
            raise ParseError("JSON-LD parsing failed: missing @context")

        dataset = Dataset()
        try:
            dataset.parse(data=content, format="json-ld")
        except Exception as exc:
            raise ParseError(f"JSON-LD parsing failed: {exc}") from exc

        # The primary graph is the union of all graphs: ontologies commonly
        # wrap their whole content in a single named @graph.
        union = new_graph()
        additional: Dict[str, ParsedDocument] = {}
        for context in dataset.graphs():
            for triple in context:
                union.add(triple)
            if context.identifier == DATASET_DEFAULT_GRAPH_ID or len(context) == 0:
                continue
            named = new_graph(context.identifier)
            for triple in context:
                named.add(triple)
            named = stable_blank_nodes(named)
            additional[str(context.identifier)] = ParsedDocument(
                graph=named,
                format=FORMAT_NAME,
                raw_content=content,
                metadata={
                    "parser": "jsonld_handler",
                    "format": FORMAT_NAME,
                    "resource_count": subject_count(named),
                    "graph": str(context.identifier),
                },
            )

        primary = stable_blank_nodes(union)
        metadata: Dict[str, Any] = {
            "parser": "jsonld_handler",
            "format": FORMAT_NAME,
            "resource_count": subject_count(primary),
            "context": _context_of(data),
        }
        if additional:
            metadata["additional_graphs"] = additional
        return ParsedDocument(
            graph=primary,
            format=FORMAT_NAME,
            raw_content=content,
            metadata=metadata,
        )

    def format_name(self) -> str:
        return FORMAT_NAME


__all__ = ["FORMAT_NAME", "JsonLdHandler"]
