from __future__ import annotations

import re

from ontoParser.errors import ParseError
from ontoParser.handlers.base import FormatHandler
from ontoParser.kg.document import ParsedDocument, new_graph, stable_blank_nodes, subject_count

FORMAT_NAME = "turtle"

_DIRECTIVE_RE = re.compile(r"@(?:prefix|base)\b")
_SPARQL_DIRECTIVE_RE = re.compile(r"^\s*(?:PREFIX|BASE)\s", re.IGNORECASE | re.MULTILINE)


class TurtleHandler(FormatHandler):
    """Turtle documents, recognised by their prefix or base directives."""

    def can_handle(self, content: str) -> bool:
        try:
            return bool(_DIRECTIVE_RE.search(content) or _SPARQL_DIRECTIVE_RE.search(content))
        except Exception:  # pragma: no cover - detection must never raise
            return False

    def parse(self, content: str) -> ParsedDocument:
        graph = new_graph()
        try:
            graph.parse(data=content, format="turtle")
        except Exception as exc:
            raise ParseError(f"Turtle parsing failed: {exc}") from exc
        graph = stable_blank_nodes(graph)
        return ParsedDocument(
            graph=graph,
            format=FORMAT_NAME,
            raw_content=content,
            metadata={
                "parser": "turtle_handler",
                "format": FORMAT_NAME,
                "resource_count": subject_count(graph),
            },
        )

    def format_name(self) -> str:
        return FORMAT_NAME


__all__ = ["FORMAT_NAME", "TurtleHandler"]
