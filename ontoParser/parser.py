from __future__ import annotations

"""Format dispatch and ontology assembly.

:class:`OntologyParser` picks one handler for the input (explicitly by
format name or by probing handlers in priority order), parses it, runs the
extractors over the resulting document and assembles an
:class:`~ontoParser.kg.document.OntologyResult` keyed by URI.
"""

import time
from typing import Any, Dict, Iterable, List

from ontoParser.config import ParserConfig
from ontoParser.errors import FormatDetectionError, ParseError
from ontoParser.extractors import (
    ClassExtractor,
    PrefixExtractor,
    PropertyExtractor,
    RestrictionExtractor,
    ShapeExtractor,
)
from ontoParser.handlers import FormatHandler, default_handlers
from ontoParser.handlers.base import normalize_format
from ontoParser.kg.document import OntologyResult, ParsedDocument
from ontoParser.kg.namespaces import NamespaceRegistry
from ontoParser.utils.log_json import JsonLogger

_logger = JsonLogger("parser")


def _keyed(records: Iterable[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {record["uri"]: record for record in records}


class OntologyParser:
    """Parse RDF text into classes, properties, prefixes, shapes and restrictions.

    One instance owns its handler list and a :class:`NamespaceRegistry`
    shared by its extractors; independent documents may be parsed from
    several threads with the same instance.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        registry: NamespaceRegistry | None = None,
    ) -> None:
        self.config = config or ParserConfig()
        self.registry = registry if registry is not None else NamespaceRegistry()
        self._handlers: List[FormatHandler] = default_handlers(self.config)

        limit = self.config.max_list_length
        self.prefix_extractor = PrefixExtractor()
        self.class_extractor = ClassExtractor(self.registry, max_list_length=limit)
        self.property_extractor = PropertyExtractor(self.registry, max_list_length=limit)
        self.shape_extractor = ShapeExtractor(self.registry, max_list_length=limit)
        self.restriction_extractor = RestrictionExtractor(self.registry, max_list_length=limit)

    @property
    def handlers(self) -> List[FormatHandler]:
        return list(self._handlers)

    def register_handler(self, handler: FormatHandler) -> None:
        """Add ``handler`` ahead of every handler registered so far."""

        self._handlers.insert(0, handler)

    def get_supported_formats(self) -> List[str]:
        return list(dict.fromkeys(h.format_name() for h in self._handlers))

    def select_handler(self, content: str, format: str | None = None) -> FormatHandler:
        names = self.get_supported_formats()
        if format:
            wanted = normalize_format(format)
            for handler in self._handlers:
                if handler.format_name() == wanted:
                    return handler
            raise FormatDetectionError(
                f"Unsupported format '{format}'. Available formats: {', '.join(names)}",
                attempted=names,
            )

        for handler in self._handlers:
            if self._detects(handler, content):
                return handler
        raise FormatDetectionError(
            f"Unable to detect RDF format. Tried: {', '.join(names)}",
            attempted=names,
        )

    def _detects(self, handler: FormatHandler, content: str) -> bool:
        try:
            return bool(handler.can_handle(content))
        except Exception as exc:
            _logger.debug("parser.detect.failed", format=handler.format_name(), error=str(exc))
            return False

    def can_parse(self, content: str) -> bool:
        try:
            if not content or not content.strip():
                return False
            self.select_handler(content)
            return True
        except Exception:
            return False

    def parse(
        self,
        content: str,
        *,
        format: str | None = None,
        include_skolemized_blank_nodes: bool | None = None,
        preferred_language: str | None = None,
    ) -> OntologyResult:
        if not content or not content.strip():
            raise ParseError("Cannot parse empty content")

        skolemize = (
            self.config.include_skolemized_blank_nodes
            if include_skolemized_blank_nodes is None
            else include_skolemized_blank_nodes
        )
        language = preferred_language or self.config.preferred_language
        started = time.perf_counter()
        try:
            handler = self.select_handler(content, format)
            _logger.info("parser.format.selected", format=handler.format_name(), requested=format)
            document = handler.parse(content)
            result = self.assemble(
                document,
                handler,
                include_skolemized_blank_nodes=skolemize,
                preferred_language=language,
            )
        except (ParseError, FormatDetectionError) as exc:
            _logger.warning("parser.parse.failed", error=str(exc), error_type=type(exc).__name__)
            raise
        except Exception as exc:
            _logger.error("parser.parse.failed", error=str(exc), error_type=type(exc).__name__)
            raise ParseError(f"RDF parsing failed: {exc}") from exc

        _logger.info(
            "parser.parse.completed",
            format=result.metadata.get("format"),
            latency_ms=round((time.perf_counter() - started) * 1000, 3),
            classes=len(result.classes),
            properties=len(result.properties),
        )
        return result

    def assemble(
        self,
        document: ParsedDocument,
        handler: FormatHandler,
        *,
        include_skolemized_blank_nodes: bool = False,
        preferred_language: str | None = None,
    ) -> OntologyResult:
        metadata: Dict[str, Any] = dict(document.metadata)
        metadata["format"] = handler.format_name()
        metadata["resource_count"] = document.resource_count

        graphs: Dict[str, ParsedDocument] = {document.graph_key: document}
        additional = metadata.pop("additional_graphs", None) or {}
        for key, extra in additional.items():
            if isinstance(extra, ParsedDocument):
                graphs[str(key)] = extra

        options = {
            "include_skolemized_blank_nodes": include_skolemized_blank_nodes,
            "preferred_language": preferred_language,
        }
        result = OntologyResult(
            classes=_keyed(self.class_extractor.extract(document, **options)),
            properties=_keyed(self.property_extractor.extract(document, **options)),
            prefixes=self.prefix_extractor.extract(document),
            shapes=_keyed(self.shape_extractor.extract(document, preferred_language=preferred_language)),
            restrictions=self.restriction_extractor.extract(document),
            metadata=metadata,
            raw_content=document.raw_content,
            graphs=graphs,
        )
        _logger.debug(
            "extractors.completed",
            format=metadata["format"],
            classes=len(result.classes),
            properties=len(result.properties),
            shapes=len(result.shapes),
            prefixes=len(result.prefixes),
            restrictions=len(result.restrictions),
        )
        return result


__all__ = ["OntologyParser"]
