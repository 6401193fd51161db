"""Format handlers, one per RDF serialization."""

from __future__ import annotations

from ontoParser.config import ParserConfig
from ontoParser.handlers.base import FormatHandler
from ontoParser.handlers.jsonld import JsonLdHandler
from ontoParser.handlers.ntriples import NTriplesHandler
from ontoParser.handlers.rdfxml import RdfXmlHandler
from ontoParser.handlers.turtle import TurtleHandler


def default_handlers(config: ParserConfig | None = None) -> list[FormatHandler]:
    """Built-in handlers in detection priority order."""

    return [
        JsonLdHandler(),
        TurtleHandler(),
        NTriplesHandler(config),
        RdfXmlHandler(),
    ]


__all__ = [
    "FormatHandler",
    "JsonLdHandler",
    "NTriplesHandler",
    "RdfXmlHandler",
    "TurtleHandler",
    "default_handlers",
]
