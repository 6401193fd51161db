from __future__ import annotations

"""Capability interface shared by all RDF format handlers."""

from abc import ABC, abstractmethod

from ontoParser.kg.document import ParsedDocument

FORMAT_ALIASES = {
    "ttl": "turtle",
    "xml": "rdf/xml",
    "rdfxml": "rdf/xml",
    "rdf": "rdf/xml",
    "jsonld": "json-ld",
    "nt": "n-triples",
    "ntriples": "n-triples",
}


def normalize_format(name: str) -> str:
    """Map user-facing aliases (``ttl``, ``xml``, ``jsonld`` ...) to handler names."""

    key = name.strip().lower()
    return FORMAT_ALIASES.get(key, key)


class FormatHandler(ABC):
    """Detects and parses one RDF serialization.

    ``can_handle`` must never raise; ``parse`` raises
    :class:`~ontoParser.errors.ParseError` on any failure.
    """

    @abstractmethod
    def can_handle(self, content: str) -> bool:
        ...

    @abstractmethod
    def parse(self, content: str) -> ParsedDocument:
        ...

    @abstractmethod
    def format_name(self) -> str:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(format={self.format_name()!r})"


__all__ = ["FORMAT_ALIASES", "FormatHandler", "normalize_format"]
