from __future__ import annotations

"""Exception hierarchy raised by the parser, handlers and extractors."""

from typing import Iterable


class OntologyParserError(Exception):
    """Base class for all ontoParser failures."""


class ParseError(OntologyParserError):
    """Content matched a format but could not be parsed under its grammar.

    ``line`` is the 1-based source line for strict validation failures and
    ``rule`` names the violated N-Triples rule (``relative_iri``,
    ``bnode_label`` ...). Both stay ``None`` for ingestion failures that
    cannot be pinned to a line.
    """

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        rule: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.rule = rule

    def __str__(self) -> str:
        return self.message


class FormatDetectionError(OntologyParserError):
    """No handler could be selected for the given content."""

    def __init__(self, message: str, *, attempted: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.attempted = list(attempted)

    def __str__(self) -> str:
        return self.message


__all__ = ["OntologyParserError", "ParseError", "FormatDetectionError"]
