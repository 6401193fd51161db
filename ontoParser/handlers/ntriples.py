from __future__ import annotations

"""Strict N-Triples validation and ingestion.

rdflib's N-Triples reader is permissive, so every line is first checked
against a strict subset of the W3C grammar. A single left-to-right walk per
line (:func:`scan_line`) records string literals, IRIs, blank-node labels,
bare separators and the start of a trailing comment; the individual rules
then run over that one scan so comment, escape and literal boundaries are
interpreted identically everywhere.
"""

import re
from dataclasses import dataclass, field
from typing import List, Tuple

from rdflib.exceptions import ParserError as RdflibParserError

from ontoParser.config import ParserConfig
from ontoParser.errors import ParseError
from ontoParser.handlers.base import FormatHandler
from ontoParser.kg.document import ParsedDocument, new_graph, stable_blank_nodes, subject_count
from ontoParser.utils.log_json import JsonLogger

FORMAT_NAME = "n-triples"
_logger = JsonLogger("ntriples")

_LINE_SPLIT_RE = re.compile(r"\r\n|\n|\r")
_DETECT_RE = re.compile(r"^(?:<[^>]+>|_:[^\s<\"]+)\s+<[^>]+>\s+\S.*\.")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_LANG_TAG_RE = re.compile(r"^[a-zA-Z]+(?:-[a-zA-Z0-9]+)*$")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_SINGLE_ESCAPES = frozenset('tbnrf"\\')
# Characters that end a blank-node label or language tag.
_TOKEN_STOP = frozenset('<>"#;,')


@dataclass
class StringSpan:
    column: int
    content: str
    language: str | None = None


@dataclass
class LineScan:
    """Result of walking one line; columns are 1-based."""

    iris: List[Tuple[int, str]] = field(default_factory=list)
    strings: List[StringSpan] = field(default_factory=list)
    blank_nodes: List[Tuple[int, str]] = field(default_factory=list)
    separators: List[Tuple[int, str]] = field(default_factory=list)
    comment_at: int | None = None

    def without_comment(self, line: str) -> str:
        if self.comment_at is None:
            return line
        return line[: self.comment_at].rstrip()


def split_lines(content: str) -> List[str]:
    # str.splitlines() would also break on \x0b, \x0c and \x85, which may
    # legitimately appear inside literals.
    return _LINE_SPLIT_RE.split(content)


def _consume_token(line: str, start: int) -> int:
    end = start
    while end < len(line) and not line[end].isspace() and line[end] not in _TOKEN_STOP:
        end += 1
    return end


def _strip_final_dots(token: str) -> Tuple[str, bool]:
    stripped = token.rstrip(".")
    return stripped, len(stripped) != len(token)


def scan_line(line: str) -> LineScan:
    """Walk ``line`` once, tracking string, IRI and escape state."""

    scan = LineScan()
    in_string = in_iri = escaped = False
    seen_dot = False
    start = 0
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
                span = StringSpan(start + 1, line[start + 1 : i])
                i += 1
                if i < n and line[i] == "@":
                    end = _consume_token(line, i + 1)
                    span.language, trailing_dot = _strip_final_dots(line[i + 1 : end])
                    seen_dot = seen_dot or trailing_dot
                    i = end
                scan.strings.append(span)
                continue
            i += 1
            continue
        if in_iri:
            if ch == ">":
                in_iri = False
                scan.iris.append((start + 1, line[start + 1 : i]))
            i += 1
            continue

        if ch == '"':
            in_string, start = True, i
        elif ch == "<":
            in_iri, start = True, i
        elif ch == "_" and line.startswith("_:", i):
            end = _consume_token(line, i + 2)
            label, trailing_dot = _strip_final_dots(line[i + 2 : end])
            scan.blank_nodes.append((i + 1, label))
            seen_dot = seen_dot or trailing_dot
            i = end
            continue
        elif ch == ".":
            seen_dot = True
        elif ch == "#" and seen_dot:
            scan.comment_at = i
            break
        elif ch in ";,":
            scan.separators.append((i + 1, ch))
        i += 1
    return scan


def _fail(line_no: int, rule: str, description: str) -> ParseError:
    _logger.info("ntriples.validation.failed", line=line_no, rule=rule)
    return ParseError(
        f"N-Triples parsing failed: line {line_no}: {description}",
        line=line_no,
        rule=rule,
    )


def _valid_hex_escape(text: str, index: int) -> int:
    """Return the length of a valid ``\\uXXXX``/``\\UXXXXXXXX`` escape at ``index``, else 0."""

    kind = text[index + 1 : index + 2]
    width = 4 if kind == "u" else 8 if kind == "U" else 0
    if not width:
        return 0
    digits = text[index + 2 : index + 2 + width]
    if len(digits) != width or not set(digits) <= _HEX_DIGITS:
        return 0
    return 2 + width


def _check_iri(line_no: int, iri: str) -> None:
    if any(ch.isspace() for ch in iri):
        raise _fail(line_no, "iri_whitespace", f"IRI <{iri}> contains whitespace")
    if not _SCHEME_RE.match(iri):
        raise _fail(line_no, "relative_iri", f"relative IRI <{iri}> is not allowed")
    i = 0
    while i < len(iri):
        if iri[i] == "\\":
            width = _valid_hex_escape(iri, i)
            if not width:
                raise _fail(
                    line_no,
                    "iri_escape",
                    f"invalid escape sequence {iri[i:i + 2]!r} in IRI <{iri}>",
                )
            i += width
            continue
        i += 1


def _check_blank_node(line_no: int, label: str) -> None:
    if not label or not (label[0] == "_" or label[0].isalnum()):
        raise _fail(
            line_no,
            "bnode_label",
            f"blank node label '_:{label}' must start with a letter, digit or underscore",
        )
    if ":" in label:
        raise _fail(line_no, "bnode_label", f"blank node label '_:{label}' contains a colon")


def _check_string_escapes(line_no: int, content: str) -> None:
    i = 0
    while i < len(content):
        if content[i] != "\\":
            i += 1
            continue
        nxt = content[i + 1 : i + 2]
        if nxt in _SINGLE_ESCAPES and nxt:
            i += 2
            continue
        width = _valid_hex_escape(content, i)
        if not width:
            raise _fail(
                line_no,
                "string_escape",
                f"invalid escape sequence {content[i:i + 2]!r} in string literal",
            )
        i += width


def validate_line(line: str, line_no: int, *, max_line_bytes: int) -> LineScan:
    """Apply every strict rule to one non-blank, non-comment line.

    A trailing comment is exempt from the length and triple-quote rules.
    """

    scan = scan_line(line)
    code = scan.without_comment(line)
    if len(code.encode("utf-8")) > max_line_bytes:
        raise _fail(line_no, "line_too_long", f"line exceeds the maximum of {max_line_bytes} bytes")
    if '"""' in code:
        raise _fail(line_no, "triple_quoted_string", "triple-quoted strings are not valid N-Triples")

    for _, iri in scan.iris:
        _check_iri(line_no, iri)
    for _, label in scan.blank_nodes:
        _check_blank_node(line_no, label)
    for span in scan.strings:
        _check_string_escapes(line_no, span.content)
    for span in scan.strings:
        if span.language is not None and not _LANG_TAG_RE.match(span.language):
            raise _fail(line_no, "language_tag", f"invalid language tag '@{span.language}'")
    if scan.separators:
        column, sep = scan.separators[0]
        raise _fail(
            line_no,
            "structure",
            f"unexpected '{sep}' at column {column}; predicate and object lists are not valid N-Triples",
        )
    return scan


def validate_ntriples(content: str, *, max_line_bytes: int = 1_048_576) -> str:
    """Validate ``content`` and return it with trailing comments removed.

    Comment and blank lines are kept as empty lines so that line numbers in
    the cleaned text match the input.
    """

    cleaned: List[str] = []
    for line_no, line in enumerate(split_lines(content), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            cleaned.append("")
            continue
        scan = validate_line(line, line_no, max_line_bytes=max_line_bytes)
        cleaned.append(scan.without_comment(line))
    return "\n".join(cleaned) + "\n"


def _locate_ingestion_failure(cleaned: str) -> int | None:
    for line_no, line in enumerate(cleaned.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            new_graph().parse(data=line + "\n", format="nt")
        except (RdflibParserError, ValueError, SyntaxError):
            return line_no
    return None


class NTriplesHandler(FormatHandler):
    """Handler for line-based N-Triples documents."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config = config or ParserConfig()

    def can_handle(self, content: str) -> bool:
        try:
            checked = 0
            for raw in split_lines(content):
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                if _DETECT_RE.match(line):
                    return True
                checked += 1
                if checked >= self._config.detection_line_limit:
                    break
        except Exception as exc:  # pragma: no cover - detection must never raise
            _logger.debug("ntriples.detect.failed", error=str(exc))
        return False

    def validate(self, content: str) -> str:
        return validate_ntriples(content, max_line_bytes=self._config.max_line_bytes)

    def parse(self, content: str) -> ParsedDocument:
        cleaned = self.validate(content)
        graph = new_graph()
        try:
            graph.parse(data=cleaned, format="nt")
        except Exception as exc:
            line_no = _locate_ingestion_failure(cleaned)
            where = f"line {line_no}: " if line_no is not None else ""
            raise ParseError(
                f"N-Triples parsing failed: {where}{exc}",
                line=line_no,
            ) from exc
        graph = stable_blank_nodes(graph)

        metadata = {
            "parser": "ntriples_handler",
            "format": FORMAT_NAME,
            "resource_count": subject_count(graph),
        }
        return ParsedDocument(
            graph=graph,
            format=FORMAT_NAME,
            raw_content=content,
            metadata=metadata,
        )

    def format_name(self) -> str:
        return FORMAT_NAME


__all__ = [
    "FORMAT_NAME",
    "LineScan",
    "StringSpan",
    "NTriplesHandler",
    "scan_line",
    "split_lines",
    "validate_line",
    "validate_ntriples",
]
