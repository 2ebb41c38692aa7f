"""
glyphspec.core.parser - Notation document parsing.

Classifies each raw line of a notation document and drives a small
state machine (preamble, inside a spec, inside an entity) over the
classified lines to build a Document.

Grammar summary::

    #Spec: <name>         spec header
    @<identifier> ...     entity header (trailing text ignored)
    ^ ! - ~ > : ? <text>  statement lines
    ``` or ~~~            toggles a literal fence
    # ...                 comment line; " # ..." truncates a line
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple, Union

from glyphspec.core.models import (
    SPEC_SCOPED_GLYPHS,
    Document,
    Entity,
    Glyph,
    Spec,
    freeze_constraints,
    insert_first,
    normalize_text,
)
from glyphspec.exceptions import ParseError

logger = logging.getLogger(__name__)

SPEC_HEADER_PREFIX = "#Spec:"
ENTITY_SIGIL = "@"
COMMENT_MARKER = "#"
FENCE_MARKERS = ("```", "~~~")


class LineKind(Enum):
    """Classification of a single raw line."""

    BLANK = "blank"
    FENCE = "fence"
    COMMENT = "comment"
    SPEC_HEADER = "spec_header"
    ENTITY_HEADER = "entity_header"
    STATEMENT = "statement"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ClassifiedLine:
    """
    A raw line tagged with its kind.

    Attributes:
        kind: Line classification
        line_no: 1-based line number
        text: Line content after inline-comment stripping, trimmed
        name: Header name (SPEC_HEADER / ENTITY_HEADER); may be empty
        glyph: Statement glyph (STATEMENT only)
        payload: Normalized statement text (STATEMENT only)
    """

    kind: LineKind
    line_no: int
    text: str = ""
    name: str = ""
    glyph: Optional[Glyph] = None
    payload: str = ""


class ParseState(Enum):
    PREAMBLE = "preamble"
    IN_SPEC = "in_spec"
    IN_ENTITY = "in_entity"


def is_fence(line: str) -> bool:
    return line.lstrip().startswith(FENCE_MARKERS)


def is_comment(line: str) -> bool:
    trimmed = line.lstrip()
    return trimmed.startswith(COMMENT_MARKER) and not trimmed.startswith(SPEC_HEADER_PREFIX)


def strip_inline_comment(line: str) -> str:
    """Truncate the line at the first ``#`` preceded by whitespace."""
    for i in range(1, len(line)):
        if line[i] == COMMENT_MARKER and line[i - 1].isspace():
            return line[:i]
    return line


def classify_line(raw: str, line_no: int) -> ClassifiedLine:
    """Classify one raw line (without its line terminator)."""
    if is_fence(raw):
        return ClassifiedLine(LineKind.FENCE, line_no, raw.strip())
    if is_comment(raw):
        return ClassifiedLine(LineKind.COMMENT, line_no, raw.strip())

    # leading indentation never starts an inline comment
    trimmed = strip_inline_comment(raw.lstrip()).strip()
    if not trimmed:
        return ClassifiedLine(LineKind.BLANK, line_no)

    if trimmed.startswith(SPEC_HEADER_PREFIX):
        name = trimmed[len(SPEC_HEADER_PREFIX) :].strip()
        return ClassifiedLine(LineKind.SPEC_HEADER, line_no, trimmed, name=name)

    if trimmed.startswith(ENTITY_SIGIL):
        rest = trimmed[len(ENTITY_SIGIL) :].split()
        name = rest[0] if rest else ""
        return ClassifiedLine(LineKind.ENTITY_HEADER, line_no, trimmed, name=name)

    glyph = Glyph.from_char(trimmed[0])
    if glyph is None:
        return ClassifiedLine(LineKind.UNKNOWN, line_no, trimmed)
    return ClassifiedLine(
        LineKind.STATEMENT,
        line_no,
        trimmed,
        glyph=glyph,
        payload=normalize_text(trimmed[1:]),
    )


def split_lines(text: str) -> List[str]:
    """Split on LF, dropping a trailing CR from each line."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


@dataclass
class _EntityDraft:
    name: str
    header_line: int
    constraints: Dict[Glyph, Dict[str, int]] = field(default_factory=dict)

    def add(self, glyph: Glyph, payload: str, line_no: int) -> None:
        insert_first(self.constraints.setdefault(glyph, {}), payload, line_no)

    def freeze(self) -> Entity:
        return Entity(
            name=self.name,
            header_line=self.header_line,
            **_frozen_categories(self.constraints),
        )


@dataclass
class _SpecDraft:
    name: str
    header_line: int
    intents: List[str] = field(default_factory=list)
    open_questions: List[Tuple[str, int]] = field(default_factory=list)
    entities: Dict[str, _EntityDraft] = field(default_factory=dict)
    constraints: Dict[Glyph, Dict[str, int]] = field(default_factory=dict)

    def add(self, glyph: Glyph, payload: str, line_no: int) -> None:
        if glyph is Glyph.INTENT:
            self.intents.append(payload)
        elif glyph is Glyph.OPEN_QUESTION:
            self.open_questions.append((payload, line_no))
        else:
            insert_first(self.constraints.setdefault(glyph, {}), payload, line_no)

    def freeze(self) -> Spec:
        entities = {name: self.entities[name].freeze() for name in sorted(self.entities)}
        return Spec(
            name=self.name,
            header_line=self.header_line,
            intents=tuple(self.intents),
            entities=MappingProxyType(entities),
            open_questions=tuple(self.open_questions),
            **_frozen_categories(self.constraints),
        )


def _frozen_categories(constraints: Dict[Glyph, Dict[str, int]]) -> Dict[str, object]:
    return {
        glyph.category: freeze_constraints(entries) for glyph, entries in constraints.items()
    }


class NotationParser:
    """
    Parses notation documents into Document instances.

    A parser instance holds no state between calls.
    """

    def parse_text(self, text: str) -> Document:
        """
        Parse a notation document.

        Args:
            text: Document text (LF or CRLF line endings)

        Returns:
            Document with one Spec per distinct spec name

        Raises:
            ParseError: On an unknown glyph, a malformed header, or a
                document without any spec header
        """
        specs: Dict[str, _SpecDraft] = {}
        state = ParseState.PREAMBLE
        spec: Optional[_SpecDraft] = None
        entity: Optional[_EntityDraft] = None
        in_fence = False

        for index, raw in enumerate(split_lines(text)):
            line = classify_line(raw, index + 1)

            if line.kind is LineKind.FENCE:
                in_fence = not in_fence
                logger.debug("line %d: fence %s", line.line_no, "open" if in_fence else "closed")
                continue
            if in_fence or line.kind in (LineKind.COMMENT, LineKind.BLANK):
                continue

            if line.kind is LineKind.SPEC_HEADER:
                if not line.name:
                    raise _line_error("malformed spec header", line)
                spec = specs.get(line.name)
                if spec is None:
                    spec = _SpecDraft(name=line.name, header_line=line.line_no)
                    specs[line.name] = spec
                    logger.debug("line %d: new spec %r", line.line_no, line.name)
                entity = None
                state = ParseState.IN_SPEC
                continue

            if state is ParseState.PREAMBLE:
                logger.debug("line %d: dropped preamble line", line.line_no)
                continue

            if line.kind is LineKind.ENTITY_HEADER:
                if not line.name:
                    raise _line_error("malformed entity header", line)
                entity = spec.entities.get(line.name)
                if entity is None:
                    entity = _EntityDraft(name=line.name, header_line=line.line_no)
                    spec.entities[line.name] = entity
                    logger.debug("line %d: new entity @%s", line.line_no, line.name)
                state = ParseState.IN_ENTITY
                continue

            if line.kind is LineKind.UNKNOWN:
                raise ParseError(
                    f"unknown glyph '{line.text[0]}' at line {line.line_no}: {line.text}",
                    line_no=line.line_no,
                    line_text=line.text,
                )

            # LineKind.STATEMENT
            if not line.payload:
                continue
            if state is ParseState.IN_ENTITY and line.glyph not in SPEC_SCOPED_GLYPHS:
                entity.add(line.glyph, line.payload, line.line_no)
            else:
                spec.add(line.glyph, line.payload, line.line_no)

        if not specs:
            raise ParseError("no specs found")

        return Document(
            specs=MappingProxyType({name: specs[name].freeze() for name in sorted(specs)})
        )

    def parse_file(self, file_path: Path) -> Document:
        """
        Parse a notation document from a file.

        Args:
            file_path: Path to the document (UTF-8)

        Returns:
            Parsed Document
        """
        text = Path(file_path).read_text(encoding="utf-8")
        return self.parse_text(text)


def _line_error(message: str, line: ClassifiedLine) -> ParseError:
    return ParseError(
        f"{message} at line {line.line_no}: {line.text}",
        line_no=line.line_no,
        line_text=line.text,
    )


def parse_document(text: str) -> Document:
    """Parse notation text with a default parser."""
    return NotationParser().parse_text(text)


def parse_file(file_path: Union[str, Path]) -> Document:
    """Parse a notation file with a default parser."""
    return NotationParser().parse_file(Path(file_path))
