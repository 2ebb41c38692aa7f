"""
glyphspec.core.models - Core data models for the contract notation.

Provides the Document/Spec/Entity dataclasses produced by the parser,
the Glyph enumeration, and the text helpers used to build constraint
dictionaries.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple

_WHITESPACE_RUN = re.compile(r"\s+")


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


class Glyph(Enum):
    """Leading character of a statement line."""

    INTENT = "^"
    GUARANTEE = "!"
    EXCLUSION = "-"
    ASSUMPTION = "~"
    DEPENDENCY = ">"
    CONTRACT = ":"
    OPEN_QUESTION = "?"

    @property
    def label(self) -> str:
        """Singular human-readable name (e.g. "exclusion")."""
        return _LABELS[self]

    @property
    def category(self) -> str:
        """Attribute name of the constraint dictionary (e.g. "exclusions")."""
        return _CATEGORIES[self]

    @property
    def is_constraint(self) -> bool:
        return self in CONSTRAINT_GLYPHS

    @classmethod
    def from_char(cls, char: str) -> "Glyph | None":
        """Return the glyph for a leading character, or None if unknown."""
        return _BY_CHAR.get(char)


_LABELS = {
    Glyph.INTENT: "intent",
    Glyph.GUARANTEE: "guarantee",
    Glyph.EXCLUSION: "exclusion",
    Glyph.ASSUMPTION: "assumption",
    Glyph.DEPENDENCY: "dependency",
    Glyph.CONTRACT: "contract",
    Glyph.OPEN_QUESTION: "open question",
}

_CATEGORIES = {
    Glyph.INTENT: "intents",
    Glyph.GUARANTEE: "guarantees",
    Glyph.EXCLUSION: "exclusions",
    Glyph.ASSUMPTION: "assumptions",
    Glyph.DEPENDENCY: "dependencies",
    Glyph.CONTRACT: "contracts",
    Glyph.OPEN_QUESTION: "open_questions",
}

_BY_CHAR = {glyph.value: glyph for glyph in Glyph}

# Canonical order of the five typed constraint categories
CONSTRAINT_GLYPHS: Tuple[Glyph, ...] = (
    Glyph.GUARANTEE,
    Glyph.EXCLUSION,
    Glyph.ASSUMPTION,
    Glyph.DEPENDENCY,
    Glyph.CONTRACT,
)

# Glyphs that always attach to the enclosing Spec, even inside an entity
SPEC_SCOPED_GLYPHS = frozenset({Glyph.INTENT, Glyph.OPEN_QUESTION})


def normalize_text(text: str) -> str:
    """Trim text and collapse internal whitespace runs to a single space."""
    return _WHITESPACE_RUN.sub(" ", text.strip())


def insert_first(mapping: Dict[str, int], key: str, line_no: int) -> None:
    """Insert key, or lower its recorded line number if seen again earlier."""
    existing = mapping.get(key)
    if existing is None or line_no < existing:
        mapping[key] = line_no


def freeze_constraints(mapping: Mapping[str, int]) -> Mapping[str, int]:
    """Return a read-only copy of a constraint dictionary, ordered by key."""
    if not mapping:
        return _empty_mapping()
    return MappingProxyType({key: mapping[key] for key in sorted(mapping)})


class ConstraintHolder:
    """Accessors shared by Spec and Entity for the five constraint dictionaries."""

    guarantees: Mapping[str, int]
    exclusions: Mapping[str, int]
    assumptions: Mapping[str, int]
    dependencies: Mapping[str, int]
    contracts: Mapping[str, int]

    def constraints(self, glyph: Glyph) -> Mapping[str, int]:
        """Return the constraint dictionary for a constraint glyph."""
        if not glyph.is_constraint:
            raise ValueError(f"{glyph.label} is not a constraint category")
        return getattr(self, glyph.category)

    def iter_constraints(self) -> Iterator[Tuple[Glyph, Mapping[str, int]]]:
        """Yield (glyph, dictionary) pairs in canonical category order."""
        for glyph in CONSTRAINT_GLYPHS:
            yield glyph, getattr(self, glyph.category)

    def constraint_count(self) -> int:
        return sum(len(entries) for _glyph, entries in self.iter_constraints())


@dataclass(frozen=True)
class Entity(ConstraintHolder):
    """
    A named sub-component inside a Spec.

    Attributes:
        name: Entity identifier (text after the ``@`` sigil)
        header_line: Line number of the first ``@name`` header
        guarantees..contracts: Normalized statement -> first line seen
    """

    name: str
    header_line: int
    guarantees: Mapping[str, int] = field(default_factory=_empty_mapping)
    exclusions: Mapping[str, int] = field(default_factory=_empty_mapping)
    assumptions: Mapping[str, int] = field(default_factory=_empty_mapping)
    dependencies: Mapping[str, int] = field(default_factory=_empty_mapping)
    contracts: Mapping[str, int] = field(default_factory=_empty_mapping)

    def __str__(self) -> str:
        return f"@{self.name}"


@dataclass(frozen=True)
class Spec(ConstraintHolder):
    """
    A top-level named contract unit.

    Attributes:
        name: Spec name from the ``#Spec:`` header
        header_line: Line number of the first header sighting
        intents: Intent statements in document order (duplicates kept)
        entities: Entity name -> Entity, ordered by name
        guarantees..contracts: Normalized statement -> first line seen
        open_questions: (text, line) pairs in document order
    """

    name: str
    header_line: int
    intents: Tuple[str, ...] = ()
    entities: Mapping[str, Entity] = field(default_factory=_empty_mapping)
    guarantees: Mapping[str, int] = field(default_factory=_empty_mapping)
    exclusions: Mapping[str, int] = field(default_factory=_empty_mapping)
    assumptions: Mapping[str, int] = field(default_factory=_empty_mapping)
    dependencies: Mapping[str, int] = field(default_factory=_empty_mapping)
    contracts: Mapping[str, int] = field(default_factory=_empty_mapping)
    open_questions: Tuple[Tuple[str, int], ...] = ()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Document:
    """
    A parsed notation document.

    Attributes:
        specs: Spec name -> Spec, ordered by name
    """

    specs: Mapping[str, Spec]

    def __len__(self) -> int:
        return len(self.specs)

    def __iter__(self) -> Iterator[Spec]:
        return iter(self.specs.values())

    def __contains__(self, name: object) -> bool:
        return name in self.specs

    def get(self, name: str) -> Spec | None:
        return self.specs.get(name)

    def first(self) -> Spec:
        """Return the first spec in name order."""
        return next(iter(self.specs.values()))
