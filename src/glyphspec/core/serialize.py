"""Document serialization - Export parsed documents to notation, dicts and trees.

``to_notation`` writes the canonical form of a document: parsing its
output yields the same structure (line numbers aside).
"""

from __future__ import annotations

from typing import Any, Mapping

from glyphspec.core.models import (
    ConstraintHolder,
    Document,
    Entity,
    Glyph,
    Spec,
)
from glyphspec.core.parser import COMMENT_MARKER, ENTITY_SIGIL, SPEC_HEADER_PREFIX

INDENT = "  "


def _by_line(entries: Mapping[str, int]) -> list[str]:
    return sorted(entries, key=lambda key: (entries[key], key))


def _joined(prefix: str, text: str) -> str:
    # a space before "#" would turn the text into an inline comment
    if text.startswith(COMMENT_MARKER):
        return f"{prefix}{text}"
    return f"{prefix} {text}"


def _statement(glyph: Glyph, payload: str, indent: str = "") -> str:
    return indent + _joined(glyph.value, payload)


def _constraint_lines(holder: ConstraintHolder, indent: str = "") -> list[str]:
    lines = []
    for glyph, entries in holder.iter_constraints():
        for payload in _by_line(entries):
            lines.append(_statement(glyph, payload, indent))
    return lines


def spec_to_notation(spec: Spec) -> str:
    """Serialize one spec in canonical notation form."""
    lines = [_joined(SPEC_HEADER_PREFIX, spec.name)]
    lines.extend(_statement(Glyph.INTENT, intent) for intent in spec.intents)
    lines.extend(_constraint_lines(spec))
    lines.extend(_statement(Glyph.OPEN_QUESTION, text) for text, _line in spec.open_questions)
    for entity in spec.entities.values():
        lines.append("")
        lines.append(f"{ENTITY_SIGIL}{entity.name}")
        lines.extend(_constraint_lines(entity, INDENT))
    return "\n".join(lines) + "\n"


def to_notation(document: Document) -> str:
    """Serialize a document in canonical notation form."""
    return "\n".join(spec_to_notation(spec) for spec in document)


def _constraints_to_dict(holder: ConstraintHolder, include_lines: bool) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for glyph, entries in holder.iter_constraints():
        if include_lines:
            result[glyph.category] = dict(entries)
        else:
            result[glyph.category] = sorted(entries)
    return result


def entity_to_dict(entity: Entity, include_lines: bool = True) -> dict[str, Any]:
    """Serialize an Entity to a JSON-compatible dict."""
    result: dict[str, Any] = {"name": entity.name}
    if include_lines:
        result["header_line"] = entity.header_line
    result.update(_constraints_to_dict(entity, include_lines))
    return result


def spec_to_dict(spec: Spec, include_lines: bool = True) -> dict[str, Any]:
    """Serialize a Spec to a JSON-compatible dict.

    Args:
        spec: The spec to serialize.
        include_lines: Keep line numbers. Without them the result only
            describes structure, so two documents that differ only in
            layout serialize identically.

    Returns:
        Dict suitable for JSON serialization.
    """
    result: dict[str, Any] = {"name": spec.name}
    if include_lines:
        result["header_line"] = spec.header_line
    result["intents"] = list(spec.intents)
    result.update(_constraints_to_dict(spec, include_lines))
    if include_lines:
        result["open_questions"] = [
            {"text": text, "line": line} for text, line in spec.open_questions
        ]
    else:
        result["open_questions"] = [text for text, _line in spec.open_questions]
    result["entities"] = {
        name: entity_to_dict(entity, include_lines) for name, entity in spec.entities.items()
    }
    return result


def document_to_dict(document: Document, include_lines: bool = True) -> dict[str, Any]:
    """Serialize a Document to a JSON-compatible dict keyed by spec name."""
    return {
        "specs": {
            name: spec_to_dict(spec, include_lines) for name, spec in document.specs.items()
        }
    }


def _tree_constraints(holder: ConstraintHolder, indent: str) -> list[str]:
    lines = []
    for glyph, entries in holder.iter_constraints():
        for payload in _by_line(entries):
            lines.append(f"{indent}{glyph.value} {payload}  (line {entries[payload]})")
    return lines


def render_tree(document: Document) -> str:
    """Render a document as an indented, line-annotated tree."""
    lines = []
    for spec in document:
        lines.append(f"Spec {spec.name}  (line {spec.header_line})")
        for intent in spec.intents:
            lines.append(f"{INDENT}^ {intent}")
        lines.extend(_tree_constraints(spec, INDENT))
        for text, line in spec.open_questions:
            lines.append(f"{INDENT}? {text}  (line {line})")
        for entity in spec.entities.values():
            lines.append(f"{INDENT}@{entity.name}  (line {entity.header_line})")
            lines.extend(_tree_constraints(entity, INDENT * 2))
    return "\n".join(lines)
