"""
glyphspec.core - Document model, notation parser and serializers
"""

from glyphspec.core.models import Document, Entity, Glyph, Spec, normalize_text
from glyphspec.core.parser import NotationParser, parse_document, parse_file
from glyphspec.core.serialize import document_to_dict, render_tree, to_notation

__all__ = [
    "Document",
    "Entity",
    "Glyph",
    "Spec",
    "normalize_text",
    "NotationParser",
    "parse_document",
    "parse_file",
    "document_to_dict",
    "render_tree",
    "to_notation",
]
