"""
glyphspec - Contract notation tools

glyphspec parses the line-oriented contract notation (``#Spec:``
headers, ``@entity`` headers and glyph statements), checks that an
invocation document faithfully restates a canonical specification, and
verifies source code against the exclusions a specification declares.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("glyphspec")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__author__ = "Anspar"
__license__ = "MIT"

from glyphspec.conformance import CompareOptions, CompareReport, compare_documents
from glyphspec.core import Document, Entity, Glyph, Spec, parse_document, to_notation
from glyphspec.exceptions import GlyphspecError, ParseError, VerificationError
from glyphspec.verification import verify_source

__all__ = [
    "__version__",
    "CompareOptions",
    "CompareReport",
    "compare_documents",
    "Document",
    "Entity",
    "Glyph",
    "Spec",
    "parse_document",
    "to_notation",
    "GlyphspecError",
    "ParseError",
    "VerificationError",
    "verify_source",
]
