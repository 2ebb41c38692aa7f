"""
glyphspec.exceptions - Error types raised by the library.

Parsing and verification fail on the first problem; conformance
checking never raises and reports findings instead.
"""

from __future__ import annotations

from typing import Optional


class GlyphspecError(Exception):
    """Base class for all glyphspec errors."""


class ParseError(GlyphspecError):
    """A notation document could not be parsed.

    Attributes:
        line_no: 1-based line number of the offending line, if any
        line_text: Text of the offending line, if any
    """

    def __init__(
        self,
        message: str,
        line_no: Optional[int] = None,
        line_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.line_no = line_no
        self.line_text = line_text


class VerificationError(GlyphspecError):
    """Source text failed exclusion verification.

    Attributes:
        reason: User-visible failure reason
        kind: Exclusion kind that was violated, if any
        pattern: Banned pattern that matched, if any
    """

    def __init__(
        self,
        reason: str,
        kind: Optional[str] = None,
        pattern: Optional[str] = None,
    ):
        super().__init__(reason)
        self.reason = reason
        self.kind = kind
        self.pattern = pattern


class ConfigError(GlyphspecError):
    """Configuration file could not be loaded."""
