"""Verification module - Exclusion checks of source text.

Provides the fixed exclusion catalogue, syntax checkers, and the
fail-closed verifier.
"""

from glyphspec.verification.catalogue import (
    EXCLUSION_CATALOGUE,
    banned_patterns,
    supported_exclusions,
)
from glyphspec.verification.syntax import (
    PythonSyntaxChecker,
    SyntaxChecker,
    TreeSitterSyntaxChecker,
    checker_for_filename,
    checker_for_language,
)
from glyphspec.verification.verifier import PASS, collect_exclusions, verify_file, verify_source

__all__ = [
    "EXCLUSION_CATALOGUE",
    "banned_patterns",
    "supported_exclusions",
    "PythonSyntaxChecker",
    "SyntaxChecker",
    "TreeSitterSyntaxChecker",
    "checker_for_filename",
    "checker_for_language",
    "PASS",
    "collect_exclusions",
    "verify_file",
    "verify_source",
]
