"""Conformance module - Compare an invocation against a canonical document.

Provides the comparison policy, the accumulated report, and the
forbidden-term scan used to keep notation vocabulary out of invocations.
"""

from glyphspec.conformance.comparator import (
    FORBIDDEN_TERMS,
    CompareOptions,
    CompareReport,
    ConformanceChecker,
    compare_documents,
    find_forbidden_term,
)

__all__ = [
    "FORBIDDEN_TERMS",
    "CompareOptions",
    "CompareReport",
    "ConformanceChecker",
    "compare_documents",
    "find_forbidden_term",
]
