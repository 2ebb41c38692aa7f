"""Exclusion verification - Check source text against a spec's exclusions.

Verification is fail-closed and stops at the first failure:

1. The source must be syntactically well formed.
2. Every exclusion declared by the spec's entities must be a recognized
   catalogue kind; an unknown kind fails before any scanning.
3. No banned pattern of a declared kind may occur in the source.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from glyphspec.core.models import Spec
from glyphspec.exceptions import VerificationError
from glyphspec.verification.catalogue import (
    EXCLUSION_CATALOGUE,
    find_banned_pattern,
    normalize_exclusion,
)
from glyphspec.verification.syntax import (
    PythonSyntaxChecker,
    SyntaxChecker,
    checker_for_filename,
)

logger = logging.getLogger(__name__)

PASS = "PASS"


def collect_exclusions(spec: Spec) -> list[str]:
    """Declared exclusion names across all entities, normalized and de-duplicated.

    Order is first declaration: entities by name, exclusions by line.
    """
    names: list[str] = []
    for entity in spec.entities.values():
        ordered = sorted(entity.exclusions, key=lambda key: entity.exclusions[key])
        for exclusion in ordered:
            name = normalize_exclusion(exclusion)
            if name and name not in names:
                names.append(name)
    return names


def verify_source(
    spec: Spec,
    source: str,
    checker: Optional[SyntaxChecker] = None,
) -> str:
    """
    Verify source text against the exclusions declared in a spec.

    Args:
        spec: Parsed spec whose entity exclusions apply
        source: Raw source text
        checker: Syntax checker (defaults to the Python checker)

    Returns:
        "PASS"

    Raises:
        VerificationError: On the first failure, with its reason
    """
    (checker or PythonSyntaxChecker()).check(source)

    exclusions = collect_exclusions(spec)
    logger.debug("spec %s declares exclusions: %s", spec.name, exclusions)

    for name in exclusions:
        if name not in EXCLUSION_CATALOGUE:
            raise VerificationError(f"Unsupported exclusion in spec (fail-closed): {name}")

    for name in exclusions:
        pattern = find_banned_pattern(name, source)
        if pattern is not None:
            logger.debug("exclusion %s violated by pattern %r", name, pattern)
            raise VerificationError(f"Exclusion violated: {name}", kind=name, pattern=pattern)

    return PASS


def verify_file(
    spec: Spec,
    code_path: Union[str, Path],
    default_language: str = "",
) -> str:
    """
    Verify a source file, choosing the syntax checker from its name.

    Args:
        spec: Parsed spec whose entity exclusions apply
        code_path: Path to the source file
        default_language: Language assumed for unrecognized file names

    Returns:
        "PASS"

    Raises:
        VerificationError: On the first failure
        OSError: If the file cannot be read
    """
    path = Path(code_path)
    source = path.read_text(encoding="utf-8")
    checker = checker_for_filename(path.name, default_language)
    return verify_source(spec, source, checker)
