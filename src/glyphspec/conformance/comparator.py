"""Conformance comparison - Check an invocation document against a canonical one.

The invocation must restate every canonical spec, entity and checked
constraint. Comparison never stops early: each check appends zero or
more findings to a report. Only a missing spec or entity skips the
checks beneath it.

Options (from the [compare] config section or CLI flags):
- deny_extra: also report invocation entries absent from the canonical document
- strict_intent: require identical intent sequences
- deny_open_questions_in_invocation: reject ``?`` lines in the invocation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from glyphspec.core.models import CONSTRAINT_GLYPHS, Document, Entity, Glyph, Spec
from glyphspec.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Notation vocabulary that must not leak into invocation statements
FORBIDDEN_TERMS = (
    "sorcery",
    "spell",
    "glyph",
    "sigil",
    "invocation",
    "incantation",
)

# Categories whose canonical entries the invocation must restate.
# Assumptions are reported as warnings only.
CHECKED_GLYPHS = tuple(glyph for glyph in CONSTRAINT_GLYPHS if glyph is not Glyph.ASSUMPTION)


@dataclass
class CompareOptions:
    """Strictness policy for a comparison."""

    deny_extra: bool = False
    strict_intent: bool = False
    deny_open_questions_in_invocation: bool = True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompareOptions":
        """Create CompareOptions from a [compare] configuration section.

        Raises:
            ConfigError: If a value is present but not a boolean
        """
        defaults = cls()
        values = {}
        for name in ("deny_extra", "strict_intent", "deny_open_questions_in_invocation"):
            value = data.get(name, getattr(defaults, name))
            if not isinstance(value, bool):
                raise ConfigError(f"[compare] {name} must be true or false, got {value!r}")
            values[name] = value
        return cls(**values)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "CompareOptions":
        return cls.from_dict(config.get("compare", {}))


@dataclass
class CompareReport:
    """
    Accumulated result of a comparison.

    Attributes:
        errors: Findings that make the invocation non-conforming
        warnings: Informational findings; they never affect ``ok``
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)


def fmt_line(line: int) -> str:
    return f" (line {line})" if line else ""


def find_forbidden_term(text: str) -> Optional[str]:
    """Return the first forbidden term contained in text, ignoring case."""
    lower = text.lower()
    for term in FORBIDDEN_TERMS:
        if term in lower:
            return term
    return None


def missing_entries(required: Mapping[str, int], got: Mapping[str, int]) -> list[tuple[str, int]]:
    """Entries of ``required`` absent from ``got``, with their canonical lines."""
    return [(key, line) for key, line in required.items() if key not in got]


def extra_entries(required: Mapping[str, int], got: Mapping[str, int]) -> list[tuple[str, int]]:
    """Entries of ``got`` absent from ``required``, with their invocation lines."""
    return [(key, line) for key, line in got.items() if key not in required]


class ConformanceChecker:
    """
    Compares a canonical document against an invocation document.
    """

    def __init__(self, options: Optional[CompareOptions] = None):
        """
        Initialize checker.

        Args:
            options: Strictness policy (defaults to CompareOptions())
        """
        self.options = options if options is not None else CompareOptions()

    def compare(self, canonical: Document, invocation: Document) -> CompareReport:
        """
        Run every applicable check and return the accumulated report.

        Args:
            canonical: The canonical specification document
            invocation: The document claimed to restate it

        Returns:
            CompareReport; ``ok`` is True when no errors were found
        """
        report = CompareReport()

        for name, spec in canonical.specs.items():
            inv = invocation.get(name)
            if inv is None:
                report.add_error(f"missing invocation spec: {name}{fmt_line(spec.header_line)}")
                continue
            before = len(report.errors)
            self._check_spec(report, spec, inv)
            logger.debug("spec %s: %d error(s)", name, len(report.errors) - before)

        if self.options.deny_extra:
            for name in invocation.specs:
                if name not in canonical:
                    report.add_error(f"extra invocation spec: {name}")

        logger.info(
            "conformance: %d error(s), %d warning(s)", len(report.errors), len(report.warnings)
        )
        return report

    def _check_spec(self, report: CompareReport, spec: Spec, inv: Spec) -> None:
        name = spec.name
        self._check_intents(report, spec, inv)
        self._check_open_questions(report, inv)
        self._check_forbidden(report, name, None, inv)
        self._check_constraints(report, f"for {name}", "", spec, inv)

        for entity_name, entity in spec.entities.items():
            inv_entity = inv.entities.get(entity_name)
            if inv_entity is None:
                report.add_error(
                    f"missing entity in invocation for {name}: "
                    f"@{entity_name}{fmt_line(entity.header_line)}"
                )
                continue
            self._check_entity(report, name, entity, inv_entity)

        if self.options.deny_extra:
            for entity_name in inv.entities:
                if entity_name not in spec.entities:
                    report.add_error(f"extra entity in invocation for {name}: @{entity_name}")

    def _check_entity(
        self, report: CompareReport, spec_name: str, entity: Entity, inv_entity: Entity
    ) -> None:
        self._check_forbidden(report, spec_name, entity.name, inv_entity)
        self._check_constraints(
            report, f"for {spec_name} @{entity.name}", "entity ", entity, inv_entity
        )

    def _check_intents(self, report: CompareReport, spec: Spec, inv: Spec) -> None:
        if not spec.intents:
            report.add_error(f"spec missing intent: {spec.name}")
        if not inv.intents:
            report.add_error(f"invocation missing intent: {spec.name}")
        if self.options.strict_intent and list(spec.intents) != list(inv.intents):
            report.add_error(
                f"intent mismatch for {spec.name}: "
                f"spec={list(spec.intents)!r} invocation={list(inv.intents)!r}"
            )

    def _check_open_questions(self, report: CompareReport, inv: Spec) -> None:
        if self.options.deny_open_questions_in_invocation and inv.open_questions:
            report.add_error(
                f"invocation contains open questions ('?') for {inv.name}: "
                f"{list(inv.open_questions)!r}"
            )

    def _check_forbidden(
        self,
        report: CompareReport,
        spec_name: str,
        entity_name: Optional[str],
        holder: Spec | Entity,
    ) -> None:
        scope = f" @{entity_name}" if entity_name else ""
        for glyph, entries in holder.iter_constraints():
            for payload, line in entries.items():
                term = find_forbidden_term(payload)
                if term:
                    report.add_error(
                        f"forbidden notation term '{term}' in invocation for "
                        f"{spec_name}{scope}: {glyph.value} {payload}{fmt_line(line)}"
                    )

    def _check_constraints(
        self,
        report: CompareReport,
        scope: str,
        prefix: str,
        canonical: Spec | Entity,
        inv: Spec | Entity,
    ) -> None:
        """Missing/extra checks for one spec or entity.

        ``scope`` reads "for S" or "for S @E"; ``prefix`` is "" or "entity ".
        """
        for glyph in CHECKED_GLYPHS:
            required = canonical.constraints(glyph)
            got = inv.constraints(glyph)
            for payload, line in missing_entries(required, got):
                report.add_error(
                    f"missing {prefix}{glyph.label} in invocation {scope}: "
                    f"{glyph.value} {payload}{fmt_line(line)}"
                )

        if self.options.deny_extra:
            for glyph in CHECKED_GLYPHS:
                required = canonical.constraints(glyph)
                got = inv.constraints(glyph)
                for payload, line in extra_entries(required, got):
                    report.add_error(
                        f"extra {prefix}{glyph.label} in invocation {scope}: "
                        f"{glyph.value} {payload}{fmt_line(line)}"
                    )

        for payload, line in missing_entries(canonical.assumptions, inv.assumptions):
            report.add_warning(
                f"assumption not restated in invocation {scope}: "
                f"{Glyph.ASSUMPTION.value} {payload}{fmt_line(line)}"
            )


def compare_documents(
    canonical: Document,
    invocation: Document,
    options: Optional[CompareOptions] = None,
) -> CompareReport:
    """Compare two documents under the given options."""
    return ConformanceChecker(options).compare(canonical, invocation)
