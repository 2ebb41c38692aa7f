"""
glyphspec.commands.conform - Check an invocation against a canonical spec document.

Prints BOUND when the invocation conforms (preceded by WARN and the
warnings, if any) or NOT BOUND and the itemized errors.
"""

from __future__ import annotations

import argparse
import sys

from glyphspec.commands._common import (
    EXIT_USAGE,
    load_configuration,
    parse_or_report,
    read_text,
)
from glyphspec.conformance import CompareOptions, compare_documents
from glyphspec.exceptions import ConfigError


def build_options(args: argparse.Namespace, config: dict) -> CompareOptions:
    """Configured options, tightened or relaxed by command line flags."""
    options = CompareOptions.from_config(config)
    if getattr(args, "deny_extra", False):
        options.deny_extra = True
    if getattr(args, "strict_intent", False):
        options.strict_intent = True
    if getattr(args, "allow_open_questions", False):
        options.deny_open_questions_in_invocation = False
    return options


def run(args: argparse.Namespace) -> int:
    """
    Run the conformance check.

    Args:
        args: Parsed command line arguments

    Returns:
        0 when bound, 1 when not bound, 2 on unreadable or malformed input
    """
    config = load_configuration(args)
    if config is None:
        return EXIT_USAGE

    spec_text = read_text(args.spec, "spec")
    if spec_text is None:
        return EXIT_USAGE
    invocation_text = read_text(args.invocation, "invocation")
    if invocation_text is None:
        return EXIT_USAGE

    canonical = parse_or_report(spec_text, "spec document")
    if canonical is None:
        return EXIT_USAGE
    invocation = parse_or_report(invocation_text, "invocation")
    if invocation is None:
        return EXIT_USAGE

    try:
        options = build_options(args, config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    report = compare_documents(canonical, invocation, options)

    if not report.ok:
        print("NOT BOUND", file=sys.stderr)
        for error in report.errors:
            print(f"- {error}", file=sys.stderr)
        return 1

    if report.warnings:
        print("WARN")
        for warning in report.warnings:
            print(f"- {warning}")

    print("BOUND")
    return 0
