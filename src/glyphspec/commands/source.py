"""
glyphspec.commands.source - Parse notation files and verify source code.

Subcommands:
- parse: print the parsed structure of a notation file
- verify: check a source file against a spec's declared exclusions
"""

from __future__ import annotations

import argparse
import json
import sys

from glyphspec.commands._common import (
    EXIT_USAGE,
    load_configuration,
    read_text,
)
from glyphspec.core.parser import NotationParser
from glyphspec.core.serialize import document_to_dict, render_tree
from glyphspec.exceptions import ParseError, VerificationError
from glyphspec.verification import verify_file


def run(args: argparse.Namespace) -> int:
    """Dispatch to the parse or verify subcommand."""
    action = getattr(args, "source_action", None)
    if action == "parse":
        return run_parse(args)
    elif action == "verify":
        return run_verify(args)
    print("Usage: verify-source <parse|verify> ...", file=sys.stderr)
    return EXIT_USAGE


def run_parse(args: argparse.Namespace) -> int:
    """Print the parsed structure of a notation file."""
    text = read_text(args.file, "notation")
    if text is None:
        return EXIT_USAGE
    try:
        document = NotationParser().parse_text(text)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return EXIT_USAGE

    if getattr(args, "json", False):
        print(json.dumps(document_to_dict(document), indent=2))
    else:
        print(render_tree(document))
    return 0


def run_verify(args: argparse.Namespace) -> int:
    """Verify a source file against the exclusions of one spec."""
    config = load_configuration(args)
    if config is None:
        return EXIT_USAGE

    text = read_text(args.spec_file, "spec")
    if text is None:
        return EXIT_USAGE
    try:
        document = NotationParser().parse_text(text)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return EXIT_USAGE

    spec_name = getattr(args, "spec", None)
    if spec_name:
        spec = document.get(spec_name)
        if spec is None:
            print(f"Error: spec not found: {spec_name}", file=sys.stderr)
            return EXIT_USAGE
    else:
        spec = document.first()

    default_language = config.get("verify", {}).get("default_language", "")
    try:
        result = verify_file(spec, args.code_file, default_language=default_language)
    except (OSError, UnicodeDecodeError) as e:
        print(f"failed to read code file {args.code_file}: {e}", file=sys.stderr)
        return EXIT_USAGE
    except VerificationError as e:
        print(f"FAIL: {e.reason}")
        return 1

    print(result)
    return 0
