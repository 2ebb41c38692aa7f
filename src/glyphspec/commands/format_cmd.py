"""
glyphspec.commands.format_cmd - Print a notation file in canonical form.
"""

from __future__ import annotations

import argparse
import sys

from glyphspec.commands._common import EXIT_USAGE, read_text
from glyphspec.core.parser import NotationParser
from glyphspec.core.serialize import to_notation
from glyphspec.exceptions import ParseError


def run(args: argparse.Namespace) -> int:
    """Parse a notation file and print its canonical serialization."""
    text = read_text(args.file, "notation")
    if text is None:
        return EXIT_USAGE
    try:
        document = NotationParser().parse_text(text)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return EXIT_USAGE

    sys.stdout.write(to_notation(document))
    return 0
