"""
glyphspec.cli - Command-line interface.

Entry points for the ``glyphspec`` umbrella command and the standalone
``verify-conformance`` and ``verify-source`` tools.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from glyphspec import __version__
from glyphspec.commands import conform, format_cmd, source


def add_global_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every entry point."""
    parser.add_argument(
        "--version",
        action="version",
        version=f"glyphspec {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file (default: nearest .glyphspec.toml)",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug logging)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log errors",
    )


def add_conform_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("spec", type=Path, help="Canonical spec document")
    parser.add_argument("invocation", type=Path, help="Invocation document to check")
    parser.add_argument(
        "--deny-extra",
        action="store_true",
        help="Report invocation specs, entities and statements absent from the spec",
    )
    parser.add_argument(
        "--strict-intent",
        action="store_true",
        help="Require the invocation's intents to match the spec's exactly",
    )
    parser.add_argument(
        "--allow-open-questions",
        action="store_true",
        help="Allow open-question ('?') lines in the invocation",
    )


def add_parse_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", type=Path, help="Notation file")
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output JSON instead of a tree",
    )


def add_verify_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("spec_file", type=Path, help="Notation file with the spec")
    parser.add_argument("code_file", type=Path, help="Source file to verify")
    parser.add_argument(
        "--spec",
        help="Spec to verify against (default: first spec by name)",
        metavar="NAME",
    )


def add_source_subcommands(parser: argparse.ArgumentParser) -> None:
    """Add the parse and verify subcommands."""
    subparsers = parser.add_subparsers(dest="source_action", help="Source actions")
    add_parse_arguments(
        subparsers.add_parser("parse", help="Print the parsed structure of a file")
    )
    add_verify_arguments(
        subparsers.add_parser(
            "verify", help="Check source code against a spec's declared exclusions"
        )
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the umbrella command."""
    parser = argparse.ArgumentParser(
        prog="glyphspec",
        description="Contract notation tools: conformance and exclusion verification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  glyphspec conform spec.glyph impl.glyph           # BOUND / NOT BOUND
  glyphspec conform spec.glyph impl.glyph --deny-extra
  glyphspec parse spec.glyph                        # Show parsed structure
  glyphspec verify spec.glyph src/tokenizer.py      # PASS / FAIL: <reason>
  glyphspec format spec.glyph                       # Canonical notation

Exit codes:
  0  bound / pass
  1  not bound / fail
  2  unreadable or malformed input
        """,
    )
    add_global_arguments(parser)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    conform_parser = subparsers.add_parser(
        "conform",
        help="Check that an invocation restates a canonical spec document",
    )
    add_conform_arguments(conform_parser)

    add_parse_arguments(
        subparsers.add_parser("parse", help="Print the parsed structure of a file")
    )
    add_verify_arguments(
        subparsers.add_parser(
            "verify", help="Check source code against a spec's declared exclusions"
        )
    )

    format_parser = subparsers.add_parser("format", help="Print a file in canonical form")
    format_parser.add_argument("file", type=Path, help="Notation file")

    return parser


def create_conformance_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``verify-conformance``."""
    parser = argparse.ArgumentParser(
        prog="verify-conformance",
        description=(
            "Compares a canonical spec document against an invocation and returns pass/fail.\n"
            "- By default, extra items in the invocation are allowed (not checked).\n"
            "- By default, intent must exist but may differ (use --strict-intent).\n"
            "- By default, open-question lines ('?') are forbidden in the invocation."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_global_arguments(parser)
    add_conform_arguments(parser)
    return parser


def create_source_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``verify-source``."""
    parser = argparse.ArgumentParser(
        prog="verify-source",
        description="Parse notation files and verify source code against exclusions",
    )
    add_global_arguments(parser)
    add_source_subcommands(parser)
    return parser


def configure_logging(args: argparse.Namespace) -> None:
    if getattr(args, "verbose", False):
        level = logging.DEBUG
    elif getattr(args, "quiet", False):
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _enable_completion(parser: argparse.ArgumentParser) -> None:
    # Shell tab-completion if argcomplete is installed
    # Install with: pip install glyphspec[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass


def _run(
    parser: argparse.ArgumentParser,
    handler: Callable[[argparse.Namespace], int],
    argv: Optional[List[str]],
) -> int:
    _enable_completion(parser)
    args = parser.parse_args(argv)
    configure_logging(args)

    try:
        return handler(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "conform":
        return conform.run(args)
    elif args.command == "parse":
        return source.run_parse(args)
    elif args.command == "verify":
        return source.run_verify(args)
    elif args.command == "format":
        return format_cmd.run(args)
    create_parser().print_help()
    return 0 if not args.command else 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the ``glyphspec`` command.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    return _run(create_parser(), _dispatch, argv)


def conformance_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``verify-conformance``."""
    return _run(create_conformance_parser(), conform.run, argv)


def source_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``verify-source``."""
    return _run(create_source_parser(), source.run, argv)


if __name__ == "__main__":
    sys.exit(main())
