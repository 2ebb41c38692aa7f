"""
glyphspec.commands._common - Helpers shared by command handlers.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from glyphspec.config import load_config
from glyphspec.core.models import Document
from glyphspec.core.parser import NotationParser
from glyphspec.exceptions import ConfigError, ParseError

# Exit code for unreadable or malformed input
EXIT_USAGE = 2


def load_configuration(args: argparse.Namespace) -> Optional[Dict[str, Any]]:
    """Load config for a command, printing the error and returning None on failure."""
    try:
        return load_config(getattr(args, "config", None))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None


def read_text(path: Path, what: str) -> Optional[str]:
    """Read a UTF-8 file, printing ``failed to read <what> ...`` on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"failed to read {what} file {path}: {e}", file=sys.stderr)
        return None


def parse_or_report(text: str, what: str) -> Optional[Document]:
    """Parse notation text, printing ``failed to parse <what>: ...`` on error."""
    try:
        return NotationParser().parse_text(text)
    except ParseError as e:
        print(f"failed to parse {what}: {e}", file=sys.stderr)
        return None
