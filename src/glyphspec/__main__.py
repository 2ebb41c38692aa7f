"""Entry point for running glyphspec directly.

Usage:
    python -m glyphspec <command> ...
"""

import sys

from glyphspec.cli import main

if __name__ == "__main__":
    sys.exit(main())
