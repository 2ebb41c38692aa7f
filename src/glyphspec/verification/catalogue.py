"""Exclusion catalogue - Recognized exclusion kinds and their banned patterns.

Each kind maps to literal substrings whose presence anywhere in the
source text violates the exclusion. Rust identifiers come first, then
Python ones. Python patterns name the facility itself (a module import,
a qualified call, a write-mode open) so that unrelated code sharing a
word with it still passes. The table is read-only; an exclusion name
missing from it is unsupported and fails verification.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from glyphspec.core.models import normalize_text

NETWORK = "network"
FILESYSTEM_WRITES = "filesystem_writes"
NONDETERMINISM = "nondeterminism"

WRITE_MODES = ("w", "wb", "w+", "a", "ab", "a+", "x", "xb")


def _write_mode_patterns() -> tuple[str, ...]:
    """Spellings of an open() call in a writing mode."""
    patterns = []
    for mode in WRITE_MODES:
        for quote in ("'", '"'):
            literal = f"{quote}{mode}{quote}"
            patterns.extend(
                (
                    f"mode={literal}",
                    f".open({literal}",
                    f"{literal}) as ",
                    f"{literal}, encoding",
                )
            )
    return tuple(patterns)


EXCLUSION_CATALOGUE: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        NETWORK: (
            "std::net",
            "reqwest",
            "hyper::",
            "ureq::",
            "tokio::net",
            "import socket",
            "from socket import",
            "socket.socket(",
            "socket.create_connection(",
            "import requests",
            "from requests import",
            "urllib.request",
            "from urllib import request",
            "import urllib3",
            "http.client",
            "import httpx",
            "from httpx import",
            "import aiohttp",
            "from aiohttp import",
        ),
        FILESYSTEM_WRITES: (
            "std::fs::write",
            "File::create",
            "std::fs::File::create",
            "OpenOptions",
            "std::fs::OpenOptions",
            "remove_file",
            "create_dir",
            "create_dir_all",
            "os.remove(",
            "os.unlink(",
            "os.rmdir(",
            "os.mkdir(",
            "os.makedirs(",
            "os.rename(",
            "os.replace(",
            "shutil.rmtree(",
            "shutil.copy",
            "shutil.move(",
            ".write_text(",
            ".write_bytes(",
            ".unlink(",
            ".mkdir(",
            ".touch(",
            *_write_mode_patterns(),
        ),
        NONDETERMINISM: (
            "rand::",
            "thread_rng",
            "SystemTime::now",
            "Instant::now",
            "Uuid::new_v4",
            "import random",
            "from random import",
            "random.random(",
            "random.randint(",
            "random.choice(",
            "random.shuffle(",
            "import secrets",
            "from secrets import",
            "uuid.uuid1(",
            "uuid.uuid4(",
            "uuid4(",
            "time.time(",
            "time.time_ns(",
            "time.monotonic(",
            "time.perf_counter(",
            "datetime.now(",
            "datetime.utcnow(",
            "date.today(",
            "os.urandom(",
        ),
    }
)


def normalize_exclusion(name: str) -> str:
    """Normalize a declared exclusion name for catalogue lookup."""
    return normalize_text(name).lower()


def supported_exclusions() -> list[str]:
    """Names of all recognized exclusion kinds, in catalogue order."""
    return list(EXCLUSION_CATALOGUE)


def is_supported(name: str) -> bool:
    return normalize_exclusion(name) in EXCLUSION_CATALOGUE


def banned_patterns(kind: str) -> tuple[str, ...]:
    """Return the banned patterns of a kind; raises KeyError if unknown."""
    return EXCLUSION_CATALOGUE[normalize_exclusion(kind)]


def find_banned_pattern(kind: str, source: str) -> str | None:
    """Return the first banned pattern of ``kind`` found in source, if any."""
    for pattern in banned_patterns(kind):
        if pattern in source:
            return pattern
    return None
