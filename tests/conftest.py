"""Pytest fixtures shared by the glyphspec tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

MINIMAL_SPEC = "#Spec: S\n^ Intent: s\n\n@E\n  - network\n"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding notation and source fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def constraint_gate_text() -> str:
    return (FIXTURES_DIR / "constraint_gate.glyph").read_text(encoding="utf-8")


@pytest.fixture
def constraint_gate(constraint_gate_text):
    """Parsed constraint_gate.glyph document."""
    from glyphspec.core.parser import parse_document

    return parse_document(constraint_gate_text)


@pytest.fixture
def minimal_spec():
    """Spec S with one entity E excluding network."""
    from glyphspec.core.parser import parse_document

    return parse_document(MINIMAL_SPEC).specs["S"]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep user config files and GLYPHSPEC_* variables out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("GLYPHSPEC_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
