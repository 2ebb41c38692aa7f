"""Tests for glyphspec.verification.verifier."""

import pytest

from glyphspec.core.parser import parse_document
from glyphspec.exceptions import VerificationError
from glyphspec.verification import (
    PASS,
    checker_for_language,
    collect_exclusions,
    verify_file,
    verify_source,
)


def _spec(text: str):
    return parse_document(text).first()


class TestCollectExclusions:
    def test_entities_by_name_then_line(self, constraint_gate):
        spec = constraint_gate.specs["ConstraintGate"]
        assert collect_exclusions(spec) == ["nondeterminism", "network", "filesystem_writes"]

    def test_deduplicated_across_entities(self):
        spec = _spec("#Spec: S\n^ s\n@A\n  - network\n@B\n  - Network\n  - nondeterminism\n")
        assert collect_exclusions(spec) == ["network", "nondeterminism"]

    def test_spec_level_exclusions_are_not_declarations(self):
        assert collect_exclusions(_spec("#Spec: S\n^ s\n- network\n")) == []


class TestVerifySource:
    """Fail-closed verification of source text."""

    def test_clean_source_passes(self, minimal_spec):
        assert verify_source(minimal_spec, "def add(a, b):\n    return a + b\n") == PASS

    def test_banned_substring_fails(self, minimal_spec):
        with pytest.raises(VerificationError) as exc_info:
            verify_source(minimal_spec, 'BACKEND = "std::net"\n')

        error = exc_info.value
        assert str(error) == "Exclusion violated: network"
        assert error.reason == "Exclusion violated: network"
        assert error.kind == "network"
        assert error.pattern == "std::net"

    def test_rust_source(self, minimal_spec):
        rust = checker_for_language("rust")
        with pytest.raises(VerificationError, match="Exclusion violated: network"):
            verify_source(minimal_spec, "use std::net::TcpStream;\nfn main() {}\n", rust)

    def test_malformed_rust_fails(self, minimal_spec):
        rust = checker_for_language("rust")
        with pytest.raises(VerificationError, match="invalid syntax"):
            verify_source(minimal_spec, "fn main( {\n    let x = ;\n", rust)

    def test_unsupported_exclusion_fails_before_scan(self):
        spec = _spec("#Spec: S\n^ s\n@E\n  - telemetry\n")
        with pytest.raises(VerificationError) as exc_info:
            verify_source(spec, "x = 1\n")

        assert "unsupported exclusion" in exc_info.value.reason.lower()
        assert exc_info.value.reason == "Unsupported exclusion in spec (fail-closed): telemetry"

    def test_unsupported_wins_over_violation(self):
        spec = _spec("#Spec: S\n^ s\n@E\n  - network\n  - telemetry\n")
        with pytest.raises(VerificationError, match="Unsupported exclusion"):
            verify_source(spec, "import socket\n")

    def test_syntax_check_runs_first(self):
        spec = _spec("#Spec: S\n^ s\n@E\n  - telemetry\n")
        with pytest.raises(VerificationError, match="invalid syntax"):
            verify_source(spec, "def broken(:\n")

    def test_first_declared_kind_wins(self):
        spec = _spec("#Spec: S\n^ s\n@E\n  - nondeterminism\n  - network\n")
        with pytest.raises(VerificationError) as exc_info:
            verify_source(spec, "import socket\nimport random\n")
        assert exc_info.value.kind == "nondeterminism"

    def test_filesystem_writes(self):
        spec = _spec("#Spec: S\n^ s\n@Store\n  - filesystem_writes\n")
        with pytest.raises(VerificationError, match="Exclusion violated: filesystem_writes"):
            verify_source(spec, "def save(path, text):\n    path.write_text(text)\n")

    def test_exclusion_name_is_case_insensitive(self):
        spec = _spec("#Spec: S\n^ s\n@E\n  - NonDeterminism\n")
        with pytest.raises(VerificationError, match="Exclusion violated: nondeterminism"):
            verify_source(spec, "import random\n")

    def test_no_exclusions_passes(self):
        assert verify_source(_spec("#Spec: S\n^ s\n- network\n"), "import socket\n") == PASS


class TestVerifyFile:
    def test_clean_fixture(self, constraint_gate, fixtures_dir):
        spec = constraint_gate.specs["ConstraintGate"]
        assert verify_file(spec, fixtures_dir / "clean_source.py") == PASS

    def test_network_fixture(self, constraint_gate, fixtures_dir):
        spec = constraint_gate.specs["Tokenizer"]
        with pytest.raises(VerificationError) as exc_info:
            verify_file(spec, fixtures_dir / "network_source.py")
        assert exc_info.value.reason == "Exclusion violated: network"
        assert exc_info.value.pattern == "import socket"

    def test_unrecognized_file_fails_closed(self, minimal_spec, tmp_path):
        code = tmp_path / "code.unknownext"
        code.write_text("anything\n", encoding="utf-8")
        with pytest.raises(VerificationError, match="no syntax checker"):
            verify_file(minimal_spec, code)

    def test_default_language(self, minimal_spec, tmp_path):
        code = tmp_path / "code.unknownext"
        code.write_text("x = 1\n", encoding="utf-8")
        assert verify_file(minimal_spec, code, default_language="python") == PASS

    def test_missing_file(self, minimal_spec, tmp_path):
        with pytest.raises(OSError):
            verify_file(minimal_spec, tmp_path / "absent.py")
