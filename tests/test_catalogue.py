"""Tests for the exclusion catalogue."""

import pytest

from glyphspec.verification.catalogue import (
    EXCLUSION_CATALOGUE,
    FILESYSTEM_WRITES,
    NETWORK,
    NONDETERMINISM,
    banned_patterns,
    find_banned_pattern,
    is_supported,
    normalize_exclusion,
    supported_exclusions,
)


class TestCatalogue:
    def test_recognized_kinds(self):
        assert supported_exclusions() == [NETWORK, FILESYSTEM_WRITES, NONDETERMINISM]

    def test_catalogue_is_read_only(self):
        with pytest.raises(TypeError):
            EXCLUSION_CATALOGUE["telemetry"] = ("statsd",)

    def test_patterns_are_tuples(self):
        assert all(isinstance(patterns, tuple) for patterns in EXCLUSION_CATALOGUE.values())

    @pytest.mark.parametrize(
        "kind, pattern",
        [
            (NETWORK, "std::net"),
            (NETWORK, "import socket"),
            (FILESYSTEM_WRITES, "File::create"),
            (FILESYSTEM_WRITES, ".write_text("),
            (NONDETERMINISM, "thread_rng"),
            (NONDETERMINISM, "datetime.now("),
        ],
    )
    def test_known_patterns(self, kind, pattern):
        assert pattern in banned_patterns(kind)


class TestLookup:
    """Tests for name normalization and lookup."""

    def test_normalize_exclusion(self):
        assert normalize_exclusion("  Network ") == "network"
        assert normalize_exclusion("FILESYSTEM_WRITES") == "filesystem_writes"

    def test_is_supported(self):
        assert is_supported("network")
        assert is_supported(" NonDeterminism ")
        assert not is_supported("telemetry")

    def test_unknown_kind_raises(self):
        with pytest.raises(KeyError):
            banned_patterns("telemetry")


class TestFindBannedPattern:
    def test_first_matching_pattern_in_catalogue_order(self):
        assert find_banned_pattern(NETWORK, "sock = socket.socket()") == "socket.socket("
        assert find_banned_pattern(NETWORK, "import requests") == "import requests"

    def test_plain_substring_match(self):
        # no tokenization: text inside string literals counts
        assert find_banned_pattern(NETWORK, 'DOC = "see std::net"') == "std::net"

    def test_no_match(self):
        assert find_banned_pattern(NONDETERMINISM, "total = sum(values)") is None

    def test_open_for_write(self):
        source = "with open(path, 'w') as fh:\n    fh.write(text)\n"
        assert find_banned_pattern(FILESYSTEM_WRITES, source) == "'w') as "

    def test_read_only_open_is_allowed(self):
        assert find_banned_pattern(FILESYSTEM_WRITES, "open(path).read()") is None

    @pytest.mark.parametrize(
        "source",
        [
            'with open(path, "w", encoding="utf-8") as fh:\n    fh.write(text)\n',
            'path.open("a").write(line)\n',
            "fh = io.open(path, mode='wb')\n",
        ],
    )
    def test_other_write_mode_spellings(self, source):
        assert find_banned_pattern(FILESYSTEM_WRITES, source) is not None


class TestCleanCodeIsNotFlagged:
    """Code that only shares a word with an excluded facility passes."""

    @pytest.mark.parametrize(
        "kind, source",
        [
            (FILESYSTEM_WRITES, 'cleaned = "x".replace("b", "a")\n'),
            (FILESYSTEM_WRITES, "mode = options.get(key, 'w')\n"),
            (FILESYSTEM_WRITES, "parts = line.split(', ')\n"),
            (NETWORK, "self.pending_requests.append(1)\n"),
            (NETWORK, "from urllib.parse import quote\n"),
            (NETWORK, "hyperparameters = {'lr': 0.1}\n"),
            (NONDETERMINISM, "seeded = make_random_table(seed)\n"),
        ],
    )
    def test_no_match(self, kind, source):
        assert find_banned_pattern(kind, source) is None

    def test_real_network_use_still_flagged(self):
        source = "import urllib.request\n\nurllib.request.urlopen(url)\n"
        assert find_banned_pattern(NETWORK, source) == "urllib.request"
