"""Tests for glyphspec.config."""

from __future__ import annotations

import pytest

from glyphspec.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    load_config,
    merge_configs,
)
from glyphspec.exceptions import ConfigError


class TestFindConfigFile:
    def test_none_when_absent(self, tmp_path):
        assert find_config_file(tmp_path) is None

    def test_found_in_parent(self, tmp_path):
        config = tmp_path / CONFIG_FILENAME
        config.write_text("[compare]\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == config.resolve()

    def test_defaults_to_working_directory(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("", encoding="utf-8")
        assert find_config_file() == (tmp_path / CONFIG_FILENAME).resolve()


class TestMergeConfigs:
    def test_deep_merge(self):
        merged = merge_configs(DEFAULT_CONFIG, {"compare": {"deny_extra": True}})
        assert merged["compare"]["deny_extra"] is True
        assert merged["compare"]["deny_open_questions_in_invocation"] is True
        assert merged["verify"] == {"default_language": ""}

    def test_base_not_modified(self):
        merge_configs(DEFAULT_CONFIG, {"compare": {"strict_intent": True}})
        assert DEFAULT_CONFIG["compare"]["strict_intent"] is False


class TestTryParseEnvValue:
    """Typed parsing of environment override values."""

    def test_booleans(self):
        assert _try_parse_env_value("true") is True
        assert _try_parse_env_value("FALSE") is False

    def test_json_list(self):
        assert _try_parse_env_value('["a", "b"]') == ["a", "b"]

    def test_malformed_json_returns_string(self):
        assert _try_parse_env_value("[not json") == "[not json"

    def test_plain_string(self):
        assert _try_parse_env_value("rust") == "rust"


class TestEnvOverrides:
    def test_section_and_key(self, monkeypatch):
        monkeypatch.setenv("GLYPHSPEC_COMPARE_DENY_EXTRA", "true")
        config = _apply_env_overrides(merge_configs(DEFAULT_CONFIG, {}))
        assert config["compare"]["deny_extra"] is True

    def test_key_with_underscores(self, monkeypatch):
        monkeypatch.setenv("GLYPHSPEC_VERIFY_DEFAULT_LANGUAGE", "python")
        config = _apply_env_overrides({})
        assert config == {"verify": {"default_language": "python"}}

    def test_incomplete_names_ignored(self, monkeypatch):
        monkeypatch.setenv("GLYPHSPEC_COMPARE", "true")
        assert _apply_env_overrides({}) == {}


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self):
        assert load_config() == DEFAULT_CONFIG

    def test_discovered_file(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(
            "[compare]\nstrict_intent = true\n", encoding="utf-8"
        )
        config = load_config()
        assert config["compare"]["strict_intent"] is True
        assert config["compare"]["deny_extra"] is False

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[verify]\ndefault_language = "rust"\n', encoding="utf-8")
        assert load_config(path)["verify"]["default_language"] == "rust"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / CONFIG_FILENAME).write_text(
            "[compare]\ndeny_extra = false\n", encoding="utf-8"
        )
        monkeypatch.setenv("GLYPHSPEC_COMPARE_DENY_EXTRA", "true")
        assert load_config()["compare"]["deny_extra"] is True

    def test_loaded_values_are_plain_python(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(
            "[compare]\ndeny_extra = true\n", encoding="utf-8"
        )
        compare = load_config()["compare"]
        assert type(compare) is dict
        assert type(compare["deny_extra"]) is bool

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[compare\ndeny_extra = \n", encoding="utf-8")
        with pytest.raises(ConfigError, match="invalid config file"):
            load_config(path)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read config file"):
            load_config(tmp_path / "absent.toml")
