"""
glyphspec.config.loader - Configuration file discovery and loading.

Configuration is read from ``.glyphspec.toml``, merged over the
defaults, then overridden by ``GLYPHSPEC_<SECTION>_<KEY>`` environment
variables.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError

from glyphspec.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX
from glyphspec.exceptions import ConfigError

logger = logging.getLogger(__name__)


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest config file, searching from start up to the root.

    Args:
        start: Directory to start from (defaults to the working directory)

    Returns:
        Path to the config file, or None if none exists
    """
    current = Path(start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment value: JSON list/object, boolean, or plain string."""
    stripped = value.strip()
    if stripped.lower() in ("true", "false"):
        return stripped.lower() == "true"
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply GLYPHSPEC_<SECTION>_<KEY> environment variables to config.

    The section is the text up to the first underscore after the prefix;
    the rest, lower-cased, is the key.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, sep, key = name[len(ENV_PREFIX) :].lower().partition("_")
        if not sep or not section or not key:
            continue
        config.setdefault(section, {})[key] = _try_parse_env_value(raw)
        logger.debug("config override from %s", name)
    return config


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration.

    Args:
        config_path: Explicit config file; when None the nearest
            ``.glyphspec.toml`` is used if one exists

    Returns:
        Configuration dictionary (defaults + file + environment)

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    if config_path is None:
        config_path = find_config_file()

    file_config: Dict[str, Any] = {}
    if config_path is not None:
        try:
            content = Path(config_path).read_text(encoding="utf-8")
            file_config = tomlkit.parse(content).unwrap()
        except OSError as e:
            raise ConfigError(f"cannot read config file {config_path}: {e}") from e
        except TOMLKitError as e:
            raise ConfigError(f"invalid config file {config_path}: {e}") from e
        logger.debug("loaded config from %s", config_path)

    config = merge_configs(DEFAULT_CONFIG, file_config)
    return _apply_env_overrides(config)
