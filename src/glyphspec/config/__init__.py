"""
glyphspec.config - Configuration loading and defaults
"""

from glyphspec.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from glyphspec.config.loader import (
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    load_config,
    merge_configs,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "load_config",
    "merge_configs",
]
