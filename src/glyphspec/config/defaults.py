"""
glyphspec.config.defaults - Built-in configuration values.
"""

from typing import Any, Dict

CONFIG_FILENAME = ".glyphspec.toml"

ENV_PREFIX = "GLYPHSPEC_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "compare": {
        "deny_extra": False,
        "strict_intent": False,
        "deny_open_questions_in_invocation": True,
    },
    "verify": {
        # Language assumed for source files with an unrecognized name.
        # Empty: such files fail verification.
        "default_language": "",
    },
}
