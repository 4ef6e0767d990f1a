from __future__ import annotations

from .load import CONFIG_FILE, ConfigError, find_config, load_config
from .model import CodeStyleSettings, ExpansionConfig, IndentOptions

__all__ = [
    "CONFIG_FILE",
    "ConfigError",
    "CodeStyleSettings",
    "ExpansionConfig",
    "IndentOptions",
    "find_config",
    "load_config",
]
