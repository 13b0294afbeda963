"""
Formcraft Core
==============

Configuration shared by validation and widgets.
"""

from formcraft.core.config import Config, ConfigSource, config, get_config, reset_config

__all__ = [
    "Config",
    "ConfigSource",
    "config",
    "get_config",
    "reset_config",
]
