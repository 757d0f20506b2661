"""Configuration layer of the dialframe framework.

This package provides:
- Configuration: the registry of named option sets and the settings tree
- OptionSet: declarable, documented options for the platform and plugins
- SettingsTree: the frozen legacy ``.ahnrc`` settings used for file discovery
"""

from dialframe.config.errors import (
    ConfigurationError,
    SettingPathNotFoundError,
    SettingsNotLoadedError,
    SettingsParseError,
    SettingTypeError,
)
from dialframe.config.logging_bridge import LoggingBridge
from dialframe.config.options import Option, OptionSet
from dialframe.config.platform import PLATFORM
from dialframe.config.registry import Configuration
from dialframe.config.settings_tree import SettingsTree

__all__ = [
    "PLATFORM",
    "Configuration",
    "ConfigurationError",
    "LoggingBridge",
    "Option",
    "OptionSet",
    "SettingPathNotFoundError",
    "SettingTypeError",
    "SettingsNotLoadedError",
    "SettingsParseError",
    "SettingsTree",
]
