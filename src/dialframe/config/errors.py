"""Exception classes for the configuration layer.

This module defines the errors raised while loading the legacy settings
tree and resolving file paths through it.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class ConfigurationError(Exception):
    """Base class for every error raised by ``dialframe.config``."""


class SettingsNotLoadedError(ConfigurationError, RuntimeError):
    """Raised when file discovery runs before any settings tree was loaded."""

    def __init__(self, message: str = "No settings file has been loaded yet") -> None:
        super().__init__(message)


class SettingPathNotFoundError(ConfigurationError, LookupError):
    """Raised when a path through the settings tree does not exist.

    An existing key whose value is empty is reported the same way as a
    missing key.
    """

    def __init__(self, path: Sequence[Any]) -> None:
        """Initialize the exception.

        Args:
            path: The path segments exactly as requested by the caller
        """
        self.path: tuple[Any, ...] = tuple(path)
        super().__init__(f"Path {list(self.path)!r} not found in settings")


class SettingTypeError(ConfigurationError, TypeError):
    """Raised when a setting cannot be used as a list of glob patterns."""

    def __init__(self, path: Sequence[Any], value: Any) -> None:
        """Initialize the exception.

        Args:
            path: The requested path segments
            value: The offending value found at (or under) that path
        """
        self.path: tuple[Any, ...] = tuple(path)
        self.value = value
        super().__init__(
            f"Setting {list(self.path)!r} holds {type(value).__name__}, "
            "expected a glob pattern or a list of glob patterns"
        )


class SettingsParseError(ConfigurationError, ValueError):
    """Raised when settings text cannot be parsed."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the parsing error
            original_error: The original exception that was caught
        """
        super().__init__(message)
        self.original_error = original_error
