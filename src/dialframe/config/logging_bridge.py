"""Apply platform logging options to the ``dialframe`` logger."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, field_validator

TRACE: Final = 5
logging.addLevelName(TRACE, "TRACE")

# Supported levels in increasing severity
LEVELS: Final[dict[str, int]] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}

DEFAULT_FORMAT: Final = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger: Final = logging.getLogger(__name__)


def basic_formatter() -> logging.Formatter:
    """Plain string formatter; tracebacks are appended to records with exc_info."""
    return logging.Formatter(DEFAULT_FORMAT)


def to_level(value: str | int) -> int:
    """Convert a level name (``trace`` .. ``fatal`` or a stdlib name) to an int.

    Raises:
        ValueError: If the name is not a known level
    """
    if isinstance(value, int):
        return value
    name = str(value).strip().lower()
    if name in LEVELS:
        return LEVELS[name]
    stdlib_level = logging.getLevelName(name.upper())
    if isinstance(stdlib_level, int):
        return stdlib_level
    raise ValueError(f"Unknown log level {value!r}; expected one of {', '.join(LEVELS)}")


def build_handler(outputter: Any) -> logging.Handler:
    """Turn an outputter value into a handler.

    Accepts a ready ``logging.Handler``, ``"stdout"``, ``"stderr"`` or a file path.
    """
    if isinstance(outputter, logging.Handler):
        return outputter
    if outputter == "stdout":
        return logging.StreamHandler(sys.stdout)
    if outputter == "stderr":
        return logging.StreamHandler(sys.stderr)
    return logging.FileHandler(str(outputter), encoding="utf-8")


class LoggingOptions(BaseModel):
    """The subset of ``platform.logging`` that affects the logging tree."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    level: int | None = None
    outputters: list[Any] | None = None
    formatter: Any = None

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> int | None:
        if v is None:
            return None
        return to_level(v)

    @field_validator("outputters", mode="before")
    @classmethod
    def validate_outputters(cls, v: Any) -> list[Any]:
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return list(v)
        return [v]


class LoggingBridge:
    """Push level, outputters and formatter settings into ``logging``.

    Only keys present in the options passed to :meth:`apply` are changed.

    Args:
        logger_name: Name of the logger that receives the settings
    """

    def __init__(self, logger_name: str = "dialframe"):
        self.target = logging.getLogger(logger_name)
        self.formatter: logging.Formatter | None = None
        self.handlers: list[logging.Handler] = []

    def apply(self, options: Mapping[str, Any]) -> None:
        """Apply a logging option mapping.

        Raises:
            pydantic.ValidationError: If ``level`` is not a known level name
        """
        parsed = LoggingOptions.model_validate(dict(options))
        present = parsed.model_fields_set

        if "level" in present:
            self.set_level(parsed.level)
        if "outputters" in present:
            self.set_outputters(parsed.outputters or [])
        if "formatter" in present:
            self.set_formatter(parsed.formatter)

    def set_level(self, level: int | None) -> None:
        self.target.setLevel(level if level is not None else logging.NOTSET)
        logger.debug("Log level of %s set to %s", self.target.name, logging.getLevelName(level or 0))

    def set_outputters(self, outputters: list[Any]) -> None:
        """Replace every handler previously installed by this bridge.

        The new handlers are built first; if one cannot be built the current
        handlers stay installed.
        """
        new_handlers = [build_handler(outputter) for outputter in outputters]

        reused = {id(handler) for handler in new_handlers}
        for handler in self.handlers:
            self.target.removeHandler(handler)
            if id(handler) not in reused:
                handler.close()

        self.handlers = new_handlers
        for handler in self.handlers:
            if self.formatter is not None:
                handler.setFormatter(self.formatter)
            self.target.addHandler(handler)

    def set_formatter(self, formatter: Any) -> None:
        """Set the formatter used by all outputters; None restores the default."""
        if formatter is None:
            self.formatter = None
        elif isinstance(formatter, logging.Formatter):
            self.formatter = formatter
        else:
            self.formatter = logging.Formatter(str(formatter))
        for handler in self.handlers:
            handler.setFormatter(self.formatter)
