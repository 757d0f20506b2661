"""Immutable legacy settings tree loaded from an ``.ahnrc`` file."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any, ClassVar, Final, Union

import yaml
from dotenv import load_dotenv

from dialframe.config.errors import SettingsParseError

# Load environment variables from .env file(s)
load_dotenv()

logger: Final = logging.getLogger(__name__)

Scalar = Union[str, int, float, bool, None]
Node = Union[Scalar, tuple["Node", ...], Mapping[str, "Node"]]


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


def freeze(value: Any) -> Node:
    """Return a structurally immutable copy of a parsed settings value.

    Mappings become read-only proxies and sequences become tuples, recursively.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def is_mapping(node: Node) -> bool:
    return isinstance(node, Mapping)


def is_sequence(node: Node) -> bool:
    return isinstance(node, Sequence) and not isinstance(node, (str, bytes))


class SettingsTree:
    """Frozen nested structure of mappings, sequences and scalars.

    Instances are built once from a mapping, YAML text or a file and never
    change afterwards. Loading new settings means building a new tree.
    """

    # Default search paths for the settings file
    DEFAULT_PATHS: ClassVar[list[Path]] = [
        Path(".ahnrc"),
        Path("~/.ahnrc").expanduser(),
    ]

    __slots__ = ("_root",)

    def __init__(self, data: Any):
        self._root: Node = freeze(data)

    @property
    def root(self) -> Node:
        """The frozen root node."""
        return self._root

    def to_python(self) -> Any:
        """Return a mutable deep copy (dicts and lists) of the tree."""
        return _thaw(self._root)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SettingsTree):
            return NotImplemented
        return self.to_python() == other.to_python()

    def __repr__(self) -> str:
        return f"SettingsTree({self.to_python()!r})"

    @classmethod
    def parse(cls, text: str) -> SettingsTree:
        """Build a tree from YAML text.

        Raises:
            SettingsParseError: If the text is not valid YAML
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SettingsParseError(f"Unable to parse settings YAML: {exc}", exc) from exc
        return cls(data)

    @classmethod
    def from_value(cls, value: SettingsTree | Mapping[str, Any] | str) -> SettingsTree:
        """Build a tree from a pre-built mapping or from raw YAML text."""
        if isinstance(value, SettingsTree):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, Mapping):
            return cls(value)
        raise TypeError(f"Cannot load settings from {type(value).__name__}")

    @classmethod
    def load(cls, path: Path) -> SettingsTree:
        """Load a settings file, interpolating ``${VAR}`` environment references.

        Raises:
            FileNotFoundError: If the file does not exist
            SettingsParseError: If the file is not valid YAML
        """
        raw = _interpolate_env(Path(path).read_text(encoding="utf-8"))
        logger.debug("Loading settings from %s", path)
        return cls.parse(raw)

    @classmethod
    def locate(cls) -> Path:
        """Find the settings file to use.

        ``DIALFRAME_SETTINGS`` wins when set; otherwise the default paths are
        searched in order.

        Raises:
            FileNotFoundError: If no settings file is found
        """
        env_path = os.environ.get("DIALFRAME_SETTINGS")
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise FileNotFoundError(f"Settings file from DIALFRAME_SETTINGS not found: {path}")
            return path

        for default_path in cls.DEFAULT_PATHS:
            if default_path.exists():
                return default_path
        raise FileNotFoundError("No settings file found. Create .ahnrc or set DIALFRAME_SETTINGS.")


def _thaw(node: Node) -> Any:
    if isinstance(node, Mapping):
        return {key: _thaw(item) for key, item in node.items()}
    if isinstance(node, tuple):
        return [_thaw(item) for item in node]
    return node
