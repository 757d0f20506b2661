"""File discovery through the legacy settings tree.

A setting may hold a file name, a glob (e.g. ``"*.py"``), a list of file
names or a list of globs. Patterns are expanded relative to the platform
root folder.
"""

from __future__ import annotations

import glob
import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any, Final

from dialframe.config.errors import (
    SettingPathNotFoundError,
    SettingsNotLoadedError,
    SettingTypeError,
)
from dialframe.config.settings_tree import Node, SettingsTree, is_mapping, is_sequence

logger: Final = logging.getLogger(__name__)

GlobFunc = Callable[[str], Iterable[str]]


def default_glob(pattern: str) -> list[str]:
    return glob.glob(pattern, recursive=True)


def flatten_segments(segments: Iterable[Any]) -> Iterator[Any]:
    """Yield path segments with nested lists and tuples flattened."""
    for segment in segments:
        if isinstance(segment, (list, tuple)):
            yield from flatten_segments(segment)
        else:
            yield segment


def _is_empty(node: Node) -> bool:
    if node is None or node is False:
        return True
    if isinstance(node, str) or is_sequence(node):
        return len(node) == 0
    return False


class PathResolver:
    """Resolve settings paths to files on disk.

    Args:
        settings: Returns the current settings tree, or None if none is loaded
        root: Returns the folder globs are anchored at (None means the
            current working directory)
        glob_func: Expands one pattern to matching paths
    """

    def __init__(
        self,
        settings: Callable[[], SettingsTree | None],
        root: Callable[[], str | Path | None],
        glob_func: GlobFunc = default_glob,
    ):
        self._settings = settings
        self._root = root
        self._glob = glob_func

    def lookup(self, *segments: Any) -> Node:
        """Return the settings node found at ``segments``.

        Raises:
            SettingsNotLoadedError: If no settings tree has been loaded
            SettingPathNotFoundError: If the path is missing or its value is empty
        """
        tree = self._settings()
        if tree is None:
            raise SettingsNotLoadedError()

        node: Node = tree.root
        for key in flatten_segments(segments):
            if not is_mapping(node) or key not in node:  # type: ignore[operator]
                raise SettingPathNotFoundError(segments)
            node = node[key]  # type: ignore[index]

        if _is_empty(node):
            raise SettingPathNotFoundError(segments)
        return node

    def patterns(self, *segments: Any) -> list[str]:
        """Return the glob patterns stored at ``segments``.

        Raises:
            SettingTypeError: If the value (or one of its items) is a mapping
                or a nested list
        """
        node = self.lookup(*segments)
        if is_mapping(node):
            raise SettingTypeError(segments, node)
        items = list(node) if is_sequence(node) else [node]  # type: ignore[arg-type]

        patterns: list[str] = []
        for item in items:
            if is_mapping(item) or is_sequence(item):
                raise SettingTypeError(segments, item)
            patterns.append(str(item))
        return patterns

    def expand(self, pattern: str) -> list[str]:
        """Expand one pattern relative to the root folder, sorted."""
        root = self._root()
        base = str(root) if root is not None else str(Path.cwd())
        full_pattern = f"{base.rstrip('/')}/{pattern}"
        matches = sorted(self._glob(full_pattern))
        logger.debug("Glob %s matched %d file(s)", full_pattern, len(matches))
        return matches

    def resolve_paths(self, *segments: Any) -> list[str]:
        """Return the unique files matched by the patterns at ``segments``.

        Order follows the patterns, then sorted matches within each pattern;
        files matched by more than one pattern are listed once.
        """
        files: dict[str, None] = {}
        for pattern in self.patterns(*segments):
            files.update(dict.fromkeys(self.expand(pattern)))
        return list(files)
