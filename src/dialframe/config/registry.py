"""Central configuration registry for the framework and its plugins."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Final

from dialframe.config.describe import describe
from dialframe.config.logging_bridge import LoggingBridge
from dialframe.config.options import OptionSet
from dialframe.config.paths import GlobFunc, PathResolver, default_glob
from dialframe.config.platform import PLATFORM, canonical_name, install_platform_schema
from dialframe.config.settings_tree import SettingsTree

logger: Final = logging.getLogger(__name__)

Mutation = Callable[[OptionSet], Any]


class Configuration:
    """Named option sets plus the legacy settings tree.

    Every namespace name maps to exactly one :class:`OptionSet`, created the
    first time the name is used and returned on every later lookup. The
    framework owns ``platform``; plugins pick their own names.

    Examples:
        config = Configuration(settings={"paths": {"dialplan": "dialplan.py"}})

        # Plugins declare their options
        config.resolve("voicemail", lambda c: c.declare("greeting", "hello.wav"))

        # ...and read them back by index or attribute
        config["voicemail"].greeting
        config.voicemail.greeting

        # Platform options
        config.platform.root = "/srv/app"
        config.files_from_setting("paths", "dialplan")

    Args:
        platform: Mutation declaring the platform options instead of the
            built-in schema
        settings: Initial settings tree (mapping or YAML text)
        bridge: Logging bridge fed by ``platform.logging`` changes
        glob_func: Pattern expander used for file discovery
    """

    def __init__(
        self,
        platform: Mutation | None = None,
        settings: SettingsTree | Mapping[str, Any] | str | None = None,
        bridge: LoggingBridge | None = None,
        glob_func: GlobFunc = default_glob,
    ):
        self._namespaces: dict[str, OptionSet] = {}
        self._settings: SettingsTree | None = None
        self.bridge = bridge or LoggingBridge()
        self.paths = PathResolver(lambda: self._settings, lambda: self.root, glob_func)

        if platform is None:
            install_platform_schema(self.resolve(PLATFORM), self.bridge)
        else:
            self.resolve(PLATFORM, platform)

        if settings is not None:
            self.load_settings(settings)

    # ---- namespaces ----
    def resolve(self, name: object, mutation: Mutation | None = None) -> OptionSet:
        """Return the option set for ``name``, creating it on first use.

        Args:
            name: Namespace name
            mutation: Called with the option set (new or existing) to declare
                or change options

        Returns:
            The one option set registered under ``name``
        """
        key = canonical_name(name)
        options = self._namespaces.get(key)
        if options is None:
            options = OptionSet(key)
            self._namespaces[key] = options
            logger.debug("Created configuration namespace %s", key)
        if mutation is not None:
            mutation(options)
        return options

    def access(self, name: object) -> OptionSet:
        """Read-only flavour of :meth:`resolve`."""
        return self.resolve(name)

    def get(self, name: object) -> OptionSet | None:
        """Return the option set for ``name`` without creating it."""
        return self._namespaces.get(canonical_name(name))

    def all_names(self) -> list[str]:
        """Names of every namespace used so far, in creation order."""
        return list(self._namespaces)

    def __getitem__(self, name: object) -> OptionSet:
        return self.access(name)

    def __contains__(self, name: object) -> bool:
        return canonical_name(name) in self._namespaces

    def __getattr__(self, name: str) -> OptionSet:
        # Fallback for names that are not attributes: treat them as namespaces
        if name.startswith("_"):
            raise AttributeError(name)
        return self.access(name)

    @property
    def platform(self) -> OptionSet:
        """The framework's own option set."""
        return self.resolve(PLATFORM)

    def configure_platform(self, mutation: Mutation) -> OptionSet:
        """Apply ``mutation`` to the platform option set."""
        return self.resolve(PLATFORM, mutation)

    @property
    def root(self) -> Any:
        """Application root folder (``platform.root``)."""
        return self.platform.get("root")

    def configure_logging(self, options: Mapping[str, Any]) -> None:
        """Apply ``level``/``outputters``/``formatter`` options to logging."""
        self.bridge.apply(options)

    # ---- legacy settings ----
    @property
    def settings(self) -> SettingsTree | None:
        """The loaded settings tree, or None before any load."""
        return self._settings

    def load_settings(self, value: SettingsTree | Mapping[str, Any] | str) -> SettingsTree:
        """Replace the settings tree with a mapping or YAML text.

        The previous tree is discarded, never merged.
        """
        self._settings = SettingsTree.from_value(value)
        logger.debug("Settings tree loaded")
        return self._settings

    def load_settings_file(self, path: Path | None = None) -> SettingsTree:
        """Replace the settings tree with the contents of a settings file.

        Args:
            path: File to read (optional, searches default locations if None)
        """
        path = path if path is not None else SettingsTree.locate()
        self._settings = SettingsTree.load(path)
        logger.debug("Loaded settings from %s", path)
        return self._settings

    def files_from_setting(self, *path_segments: Any) -> list[str]:
        """Return the files matched by the glob(s) stored at a settings path.

        Args:
            path_segments: Keys leading through nested settings mappings;
                lists of keys are flattened

        Raises:
            SettingsNotLoadedError: If no settings tree has been loaded
            SettingPathNotFoundError: If the path is missing or empty
            SettingTypeError: If the value is not a pattern or list of patterns
        """
        return self.paths.resolve_paths(*path_segments)

    # ---- descriptions ----
    def description(self, name: object = None, show_values: bool = True, colorize: bool = False) -> str:
        """See :func:`dialframe.config.describe.describe`."""
        return describe(self, name, show_values=show_values, colorize=colorize)
