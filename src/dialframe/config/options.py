"""Declarative option sets.

An :class:`OptionSet` is a named, ordered collection of options. Each option
carries a value and an optional human readable description; nested groups are
OptionSets themselves. Plugins declare their options through a mutation
callable handed to :meth:`dialframe.config.Configuration.resolve`::

    config.resolve("voicemail", lambda c: c.declare("greeting", "hello.wav",
                                                    desc="Greeting prompt"))
    config.voicemail.greeting  # -> "hello.wav"

Option values are read and written as attributes. Options whose name clashes
with a method of this class (``get``, ``set``, ``help`` ...) remain reachable
through :meth:`OptionSet.get` and :meth:`OptionSet.set`.
"""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Final

import typer
from pydantic import BaseModel, ConfigDict

logger: Final = logging.getLogger(__name__)

Listener = Callable[[dict[str, Any]], None]


class Option(BaseModel):
    """A single declared option."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    name: str
    value: Any = None
    desc: str | None = None

    def description_lines(self) -> list[str]:
        """Return the description as dedented lines."""
        if not self.desc:
            return []
        return textwrap.dedent(self.desc).strip().splitlines()


class OptionSet:
    """Ordered, named collection of options and nested option groups."""

    def __init__(self, name: str, desc: str | None = None, parent: OptionSet | None = None):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_desc", desc)
        object.__setattr__(self, "_parent", parent)
        object.__setattr__(self, "_entries", {})
        object.__setattr__(self, "_listeners", [])

    # ---- identity ----
    @property
    def name(self) -> str:
        """Name of this set (the namespace or group key)."""
        return self._name

    @property
    def path(self) -> str:
        """Dotted path from the namespace root, e.g. ``platform.logging``."""
        if self._parent is None:
            return self._name
        return f"{self._parent.path}.{self._name}"

    @property
    def desc(self) -> str | None:
        return self._desc

    # ---- declaration ----
    def declare(self, key: str, value: Any = None, desc: str | None = None) -> OptionSet:
        """Declare an option, or update the value of an existing one.

        Only ``key`` is touched; every other option keeps its value. An
        existing description is kept unless a new one is given.

        Returns:
            This option set, so declarations can be chained
        """
        entry = self._entries.get(key)
        if isinstance(entry, OptionSet):
            raise TypeError(f"{self.path}.{key} is an option group, not an option")
        previous = {key: entry.model_copy() if entry is not None else None}
        if entry is None:
            self._entries[key] = Option(name=key, value=value, desc=desc)
            logger.debug("Declared option %s.%s", self.path, key)
        else:
            entry.value = value
            if desc is not None:
                entry.desc = desc
        self._notify({key: value}, previous)
        return self

    def default(self, key: str, value: Any = None, desc: str | None = None) -> OptionSet:
        """Declare an option only if it does not exist yet.

        A value that was already set is never overwritten; a missing
        description is filled in.
        """
        entry = self._entries.get(key)
        if entry is None:
            return self.declare(key, value, desc)
        if desc is not None and entry.desc is None:
            if isinstance(entry, OptionSet):
                object.__setattr__(entry, "_desc", desc)
            else:
                entry.desc = desc
        return self

    def group(self, key: str, desc: str | None = None) -> OptionSet:
        """Return the nested group ``key``, creating it on first use."""
        entry = self._entries.get(key)
        if entry is None:
            entry = OptionSet(key, desc=desc, parent=self)
            self._entries[key] = entry
        elif not isinstance(entry, OptionSet):
            raise TypeError(f"{self.path}.{key} is an option, not an option group")
        elif desc is not None:
            object.__setattr__(entry, "_desc", desc)
        return entry

    def set(self, **values: Any) -> OptionSet:
        """Assign several values at once.

        A mapping assigned to an existing group updates that group in place.
        Listeners are notified once with every plain option touched.
        """
        touched: dict[str, Any] = {}
        previous: dict[str, Option | None] = {}
        for key, value in values.items():
            entry = self._entries.get(key)
            if isinstance(entry, OptionSet):
                if not isinstance(value, Mapping):
                    raise TypeError(f"{self.path}.{key} is an option group; assign a mapping")
                entry.set(**value)
                continue
            previous[key] = entry.model_copy() if entry is not None else None
            if entry is None:
                self._entries[key] = Option(name=key, value=value)
            else:
                entry.value = value
            touched[key] = value
        if touched:
            self._notify(touched, previous)
        return self

    # ---- listeners ----
    def add_listener(self, listener: Listener) -> None:
        """Call ``listener`` with the touched keys after every declare/set.

        A listener that raises rejects the change: the touched options get
        their previous values back before the exception propagates.
        """
        self._listeners.append(listener)

    def _notify(self, changes: dict[str, Any], previous: dict[str, Option | None]) -> None:
        try:
            for listener in self._listeners:
                listener(changes)
        except Exception:
            for key, option in previous.items():
                if option is None:
                    del self._entries[key]
                else:
                    self._entries[key] = option
            raise

    # ---- reading ----
    def get(self, key: str, fallback: Any = None) -> Any:
        """Return the value (or group) stored under ``key``."""
        entry = self._entries.get(key)
        if entry is None:
            return fallback
        if isinstance(entry, OptionSet):
            return entry
        return entry.value

    def option(self, key: str) -> Option | None:
        """Return the :class:`Option` record for ``key`` if it is a plain option."""
        entry = self._entries.get(key)
        return entry if isinstance(entry, Option) else None

    def keys(self) -> list[str]:
        return list(self._entries)

    def items(self) -> list[tuple[str, Any]]:
        return [(key, self.get(key)) for key in self._entries]

    def to_dict(self) -> dict[str, Any]:
        """Return the values as a plain dict, groups as nested dicts."""
        result: dict[str, Any] = {}
        for key, entry in self._entries.items():
            result[key] = entry.to_dict() if isinstance(entry, OptionSet) else entry.value
        return result

    def __getattr__(self, key: str) -> Any:
        # Only reached when normal attribute lookup fails
        if key.startswith("_"):
            raise AttributeError(key)
        entries = self.__dict__.get("_entries", {})
        if key not in entries:
            raise AttributeError(f"{self.path!r} has no option {key!r}")
        return self.get(key)

    def __setattr__(self, key: str, value: Any) -> None:
        if key.startswith("_"):
            object.__setattr__(self, key, value)
        else:
            self.set(**{key: value})

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"OptionSet({self.path!r}, {self.to_dict()!r})"

    # ---- help text ----
    def help(
        self,
        show_values: bool = True,
        name_leader: str = "| * ",
        desc_leader: str = "| ",
        colorize: bool = False,
    ) -> str:
        """Render a description of every option in declaration order.

        Args:
            show_values: Append the current value to every option line
            name_leader: Prefix of lines carrying an option name
            desc_leader: Prefix of description lines
            colorize: Style names and values with ANSI colors

        Returns:
            The rendered text, empty when no option is declared
        """
        lines: list[str] = []
        self._render(lines, "", show_values, name_leader, desc_leader, colorize)
        return "\n".join(lines) + "\n" if lines else ""

    def _render(
        self,
        lines: list[str],
        prefix: str,
        show_values: bool,
        name_leader: str,
        desc_leader: str,
        colorize: bool,
    ) -> None:
        blank = desc_leader.rstrip()
        for key, entry in self._entries.items():
            full_name = f"{prefix}{key}"
            if colorize:
                shown_name = typer.style(full_name, fg=typer.colors.CYAN, bold=True)
            else:
                shown_name = full_name

            if isinstance(entry, OptionSet):
                if entry.desc:
                    lines.extend(
                        f"{desc_leader}{line}"
                        for line in textwrap.dedent(entry.desc).strip().splitlines()
                    )
                lines.append(f"{name_leader}{shown_name}")
                lines.append(blank)
                entry._render(lines, f"{full_name}.", show_values, name_leader, desc_leader, colorize)
                continue

            lines.extend(f"{desc_leader}{line.strip()}" for line in entry.description_lines())
            if show_values:
                value = repr(entry.value)
                if colorize:
                    value = typer.style(value, fg=typer.colors.GREEN)
                lines.append(f"{name_leader}{shown_name} = {value}")
            else:
                lines.append(f"{name_leader}{shown_name}")
            lines.append(blank)
