"""Human readable descriptions of registered configurations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from dialframe.config.platform import canonical_name

if TYPE_CHECKING:
    from dialframe.config.registry import Configuration

ALL: Final = "all"
NAME_LEADER: Final = "| * "
DESC_LEADER: Final = "| "


def section_header(name: str) -> str:
    return f"******* Configuration for {name} **************\n"


def describe(
    config: Configuration,
    name: object = None,
    show_values: bool = True,
    colorize: bool = False,
) -> str:
    """Describe the options of one configuration, or of all of them.

    Args:
        config: Registry to read from
        name: Namespace name; None means ``platform`` and ``"all"`` every
            registered namespace, each under its own header
        show_values: Include current values next to option names
        colorize: Style option names and values with ANSI colors

    Returns:
        The description, or an empty string for an unknown name
    """
    key = canonical_name(name)
    if key == ALL:
        return "".join(
            section_header(each) + _describe_one(config, each, show_values, colorize)
            for each in config.all_names()
        )
    return _describe_one(config, key, show_values, colorize)


def _describe_one(config: Configuration, key: str, show_values: bool, colorize: bool) -> str:
    # No "all" handling here: a namespace may itself be named "all"
    options = config.get(key)
    if options is None:
        return ""
    return options.help(
        show_values=show_values,
        name_leader=NAME_LEADER,
        desc_leader=DESC_LEADER,
        colorize=colorize,
    )
