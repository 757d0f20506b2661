"""Built-in options of the ``platform`` namespace."""

from __future__ import annotations

from dialframe.config.logging_bridge import LEVELS, LoggingBridge, basic_formatter
from dialframe.config.options import OptionSet

PLATFORM: str = "platform"


def install_platform_schema(options: OptionSet, bridge: LoggingBridge | None = None) -> OptionSet:
    """Declare the framework's own options on ``options``.

    Values already present are kept, so the schema can be installed over an
    option set that a plugin or the embedder has touched first. When a bridge
    is given it listens to the ``logging`` group from then on; installing the
    defaults does not reconfigure logging.

    Returns:
        The same option set
    """
    options.default("root", None, desc="Application root folder")
    options.default(
        "automatically_accept_incoming_calls",
        True,
        desc="Accept every inbound call automatically",
    )

    logging_group = options.group("logging", desc="Log configuration")
    logging_group.default(
        "level",
        "info",
        desc=f"Supported levels (in increasing severity) -- {' < '.join(LEVELS)}",
    )
    logging_group.default(
        "outputters",
        None,
        desc="A list of log outputters to use: logging.Handler objects, "
        "'stdout', 'stderr' or file paths",
    )
    logging_group.default(
        "formatters",
        [basic_formatter()],
        desc="A list of log formatters to apply to the outputters in use",
    )
    logging_group.default(
        "formatter",
        None,
        desc="A log formatter to apply to all active outputters",
    )

    if bridge is not None:
        logging_group.add_listener(bridge.apply)
    return options


def canonical_name(name: object) -> str:
    """Normalize a namespace name; None and "" mean ``platform``."""
    if name is None or name == "":
        return PLATFORM
    return str(name)
