"""dialframe command-line interface.

Inspect the platform configuration and the legacy ``.ahnrc`` settings of a
dialframe application.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final

import typer

from dialframe.config import Configuration, ConfigurationError, SettingsTree

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="dialframe application CLI", add_completion=False)
config_app = typer.Typer(help="Configuration helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "dialframe.cli"

SETTINGS_OPTION = typer.Option(
    None, "--settings", "-s", dir_okay=False, help="Settings file (default: .ahnrc)"
)
ROOT_OPTION = typer.Option(None, "--root", "-r", file_okay=False, help="Application root folder")
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
VALUES_OPTION = typer.Option(True, "--values/--no-values", help="Show current values")
COLOR_OPTION = typer.Option(False, "--color", help="Colorize the output")
NAME_ARGUMENT = typer.Argument(None, help="Configuration name (default: platform)")
SEGMENTS_ARGUMENT = typer.Argument(..., help="Keys leading to the setting")


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _build_config(settings: Path | None, root: Path | None) -> Configuration:
    config = Configuration()
    if root is not None:
        config.platform.root = str(root)
    config.load_settings_file(settings)
    return config


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("describe")
def describe_config(
    name: str | None = NAME_ARGUMENT,
    values: bool = VALUES_OPTION,
    color: bool = COLOR_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Describe the built-in platform options.

    No plugins are loaded by the CLI, so ``platform`` is the only registered
    configuration; ``all`` prints just its section.
    """
    _setup_logging(debug)
    config = Configuration()
    text = config.description(name, show_values=values, colorize=color)
    if not text:
        typer.secho(f"No configuration named {name!r}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    typer.echo(text, nl=False)


@config_app.command("files")
def files(
    segments: list[str] = SEGMENTS_ARGUMENT,
    settings: Path | None = SETTINGS_OPTION,
    root: Path | None = ROOT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """List the files matched by the globs stored at a settings path."""
    _setup_logging(debug)
    try:
        config = _build_config(settings, root)
        logger.debug("Resolving files for %s", segments)
        for path in config.files_from_setting(*segments):
            typer.echo(path)
    except (ConfigurationError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("validate")
def validate_settings(file: Path):
    """Check that a settings file parses."""
    try:
        SettingsTree.load(file)
        typer.echo("✅ Settings valid")
    except (ConfigurationError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
