"""CLI entry point for bidi-entry.

Launches the demo TUI by default and offers headless subcommands for
inspecting how a string is hinted and how positions translate.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from bidi_entry import __version__
from bidi_entry.config.paths import CONFIG_FILE
from bidi_entry.config.settings import Settings
from bidi_entry.utils.bidi import has_rtl
from bidi_entry.utils.graphemes import InvalidPositionError, Unit
from bidi_entry.utils.visual import build_visual

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json_output(data: Any, *, compact: bool = False) -> None:
    """Print *data* as JSON to stdout."""
    indent = None if compact else 2
    click.echo(json.dumps(data, indent=indent, ensure_ascii=True))


def _error(msg: str) -> NoReturn:
    """Print an error message to stderr and exit with code 1."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _setup_logging(settings: Settings) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.logging.file:
        handlers.append(logging.FileHandler(settings.logging.file, encoding="utf-8"))
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


UNIT_CHOICE = click.Choice([u.value for u in Unit], case_sensitive=False)

# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="bidi-entry")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: XDG config dir).",
)
@click.option("--json", "compact_json", is_flag=True, help="Compact JSON output.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, compact_json: bool) -> None:
    """bidi-entry -- direction-hinted text entry for terminals.

    Launch without arguments to start the demo input field.
    Use subcommands to inspect hinting and offsets headlessly.
    """
    try:
        settings = Settings.load(config_path or CONFIG_FILE)
    except ValueError as exc:
        _error(f"Invalid config: {exc}")
    _setup_logging(settings)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["config_path"] = config_path or CONFIG_FILE
    ctx.obj["compact"] = compact_json

    if ctx.invoked_subcommand is None:
        from bidi_entry.app import BidiEntryApp

        app = BidiEntryApp(settings=settings)
        app.run()


# ---------------------------------------------------------------------------
# Headless commands
# ---------------------------------------------------------------------------


@main.command()
@click.argument("text")
@click.pass_context
def inspect(ctx: click.Context, text: str) -> None:
    """Show how TEXT is hinted and the offsets it introduces."""
    visual = build_visual(text, _settings(ctx).bidi.encoding)
    _json_output(
        {
            "logical": text,
            "visual": visual.text,
            "hinted": visual.hinted,
            "has_rtl": has_rtl(text),
            "encoding": visual.encoding,
            "offsets": visual.offsets.as_dict(),
            "logical_length": {u.value: visual.logical_length(u) for u in Unit},
            "visual_length": {u.value: visual.length(u) for u in Unit},
        },
        compact=ctx.obj["compact"],
    )


@main.command()
@click.argument("text")
@click.argument("position", type=int)
@click.option(
    "--unit", "-u", type=UNIT_CHOICE, default="grapheme", show_default=True, help="Position unit."
)
@click.option(
    "--to",
    "target",
    type=click.Choice(["logical", "visual"]),
    default="visual",
    show_default=True,
    help="Coordinate space to translate into.",
)
@click.pass_context
def translate(ctx: click.Context, text: str, position: int, unit: str, target: str) -> None:
    """Translate POSITION within TEXT between logical and visual space."""
    visual = build_visual(text, _settings(ctx).bidi.encoding)
    unit_enum = Unit(unit.lower())
    try:
        if target == "visual":
            result = visual.to_visual(position, unit_enum)
        else:
            result = visual.to_logical(position, unit_enum)
    except InvalidPositionError as exc:
        _error(str(exc))

    _json_output(
        {
            "unit": unit_enum.value,
            "from": "logical" if target == "visual" else "visual",
            "to": target,
            "position": position,
            "result": result,
            "hinted": visual.hinted,
        },
        compact=ctx.obj["compact"],
    )


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Print the config file path (the default file is created on first load)."""
    click.echo(str(ctx.obj["config_path"]))
