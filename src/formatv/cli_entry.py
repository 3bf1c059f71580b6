"""Click CLI wiring and entry points for formatv."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional, cast

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from src.config_loader import ConfigError, fresh_config, load_config
from src.datatypes import FormatvConfig

from .cli_utils import coerce_arguments, describe_item
from .env_flags import CONFIG_ENV_VAR
from .errors import FormatvError
from .replacement import parse_format_string
from .session import formatv
from .sinks import ConsoleSink

_DEFAULT_CONFIG_HELP = f"Path to a formatv TOML config. Defaults to ${CONFIG_ENV_VAR} when set."


def _configure_logging(verbose: bool) -> None:
    """Route library debug logging to stderr through Rich when ``--verbose`` is given."""

    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_cli_config(config_path: Optional[str]) -> FormatvConfig:
    path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return fresh_config()
    try:
        return load_config(path)
    except FileNotFoundError:
        raise click.ClickException(f"Config file not found at {path}") from None
    except ConfigError as exc:
        raise click.ClickException(f"Config parsing failed: {exc}") from exc


def _context_config(ctx: click.Context) -> FormatvConfig:
    params = cast(Dict[str, Any], ctx.ensure_object(dict))
    return cast(FormatvConfig, params["config"])


def _make_console(config: FormatvConfig) -> Console:
    return Console(no_color=config.cli.no_color, highlight=False, soft_wrap=True)


@click.group()
@click.option("--config", "config_path", default=None, show_default=False, help=_DEFAULT_CONFIG_HELP)
@click.option("--strict", is_flag=True, help="Reject malformed format strings instead of recovering.")
@click.option("--verbose", is_flag=True, help="Show debug logging, including recovered format errors.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colour output.")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], strict: bool, verbose: bool, no_color: bool) -> None:
    """Render and inspect formatv format strings."""

    _configure_logging(verbose)
    config = _load_cli_config(config_path)
    if strict:
        config.parsing.strict = True
    if no_color:
        config.cli.no_color = True
    params = cast(Dict[str, Any], ctx.ensure_object(dict))
    params["config"] = config


@main.command("render")
@click.argument("fmt", metavar="FORMAT")
@click.argument("values", metavar="[ARGS]...", nargs=-1)
@click.option("--raw", is_flag=True, help="Pass every argument through as a string.")
@click.option("-n", "--no-newline", is_flag=True, help="Do not print a trailing newline.")
@click.pass_context
def render(ctx: click.Context, fmt: str, values: tuple[str, ...], raw: bool, no_newline: bool) -> None:
    """Format ARGS according to FORMAT and print the result."""

    config = _context_config(ctx)
    arguments = coerce_arguments(values, enabled=config.cli.coerce_arguments and not raw)
    try:
        session = formatv(fmt, *arguments, config=config)
    except FormatvError as exc:
        raise click.ClickException(str(exc)) from exc
    sink = ConsoleSink(_make_console(config))
    session.format(sink)
    if not no_newline:
        sink.write("\n")


@main.command("parse")
@click.argument("fmt", metavar="FORMAT")
@click.option("--json", "json_mode", is_flag=True, help="Emit the parsed items as JSON.")
@click.pass_context
def parse(ctx: click.Context, fmt: str, json_mode: bool) -> None:
    """Show how FORMAT is split into literal and replacement items."""

    config = _context_config(ctx)
    try:
        items = parse_format_string(fmt, strict=config.parsing.strict)
    except FormatvError as exc:
        raise click.ClickException(str(exc)) from exc
    described = [describe_item(position, item) for position, item in enumerate(items)]

    if json_mode:
        click.echo(json.dumps(described, indent=2))
        return

    table = Table(title="Replacement items")
    for column in ("#", "type", "spec", "index", "width", "align", "pad", "options"):
        table.add_column(column)
    for entry in described:
        cells = (
            str(entry["position"]),
            entry["type"],
            repr(entry["spec"]),
            str(entry.get("index", "")),
            str(entry.get("width", "")),
            str(entry.get("align", "")),
            repr(entry["pad"]) if "pad" in entry else "",
            repr(entry["options"]) if "options" in entry else "",
        )
        table.add_row(*(Text(cell) for cell in cells))
    _make_console(config).print(table)


cli = main
