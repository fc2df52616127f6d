"""Command-line interface for placeless.

Every command takes its locale, timezone and separators from explicit
options or from a ``--config`` file. When neither is given the documented
literal defaults apply (``en``, ``UTC``, ``/``, ``.``); the host locale,
timezone and environment are never read.
"""

import functools
import logging
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Annotated, Any, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from placeless.calendar import DateStyle, Instant, TimeStyle
from placeless.collation import Strength
from placeless.config import EngineConfig
from placeless.context import Context
from placeless.engine import BoundEngine, NormalizationEngine
from placeless.errors import PlacelessError
from placeless.factors import AppearanceOrder, CollationOrder
from placeless.locales.provider import BuiltinLocaleProvider
from placeless.locales.store import LocaleStore
from placeless.numbers import format_number
from placeless.paths import render
from placeless.rendering import (
    PlainTextRenderer,
    RendererCapabilities,
    RendererRegistry,
    RichConsoleRenderer,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
DEFAULT_TIMEZONE = "UTC"
DEFAULT_PATH_SEPARATOR = "/"
DEFAULT_DECIMAL_SEPARATOR = "."

app = typer.Typer(
    name="placeless",
    help="Host-independent text, path, date and number normalization",
    add_completion=False,
)

console = Console()

F = TypeVar("F", bound=Callable[..., Any])


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log locale loading and store lifecycle"),
    ] = False,
) -> None:
    """Host-independent text, path, date and number normalization."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
            force=True,
        )


# =============================================================================
# Shared Options and Helpers
# =============================================================================

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Configuration file (YAML, JSON or TOML)"),
]
LocaleOption = Annotated[
    Optional[str],
    typer.Option("--locale", "-l", help=f"Locale tag (default: {DEFAULT_LOCALE})"),
]
TimezoneOption = Annotated[
    Optional[str],
    typer.Option("--timezone", "-z", help=f"IANA timezone id (default: {DEFAULT_TIMEZONE})"),
]
ColorOption = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Draw output through the rich console renderer"),
]


def handle_errors(func: F) -> F:
    """Turn placeless errors into a red message and exit code 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except PlacelessError as e:
            typer.echo(typer.style(f"Error: {e.message}", fg="red"), err=True)
            raise typer.Exit(1)

    return wrapper  # type: ignore


def _load(
    config_path: Optional[Path],
    locale: Optional[str] = None,
    timezone: Optional[str] = None,
    **overrides: Any,
) -> BoundEngine:
    """Build an engine bound to the context named by options and config."""
    if config_path is not None:
        config = EngineConfig.from_file(config_path)
        engine = config.build_engine()
        base = config.context.to_dict() if config.context is not None else {}
    else:
        engine = NormalizationEngine(LocaleStore.load(BuiltinLocaleProvider()))
        base = {}

    values = {
        "locale_id": DEFAULT_LOCALE,
        "timezone_id": DEFAULT_TIMEZONE,
        "path_separator": DEFAULT_PATH_SEPARATOR,
        "decimal_separator": DEFAULT_DECIMAL_SEPARATOR,
    }
    values.update(base)
    if locale is not None:
        values["locale_id"] = locale
    if timezone is not None:
        values["timezone_id"] = timezone
    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        context = Context.from_dict(values)
    except ValueError as e:
        typer.echo(typer.style(f"Error: {e}", fg="red"), err=True)
        raise typer.Exit(2)
    return engine.bind(context)


def _registry(color: bool) -> RendererRegistry:
    registry = RendererRegistry()
    registry.register(PlainTextRenderer())
    if color:
        registry.register(RichConsoleRenderer(console))
    return registry


def _emit(lines: list[str], color: bool = False) -> None:
    requested = RendererCapabilities.TEXT | RendererCapabilities.UNICODE
    if color:
        requested |= RendererCapabilities.COLOR
    handle = _registry(color).select_renderer(requested)
    for line in lines:
        handle.draw_text(line)


def _read_lines(file: Optional[Path]) -> list[str]:
    if file is None:
        content = sys.stdin.read()
    else:
        if not file.is_file():
            typer.echo(typer.style(f"Error: File not found: {file}", fg="red"), err=True)
            raise typer.Exit(1)
        content = file.read_text(encoding="utf-8")
    return content.splitlines()


# =============================================================================
# Commands
# =============================================================================


@app.command(name="locales")
@handle_errors
def locales_cmd(config: ConfigOption = None) -> None:
    """List the loaded locales."""
    engine = _load(config).engine
    table = Table(title="Locales", show_header=True, header_style="bold magenta")
    table.add_column("Locale")
    table.add_column("Version")
    table.add_column("Decimal")
    table.add_column("Group")
    table.add_column("Collation")
    for tag in engine.store:
        data = engine.store.get(tag)
        group = data.group_separator_default
        table.add_row(
            Text(tag),
            Text(data.version),
            Text(repr(data.decimal_separator_default)),
            Text(repr(group) if group is not None else "-"),
            Text("code point" if data.collation.byte_order else "tailored"),
        )
    console.print(table)


@app.command(name="upper")
@handle_errors
def upper_cmd(
    text: Annotated[str, typer.Argument(help="Text to convert")],
    locale: LocaleOption = None,
    config: ConfigOption = None,
    color: ColorOption = False,
) -> None:
    """Upper-case text with the locale's rules."""
    _emit([_load(config, locale).upper(text)], color)


@app.command(name="lower")
@handle_errors
def lower_cmd(
    text: Annotated[str, typer.Argument(help="Text to convert")],
    locale: LocaleOption = None,
    config: ConfigOption = None,
    color: ColorOption = False,
) -> None:
    """Lower-case text with the locale's rules."""
    _emit([_load(config, locale).lower(text)], color)


@app.command(name="fold")
@handle_errors
def fold_cmd(
    text: Annotated[str, typer.Argument(help="Text to case-fold")],
    locale: LocaleOption = None,
    config: ConfigOption = None,
    color: ColorOption = False,
) -> None:
    """Case-fold text for caseless matching."""
    _emit([_load(config, locale).fold(text)], color)


@app.command(name="sort")
@handle_errors
def sort_cmd(
    file: Annotated[
        Optional[Path],
        typer.Argument(help="File with one value per line (default: stdin)"),
    ] = None,
    locale: LocaleOption = None,
    strength: Annotated[
        Strength,
        typer.Option("--strength", "-s", help="Collation strength"),
    ] = Strength.IDENTICAL,
    numeric: Annotated[
        bool,
        typer.Option("--numeric", "-n", help="Compare digit runs by value"),
    ] = False,
    reverse: Annotated[bool, typer.Option("--reverse", "-r", help="Descending order")] = False,
    config: ConfigOption = None,
    color: ColorOption = False,
) -> None:
    """Sort lines in the locale's collation order."""
    bound = _load(config, locale)
    lines = _read_lines(file)
    _emit(bound.sort(lines, reverse=reverse, strength=strength, numeric=numeric), color)


@app.command(name="path")
@handle_errors
def path_cmd(
    raw: Annotated[str, typer.Argument(help="Path using '/' or '\\' separators")],
    separator: Annotated[
        Optional[str],
        typer.Option("--separator", help="Target separator, '/' or '\\'"),
    ] = None,
    home: Annotated[
        Optional[str],
        typer.Option("--home", help="Home directory substituted for a leading '~'"),
    ] = None,
    collapse: Annotated[
        bool,
        typer.Option("--collapse", help="Resolve '..' segments lexically"),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Normalize a path and render it for a target separator."""
    bound = _load(config, path_separator=separator, home=home)
    spec = bound.normalize_path(raw, collapse_parent=collapse)
    _emit([render(spec, bound.context.path_separator)])


@app.command(name="format-date")
@handle_errors
def format_date_cmd(
    at: Annotated[
        str,
        typer.Argument(help="ISO 8601 timestamp with offset, or epoch seconds"),
    ],
    pattern: Annotated[
        Optional[str],
        typer.Option("--pattern", "-p", help="Date/time pattern, e.g. 'yyyy-MM-dd HH:mm'"),
    ] = None,
    date_style: Annotated[
        Optional[DateStyle],
        typer.Option("--date-style", help="Named date style"),
    ] = None,
    time_style: Annotated[
        Optional[TimeStyle],
        typer.Option("--time-style", help="Named time style"),
    ] = None,
    locale: LocaleOption = None,
    timezone: TimezoneOption = None,
    config: ConfigOption = None,
    color: ColorOption = False,
) -> None:
    """Format an instant in a timezone and locale."""
    instant = _parse_instant(at)
    bound = _load(config, locale, timezone)
    if pattern is not None:
        _emit([bound.format_datetime(instant, pattern)], color)
    else:
        _emit([bound.format_style(instant, date_style or DateStyle.MEDIUM, time_style)], color)


@app.command(name="parse-date")
@handle_errors
def parse_date_cmd(
    text: Annotated[str, typer.Argument(help="Text to parse")],
    pattern: Annotated[str, typer.Option("--pattern", "-p", help="Date/time pattern")],
    locale: LocaleOption = None,
    timezone: TimezoneOption = None,
    config: ConfigOption = None,
    color: ColorOption = False,
) -> None:
    """Parse text into an instant; prints UTC ISO time and epoch seconds."""
    bound = _load(config, locale, timezone)
    instant = bound.parse_datetime(text, pattern)
    seconds = format_number(Decimal(instant.epoch_micros).scaleb(-6), ".")
    _emit([str(instant), seconds], color)


@app.command(name="format-number")
@handle_errors
def format_number_cmd(
    number: Annotated[str, typer.Argument(help="Number written with '.' as decimal mark")],
    decimal: Annotated[
        Optional[str],
        typer.Option("--decimal", "-d", help="Decimal separator"),
    ] = None,
    group: Annotated[
        Optional[str],
        typer.Option("--group", "-g", help="Grouping separator (default: none)"),
    ] = None,
    precision: Annotated[
        Optional[int],
        typer.Option("--precision", help="Fraction digits"),
    ] = None,
    config: ConfigOption = None,
    color: ColorOption = False,
) -> None:
    """Format a number with explicit separators."""
    try:
        value = Decimal(number)
    except InvalidOperation:
        typer.echo(typer.style(f"Error: Not a number: {number!r}", fg="red"), err=True)
        raise typer.Exit(2)
    bound = _load(config, decimal_separator=decimal, group_separator=group)
    _emit([bound.format_number(value, precision=precision)], color)


@app.command(name="levels")
@handle_errors
def levels_cmd(
    values: Annotated[list[str], typer.Argument(help="Values to build levels from")],
    mode: Annotated[
        str,
        typer.Option("--mode", "-m", help="Level order: 'appearance' or 'collation'"),
    ],
    locale: LocaleOption = None,
    strength: Annotated[
        Strength,
        typer.Option("--strength", "-s", help="Collation strength"),
    ] = Strength.IDENTICAL,
    config: ConfigOption = None,
) -> None:
    """Build ordered factor levels; the ordering mode is required."""
    bound = _load(config, locale)
    if mode == "appearance":
        levels = bound.factor_levels(values, AppearanceOrder())
    elif mode == "collation":
        levels = bound.factor_levels(values, CollationOrder(bound.locale, strength))
    else:
        typer.echo(
            typer.style(f"Error: Unknown mode {mode!r}; use 'appearance' or 'collation'", fg="red"),
            err=True,
        )
        raise typer.Exit(2)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Code", justify="right")
    table.add_column("Level")
    for code, level in enumerate(levels.levels):
        table.add_row(str(code), Text(level))
    console.print(table)


def _parse_instant(value: str) -> Instant:
    try:
        seconds: Optional[Decimal] = Decimal(value)
    except InvalidOperation:
        seconds = None
    if seconds is not None and seconds.is_finite():
        return Instant.from_epoch_seconds(seconds)

    try:
        parsed: Optional[datetime] = datetime.fromisoformat(value)
    except ValueError:
        parsed = None
    if parsed is None or parsed.tzinfo is None:
        typer.echo(
            typer.style(
                f"Error: Expected epoch seconds or an ISO 8601 timestamp with offset, got {value!r}",
                fg="red",
            ),
            err=True,
        )
        raise typer.Exit(2)
    return Instant.from_datetime(parsed)


if __name__ == "__main__":
    app()
