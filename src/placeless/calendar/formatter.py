"""Instant formatting with explicit timezone and locale.

Usage:
    formatter = CalendarFormatter(store)
    instant = Instant.from_datetime(datetime(2024, 3, 5, 14, 7, tzinfo=pytz.utc))

    formatter.format(instant, "Europe/Berlin", "de", "EEEE, d. MMMM y HH:mm")
    # "Dienstag, 5. März 2024 15:07"

    formatter.format_style(instant, "UTC", "en", DateStyle.MEDIUM, TimeStyle.SHORT)
    # "Mar 5, 2024 2:07 PM"
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from enum import Enum

from placeless.calendar.patterns import Token, compile_pattern
from placeless.calendar.zones import Instant, resolve_timezone, timezone_name
from placeless.context import LocaleId
from placeless.locales.data import CalendarNames
from placeless.locales.store import LocaleStore


class DateStyle(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    FULL = "full"


class TimeStyle(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    FULL = "full"


def weekday_index(value: datetime) -> int:
    """Index into Sunday-first weekday tables."""
    return (value.weekday() + 1) % 7


def format_offset(offset: timedelta, colon: bool, zulu: bool) -> str:
    """Render a UTC offset as "+05:30" / "+0530" (or "Z" when ``zulu``)."""
    total = int(offset.total_seconds())
    if total == 0 and zulu:
        return "Z"
    sign = "-" if total < 0 else "+"
    total = abs(total)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    separator = ":" if colon else ""
    text = f"{sign}{hours:02d}{separator}{minutes:02d}"
    if seconds:
        text += f"{separator}{seconds:02d}"
    return text


def style_pattern(
    names: CalendarNames,
    date_style: DateStyle | None,
    time_style: TimeStyle | None,
) -> str:
    """Build the pattern for a date/time style combination.

    Raises:
        ValueError: If neither style is given
    """
    if date_style is None and time_style is None:
        raise ValueError("At least one of date_style and time_style is required")
    date_pattern = names.pattern(f"date_{DateStyle(date_style).value}") if date_style else None
    time_pattern = names.pattern(f"time_{TimeStyle(time_style).value}") if time_style else None
    if date_pattern is None:
        return time_pattern  # type: ignore[return-value]
    if time_pattern is None:
        return date_pattern
    template = names.pattern("datetime")
    return template.replace("{date}", date_pattern).replace("{time}", time_pattern)


def _format_field(token: Token, value: datetime, names: CalendarNames, zone: tzinfo) -> str:
    letter, width = token.letter, token.width

    if letter == "y":
        if width == 2:
            return f"{value.year % 100:02d}"
        if width == 4:
            return f"{value.year:04d}"
        return str(value.year)
    if letter == "M":
        if width == 4:
            return names.months_wide[value.month - 1]
        if width == 3:
            return names.months_abbreviated[value.month - 1]
        return f"{value.month:0{width}d}"
    if letter == "d":
        return f"{value.day:0{width}d}"
    if letter == "E":
        if width == 4:
            return names.days_wide[weekday_index(value)]
        return names.days_abbreviated[weekday_index(value)]
    if letter == "H":
        return f"{value.hour:0{width}d}"
    if letter == "h":
        return f"{value.hour % 12 or 12:0{width}d}"
    if letter == "m":
        return f"{value.minute:0{width}d}"
    if letter == "s":
        return f"{value.second:0{width}d}"
    if letter == "S":
        return f"{value.microsecond:06d}"[:width].ljust(width, "0")
    if letter == "a":
        return names.am if value.hour < 12 else names.pm
    if letter == "X":
        return format_offset(value.utcoffset(), colon=True, zulu=True)
    if letter == "x":
        return format_offset(value.utcoffset(), colon=width == 3, zulu=False)
    if letter == "Z":
        return format_offset(value.utcoffset(), colon=False, zulu=False)
    if letter == "V":
        return timezone_name(zone)
    raise AssertionError(f"unhandled pattern field {token.value!r}")


class CalendarFormatter:
    """Format instants for a named timezone and locale."""

    def __init__(self, store: LocaleStore) -> None:
        self.store = store

    def format(
        self,
        instant: Instant,
        timezone: str | tzinfo,
        locale: str | LocaleId,
        pattern: str,
    ) -> str:
        """Format ``instant`` as wall time in ``timezone``.

        Raises:
            UnknownTimezone: If the timezone id is unknown
            UnknownLocale: If the locale is not in the store
            PatternError: If the pattern is malformed
        """
        zone = resolve_timezone(timezone)
        names = self.store.get(locale).calendar
        compiled = compile_pattern(pattern)
        local = instant.to_datetime(zone)
        return "".join(
            _format_field(token, local, names, zone) if token.is_field else token.value
            for token in compiled.tokens
        )

    def format_style(
        self,
        instant: Instant,
        timezone: str | tzinfo,
        locale: str | LocaleId,
        date_style: DateStyle | None = DateStyle.MEDIUM,
        time_style: TimeStyle | None = None,
    ) -> str:
        """Format with the locale's named date and time styles."""
        names = self.store.get(locale).calendar
        return self.format(instant, timezone, locale, style_pattern(names, date_style, time_style))
