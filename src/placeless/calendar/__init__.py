"""Gregorian calendar formatting and parsing with explicit timezone and locale."""

from placeless.calendar.formatter import CalendarFormatter, DateStyle, TimeStyle, style_pattern
from placeless.calendar.parser import CalendarParser
from placeless.calendar.patterns import Pattern, Token, TokenKind, compile_pattern
from placeless.calendar.zones import Instant, available_timezones, resolve_timezone

__all__ = [
    "CalendarFormatter",
    "CalendarParser",
    "DateStyle",
    "Instant",
    "Pattern",
    "TimeStyle",
    "Token",
    "TokenKind",
    "available_timezones",
    "compile_pattern",
    "resolve_timezone",
    "style_pattern",
]
