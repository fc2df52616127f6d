"""Strict date/time parsing with explicit timezone and locale.

The parser walks the tokenized pattern and consumes the input left to
right. Numeric fields written back to back ("yyyyMMddHmmss") share one
run of digits, and every division of that run is tried.

It never guesses: a two-digit year, a name shared by two months, digits
that divide into valid fields more than one way, a 12-hour clock without
an am/pm marker or a wall time that occurs twice on a DST transition
raise ``AmbiguousFormat``. Anything else that does not match raises
``ParseError`` with the offset where matching failed.

Usage:
    parser = CalendarParser(store)
    instant = parser.parse("5 March 2024 14:07", "Europe/Berlin", "en", "d MMMM y HH:mm")
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone as fixed_timezone, tzinfo
from typing import Any

import pytz

from placeless.calendar.formatter import format_offset, weekday_index
from placeless.calendar.patterns import Token, compile_pattern
from placeless.calendar.zones import Instant, resolve_timezone
from placeless.casing import CaseMapper
from placeless.context import LocaleId
from placeless.errors import AmbiguousFormat, ParseError, UnknownTimezone
from placeless.locales.data import CalendarNames
from placeless.locales.store import LocaleStore

_OFFSET_COLON_RE = re.compile(r"([+-])(\d{2}):(\d{2})(?::(\d{2}))?")
_OFFSET_BASIC_RE = re.compile(r"([+-])(\d{2})(\d{2})(\d{2})?")
_ZONE_ID_RE = re.compile(r"[A-Za-z][A-Za-z0-9_+\-]*(?:/[A-Za-z0-9_+\-]+)*")

_FIELD_NAMES = {
    "y": "year",
    "M": "month",
    "d": "day",
    "E": "weekday",
    "H": "hour",
    "h": "hour12",
    "m": "minute",
    "s": "second",
    "S": "microsecond",
    "a": "meridiem",
    "X": "offset",
    "x": "offset",
    "Z": "offset",
    "V": "zone",
}

_NUMERIC_LETTERS = frozenset("yMdHhmsS")

# field name -> inclusive value range
_RANGES = {
    "year": (1, 9999),
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 23),
    "hour12": (1, 12),
    "minute": (0, 59),
    "second": (0, 59),
}


def _is_numeric(token: Token) -> bool:
    if not token.is_field or token.letter not in _NUMERIC_LETTERS:
        return False
    return not (token.letter == "M" and token.width >= 3)


def _is_ascii_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


def _digit_widths(token: Token) -> tuple[int, int]:
    """(minimum, maximum) digits a numeric field reads."""
    letter, width = token.letter, token.width
    if letter == "S":
        return width, width
    if letter == "y":
        if width == 1:
            return 1, 4
        return (2, 2) if width == 2 else (4, 4)
    return (1, 2) if width == 1 else (2, 2)


def _splits(run: tuple[Token, ...], position: int, limit: int):
    """Yield the end offsets of every way ``run`` can read digits up to ``limit``."""
    if not run:
        yield ()
        return
    minimum, maximum = _digit_widths(run[0])
    for end in range(position + minimum, min(position + maximum, limit) + 1):
        for rest in _splits(run[1:], end, limit):
            yield (end,) + rest


def _in_range(run: tuple[Token, ...], ends: tuple[int, ...], text: str, position: int, fields: _Fields) -> bool:
    values = dict(fields.values)
    start = position
    for token, end in zip(run, ends):
        name = _FIELD_NAMES[token.letter]
        value = int(text[start:end])
        bounds = _RANGES.get(name)
        if bounds is not None and not bounds[0] <= value <= bounds[1]:
            return False
        if token.letter == "y" and token.width == 2:
            values.pop("year", None)
        else:
            values[name] = value
        start = end
    year, month, day = values.get("year"), values.get("month"), values.get("day")
    if year is None or month is None or day is None:
        return True
    if 1 <= year <= 9999 and 1 <= month <= 12:
        return day <= calendar.monthrange(year, month)[1]
    return True


def _describe_split(run: tuple[Token, ...], ends: tuple[int, ...], text: str, position: int) -> str:
    parts = []
    start = position
    for token, end in zip(run, ends):
        parts.append(f"{token.value}={text[start:end]}")
        start = end
    return " ".join(parts)


@dataclass
class _Fields:
    """Values collected while walking one input."""

    values: dict[str, Any] = field(default_factory=dict)
    positions: dict[str, int] = field(default_factory=dict)

    def set(self, name: str, value: Any, position: int, text: str) -> None:
        if name in self.values and self.values[name] != value:
            raise ParseError(f"conflicting values for {name}", position, text)
        self.values[name] = value
        self.positions.setdefault(name, position)

    def get(self, name: str) -> Any:
        return self.values.get(name)


class CalendarParser:
    """Parse text into Instants for a named timezone and locale."""

    def __init__(self, store: LocaleStore) -> None:
        self.store = store
        self.case_mapper = CaseMapper(store)

    def parse(
        self,
        text: str,
        timezone: str | tzinfo,
        locale: str | LocaleId,
        pattern: str,
    ) -> Instant:
        """Parse ``text`` according to ``pattern``.

        Args:
            text: Input text
            timezone: Timezone used to place a wall time that carries no offset
            locale: Locale supplying month/weekday names and am/pm markers
            pattern: Pattern in the formatter's pattern language

        Returns:
            The parsed Instant

        Raises:
            ParseError: If the text does not match the pattern or names an
                impossible or nonexistent time
            AmbiguousFormat: If more than one reading is possible
            UnknownTimezone: If ``timezone`` is unknown
            UnknownLocale: If ``locale`` is not in the store
            PatternError: If the pattern is malformed
        """
        zone = resolve_timezone(timezone)
        names = self.store.get(locale).calendar
        compiled = compile_pattern(pattern)
        fields = _Fields()
        tokens = compiled.tokens
        position = 0
        index = 0

        while index < len(tokens):
            token = tokens[index]
            if _is_numeric(token):
                run_end = index + 1
                while run_end < len(tokens) and _is_numeric(tokens[run_end]):
                    run_end += 1
                following = tokens[run_end] if run_end < len(tokens) else None
                position = self._parse_digit_run(tokens[index:run_end], following, text, position, fields)
                index = run_end
                continue
            if token.is_field:
                position = self._parse_field(token, text, position, names, locale, fields)
            else:
                if not text.startswith(token.value, position):
                    raise ParseError(f"expected {token.value!r}", position, text)
                position += len(token.value)
            index += 1

        if position != len(text):
            raise ParseError("unexpected trailing text", position, text)

        return self._assemble(fields, text, zone)

    # ==========================================================================
    # Field Matching
    # ==========================================================================

    def _parse_field(
        self,
        token: Token,
        text: str,
        position: int,
        names: CalendarNames,
        locale: str | LocaleId,
        fields: _Fields,
    ) -> int:
        letter = token.letter
        name = _FIELD_NAMES[letter]

        if letter == "M":
            index, end = self._match_name(
                text, position, names.months_wide, names.months_abbreviated, locale, "month"
            )
            fields.set(name, index + 1, position, text)
            return end
        if letter == "E":
            index, end = self._match_name(
                text, position, names.days_wide, names.days_abbreviated, locale, "weekday"
            )
            fields.set(name, index, position, text)
            return end
        if letter == "a":
            index, end = self._match_name(text, position, (names.am, names.pm), (), locale, "am/pm marker")
            fields.set(name, index, position, text)
            return end
        if letter in ("X", "x", "Z"):
            offset, end = self._offset(token, text, position)
            fields.set(name, offset, position, text)
            return end
        if letter == "V":
            match = _ZONE_ID_RE.match(text, position)
            if match is None:
                raise ParseError("expected timezone id", position, text)
            try:
                zone = resolve_timezone(match.group(0))
            except UnknownTimezone:
                raise ParseError(f"unknown timezone {match.group(0)!r}", position, text) from None
            fields.set(name, zone, position, text)
            return match.end()
        raise ParseError(f"unsupported field {token.value!r}", position, text)

    # ==========================================================================
    # Numeric Fields
    # ==========================================================================

    def _parse_digit_run(
        self,
        run: tuple[Token, ...],
        following: Token | None,
        text: str,
        position: int,
        fields: _Fields,
    ) -> int:
        """Read numeric fields that follow each other with no separator.

        Every way of dividing the digits between the fields is considered.
        A single reading is taken as is; when several remain, the ones with
        out-of-range values are dropped and more than one survivor raises
        ``AmbiguousFormat``.
        """
        span_end = position
        while span_end < len(text) and _is_ascii_digit(text[span_end]):
            span_end += 1

        splits = [
            ends
            for ends in _splits(run, position, span_end)
            if ends[-1] == span_end
            or (following is not None and not following.is_field and text.startswith(following.value, ends[-1]))
        ]

        if not splits:
            # No division fits; read greedily to report where it breaks
            for token in run:
                minimum, maximum = _digit_widths(token)
                end = position
                while end < span_end and end - position < maximum:
                    end += 1
                if end - position < minimum:
                    if minimum == maximum:
                        raise ParseError(f"expected {minimum} digits", position, text)
                    raise ParseError(f"expected {minimum} to {maximum} digits", position, text)
                self._set_numeric(token, text, position, end, fields)
                position = end
            return position

        if len(splits) > 1:
            splits = [ends for ends in splits if _in_range(run, ends, text, position, fields)]
            if not splits:
                raise ParseError("digits do not divide into valid fields", position, text)
            if len(splits) > 1:
                raise AmbiguousFormat(
                    "digits divide into fields in more than one way",
                    position,
                    text,
                    candidates=[_describe_split(run, ends, text, position) for ends in splits],
                )

        start = position
        for token, end in zip(run, splits[0]):
            self._set_numeric(token, text, start, end, fields)
            start = end
        return start

    def _set_numeric(self, token: Token, text: str, start: int, end: int, fields: _Fields) -> None:
        letter, width = token.letter, token.width
        digits = text[start:end]
        if letter == "y" and width == 2:
            raise AmbiguousFormat("two-digit year cannot be resolved", start, text)
        if letter == "S":
            if width > 6 and int(digits[6:]) != 0:
                raise ParseError("fraction finer than a microsecond", start + 6, text)
            fields.set("microsecond", int(digits[:6].ljust(6, "0")), start, text)
            return
        fields.set(_FIELD_NAMES[letter], int(digits), start, text)

    def _match_name(
        self,
        text: str,
        position: int,
        wide: tuple[str, ...],
        abbreviated: tuple[str, ...],
        locale: str | LocaleId,
        what: str,
    ) -> tuple[int, int]:
        """Match the longest name at ``position``, ignoring case.

        Returns:
            (index into the tables, end position)
        """
        best_length = 0
        best: dict[int, str] = {}
        for table in (wide, abbreviated):
            for index, candidate in enumerate(table):
                length = len(candidate)
                if length < best_length:
                    continue
                segment = text[position : position + length]
                if len(segment) != length:
                    continue
                if self.case_mapper.fold(segment, locale) != self.case_mapper.fold(candidate, locale):
                    continue
                if length > best_length:
                    best_length = length
                    best = {}
                best.setdefault(index, candidate)

        if not best:
            raise ParseError(f"expected {what} name", position, text)
        if len(best) > 1:
            raise AmbiguousFormat(
                f"{what} name matches more than one entry",
                position,
                text,
                candidates=[best[index] for index in sorted(best)],
            )
        (index,) = best
        return index, position + best_length

    def _offset(self, token: Token, text: str, position: int) -> tuple[timedelta, int]:
        if token.letter in ("X", "x") and text.startswith("Z", position):
            return timedelta(0), position + 1
        colon = token.letter in ("X", "x") and token.width == 3
        regex = _OFFSET_COLON_RE if colon else _OFFSET_BASIC_RE
        match = regex.match(text, position)
        if match is None:
            expected = "+HH:MM" if colon else "+HHMM"
            raise ParseError(f"expected UTC offset like {expected}", position, text)
        sign, hours, minutes, seconds = match.groups()
        if int(minutes) > 59 or (seconds is not None and int(seconds) > 59):
            raise ParseError("UTC offset out of range", position, text)
        offset = timedelta(hours=int(hours), minutes=int(minutes), seconds=int(seconds or 0))
        if offset >= timedelta(hours=24):
            raise ParseError("UTC offset out of range", position, text)
        return (-offset if sign == "-" else offset), match.end()

    # ==========================================================================
    # Assembly
    # ==========================================================================

    def _assemble(self, fields: _Fields, text: str, zone: tzinfo) -> Instant:
        for required in ("year", "month", "day"):
            if fields.get(required) is None:
                raise ParseError(f"pattern has no {required} field", 0, text)

        hour = self._hour(fields, text)
        try:
            naive = datetime(
                fields.get("year"),
                fields.get("month"),
                fields.get("day"),
                hour,
                fields.get("minute") or 0,
                fields.get("second") or 0,
                fields.get("microsecond") or 0,
            )
        except ValueError as e:
            position = min(fields.positions.get(n, 0) for n in ("year", "month", "day"))
            raise ParseError(f"invalid date or time: {e}", position, text) from None

        weekday = fields.get("weekday")
        if weekday is not None and weekday != weekday_index(naive):
            raise ParseError("weekday does not match the date", fields.positions["weekday"], text)

        named_zone = fields.get("zone")
        target_zone: tzinfo = named_zone if named_zone is not None else zone
        offset = fields.get("offset")

        if offset is not None:
            aware = naive.replace(tzinfo=fixed_timezone(offset))
            if named_zone is not None and aware.astimezone(target_zone).utcoffset() != offset:
                raise ParseError(
                    "UTC offset does not match the timezone", fields.positions["offset"], text
                )
            return Instant.from_datetime(aware)

        localize = getattr(target_zone, "localize", None)
        if localize is None:
            return Instant.from_datetime(naive.replace(tzinfo=target_zone))
        try:
            aware = localize(naive, is_dst=None)
        except pytz.exceptions.AmbiguousTimeError:
            offsets = [localize(naive, is_dst=is_dst).utcoffset() for is_dst in (True, False)]
            raise AmbiguousFormat(
                f"wall time {naive.isoformat()} occurs twice in {target_zone}",
                0,
                text,
                candidates=[format_offset(offset, colon=True, zulu=False) for offset in offsets],
            ) from None
        except pytz.exceptions.NonExistentTimeError:
            raise ParseError(
                f"wall time {naive.isoformat()} does not exist in {target_zone}", 0, text
            ) from None
        return Instant.from_datetime(aware)

    def _hour(self, fields: _Fields, text: str) -> int:
        hour = fields.get("hour")
        hour12 = fields.get("hour12")
        meridiem = fields.get("meridiem")

        if hour12 is not None:
            if not 1 <= hour12 <= 12:
                raise ParseError("12-hour clock hour out of range", fields.positions["hour12"], text)
            if meridiem is None:
                raise AmbiguousFormat(
                    "12-hour clock without am/pm marker", fields.positions["hour12"], text
                )
            converted = hour12 % 12 + (12 if meridiem == 1 else 0)
            if hour is not None and hour != converted:
                raise ParseError("conflicting values for hour", fields.positions["hour"], text)
            return converted
        if hour is None:
            return 0
        if meridiem is not None and (hour >= 12) != (meridiem == 1):
            raise ParseError("am/pm marker does not match the hour", fields.positions["meridiem"], text)
        return hour
