"""Number formatting and parsing with explicit separators.

The decimal mark and grouping separator are always passed in (directly or
through a ``Context``); nothing is read from the process locale. Floats are
written with their shortest round-trip representation and never in
exponent notation.

Usage:
    format_number(1234.5, ",")                               # "1234,5"
    format_number(1234567.891, ",", group_separator=".")     # "1.234.567,891"
    format_number(12345678, ".", group_separator=",", secondary_group_size=2)
    # "1,23,45,678"

    parse_number("1.234,5", ",", group_separator=".")        # 1234.5
    parse_number("1.234,5", ",", group_separator=".", exact=True)
    # Decimal("1234.5")

    fmt = NumberFormat.from_context(ctx)
    fmt.format(0.1)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace as dc_replace
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext
from typing import Any, Union

from placeless.context import Context
from placeless.errors import ParseError
from placeless.locales.data import LocaleData

Number = Union[int, float, Decimal]

NAN_TEXT = "NaN"
INFINITY_TEXT = "∞"
DEFAULT_MINUS = "-"


# ==============================================================================
# Grouping
# ==============================================================================


def apply_grouping(
    int_part: str,
    group_separator: str,
    group_size: int = 3,
    secondary_group_size: int | None = None,
) -> str:
    """Insert grouping separators into a run of integer digits.

    The rightmost group has ``group_size`` digits; the groups to its left
    have ``secondary_group_size`` digits when set (2 for Indian-style
    grouping), otherwise ``group_size``.
    """
    if len(int_part) <= group_size:
        return int_part
    secondary = secondary_group_size or group_size
    groups = [int_part[-group_size:]]
    remaining = int_part[:-group_size]
    while remaining:
        groups.insert(0, remaining[-secondary:])
        remaining = remaining[:-secondary]
    return group_separator.join(groups)


def _check_separators(decimal_separator: str, group_separator: str | None, minus: str) -> None:
    if not decimal_separator:
        raise ValueError("decimal_separator must not be empty")
    for name, value in (("decimal_separator", decimal_separator), ("group_separator", group_separator)):
        if value is None:
            continue
        if not value or any(ch.isdigit() for ch in value) or value == minus:
            raise ValueError(f"{name} must be a non-empty, non-digit string, got {value!r}")
    if group_separator is not None and group_separator == decimal_separator:
        raise ValueError("decimal_separator and group_separator must differ")


# ==============================================================================
# Formatting
# ==============================================================================


def _to_decimal(number: Number) -> Decimal:
    if isinstance(number, bool) or not isinstance(number, (int, float, Decimal)):
        raise TypeError(f"Expected int, float or Decimal, got {type(number).__name__}")
    if isinstance(number, float):
        return Decimal(repr(number))
    return Decimal(number)


def format_number(
    number: Number,
    decimal_separator: str,
    *,
    group_separator: str | None = None,
    group_size: int = 3,
    secondary_group_size: int | None = None,
    precision: int | None = None,
    minus: str = DEFAULT_MINUS,
) -> str:
    """Format a number with explicit separators.

    Args:
        number: int, float or Decimal
        decimal_separator: Decimal mark, e.g. "." or ","
        group_separator: Grouping mark; None disables grouping
        group_size: Digits in the rightmost group
        secondary_group_size: Digits in the other groups (defaults to group_size)
        precision: Fraction digits, rounded half to even; None keeps all
        minus: Minus sign

    Returns:
        Formatted number. NaN renders as "NaN" and infinities as "∞"/"-∞".

    Raises:
        TypeError: If ``number`` is not numeric
        ValueError: If separators are invalid or precision is negative
    """
    _check_separators(decimal_separator, group_separator, minus)
    if group_size < 1 or (secondary_group_size is not None and secondary_group_size < 1):
        raise ValueError("group sizes must be positive")
    if precision is not None and precision < 0:
        raise ValueError("precision must not be negative")

    value = _to_decimal(number)
    if value.is_nan():
        return NAN_TEXT
    if value.is_infinite():
        return (minus if value < 0 else "") + INFINITY_TEXT

    if precision is not None:
        with localcontext() as ctx:
            ctx.prec = max(28, value.adjusted() + precision + 2)
            value = value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_EVEN)

    text = format(value, "f")
    negative = text.startswith("-")
    if negative:
        text = text[1:]
    int_part, _, frac_part = text.partition(".")

    if group_separator is not None:
        int_part = apply_grouping(int_part, group_separator, group_size, secondary_group_size)

    formatted = f"{int_part}{decimal_separator}{frac_part}" if frac_part else int_part
    return f"{minus}{formatted}" if negative else formatted


# ==============================================================================
# Parsing
# ==============================================================================


def _check_groups(
    groups: list[str],
    text: str,
    offset: int,
    group_size: int,
    secondary_group_size: int | None,
) -> None:
    secondary = secondary_group_size or group_size
    position = offset
    for i, group in enumerate(groups):
        if i == 0:
            valid = 1 <= len(group) <= secondary
        elif i == len(groups) - 1:
            valid = len(group) == group_size
        else:
            valid = len(group) == secondary
        if not valid:
            raise ParseError("misplaced group separator", position, text)
        position += len(group) + 1


def parse_number(
    text: str,
    decimal_separator: str,
    *,
    group_separator: str | None = None,
    group_size: int = 3,
    secondary_group_size: int | None = None,
    exact: bool = False,
    minus: str = DEFAULT_MINUS,
) -> Number:
    """Parse a number written with explicit separators.

    Grouping separators are accepted only where ``format_number`` would put
    them, so "1,5" is never read as 15 when "," is the grouping mark.

    Args:
        text: Input text (no surrounding whitespace)
        decimal_separator: Expected decimal mark
        group_separator: Expected grouping mark; None rejects grouping
        group_size: Digits in the rightmost group
        secondary_group_size: Digits in the other groups
        exact: Return a Decimal instead of int/float
        minus: Minus sign

    Returns:
        int when there is no fraction, float otherwise; Decimal when ``exact``

    Raises:
        ParseError: If the text is not a number in this format
    """
    _check_separators(decimal_separator, group_separator, minus)
    if not isinstance(text, str) or not text:
        raise ParseError("empty number", 0, str(text))

    position = 0
    negative = False
    if text.startswith(minus):
        negative = True
        position = len(minus)
    elif minus != DEFAULT_MINUS and text.startswith(DEFAULT_MINUS):
        negative = True
        position = 1

    body = text[position:]
    if body == NAN_TEXT and not negative:
        return Decimal("NaN") if exact else math.nan
    if body == INFINITY_TEXT:
        if exact:
            return Decimal("-Infinity") if negative else Decimal("Infinity")
        return -math.inf if negative else math.inf

    int_text, has_fraction, frac_text = body.partition(decimal_separator)
    if has_fraction and not frac_text:
        raise ParseError("expected digits after decimal separator", len(text), text)

    if group_separator is not None and group_separator in int_text:
        groups = int_text.split(group_separator)
        _check_groups(groups, text, position, group_size, secondary_group_size)
        int_digits = "".join(groups)
    else:
        int_digits = int_text

    if not int_digits:
        raise ParseError("expected digits", position, text)
    for i, ch in enumerate(int_text):
        if not (ch.isascii() and ch.isdigit()) and not (group_separator and ch in group_separator):
            raise ParseError(f"unexpected character {ch!r}", position + i, text)
    frac_start = position + len(int_text) + len(decimal_separator)
    for i, ch in enumerate(frac_text):
        if not (ch.isascii() and ch.isdigit()):
            raise ParseError(f"unexpected character {ch!r}", frac_start + i, text)

    sign = "-" if negative else ""
    if exact:
        try:
            return Decimal(f"{sign}{int_digits}.{frac_text}" if has_fraction else f"{sign}{int_digits}")
        except InvalidOperation as e:
            raise ParseError(f"not a number: {e}", 0, text) from None
    if has_fraction:
        return float(f"{sign}{int_digits}.{frac_text}")
    return int(f"{sign}{int_digits}")


# ==============================================================================
# Configuration Object
# ==============================================================================


@dataclass(frozen=True)
class NumberFormat:
    """Reusable number format settings.

    Attributes:
        decimal_separator: Decimal mark
        group_separator: Grouping mark, None disables grouping
        group_size: Digits in the rightmost group
        secondary_group_size: Digits in the other groups
        precision: Fraction digits, None keeps all
        minus: Minus sign
    """

    decimal_separator: str = "."
    group_separator: str | None = None
    group_size: int = 3
    secondary_group_size: int | None = None
    precision: int | None = None
    minus: str = DEFAULT_MINUS

    def __post_init__(self) -> None:
        _check_separators(self.decimal_separator, self.group_separator, self.minus)

    @classmethod
    def from_context(cls, context: Context, **overrides: Any) -> "NumberFormat":
        """Take the separators from a Context."""
        return cls(
            decimal_separator=context.decimal_separator,
            group_separator=context.group_separator,
            **overrides,
        )

    @classmethod
    def from_locale(cls, data: LocaleData, **overrides: Any) -> "NumberFormat":
        """Take the separators customary for a locale."""
        return cls(
            decimal_separator=data.decimal_separator_default,
            group_separator=data.group_separator_default,
            **overrides,
        )

    def replace(self, **changes: Any) -> "NumberFormat":
        return dc_replace(self, **changes)

    def format(self, number: Number) -> str:
        return format_number(
            number,
            self.decimal_separator,
            group_separator=self.group_separator,
            group_size=self.group_size,
            secondary_group_size=self.secondary_group_size,
            precision=self.precision,
            minus=self.minus,
        )

    def parse(self, text: str, exact: bool = False) -> Number:
        return parse_number(
            text,
            self.decimal_separator,
            group_separator=self.group_separator,
            group_size=self.group_size,
            secondary_group_size=self.secondary_group_size,
            exact=exact,
            minus=self.minus,
        )
