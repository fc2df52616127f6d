"""Immutable, versioned locale tables.

A ``LocaleData`` holds everything locale-specific the engine needs:
collation tailoring, special-casing exceptions, calendar names and the
default number separators. Instances are frozen and built once by a
provider; the mapping form produced by ``to_dict`` is the transport format
read by ``FileLocaleProvider``.

Mapping form:
    locale_id: tr
    version: "2024.1"
    collation:
      before: {i: ["ı"]}
      after: {c: ["ç"], g: ["ğ"], o: ["ö"], s: ["ş"], u: ["ü"]}
      case_first: lower
    special_casing:
      - {source: "I", target: "ı", operation: lower}
    calendar:
      months_wide: [...12 names...]
      months_abbreviated: [...12 names...]
      days_wide: [...7 names, Sunday first...]
      days_abbreviated: [...7 names...]
      am: ÖÖ
      pm: ÖS
      patterns: {date_long: "d MMMM y"}
    decimal_separator: ","
    group_separator: "."
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from placeless.context import canonical_tag


class CasingOperation(str, Enum):
    """Case mapping operation a special-casing rule applies to."""

    UPPER = "upper"
    LOWER = "lower"
    FOLD = "fold"


class CaseFirst(str, Enum):
    """Which case sorts first at the tertiary collation level."""

    LOWER = "lower"
    UPPER = "upper"


@dataclass(frozen=True)
class SpecialCasingRule:
    """Locale-specific exception to the default Unicode case mapping.

    Attributes:
        source: Text matched in the input (may be several code points)
        target: Replacement text
        operation: Operation the rule applies to
    """

    source: str
    target: str
    operation: CasingOperation

    def __post_init__(self) -> None:
        if not self.source:
            raise ValueError("Special casing rule source must not be empty")
        object.__setattr__(self, "operation", CasingOperation(self.operation))

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target, "operation": self.operation.value}


def _freeze_tailoring(value: Mapping[str, Any] | None) -> Mapping[str, tuple[str, ...]]:
    frozen: dict[str, tuple[str, ...]] = {}
    for anchor, letters in (value or {}).items():
        if isinstance(letters, str):
            letters = [letters]
        if not anchor or any(not letter for letter in letters):
            raise ValueError("Collation tailoring entries must not be empty")
        frozen[anchor.casefold()] = tuple(letter.casefold() for letter in letters)
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class CollationTable:
    """Collation tailoring for one locale.

    The root order places characters by class (whitespace and punctuation,
    symbols, digits, letters) and letters by their accent-free, case-free
    identity. A tailoring moves letters relative to an anchor letter at the
    primary level. An entry longer than one character is a contraction and
    sorts as a single letter.

    Attributes:
        after: anchor -> letters placed right after the anchor, in order
        before: anchor -> letters placed right before the anchor, in order
        case_first: Which case sorts first among otherwise equal strings
        byte_order: Ignore all tailoring and compare raw code points
    """

    after: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    before: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    case_first: CaseFirst = CaseFirst.LOWER
    byte_order: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "after", _freeze_tailoring(self.after))
        object.__setattr__(self, "before", _freeze_tailoring(self.before))
        object.__setattr__(self, "case_first", CaseFirst(self.case_first))

    def to_dict(self) -> dict[str, Any]:
        return {
            "after": {k: list(v) for k, v in self.after.items()},
            "before": {k: list(v) for k, v in self.before.items()},
            "case_first": self.case_first.value,
            "byte_order": self.byte_order,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "CollationTable":
        data = data or {}
        return cls(
            after=data.get("after") or {},
            before=data.get("before") or {},
            case_first=data.get("case_first", CaseFirst.LOWER.value),
            byte_order=bool(data.get("byte_order", False)),
        )


_DEFAULT_PATTERNS = {
    "date_short": "M/d/yy",
    "date_medium": "MMM d, y",
    "date_long": "MMMM d, y",
    "date_full": "EEEE, MMMM d, y",
    "time_short": "h:mm a",
    "time_medium": "h:mm:ss a",
    "time_long": "h:mm:ss a XXX",
    "time_full": "h:mm:ss a XXX VV",
    "datetime": "{date} {time}",
}


@dataclass(frozen=True)
class CalendarNames:
    """Gregorian calendar names and style patterns for one locale.

    Weekday tables start on Sunday.
    """

    months_wide: tuple[str, ...]
    months_abbreviated: tuple[str, ...]
    days_wide: tuple[str, ...]
    days_abbreviated: tuple[str, ...]
    am: str = "AM"
    pm: str = "PM"
    patterns: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name, expected in (
            ("months_wide", 12),
            ("months_abbreviated", 12),
            ("days_wide", 7),
            ("days_abbreviated", 7),
        ):
            value = tuple(getattr(self, name))
            if len(value) != expected:
                raise ValueError(f"{name} must have {expected} entries, got {len(value)}")
            if any(not entry for entry in value):
                raise ValueError(f"{name} must not contain empty names")
            object.__setattr__(self, name, value)
        merged = dict(_DEFAULT_PATTERNS)
        merged.update(self.patterns or {})
        object.__setattr__(self, "patterns", MappingProxyType(merged))

    def pattern(self, name: str) -> str:
        try:
            return self.patterns[name]
        except KeyError:
            raise KeyError(f"No calendar pattern named {name!r}") from None

    def to_dict(self) -> dict[str, Any]:
        return {
            "months_wide": list(self.months_wide),
            "months_abbreviated": list(self.months_abbreviated),
            "days_wide": list(self.days_wide),
            "days_abbreviated": list(self.days_abbreviated),
            "am": self.am,
            "pm": self.pm,
            "patterns": dict(self.patterns),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CalendarNames":
        return cls(
            months_wide=tuple(data["months_wide"]),
            months_abbreviated=tuple(data.get("months_abbreviated") or data["months_wide"]),
            days_wide=tuple(data["days_wide"]),
            days_abbreviated=tuple(data.get("days_abbreviated") or data["days_wide"]),
            am=data.get("am", "AM"),
            pm=data.get("pm", "PM"),
            patterns=data.get("patterns") or {},
        )


@dataclass(frozen=True)
class LocaleData:
    """Complete immutable table set for one locale.

    Attributes:
        locale_id: Canonical BCP 47 tag
        version: Table version; sort keys are stable for a fixed version
        collation: Collation tailoring
        special_casing: Case mapping exceptions
        calendar: Month/weekday names and style patterns
        decimal_separator_default: Decimal mark customary for the locale
        group_separator_default: Grouping mark customary for the locale
    """

    locale_id: str
    version: str
    collation: CollationTable
    special_casing: tuple[SpecialCasingRule, ...]
    calendar: CalendarNames
    decimal_separator_default: str = "."
    group_separator_default: str | None = ","

    def __post_init__(self) -> None:
        object.__setattr__(self, "locale_id", canonical_tag(self.locale_id))
        object.__setattr__(self, "special_casing", tuple(self.special_casing))

    def casing_rules(self, operation: CasingOperation) -> tuple[SpecialCasingRule, ...]:
        return tuple(rule for rule in self.special_casing if rule.operation == operation)

    def to_dict(self) -> dict[str, Any]:
        return {
            "locale_id": self.locale_id,
            "version": self.version,
            "collation": self.collation.to_dict(),
            "special_casing": [rule.to_dict() for rule in self.special_casing],
            "calendar": self.calendar.to_dict(),
            "decimal_separator": self.decimal_separator_default,
            "group_separator": self.group_separator_default,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LocaleData":
        """Build LocaleData from its mapping form.

        Raises:
            ValueError: If required keys are missing or tables are malformed
        """
        try:
            return cls(
                locale_id=data["locale_id"],
                version=str(data.get("version", "0")),
                collation=CollationTable.from_dict(data.get("collation")),
                special_casing=tuple(
                    SpecialCasingRule(
                        source=rule["source"],
                        target=rule["target"],
                        operation=rule["operation"],
                    )
                    for rule in data.get("special_casing") or ()
                ),
                calendar=CalendarNames.from_dict(data["calendar"]),
                decimal_separator_default=data.get("decimal_separator", "."),
                group_separator_default=data.get("group_separator", ","),
            )
        except KeyError as e:
            raise ValueError(f"Locale data is missing required key {e.args[0]!r}") from e
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Locale data has a wrongly typed table: {e}") from e
