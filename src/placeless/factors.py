"""Factor level construction.

The order of categorical levels is always chosen by the caller: either the
order in which values first appear, or collation order for an explicit
locale. There is no default, because an implicit order would depend on
whatever locale happened to be ambient.

Usage:
    builder = FactorLevelBuilder(CollationEngine(store))
    builder.build(["b", "a", "b", "c"], AppearanceOrder()).levels   # ("b", "a", "c")
    builder.build(["b", "a", "b", "c"], CollationOrder("en")).levels  # ("a", "b", "c")

    levels = builder.build(series.to_list(), CollationOrder("sv"))
    encoded = levels.encode_series(series)   # pl.Enum dtype
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

import polars as pl

from placeless.collation import CollationEngine, Strength


@dataclass(frozen=True)
class AppearanceOrder:
    """Levels in order of first appearance."""


@dataclass(frozen=True)
class CollationOrder:
    """Levels in collation order for an explicit locale.

    Values that compare equal at ``strength`` collapse into the first one
    seen; at the default IDENTICAL strength only equal strings collapse.
    """

    locale: str
    strength: Strength = Strength.IDENTICAL
    numeric: bool = False


OrderingMode = Union[AppearanceOrder, CollationOrder]


@dataclass(frozen=True)
class FactorLevels:
    """Ordered, unique category levels.

    Attributes:
        levels: Unique level strings in order
        mode: The ordering mode that produced them
    """

    levels: tuple[str, ...]
    mode: OrderingMode

    def __len__(self) -> int:
        return len(self.levels)

    def __iter__(self):
        return iter(self.levels)

    def index(self, value: str) -> int:
        """Position of ``value`` among the levels.

        Raises:
            ValueError: If ``value`` is not a level
        """
        try:
            return self.levels.index(value)
        except ValueError:
            raise ValueError(f"{value!r} is not a level") from None

    def codes(self, values: Iterable[Optional[str]]) -> list[Optional[int]]:
        """Integer codes for ``values``; None stays None.

        Raises:
            ValueError: If a value is not a level
        """
        lookup = {level: i for i, level in enumerate(self.levels)}
        result: list[Optional[int]] = []
        for value in values:
            if value is None:
                result.append(None)
                continue
            try:
                result.append(lookup[value])
            except KeyError:
                raise ValueError(f"{value!r} is not a level") from None
        return result

    def to_polars_enum(self) -> pl.Enum:
        return pl.Enum(list(self.levels))

    def encode_series(self, series: pl.Series) -> pl.Series:
        """Cast a string Series to an Enum with these levels.

        Raises:
            ValueError: If the series holds a value that is not a level
        """
        self.codes(series.to_list())
        return series.cast(self.to_polars_enum())


class FactorLevelBuilder:
    """Builds FactorLevels from raw values."""

    def __init__(self, collation: CollationEngine) -> None:
        self.collation = collation

    def build(self, values: Iterable[Optional[str]], mode: OrderingMode) -> FactorLevels:
        """Build ordered levels.

        Args:
            values: Raw values; None (missing) is skipped
            mode: AppearanceOrder() or CollationOrder(locale)

        Raises:
            TypeError: If ``mode`` is not a supported ordering mode
            UnknownLocale: If the collation locale is unknown
        """
        if isinstance(mode, AppearanceOrder):
            return FactorLevels(tuple(dict.fromkeys(v for v in values if v is not None)), mode)
        if isinstance(mode, CollationOrder):
            collator = self.collation.collator(mode.locale, mode.strength, mode.numeric)
            by_key: dict[bytes, str] = {}
            for value in values:
                if value is None:
                    continue
                by_key.setdefault(collator.sort_key(value), value)
            return FactorLevels(tuple(by_key[key] for key in sorted(by_key)), mode)
        raise TypeError(
            f"mode must be AppearanceOrder() or CollationOrder(locale), got {mode!r}"
        )
