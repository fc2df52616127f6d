"""Engine facade.

``NormalizationEngine`` owns one instance of each component over a single
LocaleStore. ``bind`` fixes a Context so call sites pass only values:

    engine = NormalizationEngine(store)
    tr = engine.bind(Context(locale_id="tr", timezone_id="Europe/Istanbul",
                             decimal_separator=",", group_separator="."))

    tr.upper("istanbul")            # "İSTANBUL"
    tr.sort(["şeker", "sabun"])     # ["sabun", "şeker"]
    tr.format_number(1234.5)        # "1.234,5"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from placeless.calendar import CalendarFormatter, CalendarParser, DateStyle, Instant, TimeStyle
from placeless.calendar.zones import resolve_timezone
from placeless.casing import CaseMapper
from placeless.collation import CollationEngine, Ordering, RankMethod, SortKey, Strength
from placeless.context import Context
from placeless.factors import (
    AppearanceOrder,
    CollationOrder,
    FactorLevelBuilder,
    FactorLevels,
    OrderingMode,
)
from placeless.locales.data import LocaleData
from placeless.locales.store import LocaleStore
from placeless.numbers import Number, NumberFormat
from placeless.paths import PathNormalizer, PathSpec

T = TypeVar("T")


class NormalizationEngine:
    """All components over one LocaleStore."""

    def __init__(self, store: LocaleStore) -> None:
        self.store = store
        self.case_mapper = CaseMapper(store)
        self.collation = CollationEngine(store)
        self.formatter = CalendarFormatter(store)
        self.parser = CalendarParser(store)
        self.factors = FactorLevelBuilder(self.collation)

    def bind(self, context: Context) -> "BoundEngine":
        """Fix a Context.

        Raises:
            UnknownLocale: If the context's locale is not in the store
            UnknownTimezone: If the context's timezone is unknown
        """
        self.store.get(context.locale_id)
        resolve_timezone(context.timezone_id)
        return BoundEngine(self, context)


@dataclass(frozen=True)
class BoundEngine:
    """Engine operations with a fixed Context."""

    engine: NormalizationEngine
    context: Context

    @property
    def locale(self) -> str:
        return self.context.locale_id

    @property
    def timezone(self) -> str:
        return self.context.timezone_id

    @property
    def locale_data(self) -> LocaleData:
        return self.engine.store.get(self.context.locale_id)

    @property
    def number_format(self) -> NumberFormat:
        return NumberFormat.from_context(self.context)

    # Casing

    def upper(self, text: str) -> str:
        return self.engine.case_mapper.to_upper(text, self.locale)

    def lower(self, text: str) -> str:
        return self.engine.case_mapper.to_lower(text, self.locale)

    def fold(self, text: str) -> str:
        return self.engine.case_mapper.fold(text, self.locale)

    # Collation

    def compare(self, a: str, b: str, strength: Strength = Strength.IDENTICAL) -> Ordering:
        return self.engine.collation.compare(a, b, self.locale, strength)

    def sort_key(self, text: str, strength: Strength = Strength.IDENTICAL) -> SortKey:
        return self.engine.collation.sort_key(text, self.locale, strength)

    def sort(
        self,
        items: Iterable[T],
        key: Callable[[T], str] | None = None,
        reverse: bool = False,
        strength: Strength = Strength.IDENTICAL,
        numeric: bool = False,
    ) -> list[T]:
        return self.engine.collation.sort(
            items, self.locale, key=key, reverse=reverse, strength=strength, numeric=numeric
        )

    def rank(self, values: Sequence[str], method: RankMethod | str = RankMethod.DENSE) -> list[int]:
        return self.engine.collation.rank(values, self.locale, method)

    # Calendar

    def format_datetime(self, instant: Instant, pattern: str) -> str:
        return self.engine.formatter.format(instant, self.timezone, self.locale, pattern)

    def format_style(
        self,
        instant: Instant,
        date_style: DateStyle | None = DateStyle.MEDIUM,
        time_style: TimeStyle | None = None,
    ) -> str:
        return self.engine.formatter.format_style(
            instant, self.timezone, self.locale, date_style, time_style
        )

    def parse_datetime(self, text: str, pattern: str) -> Instant:
        return self.engine.parser.parse(text, self.timezone, self.locale, pattern)

    # Numbers

    def format_number(self, number: Number, precision: int | None = None) -> str:
        return self.number_format.replace(precision=precision).format(number)

    def parse_number(self, text: str, exact: bool = False) -> Number:
        return self.number_format.parse(text, exact=exact)

    # Paths

    def normalize_path(self, raw: str, collapse_parent: bool = False) -> PathSpec:
        return PathNormalizer(self.context.path_convention).normalize(raw, collapse_parent)

    def render_path(self, spec: PathSpec) -> str:
        return PathNormalizer(self.context.path_convention).render(spec)

    # Factors

    def factor_levels(
        self,
        values: Iterable[Optional[str]],
        mode: OrderingMode,
    ) -> FactorLevels:
        """Build factor levels in an explicit order.

        ``collation_levels`` is the shortcut for the bound locale.
        """
        return self.engine.factors.build(values, mode)

    def collation_levels(
        self,
        values: Iterable[Optional[str]],
        strength: Strength = Strength.IDENTICAL,
    ) -> FactorLevels:
        return self.engine.factors.build(values, CollationOrder(self.locale, strength))

    def appearance_levels(self, values: Iterable[Optional[str]]) -> FactorLevels:
        return self.engine.factors.build(values, AppearanceOrder())
