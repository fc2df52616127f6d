"""Locale-aware collation.

Sort keys are built from explicit LocaleData tailoring only, so the same
strings sort the same way on every host. ``compare`` is defined as the
comparison of sort keys, which keeps the two consistent.

Key layout (levels separated by 0x00, every weight starts with a nonzero
byte so a shorter level always sorts first):

    primary    per element: group byte, 3-byte letter identity, tailoring byte
    secondary  per element: 0x02 + 3-byte code point per accent, then 0x01
    tertiary   per element: one case byte
    identical  3-byte code point per character of the raw input

Features:
    - Character classes: whitespace/punctuation < symbols < digits < letters
    - Tailoring moves letters before/after an anchor (Swedish ö after z)
    - Contractions sort as one letter (Czech ch after h)
    - Accent and case differences only matter at lower strengths
    - Optional numeric mode compares digit runs by value (file2 < file10)
    - The "C" pseudo-locale compares raw code points

Usage:
    engine = CollationEngine(store)
    engine.compare("résumé", "Resume", "fr", Strength.PRIMARY)  # Ordering.EQUAL
    engine.sort(["ö", "z", "a"], "sv")                          # ["a", "z", "ö"]
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, Iterable, Sequence, TypeVar

import polars as pl

from placeless.casing import apply_case_mapping
from placeless.context import LocaleId
from placeless.locales.data import CaseFirst, CasingOperation, CollationTable, LocaleData
from placeless.locales.store import LocaleStore

T = TypeVar("T")

SortKey = bytes

LEVEL_SEPARATOR = b"\x00"
_SECONDARY_END = b"\x01"
_SECONDARY_MARK = b"\x02"

_GROUP_SPACE_PUNCT = 1
_GROUP_SYMBOL = 2
_GROUP_DIGIT = 3
_GROUP_LETTER = 4
_GROUP_OTHER = 5

_NEUTRAL_OFFSET = 128

_TERTIARY_VARIANT = 3


class Strength(str, Enum):
    """How many collation levels are compared."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"
    IDENTICAL = "identical"

    @property
    def levels(self) -> int:
        return _STRENGTH_LEVELS[self]


_STRENGTH_LEVELS = {
    Strength.PRIMARY: 1,
    Strength.SECONDARY: 2,
    Strength.TERTIARY: 3,
    Strength.IDENTICAL: 4,
}


class Ordering(IntEnum):
    """Result of comparing two strings."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class RankMethod(str, Enum):
    DENSE = "dense"
    MIN = "min"
    ORDINAL = "ordinal"


def _is_mark(ch: str) -> bool:
    return unicodedata.category(ch).startswith("M")


def _code_point(ch: str) -> bytes:
    return ord(ch).to_bytes(3, "big")


def _clusters(text: str) -> list[str]:
    """Split NFC text into base-plus-marks clusters."""
    clusters: list[str] = []
    for ch in text:
        if clusters and _is_mark(ch):
            clusters[-1] += ch
        else:
            clusters.append(ch)
    return clusters


def _base_weight(ch: str) -> tuple[int, int]:
    """Return (group, identity) for a single base character."""
    category = unicodedata.category(ch)
    if category[0] == "L":
        return _GROUP_LETTER, ord(ch)
    if category[0] == "N":
        digit = unicodedata.digit(ch, None)
        if digit is not None:
            return _GROUP_DIGIT, digit
        return _GROUP_SYMBOL, ord(ch)
    if category[0] in ("Z", "P") or category == "Cc":
        return _GROUP_SPACE_PUNCT, ord(ch)
    if category[0] == "S":
        return _GROUP_SYMBOL, ord(ch)
    return _GROUP_OTHER, ord(ch)


def _primary(group: int, identity: int, offset: int = _NEUTRAL_OFFSET) -> bytes:
    return bytes([group]) + identity.to_bytes(3, "big") + bytes([offset])


@dataclass(frozen=True)
class _Element:
    primary: bytes
    marks: tuple[str, ...] = ()
    tertiary: int = 1


class Collator:
    """Sort-key builder for one locale and set of options.

    Building a Collator once and reusing it for many keys avoids
    re-deriving the tailoring index on every call. Collators are
    immutable and safe to share between threads.
    """

    def __init__(
        self,
        data: LocaleData,
        strength: Strength = Strength.IDENTICAL,
        numeric: bool = False,
    ) -> None:
        self.data = data
        self.strength = Strength(strength)
        self.numeric = numeric
        table: CollationTable = data.collation
        self._byte_order = table.byte_order or LocaleId.parse(data.locale_id).is_byte_order
        self._fold_rules = data.casing_rules(CasingOperation.FOLD)
        self._lower_rules = data.casing_rules(CasingOperation.LOWER)
        if table.case_first == CaseFirst.UPPER:
            self._lower_weight, self._upper_weight = 2, 1
        else:
            self._lower_weight, self._upper_weight = 1, 2
        self._tailoring = self._build_tailoring(table)
        self._longest = max((len(key) for key in self._tailoring), default=0)

    def _build_tailoring(self, table: CollationTable) -> dict[str, bytes]:
        tailoring: dict[str, bytes] = {}
        for anchor, letters in table.after.items():
            group, identity = _base_weight(anchor[0])
            for i, letter in enumerate(letters, start=1):
                tailoring[letter] = _primary(group, identity, _NEUTRAL_OFFSET + i)
        for anchor, letters in table.before.items():
            group, identity = _base_weight(anchor[0])
            count = len(letters)
            for i, letter in enumerate(letters):
                tailoring[letter] = _primary(group, identity, _NEUTRAL_OFFSET - count + i)
        return tailoring

    def _fold(self, text: str) -> str:
        return apply_case_mapping(text, self._fold_rules, CasingOperation.FOLD)

    def _case_weight(self, text: str) -> int:
        lowered = apply_case_mapping(text, self._lower_rules, CasingOperation.LOWER)
        return self._lower_weight if lowered == text else self._upper_weight

    def _decompose(self, cluster: str) -> list[_Element]:
        folded = unicodedata.normalize("NFD", self._fold(cluster))
        bases: list[tuple[str, list[str]]] = []
        for ch in folded:
            if bases and _is_mark(ch):
                bases[-1][1].append(ch)
            else:
                bases.append((ch, []))
        if len(bases) > 1:
            tertiary = _TERTIARY_VARIANT
        else:
            tertiary = self._case_weight(cluster)
        return [
            _Element(_primary(*_base_weight(base)), tuple(marks), tertiary)
            for base, marks in bases
        ]

    def _numeric_element(self, digits: str) -> _Element:
        values = [unicodedata.digit(ch) for ch in digits]
        while len(values) > 1 and values[0] == 0:
            values.pop(0)
        body = len(values).to_bytes(2, "big") + bytes(v + 1 for v in values)
        return _Element(bytes([_GROUP_DIGIT]) + body, (), self._lower_weight)

    def _is_digit_cluster(self, cluster: str) -> bool:
        return len(cluster) == 1 and unicodedata.digit(cluster, None) is not None

    def elements(self, text: str) -> list[_Element]:
        clusters = _clusters(unicodedata.normalize("NFC", text))
        folded = [self._fold(cluster) for cluster in clusters]
        result: list[_Element] = []
        i = 0
        n = len(clusters)
        while i < n:
            if self.numeric and self._is_digit_cluster(clusters[i]):
                j = i
                while j < n and self._is_digit_cluster(clusters[j]):
                    j += 1
                result.append(self._numeric_element("".join(clusters[i:j])))
                i = j
                continue

            matched = 0
            for span in range(min(self._longest, n - i), 0, -1):
                candidate = "".join(folded[i : i + span])
                primary = self._tailoring.get(candidate)
                if primary is not None:
                    source = "".join(clusters[i : i + span])
                    result.append(_Element(primary, (), self._case_weight(source)))
                    matched = span
                    break
            if matched:
                i += matched
                continue

            result.extend(self._decompose(clusters[i]))
            i += 1
        return result

    def sort_key(self, text: str) -> SortKey:
        if self._byte_order:
            return b"".join(_code_point(ch) for ch in text)

        elements = self.elements(text)
        levels = self.strength.levels
        parts = [b"".join(element.primary for element in elements)]
        if levels >= 2:
            secondary = bytearray()
            for element in elements:
                for mark in element.marks:
                    secondary += _SECONDARY_MARK + _code_point(mark)
                secondary += _SECONDARY_END
            parts.append(bytes(secondary))
        if levels >= 3:
            parts.append(bytes(element.tertiary for element in elements))
        if levels >= 4:
            parts.append(b"".join(_code_point(ch) for ch in text))
        return LEVEL_SEPARATOR.join(parts)

    def compare(self, a: str, b: str) -> Ordering:
        key_a = self.sort_key(a)
        key_b = self.sort_key(b)
        if key_a < key_b:
            return Ordering.LESS
        if key_a > key_b:
            return Ordering.GREATER
        return Ordering.EQUAL


class CollationEngine:
    """Locale-aware string comparison, sorting and ranking."""

    def __init__(self, store: LocaleStore) -> None:
        self.store = store

    def collator(
        self,
        locale: str | LocaleId,
        strength: Strength = Strength.IDENTICAL,
        numeric: bool = False,
        fallback: str | None = None,
    ) -> Collator:
        """Build a reusable Collator.

        Raises:
            UnknownLocale: If the locale is not in the store
        """
        return Collator(self.store.get(locale, fallback=fallback), strength, numeric)

    def sort_key(
        self,
        text: str,
        locale: str | LocaleId,
        strength: Strength = Strength.IDENTICAL,
        numeric: bool = False,
    ) -> SortKey:
        return self.collator(locale, strength, numeric).sort_key(text)

    def compare(
        self,
        a: str,
        b: str,
        locale: str | LocaleId,
        strength: Strength = Strength.IDENTICAL,
        numeric: bool = False,
    ) -> Ordering:
        return self.collator(locale, strength, numeric).compare(a, b)

    def sort(
        self,
        items: Iterable[T],
        locale: str | LocaleId,
        key: Callable[[T], str] | None = None,
        reverse: bool = False,
        strength: Strength = Strength.IDENTICAL,
        numeric: bool = False,
    ) -> list[T]:
        """Return ``items`` sorted by collation order.

        The sort is stable, so items with equal keys keep their input order
        when ``strength`` is below IDENTICAL.
        """
        collator = self.collator(locale, strength, numeric)
        if key is None:
            return sorted(items, key=collator.sort_key, reverse=reverse)  # type: ignore[arg-type]
        return sorted(items, key=lambda item: collator.sort_key(key(item)), reverse=reverse)

    def rank(
        self,
        values: Sequence[str],
        locale: str | LocaleId,
        method: RankMethod | str = RankMethod.DENSE,
        strength: Strength = Strength.IDENTICAL,
        numeric: bool = False,
    ) -> list[int]:
        """Rank values (1-based) in collation order.

        Args:
            values: Strings to rank
            locale: Locale tag
            method: "dense" (ties share a rank, no gaps), "min" (ties share
                the lowest position) or "ordinal" (input order breaks ties)
            strength: Collation strength
            numeric: Compare digit runs by value
        """
        method = RankMethod(method)
        collator = self.collator(locale, strength, numeric)
        keys = [collator.sort_key(value) for value in values]
        order = sorted(range(len(values)), key=lambda i: keys[i])

        ranks = [0] * len(values)
        dense = 0
        previous: bytes | None = None
        first_position = 0
        for position, index in enumerate(order, start=1):
            if keys[index] != previous:
                dense += 1
                first_position = position
                previous = keys[index]
            if method is RankMethod.DENSE:
                ranks[index] = dense
            elif method is RankMethod.MIN:
                ranks[index] = first_position
            else:
                ranks[index] = position
        return ranks

    def sort_series(
        self,
        series: pl.Series,
        locale: str | LocaleId,
        descending: bool = False,
        strength: Strength = Strength.IDENTICAL,
        numeric: bool = False,
    ) -> pl.Series:
        """Sort a polars string Series in collation order, nulls last."""
        values: list[Any] = series.to_list()
        present = [value for value in values if value is not None]
        nulls = [None] * (len(values) - len(present))
        ordered = self.sort(present, locale, reverse=descending, strength=strength, numeric=numeric)
        return pl.Series(series.name, ordered + nulls, dtype=series.dtype)
