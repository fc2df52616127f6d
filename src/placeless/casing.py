"""Locale-driven case mapping.

Special-casing rules from LocaleData are applied first, longest match at
each position; text between matches goes through Python's default
Unicode mapping (``str.upper``, ``str.lower``, ``str.casefold``), which is
itself independent of the process locale. Default mapping is applied to
whole runs so context-sensitive rules such as Greek final sigma still
work.

Usage:
    mapper = CaseMapper(store)
    mapper.to_lower("I", "tr")    # "ı"
    mapper.to_upper("i", "tr")    # "İ"
    mapper.to_lower("I", "en")    # "i"
"""

from __future__ import annotations

from typing import Callable

from placeless.context import LocaleId
from placeless.locales.data import CasingOperation, LocaleData, SpecialCasingRule
from placeless.locales.store import LocaleStore

_DEFAULT_MAPPINGS: dict[CasingOperation, Callable[[str], str]] = {
    CasingOperation.UPPER: str.upper,
    CasingOperation.LOWER: str.lower,
    CasingOperation.FOLD: str.casefold,
}


def apply_case_mapping(
    text: str,
    rules: tuple[SpecialCasingRule, ...],
    operation: CasingOperation,
) -> str:
    """Map ``text`` with locale rules first and the default mapping after.

    Args:
        text: Input text
        rules: Rules for ``operation`` (others are ignored)
        operation: Which mapping to apply

    Returns:
        Mapped text
    """
    default = _DEFAULT_MAPPINGS[operation]
    table = {rule.source: rule.target for rule in rules if rule.operation == operation}
    if not table or not text:
        return default(text)

    longest = max(len(source) for source in table)
    out: list[str] = []
    run_start = 0
    i = 0
    n = len(text)
    while i < n:
        for length in range(min(longest, n - i), 0, -1):
            target = table.get(text[i : i + length])
            if target is not None:
                out.append(default(text[run_start:i]))
                out.append(target)
                i += length
                run_start = i
                break
        else:
            i += 1
    out.append(default(text[run_start:]))
    return "".join(out)


class CaseMapper:
    """Upper/lower/fold conversion driven by LocaleData.

    Output depends only on (text, locale, LocaleData). An unknown locale
    raises ``UnknownLocale`` unless the caller names a fallback explicitly.
    """

    def __init__(self, store: LocaleStore) -> None:
        self.store = store

    def _data(self, locale: str | LocaleId, fallback: str | None) -> LocaleData:
        return self.store.get(locale, fallback=fallback)

    def map(
        self,
        text: str,
        locale: str | LocaleId,
        operation: CasingOperation,
        fallback: str | None = None,
    ) -> str:
        data = self._data(locale, fallback)
        return apply_case_mapping(text, data.casing_rules(operation), operation)

    def to_upper(self, text: str, locale: str | LocaleId, fallback: str | None = None) -> str:
        return self.map(text, locale, CasingOperation.UPPER, fallback)

    def to_lower(self, text: str, locale: str | LocaleId, fallback: str | None = None) -> str:
        return self.map(text, locale, CasingOperation.LOWER, fallback)

    def fold(self, text: str, locale: str | LocaleId, fallback: str | None = None) -> str:
        """Case-fold for caseless matching."""
        return self.map(text, locale, CasingOperation.FOLD, fallback)

    def equals_ignore_case(self, a: str, b: str, locale: str | LocaleId) -> bool:
        data = self._data(locale, None)
        rules = data.casing_rules(CasingOperation.FOLD)
        return apply_case_mapping(a, rules, CasingOperation.FOLD) == apply_case_mapping(
            b, rules, CasingOperation.FOLD
        )
