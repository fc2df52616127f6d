"""Locale data: immutable tables, providers and the load-once store."""

from placeless.locales.builtin import BUILTIN_VERSION, builtin_tables
from placeless.locales.data import (
    CalendarNames,
    CaseFirst,
    CasingOperation,
    CollationTable,
    LocaleData,
    SpecialCasingRule,
)
from placeless.locales.provider import (
    BuiltinLocaleProvider,
    ChainedLocaleProvider,
    FileLocaleProvider,
    LocaleDataProvider,
    MemoryLocaleProvider,
)
from placeless.locales.store import LocaleStore, get_store, initialize, reset_store, swap_store

__all__ = [
    "BUILTIN_VERSION",
    "builtin_tables",
    "CalendarNames",
    "CaseFirst",
    "CasingOperation",
    "CollationTable",
    "LocaleData",
    "SpecialCasingRule",
    "BuiltinLocaleProvider",
    "ChainedLocaleProvider",
    "FileLocaleProvider",
    "LocaleDataProvider",
    "MemoryLocaleProvider",
    "LocaleStore",
    "get_store",
    "initialize",
    "reset_store",
    "swap_store",
]
