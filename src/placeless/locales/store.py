"""Load-once, read-only locale store.

A ``LocaleStore`` is a frozen snapshot of LocaleData tables. It is built
synchronously from a provider, shared by reference and never mutated.
Reloading builds a new store and swaps it in whole.

The process-wide default store sits behind an initialization barrier:

    import placeless

    store = placeless.initialize(BuiltinLocaleProvider())   # once, at startup
    store = placeless.get_store()                           # anywhere after

Components never reach for the default store on their own; callers pass a
store (or an engine built from one) explicitly.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from placeless.context import LocaleId, canonical_tag
from placeless.errors import LocaleDataLoadError, LocaleDataNotInitialized, UnknownLocale
from placeless.locales.data import LocaleData
from placeless.locales.provider import LocaleDataProvider

logger = logging.getLogger(__name__)


class LocaleStore:
    """Immutable mapping of canonical locale tag to LocaleData."""

    __slots__ = ("_tables", "generation")

    def __init__(self, tables: Mapping[str, LocaleData], generation: int = 1) -> None:
        frozen = {}
        for table in tables.values():
            frozen[table.locale_id] = table
        self._tables: Mapping[str, LocaleData] = MappingProxyType(frozen)
        self.generation = generation

    @classmethod
    def load(
        cls,
        provider: LocaleDataProvider,
        locales: Iterable[str] | None = None,
        generation: int = 1,
    ) -> "LocaleStore":
        """Load tables from a provider.

        Args:
            provider: Source of locale tables
            locales: Tags to load; all available tags when None
            generation: Sequence number of this snapshot

        Returns:
            A new store

        Raises:
            LocaleDataLoadError: If no table could be loaded, or a requested
                tag is unavailable
        """
        try:
            wanted = sorted(provider.list_available()) if locales is None else list(locales)
        except LocaleDataLoadError:
            raise
        except Exception as e:
            raise LocaleDataLoadError(f"Locale provider failed to list locales: {e}") from e

        tables: dict[str, LocaleData] = {}
        for locale_id in wanted:
            try:
                table = provider.load(locale_id)
            except UnknownLocale as e:
                raise LocaleDataLoadError(
                    f"Requested locale {locale_id!r} is not available", {"locale_id": locale_id}
                ) from e
            tables[table.locale_id] = table
            logger.debug("Loaded locale %s (version %s)", table.locale_id, table.version)

        if not tables:
            raise LocaleDataLoadError("No locale data could be loaded")

        logger.info("Locale store generation %d loaded %d locales", generation, len(tables))
        return cls(tables, generation=generation)

    def get(self, locale_id: str | LocaleId, fallback: str | LocaleId | None = None) -> LocaleData:
        """Resolve a locale tag to exactly one table.

        Args:
            locale_id: Locale tag
            fallback: Tag to use instead when ``locale_id`` is unknown. Only
                used when given explicitly.

        Raises:
            UnknownLocale: If neither tag resolves
        """
        try:
            tag = canonical_tag(locale_id)
        except ValueError:
            raise UnknownLocale(str(locale_id), self._tables) from None
        table = self._tables.get(tag)
        if table is not None:
            return table
        if fallback is not None:
            return self.get(fallback)
        raise UnknownLocale(str(locale_id), self._tables)

    def __contains__(self, locale_id: object) -> bool:
        if not isinstance(locale_id, (str, LocaleId)):
            return False
        try:
            return canonical_tag(locale_id) in self._tables
        except ValueError:
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._tables))

    def __len__(self) -> int:
        return len(self._tables)

    def available(self) -> frozenset[str]:
        return frozenset(self._tables)

    def versions(self) -> dict[str, str]:
        return {tag: table.version for tag, table in sorted(self._tables.items())}


# ==============================================================================
# Process-wide Default Store
# ==============================================================================

_store: LocaleStore | None = None
_store_lock = threading.Lock()


def initialize(
    provider: LocaleDataProvider,
    locales: Iterable[str] | None = None,
) -> LocaleStore:
    """Load the default store once.

    Concurrent callers block until the first load finishes; later calls
    return the existing store without consulting the provider.

    Raises:
        LocaleDataLoadError: If loading fails (fatal for startup)
    """
    global _store
    with _store_lock:
        if _store is None:
            _store = LocaleStore.load(provider, locales)
        return _store


def get_store() -> LocaleStore:
    """Return the default store.

    Raises:
        LocaleDataNotInitialized: If initialize() has not run
    """
    store = _store
    if store is None:
        raise LocaleDataNotInitialized()
    return store


def swap_store(new_store: LocaleStore) -> LocaleStore | None:
    """Replace the default store as a whole and return the previous one.

    Readers holding the old store keep a consistent snapshot.
    """
    global _store
    with _store_lock:
        previous = _store
        if previous is not None and new_store.generation <= previous.generation:
            new_store = LocaleStore(
                {tag: new_store.get(tag) for tag in new_store},
                generation=previous.generation + 1,
            )
        _store = new_store
    logger.info("Locale store swapped to generation %d", new_store.generation)
    return previous


def reset_store() -> None:
    """Drop the default store. Intended for tests."""
    global _store
    with _store_lock:
        _store = None
