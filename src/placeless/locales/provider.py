"""Locale data providers.

The engine depends only on the ``LocaleDataProvider`` protocol; how tables
are packaged is the provider's business. Three implementations ship:

- BuiltinLocaleProvider: the bundled tables in ``placeless.locales.builtin``
- FileLocaleProvider: ``<tag>.json`` / ``<tag>.yaml`` files in a directory
- ChainedLocaleProvider: first provider that has the tag wins

Usage:
    provider = ChainedLocaleProvider(
        FileLocaleProvider(Path("locales")),
        BuiltinLocaleProvider(),
    )
    provider.list_available()  # frozenset({"C", "en", ..., "pt-BR"})
    data = provider.load("pt-BR")
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Protocol, runtime_checkable

import yaml

from placeless.context import canonical_tag
from placeless.errors import LocaleDataLoadError, UnknownLocale
from placeless.locales.builtin import builtin_tables
from placeless.locales.data import LocaleData

logger = logging.getLogger(__name__)

LOCALE_FILE_SUFFIXES = (".json", ".yaml", ".yml")


@runtime_checkable
class LocaleDataProvider(Protocol):
    """Protocol for locale data sources."""

    def load(self, locale_id: str) -> LocaleData:
        """Load the table for one locale.

        Raises:
            UnknownLocale: If the provider has no table for ``locale_id``
        """
        ...

    def list_available(self) -> frozenset[str]:
        """Return the canonical tags this provider can load."""
        ...


class MemoryLocaleProvider:
    """Provider over an in-memory mapping of tables.

    Useful for tests and for callers that build LocaleData themselves.
    """

    def __init__(self, tables: Mapping[str, LocaleData] | None = None) -> None:
        self._tables: dict[str, LocaleData] = {}
        for table in (tables or {}).values():
            self._tables[table.locale_id] = table

    def load(self, locale_id: str) -> LocaleData:
        tag = canonical_tag(locale_id)
        try:
            return self._tables[tag]
        except KeyError:
            raise UnknownLocale(locale_id, self._tables) from None

    def list_available(self) -> frozenset[str]:
        return frozenset(self._tables)


class BuiltinLocaleProvider(MemoryLocaleProvider):
    """Provider serving the bundled locale tables."""

    def __init__(self) -> None:
        super().__init__(builtin_tables())


class FileLocaleProvider:
    """Provider reading locale tables from a directory.

    Each file holds one table in the mapping form of ``LocaleData.to_dict``
    and is named after its tag (``pt-BR.yaml``, ``pt_BR.json``). If the
    file omits ``locale_id`` it is inferred from the filename.

    Example:
        provider = FileLocaleProvider(Path("locales"))
        data = provider.load("pt-BR")
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _index(self) -> dict[str, Path]:
        if not self.directory.is_dir():
            raise LocaleDataLoadError(
                f"Locale directory not found: {self.directory}",
                {"directory": str(self.directory)},
            )
        index: dict[str, Path] = {}
        for path in sorted(self.directory.iterdir()):
            if path.suffix.lower() not in LOCALE_FILE_SUFFIXES or not path.is_file():
                continue
            try:
                tag = canonical_tag(path.stem)
            except ValueError:
                logger.debug("Skipping %s: filename is not a locale tag", path)
                continue
            if tag in index:
                raise LocaleDataLoadError(
                    f"Duplicate locale files for {tag}: {index[tag].name}, {path.name}",
                    {"locale_id": tag},
                )
            index[tag] = path
        return index

    def list_available(self) -> frozenset[str]:
        return frozenset(self._index())

    def load(self, locale_id: str) -> LocaleData:
        tag = canonical_tag(locale_id)
        index = self._index()
        path = index.get(tag)
        if path is None:
            raise UnknownLocale(locale_id, index)
        logger.debug("Loading locale %s from %s", tag, path)
        data = self._read(path)
        data.setdefault("locale_id", tag)
        try:
            declared = canonical_tag(data["locale_id"])
        except ValueError as e:
            raise LocaleDataLoadError(f"Invalid locale file {path}: {e}", {"path": str(path)}) from e
        if declared != tag:
            raise LocaleDataLoadError(
                f"{path.name} declares locale {data['locale_id']!r}, expected {tag!r}",
                {"path": str(path)},
            )
        try:
            return LocaleData.from_dict(data)
        except (ValueError, TypeError, KeyError) as e:
            raise LocaleDataLoadError(f"Invalid locale file {path}: {e}", {"path": str(path)}) from e

    def _read(self, path: Path) -> dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise LocaleDataLoadError(f"Cannot read locale file {path}: {e}", {"path": str(path)}) from e
        if not isinstance(data, dict):
            raise LocaleDataLoadError(
                f"Locale file {path} must contain a mapping", {"path": str(path)}
            )
        return data


class ChainedLocaleProvider:
    """Provider that consults several providers in order.

    The first provider listing a tag serves it, so earlier providers
    override later ones.
    """

    def __init__(self, *providers: LocaleDataProvider) -> None:
        if not providers:
            raise ValueError("ChainedLocaleProvider needs at least one provider")
        self.providers = providers

    def list_available(self) -> frozenset[str]:
        available: set[str] = set()
        for provider in self.providers:
            available |= provider.list_available()
        return frozenset(available)

    def load(self, locale_id: str) -> LocaleData:
        tag = canonical_tag(locale_id)
        for provider in self.providers:
            if tag in provider.list_available():
                return provider.load(tag)
        raise UnknownLocale(locale_id, self.list_available())
