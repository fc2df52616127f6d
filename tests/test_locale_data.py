"""Tests for locale tables, providers and the locale store."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor

import pytest
import yaml

from placeless.errors import (
    LocaleDataLoadError,
    LocaleDataNotInitialized,
    UnknownLocale,
)
from placeless.locales import (
    BUILTIN_VERSION,
    BuiltinLocaleProvider,
    CalendarNames,
    CaseFirst,
    CasingOperation,
    ChainedLocaleProvider,
    CollationTable,
    FileLocaleProvider,
    LocaleData,
    LocaleDataProvider,
    LocaleStore,
    MemoryLocaleProvider,
    builtin_tables,
    get_store,
    initialize,
    swap_store,
)

BUILTIN_TAGS = {"C", "en", "en-GB", "de", "fr", "es", "sv", "da", "tr", "az", "cs", "ja"}


def _pt_br_mapping() -> dict:
    en = builtin_tables()["en"]
    data = en.to_dict()
    data["locale_id"] = "pt-BR"
    data["version"] = "test-1"
    data["decimal_separator"] = ","
    data["group_separator"] = "."
    data["calendar"]["months_wide"] = [
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ]
    return data


# =============================================================================
# LocaleData
# =============================================================================


class TestLocaleData:
    def test_builtin_tags(self):
        assert set(builtin_tables()) == BUILTIN_TAGS

    def test_builtin_tables_are_versioned(self):
        for table in builtin_tables().values():
            assert table.version == BUILTIN_VERSION

    def test_dict_round_trip(self):
        tr = builtin_tables()["tr"]
        assert LocaleData.from_dict(tr.to_dict()) == tr

    def test_missing_key(self):
        data = builtin_tables()["en"].to_dict()
        del data["calendar"]
        with pytest.raises(ValueError, match="calendar"):
            LocaleData.from_dict(data)

    def test_calendar_table_sizes(self):
        en = builtin_tables()["en"].calendar
        with pytest.raises(ValueError, match="months_wide"):
            CalendarNames(
                months_wide=en.months_wide[:11],
                months_abbreviated=en.months_abbreviated,
                days_wide=en.days_wide,
                days_abbreviated=en.days_abbreviated,
            )
        with pytest.raises(ValueError, match="days_wide"):
            CalendarNames(
                months_wide=en.months_wide,
                months_abbreviated=en.months_abbreviated,
                days_wide=en.days_wide + ("Extra",),
                days_abbreviated=en.days_abbreviated,
            )

    def test_calendar_default_patterns_are_merged(self):
        de = builtin_tables()["de"].calendar
        assert de.pattern("date_long") == "d. MMMM y"
        assert de.pattern("datetime") == "{date}, {time}"
        with pytest.raises(KeyError):
            de.pattern("date_huge")

    def test_collation_table_is_frozen_and_folded(self):
        table = CollationTable(after={"Z": ["Å", "Ä"]}, case_first="upper")
        assert table.after["z"] == ("å", "ä")
        assert table.case_first is CaseFirst.UPPER
        with pytest.raises(TypeError):
            table.after["y"] = ("x",)  # type: ignore[index]

    def test_turkish_casing_rules(self):
        tr = builtin_tables()["tr"]
        lower = {rule.source: rule.target for rule in tr.casing_rules(CasingOperation.LOWER)}
        assert lower["I"] == "ı"
        assert lower["İ"] == "i"
        assert builtin_tables()["en"].special_casing == ()


# =============================================================================
# Providers
# =============================================================================


class TestProviders:
    def test_builtin_provider_satisfies_protocol(self):
        provider = BuiltinLocaleProvider()
        assert isinstance(provider, LocaleDataProvider)
        assert provider.list_available() == frozenset(BUILTIN_TAGS)
        assert provider.load("en_GB").locale_id == "en-GB"

    def test_unknown_locale(self):
        with pytest.raises(UnknownLocale) as exc_info:
            BuiltinLocaleProvider().load("xx")
        assert exc_info.value.locale_id == "xx"

    def test_file_provider_yaml(self, tmp_path):
        (tmp_path / "pt-BR.yaml").write_text(
            yaml.safe_dump(_pt_br_mapping(), allow_unicode=True), encoding="utf-8"
        )
        provider = FileLocaleProvider(tmp_path)
        assert provider.list_available() == frozenset({"pt-BR"})
        data = provider.load("pt_br")
        assert data.locale_id == "pt-BR"
        assert data.calendar.months_wide[2] == "março"
        assert data.decimal_separator_default == ","

    def test_file_provider_json_infers_locale_id(self, tmp_path):
        mapping = _pt_br_mapping()
        del mapping["locale_id"]
        (tmp_path / "pt_BR.json").write_text(json.dumps(mapping), encoding="utf-8")
        assert FileLocaleProvider(tmp_path).load("pt-BR").locale_id == "pt-BR"

    def test_file_provider_rejects_mismatched_locale_id(self, tmp_path):
        mapping = _pt_br_mapping()
        (tmp_path / "es.json").write_text(json.dumps(mapping), encoding="utf-8")
        with pytest.raises(LocaleDataLoadError, match="declares locale"):
            FileLocaleProvider(tmp_path).load("es")

    def test_file_provider_rejects_invalid_file(self, tmp_path):
        (tmp_path / "nl.yaml").write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(LocaleDataLoadError, match="mapping"):
            FileLocaleProvider(tmp_path).load("nl")

    def test_file_provider_rejects_non_string_locale_id(self, tmp_path):
        mapping = _pt_br_mapping()
        mapping["locale_id"] = 12
        (tmp_path / "pt-BR.yaml").write_text(yaml.safe_dump(mapping), encoding="utf-8")
        with pytest.raises(LocaleDataLoadError, match="Invalid locale file"):
            FileLocaleProvider(tmp_path).load("pt-BR")

    @pytest.mark.parametrize(
        "section,key,value",
        [
            ("calendar", "months_wide", 5),
            ("calendar", "patterns", ["not", "a", "mapping"]),
            (None, "calendar", 5),
            (None, "collation", "after-z"),
            (None, "special_casing", [5]),
        ],
    )
    def test_file_provider_rejects_wrongly_typed_tables(self, tmp_path, section, key, value):
        mapping = _pt_br_mapping()
        target = mapping[section] if section else mapping
        target[key] = value
        (tmp_path / "pt-BR.yaml").write_text(yaml.safe_dump(mapping), encoding="utf-8")
        with pytest.raises(LocaleDataLoadError, match="Invalid locale file"):
            FileLocaleProvider(tmp_path).load("pt-BR")
        with pytest.raises(LocaleDataLoadError):
            LocaleStore.load(FileLocaleProvider(tmp_path))

    def test_file_provider_rejects_duplicates(self, tmp_path):
        mapping = _pt_br_mapping()
        (tmp_path / "pt-BR.json").write_text(json.dumps(mapping), encoding="utf-8")
        (tmp_path / "pt_BR.yaml").write_text(yaml.safe_dump(mapping), encoding="utf-8")
        with pytest.raises(LocaleDataLoadError, match="Duplicate"):
            FileLocaleProvider(tmp_path).list_available()

    def test_file_provider_missing_directory(self, tmp_path):
        with pytest.raises(LocaleDataLoadError):
            FileLocaleProvider(tmp_path / "nope").list_available()

    def test_chained_provider_prefers_first(self, tmp_path):
        mapping = builtin_tables()["en"].to_dict()
        mapping["version"] = "override"
        (tmp_path / "en.json").write_text(json.dumps(mapping), encoding="utf-8")
        provider = ChainedLocaleProvider(FileLocaleProvider(tmp_path), BuiltinLocaleProvider())
        assert provider.load("en").version == "override"
        assert provider.load("de").version == BUILTIN_VERSION
        assert "ja" in provider.list_available()
        with pytest.raises(UnknownLocale):
            provider.load("xx")


# =============================================================================
# LocaleStore
# =============================================================================


class TestLocaleStore:
    def test_load_all(self, store):
        assert set(store) == BUILTIN_TAGS
        assert len(store) == len(BUILTIN_TAGS)
        assert "en_GB" in store
        assert 42 not in store

    def test_load_subset(self):
        store = LocaleStore.load(BuiltinLocaleProvider(), ["en", "tr"])
        assert store.available() == frozenset({"en", "tr"})
        with pytest.raises(UnknownLocale):
            store.get("de")

    def test_missing_requested_locale_is_fatal(self):
        with pytest.raises(LocaleDataLoadError):
            LocaleStore.load(BuiltinLocaleProvider(), ["en", "xx"])

    def test_empty_provider_is_fatal(self):
        with pytest.raises(LocaleDataLoadError):
            LocaleStore.load(MemoryLocaleProvider())

    def test_no_implicit_fallback(self, store):
        with pytest.raises(UnknownLocale):
            store.get("nl")
        assert store.get("nl", fallback="en").locale_id == "en"

    def test_versions(self, store):
        assert store.versions()["sv"] == BUILTIN_VERSION


class TestDefaultStore:
    def test_get_before_initialize(self):
        with pytest.raises(LocaleDataNotInitialized):
            get_store()

    def test_initialize_once(self):
        first = initialize(BuiltinLocaleProvider(), ["en"])
        second = initialize(BuiltinLocaleProvider(), ["en", "de"])
        assert first is second
        assert get_store() is first

    def test_concurrent_initialize_loads_once(self):
        class CountingProvider(BuiltinLocaleProvider):
            calls = 0

            def list_available(self):
                CountingProvider.calls += 1
                return super().list_available()

        with ThreadPoolExecutor(max_workers=8) as pool:
            stores = list(pool.map(lambda _: initialize(CountingProvider()), range(16)))
        assert all(s is stores[0] for s in stores)
        assert CountingProvider.calls == 1

    def test_swap_replaces_whole_generation(self):
        old = initialize(BuiltinLocaleProvider(), ["en"])
        new = LocaleStore.load(BuiltinLocaleProvider(), ["en", "tr"])
        previous = swap_store(new)
        assert previous is old
        current = get_store()
        assert current.available() == frozenset({"en", "tr"})
        assert current.generation > old.generation
        assert old.available() == frozenset({"en"})
