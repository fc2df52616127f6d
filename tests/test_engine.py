"""Tests for the engine facade and context binding."""

from __future__ import annotations

import pytest

from placeless.collation import Ordering
from placeless.context import Context
from placeless.errors import UnknownLocale, UnknownTimezone
from placeless.factors import AppearanceOrder


@pytest.fixture
def turkish(engine):
    ctx = Context(
        locale_id="tr",
        timezone_id="Europe/Istanbul",
        decimal_separator=",",
        group_separator=".",
    )
    return engine.bind(ctx)


class TestBind:
    def test_bind(self, engine, en_context):
        bound = engine.bind(en_context)
        assert bound.locale == "en"
        assert bound.timezone == "UTC"
        assert bound.locale_data.locale_id == "en"

    def test_unknown_locale(self, engine):
        with pytest.raises(UnknownLocale):
            engine.bind(Context(locale_id="nl", timezone_id="UTC"))

    def test_unknown_timezone(self, engine):
        with pytest.raises(UnknownTimezone):
            engine.bind(Context(locale_id="en", timezone_id="Mars/Olympus"))

    def test_context_decides_output(self, engine, en_context):
        english = engine.bind(en_context)
        turkish = engine.bind(en_context.replace(locale_id="tr"))
        assert english.upper("i") == "I"
        assert turkish.upper("i") == "İ"
        assert engine.bind(Context(locale_id="en", timezone_id="UTC")).upper("i") == english.upper("i")


class TestBoundOperations:
    def test_casing(self, turkish):
        assert turkish.upper("istanbul") == "İSTANBUL"
        assert turkish.lower("IRMAK") == "ırmak"
        assert turkish.fold("KIŞ") == turkish.fold("kış")

    def test_collation(self, turkish, collation):
        assert turkish.sort(["şeker", "sabun", "tuz"]) == ["sabun", "şeker", "tuz"]
        assert turkish.compare("ı", "i") is Ordering.LESS
        assert turkish.sort_key("ç") == collation.sort_key("ç", "tr")
        assert turkish.rank(["b", "a", "b"]) == [2, 1, 2]
        assert turkish.sort(["file10", "file2"], numeric=True) == ["file2", "file10"]

    def test_calendar(self, turkish, sample_instant):
        pattern = "d MMMM y HH:mm:ss.SSSSSS"
        text = turkish.format_datetime(sample_instant, pattern)
        assert text == "5 Mart 2024 17:07:09.123456"
        assert turkish.parse_datetime(text, pattern) == sample_instant
        assert turkish.format_style(sample_instant) == "5 Mar 2024"

    def test_numbers(self, turkish):
        assert turkish.format_number(1234.5) == "1.234,5"
        assert turkish.format_number(2.5, precision=0) == "2"
        assert turkish.parse_number("1.234,5") == 1234.5
        assert turkish.number_format.decimal_separator == ","

    def test_paths(self, engine):
        bound = engine.bind(
            Context(locale_id="en", timezone_id="UTC", path_separator="\\", home="C:\\Users\\ada")
        )
        spec = bound.normalize_path("~/data/../reports/q1.csv", collapse_parent=True)
        assert bound.render_path(spec) == "C:\\Users\\ada\\reports\\q1.csv"

    def test_factor_levels(self, turkish):
        values = ["ü", "u", None, "v", "u"]
        assert turkish.collation_levels(values).levels == ("u", "ü", "v")
        assert turkish.appearance_levels(values).levels == ("ü", "u", "v")
        assert turkish.factor_levels(values, AppearanceOrder()).levels == ("ü", "u", "v")
