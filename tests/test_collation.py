"""Tests for locale-aware collation."""

from __future__ import annotations

import functools
import itertools

import polars as pl
import pytest

from placeless.collation import CollationEngine, Ordering, RankMethod, Strength
from placeless.errors import UnknownLocale

SAMPLE = [
    "", "a", "A", "ab", "Ab", "b", "résumé", "Resume", "resume", "côte", "coté",
    "cote", "file10", "file2", "1", "10", "-", " ", "straße", "strasse", "Ähre",
    "ähre", "zebra", "ö", "ñ", "chata", "hrad", "ı", "I", "i", "İ", "か", "が",
]


class TestOrdering:
    """Results of compare()."""

    def test_values(self, collation):
        assert collation.compare("a", "b", "en") is Ordering.LESS
        assert collation.compare("b", "a", "en") is Ordering.GREATER
        assert collation.compare("a", "a", "en") is Ordering.EQUAL
        assert int(Ordering.LESS) == -1

    def test_unknown_locale(self, collation):
        with pytest.raises(UnknownLocale):
            collation.compare("a", "b", "nl")


class TestTotalOrder:
    """compare() is a strict total order consistent with sort_key()."""

    @pytest.mark.parametrize("locale", ["en", "sv", "tr", "cs", "da", "C", "ja"])
    def test_consistent_with_sort_key(self, collation, locale):
        for a, b in itertools.product(SAMPLE, repeat=2):
            key_a = collation.sort_key(a, locale)
            key_b = collation.sort_key(b, locale)
            expected = (key_a > key_b) - (key_a < key_b)
            assert collation.compare(a, b, locale) == expected

    @pytest.mark.parametrize("locale", ["en", "tr", "cs"])
    def test_identical_strength_distinguishes_all_strings(self, collation, locale):
        for a, b in itertools.combinations(SAMPLE, 2):
            assert collation.compare(a, b, locale) is not Ordering.EQUAL

    @pytest.mark.parametrize("locale", ["en", "sv", "da"])
    def test_antisymmetric_and_transitive(self, collation, locale):
        compare = functools.partial(collation.compare, locale=locale)
        for a, b in itertools.product(SAMPLE, repeat=2):
            assert compare(a, b) == -compare(b, a)
        ordered = sorted(SAMPLE, key=functools.cmp_to_key(compare))
        for a, b, c in zip(ordered, ordered[1:], ordered[2:]):
            assert compare(a, b) is Ordering.LESS
            assert compare(a, c) is Ordering.LESS

    def test_prefix_sorts_first(self, collation):
        assert collation.sort(["abc", "ab", "a", ""], "en") == ["", "a", "ab", "abc"]


class TestTailoring:
    """Locale tailoring of the root order."""

    def test_c_locale_is_code_point_order(self, collation):
        values = ["b", "B", "a", "é", "e", "Z", "ı", "10", "9"]
        assert collation.sort(values, "C") == sorted(values)

    def test_swedish(self, collation):
        assert collation.sort(["ö", "z", "a", "å", "ä"], "sv") == ["a", "z", "å", "ä", "ö"]
        assert collation.sort(["ö", "z", "o"], "de") == ["o", "ö", "z"]

    def test_danish_upper_first(self, collation):
        assert collation.sort(["æble", "zebra", "Æble"], "da") == ["zebra", "Æble", "æble"]

    def test_spanish_enye(self, collation):
        assert collation.sort(["o", "ña", "nz", "n"], "es") == ["n", "nz", "ña", "o"]

    def test_czech_contraction(self, collation):
        assert collation.sort(["chata", "hrad", "cukr", "ir", "čaj"], "cs") == [
            "cukr", "čaj", "hrad", "chata", "ir",
        ]
        assert collation.compare("Chata", "hrad", "cs") is Ordering.GREATER

    def test_turkish_dotless_i(self, collation):
        assert collation.sort(["i", "ı", "j", "h"], "tr") == ["h", "ı", "i", "j"]
        assert collation.compare("I", "ı", "tr", Strength.PRIMARY) is Ordering.EQUAL
        assert collation.compare("İ", "i", "tr", Strength.PRIMARY) is Ordering.EQUAL
        assert collation.compare("I", "i", "en", Strength.PRIMARY) is Ordering.EQUAL

    def test_turkish_letters(self, collation):
        assert collation.sort(["şeker", "sabun", "tuz"], "tr") == ["sabun", "şeker", "tuz"]
        assert collation.sort(["ça", "da", "cz"], "tr") == ["cz", "ça", "da"]


class TestCharacterClasses:
    def test_space_punct_digits_letters(self, collation):
        assert collation.sort(["b", "1", "-", "a", " ", "$"], "en") == [" ", "-", "$", "1", "a", "b"]

    def test_digits_compare_by_value(self, collation):
        assert collation.sort(["2", "10", "1"], "en") == ["1", "10", "2"]


class TestStrength:
    def test_primary_ignores_accent_and_case(self, collation):
        assert collation.compare("résumé", "Resume", "fr", Strength.PRIMARY) is Ordering.EQUAL

    def test_secondary_ignores_case_only(self, collation):
        assert collation.compare("resume", "Resume", "en", Strength.SECONDARY) is Ordering.EQUAL
        assert collation.compare("resume", "résumé", "en", Strength.SECONDARY) is Ordering.LESS

    def test_tertiary_orders_case(self, collation):
        assert collation.compare("resume", "Resume", "en", Strength.TERTIARY) is Ordering.LESS
        assert collation.compare("resume", "Resume", "da", Strength.TERTIARY) is Ordering.GREATER

    def test_accent_order(self, collation):
        assert collation.sort(["côté", "côte", "coté", "cote"], "en") == ["cote", "coté", "côte", "côté"]

    def test_sharp_s(self, collation):
        assert collation.compare("straße", "strasse", "de", Strength.SECONDARY) is Ordering.EQUAL
        assert collation.compare("strasse", "straße", "de", Strength.TERTIARY) is Ordering.LESS

    def test_kana_voicing_is_secondary(self, collation):
        assert collation.compare("か", "が", "ja", Strength.PRIMARY) is Ordering.EQUAL
        assert collation.compare("か", "が", "ja", Strength.SECONDARY) is Ordering.LESS

    def test_nfc_and_nfd_equal_below_identical(self, collation):
        assert collation.compare("e\u0301", "\u00e9", "en", Strength.TERTIARY) is Ordering.EQUAL
        assert collation.compare("e\u0301", "\u00e9", "en") is not Ordering.EQUAL

    def test_strength_levels(self):
        assert [s.levels for s in Strength] == [1, 2, 3, 4]


class TestSortKey:
    def test_stable_primary_key(self, collation):
        assert collation.sort_key("a", "en", Strength.PRIMARY) == bytes([4, 0, 0, 0x61, 128])

    def test_key_for_tailored_letter(self, collation):
        z = collation.sort_key("z", "sv", Strength.PRIMARY)
        o_umlaut = collation.sort_key("ö", "sv", Strength.PRIMARY)
        assert o_umlaut[:4] == z[:4]
        assert o_umlaut > z

    def test_collator_reuse(self, collation):
        collator = collation.collator("sv")
        assert sorted(["ö", "z"], key=collator.sort_key) == ["z", "ö"]


class TestNumeric:
    def test_numeric_runs(self, collation):
        files = ["file10", "file2", "file1", "file02"]
        assert collation.sort(files, "en", numeric=True) == ["file1", "file02", "file2", "file10"]
        assert collation.sort(files, "en") == ["file02", "file1", "file10", "file2"]

    def test_numeric_prefix(self, collation):
        assert collation.sort(["a2b", "a2", "a10"], "en", numeric=True) == ["a2", "a2b", "a10"]


class TestSortHelpers:
    def test_sort_with_key_and_reverse(self, collation):
        rows = [{"name": "ö"}, {"name": "a"}, {"name": "z"}]
        ordered = collation.sort(rows, "sv", key=lambda row: row["name"], reverse=True)
        assert [row["name"] for row in ordered] == ["ö", "z", "a"]

    def test_sort_is_stable_at_lower_strength(self, collation):
        assert collation.sort(["B", "b", "A", "a"], "en", strength=Strength.PRIMARY) == ["A", "a", "B", "b"]

    @pytest.mark.parametrize(
        "method,expected",
        [
            (RankMethod.DENSE, [2, 1, 2, 3]),
            (RankMethod.MIN, [2, 1, 2, 4]),
            (RankMethod.ORDINAL, [2, 1, 3, 4]),
            ("dense", [2, 1, 2, 3]),
        ],
    )
    def test_rank(self, collation, method, expected):
        assert collation.rank(["b", "a", "b", "c"], "en", method) == expected

    def test_rank_with_strength(self, collation):
        ranks = collation.rank(["a", "A", "b"], "en", "dense", strength=Strength.PRIMARY)
        assert ranks == [1, 1, 2]

    def test_sort_series(self, collation):
        series = pl.Series("name", ["ö", "a", None, "z"])
        result = collation.sort_series(series, "sv")
        assert result.name == "name"
        assert result.to_list() == ["a", "z", "ö", None]
        assert collation.sort_series(series, "de").to_list() == ["a", "ö", "z", None]


class TestIsolation:
    def test_engines_share_nothing(self, store):
        first = CollationEngine(store)
        second = CollationEngine(store)
        assert first.sort_key("ö", "sv") == second.sort_key("ö", "sv")
