"""Tests for locale-driven case mapping."""

from __future__ import annotations

import pytest

from placeless.casing import CaseMapper, apply_case_mapping
from placeless.errors import UnknownLocale
from placeless.locales.data import CasingOperation, SpecialCasingRule


class TestTurkicCasing:
    """Dotted and dotless i."""

    def test_lower_dotless(self, case_mapper):
        assert case_mapper.to_lower("I", "tr") == "ı"
        assert case_mapper.to_lower("İ", "tr") == "i"

    def test_upper_dotted(self, case_mapper):
        assert case_mapper.to_upper("i", "tr") == "İ"
        assert case_mapper.to_upper("ı", "tr") == "I"

    def test_words(self, case_mapper):
        assert case_mapper.to_upper("istanbul", "tr") == "İSTANBUL"
        assert case_mapper.to_lower("DİYARBAKIR", "tr") == "diyarbakır"
        assert case_mapper.to_lower("DİYARBAKIR", "az") == "diyarbakır"

    def test_decomposed_dotted_capital(self, case_mapper):
        assert case_mapper.to_lower("I\u0307stanbul", "tr") == "istanbul"

    def test_round_trip_is_stable(self, case_mapper):
        once = case_mapper.to_lower(case_mapper.to_upper("ııii", "tr"), "tr")
        assert once == "ııii"
        assert case_mapper.to_lower(case_mapper.to_upper(once, "tr"), "tr") == once

    def test_fold(self, case_mapper):
        assert case_mapper.fold("KIŞ", "tr") == case_mapper.fold("kış", "tr")
        assert case_mapper.equals_ignore_case("IRMAK", "ırmak", "tr")
        assert not case_mapper.equals_ignore_case("IRMAK", "ırmak", "en")


class TestDefaultCasing:
    def test_english(self, case_mapper):
        assert case_mapper.to_lower("I", "en") == "i"
        assert case_mapper.to_upper("i", "en") == "I"

    def test_german_sharp_s(self, case_mapper):
        assert case_mapper.to_upper("straße", "de") == "STRASSE"
        assert case_mapper.fold("Straße", "de") == case_mapper.fold("STRASSE", "de")

    def test_greek_final_sigma(self, case_mapper):
        assert case_mapper.to_lower("\u039f\u0394\u039f\u03a3", "en") == "\u03bf\u03b4\u03bf\u03c2"

    def test_c_locale_uses_default_mapping(self, case_mapper):
        assert case_mapper.to_lower("I", "C") == "i"

    def test_unknown_locale(self, case_mapper):
        with pytest.raises(UnknownLocale):
            case_mapper.to_upper("x", "nl")

    def test_explicit_fallback(self, case_mapper):
        assert case_mapper.to_upper("i", "nl", fallback="en") == "I"


class TestApplyCaseMapping:
    def test_longest_rule_wins(self):
        rules = (
            SpecialCasingRule("a", "1", CasingOperation.LOWER),
            SpecialCasingRule("ab", "2", CasingOperation.LOWER),
        )
        assert apply_case_mapping("abA", rules, CasingOperation.LOWER) == "2a"

    def test_rules_for_other_operations_ignored(self):
        rules = (SpecialCasingRule("x", "y", CasingOperation.UPPER),)
        assert apply_case_mapping("X", rules, CasingOperation.LOWER) == "x"

    def test_empty_text(self):
        assert apply_case_mapping("", (), CasingOperation.FOLD) == ""
