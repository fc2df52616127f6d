"""Tests for factor level construction."""

from __future__ import annotations

import polars as pl
import pytest

from placeless.collation import Strength
from placeless.errors import UnknownLocale
from placeless.factors import AppearanceOrder, CollationOrder, FactorLevelBuilder, FactorLevels


@pytest.fixture
def builder(collation) -> FactorLevelBuilder:
    return FactorLevelBuilder(collation)


class TestBuild:
    def test_appearance_order(self, builder):
        levels = builder.build(["b", "a", None, "b", "c"], AppearanceOrder())
        assert levels.levels == ("b", "a", "c")
        assert levels.mode == AppearanceOrder()

    def test_collation_order(self, builder):
        assert builder.build(["b", "a", "b", "c"], CollationOrder("en")).levels == ("a", "b", "c")

    def test_collation_order_is_locale_specific(self, builder):
        values = ["ö", "z", "a"]
        assert builder.build(values, CollationOrder("sv")).levels == ("a", "z", "ö")
        assert builder.build(values, CollationOrder("de")).levels == ("a", "ö", "z")

    def test_equal_at_strength_collapse_to_first_seen(self, builder):
        levels = builder.build(["b", "B", "a", "A"], CollationOrder("en", Strength.PRIMARY))
        assert levels.levels == ("a", "b")

    def test_identical_strength_keeps_case_variants(self, builder):
        levels = builder.build(["b", "B", "a"], CollationOrder("en"))
        assert levels.levels == ("a", "b", "B")

    def test_numeric(self, builder):
        levels = builder.build(["item10", "item2", "item1"], CollationOrder("en", numeric=True))
        assert levels.levels == ("item1", "item2", "item10")

    def test_empty(self, builder):
        assert len(builder.build([None, None], AppearanceOrder())) == 0

    def test_iterables(self, builder):
        assert builder.build(iter(["y", "x"]), CollationOrder("en")).levels == ("x", "y")

    @pytest.mark.parametrize("mode", ["en", None, CollationOrder])
    def test_mode_is_required(self, builder, mode):
        with pytest.raises(TypeError):
            builder.build(["a"], mode)

    def test_unknown_locale(self, builder):
        with pytest.raises(UnknownLocale):
            builder.build(["a"], CollationOrder("nl"))


class TestFactorLevels:
    @pytest.fixture
    def levels(self) -> FactorLevels:
        return FactorLevels(("a", "b", "c"), AppearanceOrder())

    def test_sequence_behaviour(self, levels):
        assert len(levels) == 3
        assert list(levels) == ["a", "b", "c"]
        assert levels.index("c") == 2
        with pytest.raises(ValueError):
            levels.index("z")

    def test_codes(self, levels):
        assert levels.codes(["b", None, "a", "b"]) == [1, None, 0, 1]
        with pytest.raises(ValueError, match="'z'"):
            levels.codes(["a", "z"])

    def test_polars_enum(self, levels):
        series = pl.Series("grade", ["b", "a", None, "c"])
        encoded = levels.encode_series(series)
        assert encoded.name == "grade"
        assert encoded.dtype == levels.to_polars_enum()
        assert encoded.cat.get_categories().to_list() == ["a", "b", "c"]
        assert encoded.to_physical().to_list() == [1, 0, None, 2]

    def test_encode_rejects_unknown(self, levels):
        with pytest.raises(ValueError):
            levels.encode_series(pl.Series(["a", "x"]))
