"""Tests that components are safe to share across threads."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from placeless.context import Context

WORDS = ["şeker", "Istanbul", "ılık", "içmek", "çay", "Ürün", "file10", "file2", "öğle"] * 5
CONTEXTS = [
    Context(locale_id="tr", timezone_id="Europe/Istanbul", decimal_separator=",", group_separator="."),
    Context(locale_id="en", timezone_id="America/New_York", group_separator=","),
    Context(locale_id="sv", timezone_id="Europe/Stockholm", decimal_separator=","),
    Context(locale_id="C", timezone_id="UTC"),
]


def _work(engine, context, instant):
    bound = engine.bind(context)
    return (
        bound.sort(WORDS),
        [bound.upper(word) for word in WORDS],
        bound.format_style(instant, time_style="full"),
        bound.format_number(1234567.891),
        bound.collation_levels(WORDS).levels,
    )


class TestSharedEngine:
    def test_parallel_results_match_sequential(self, engine, sample_instant):
        expected = [_work(engine, ctx, sample_instant) for ctx in CONTEXTS]
        jobs = CONTEXTS * 8
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda ctx: _work(engine, ctx, sample_instant), jobs))
        assert results == expected * 8

    def test_contexts_do_not_leak(self, engine, sample_instant):
        results = [_work(engine, ctx, sample_instant) for ctx in CONTEXTS]
        assert results[0][1][0] == "ŞEKER"
        assert results[0][1][3] == "İÇMEK"
        assert results[1][1][3] == "IÇMEK"
        assert results[0][3] == "1.234.567,891"
        assert results[1][3] == "1,234,567.891"
