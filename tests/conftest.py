"""Shared fixtures for placeless tests."""

from __future__ import annotations

import logging
from datetime import datetime

import pytest
import pytz

from placeless.calendar import CalendarFormatter, CalendarParser, Instant
from placeless.casing import CaseMapper
from placeless.collation import CollationEngine
from placeless.context import Context
from placeless.engine import NormalizationEngine
from placeless.locales.provider import BuiltinLocaleProvider
from placeless.locales.store import LocaleStore, reset_store


@pytest.fixture(autouse=True)
def clean_default_store():
    """Make sure no test sees a default store left by another."""
    reset_store()
    yield
    reset_store()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo global logging setup (e.g. from ``--verbose``) after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(scope="session")
def store() -> LocaleStore:
    """Store with every built-in locale."""
    return LocaleStore.load(BuiltinLocaleProvider())


@pytest.fixture
def engine(store: LocaleStore) -> NormalizationEngine:
    return NormalizationEngine(store)


@pytest.fixture
def case_mapper(store: LocaleStore) -> CaseMapper:
    return CaseMapper(store)


@pytest.fixture
def collation(store: LocaleStore) -> CollationEngine:
    return CollationEngine(store)


@pytest.fixture
def formatter(store: LocaleStore) -> CalendarFormatter:
    return CalendarFormatter(store)


@pytest.fixture
def parser(store: LocaleStore) -> CalendarParser:
    return CalendarParser(store)


@pytest.fixture
def en_context() -> Context:
    return Context(locale_id="en", timezone_id="UTC")


@pytest.fixture
def sample_instant() -> Instant:
    """2024-03-05 14:07:09.123456 UTC, a Tuesday."""
    return Instant.from_datetime(datetime(2024, 3, 5, 14, 7, 9, 123456, tzinfo=pytz.utc))
