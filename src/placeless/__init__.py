"""Placeless - host-independent text, path, date and number normalization.

Every operation takes its locale, timezone and separators from an explicit
Context; nothing is read from the host environment.
"""

from placeless.calendar import (
    CalendarFormatter,
    CalendarParser,
    DateStyle,
    Instant,
    TimeStyle,
    resolve_timezone,
)
from placeless.casing import CaseMapper
from placeless.collation import CollationEngine, Collator, Ordering, RankMethod, Strength
from placeless.config import EngineConfig
from placeless.context import Context, LocaleId, PathConvention
from placeless.engine import BoundEngine, NormalizationEngine
from placeless.errors import (
    AmbiguousFormat,
    ConfigError,
    InvalidPath,
    LocaleDataLoadError,
    LocaleDataNotInitialized,
    ParseError,
    PatternError,
    PlacelessError,
    RendererUnavailable,
    UnknownLocale,
    UnknownTimezone,
)
from placeless.factors import (
    AppearanceOrder,
    CollationOrder,
    FactorLevelBuilder,
    FactorLevels,
)
from placeless.locales import (
    BuiltinLocaleProvider,
    ChainedLocaleProvider,
    FileLocaleProvider,
    LocaleData,
    LocaleDataProvider,
    LocaleStore,
    MemoryLocaleProvider,
    get_store,
    initialize,
    swap_store,
)
from placeless.numbers import NumberFormat, format_number, parse_number
from placeless.paths import PathNormalizer, PathSpec, join, normalize, render
from placeless.rendering import (
    Renderer,
    RendererCapabilities,
    RendererHandle,
    RendererRegistry,
    default_registry,
)

__version__ = "0.1.0"

__all__ = [
    # Context
    "Context",
    "LocaleId",
    "PathConvention",
    # Locale data
    "LocaleData",
    "LocaleDataProvider",
    "BuiltinLocaleProvider",
    "FileLocaleProvider",
    "ChainedLocaleProvider",
    "MemoryLocaleProvider",
    "LocaleStore",
    "initialize",
    "get_store",
    "swap_store",
    # Components
    "PathNormalizer",
    "PathSpec",
    "normalize",
    "render",
    "join",
    "CaseMapper",
    "CollationEngine",
    "Collator",
    "Ordering",
    "RankMethod",
    "Strength",
    "CalendarFormatter",
    "CalendarParser",
    "DateStyle",
    "TimeStyle",
    "Instant",
    "resolve_timezone",
    "NumberFormat",
    "format_number",
    "parse_number",
    "FactorLevelBuilder",
    "FactorLevels",
    "AppearanceOrder",
    "CollationOrder",
    "Renderer",
    "RendererCapabilities",
    "RendererHandle",
    "RendererRegistry",
    "default_registry",
    # Facade and configuration
    "NormalizationEngine",
    "BoundEngine",
    "EngineConfig",
    # Errors
    "PlacelessError",
    "UnknownLocale",
    "UnknownTimezone",
    "InvalidPath",
    "ParseError",
    "AmbiguousFormat",
    "PatternError",
    "RendererUnavailable",
    "LocaleDataLoadError",
    "LocaleDataNotInitialized",
    "ConfigError",
]
