"""Engine configuration from an explicit file.

Configuration is only ever read from a path the caller names. Environment
variables and host settings are never consulted, so the same file gives
the same engine on every machine.

Supported formats are detected from the file extension: YAML (.yaml/.yml),
JSON (.json) and TOML (.toml).

Example (placeless.yaml):
    context:
      locale: de
      timezone: Europe/Berlin
      path_separator: "/"
      decimal_separator: ","
      group_separator: "."
      home: /home/ada
    locales: [de, en, C]
    locale_dirs: [./locales]

Usage:
    config = EngineConfig.from_file("placeless.yaml")
    engine = config.build_engine()
    bound = engine.bind(config.context)
"""

from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from placeless.context import Context
from placeless.engine import NormalizationEngine
from placeless.errors import ConfigError, LocaleDataLoadError
from placeless.locales.provider import (
    BuiltinLocaleProvider,
    ChainedLocaleProvider,
    FileLocaleProvider,
    LocaleDataProvider,
)
from placeless.locales.store import LocaleStore

logger = logging.getLogger(__name__)

CONFIG_SUFFIXES = (".yaml", ".yml", ".json", ".toml")
_TOP_LEVEL_KEYS = {"context", "locales", "locale_dirs", "builtin_locales"}


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read a configuration file into a mapping.

    Raises:
        ConfigError: If the file is missing, unreadable, malformed or not a
            mapping
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}", str(path))

    suffix = path.suffix.lower()
    if suffix not in CONFIG_SUFFIXES:
        raise ConfigError(f"Unsupported configuration format: {suffix or path.name}", str(path))

    try:
        content = path.read_text(encoding="utf-8")
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif suffix == ".json":
            data = json.loads(content)
        else:
            data = tomllib.loads(content)
    except (OSError, yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping", str(path))
    logger.debug("Loaded configuration from %s", path)
    return data


@dataclass(frozen=True)
class EngineConfig:
    """Engine settings.

    Attributes:
        context: Context built from the ``context`` section, if present
        locales: Locale tags to preload; None loads everything available
        locale_dirs: Directories of locale files, searched before the
            built-in tables
        builtin_locales: Whether the built-in tables are available
        source: File the configuration came from
    """

    context: Context | None = None
    locales: tuple[str, ...] | None = None
    locale_dirs: tuple[Path, ...] = ()
    builtin_locales: bool = True
    source: Path | None = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base_dir: Path | None = None) -> "EngineConfig":
        """Build from a mapping.

        Relative ``locale_dirs`` are resolved against ``base_dir``.

        Raises:
            ConfigError: If the mapping is malformed
        """
        unknown = set(data) - _TOP_LEVEL_KEYS
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        context = None
        if data.get("context") is not None:
            if not isinstance(data["context"], Mapping):
                raise ConfigError("'context' must be a mapping")
            try:
                context = Context.from_dict(dict(data["context"]))
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid context: {e}") from e

        locales = data.get("locales")
        if locales is not None:
            if not isinstance(locales, list) or not all(isinstance(tag, str) for tag in locales):
                raise ConfigError("'locales' must be a list of locale tags")
            locales = tuple(locales)

        dirs = data.get("locale_dirs") or []
        if not isinstance(dirs, list) or not all(isinstance(d, str) for d in dirs):
            raise ConfigError("'locale_dirs' must be a list of directories")
        resolved = []
        for directory in dirs:
            path = Path(directory)
            if not path.is_absolute() and base_dir is not None:
                path = base_dir / path
            resolved.append(path)

        builtin = data.get("builtin_locales", True)
        if not isinstance(builtin, bool):
            raise ConfigError("'builtin_locales' must be true or false")
        if not builtin and not resolved:
            raise ConfigError("No locale source: builtin_locales is false and locale_dirs is empty")

        return cls(
            context=context,
            locales=locales,
            locale_dirs=tuple(resolved),
            builtin_locales=builtin,
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "EngineConfig":
        path = Path(path)
        data = load_config_file(path)
        return replace(cls.from_dict(data, base_dir=path.parent), source=path)

    def build_provider(self) -> LocaleDataProvider:
        providers: list[LocaleDataProvider] = [FileLocaleProvider(d) for d in self.locale_dirs]
        if self.builtin_locales:
            providers.append(BuiltinLocaleProvider())
        if len(providers) == 1:
            return providers[0]
        return ChainedLocaleProvider(*providers)

    def build_store(self) -> LocaleStore:
        """Load a LocaleStore.

        Raises:
            LocaleDataLoadError: If locale data cannot be loaded
        """
        store = LocaleStore.load(self.build_provider(), self.locales)
        if self.context is not None and self.context.locale_id not in store:
            raise LocaleDataLoadError(
                f"Configured locale {self.context.locale_id!r} was not loaded",
                {"locale_id": self.context.locale_id},
            )
        return store

    def build_engine(self) -> NormalizationEngine:
        return NormalizationEngine(self.build_store())
