"""Explicit context values.

A ``Context`` bundles every choice that would otherwise be read from the
host: locale, timezone, path separator and number separators. It is
immutable and passed to each operation; nothing here consults
``os.environ``, ``locale`` or ``time``.

Usage:
    from placeless.context import Context, LocaleId

    ctx = Context(locale_id="tr", timezone_id="Europe/Istanbul")
    ctx_de = ctx.replace(locale_id="de", decimal_separator=",")

    LocaleId.parse("en_us").tag  # "en-US"
"""

from __future__ import annotations

from dataclasses import dataclass, replace as dc_replace
from typing import Any

PATH_SEPARATORS = ("/", "\\")

# Pseudo-locale selecting raw code-point ordering and default casing.
BYTE_ORDER_LOCALE = "C"
_BYTE_ORDER_ALIASES = {"c", "posix", "c.utf-8", "c.utf8"}


@dataclass(frozen=True)
class LocaleId:
    """Parsed locale identifier.

    Attributes:
        language: ISO 639 language code (e.g., "en", "tr"), or "C"
        script: ISO 15924 script code (e.g., "Latn", "Hans")
        region: ISO 3166-1 region code (e.g., "US", "GB")
        variant: Locale variant (e.g., "posix")
    """

    language: str
    script: str | None = None
    region: str | None = None
    variant: str | None = None

    @property
    def tag(self) -> str:
        """Get BCP 47 language tag."""
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        if self.variant:
            parts.append(self.variant)
        return "-".join(parts)

    @property
    def is_byte_order(self) -> bool:
        return self.language == BYTE_ORDER_LOCALE

    @classmethod
    def parse(cls, tag: str | "LocaleId") -> "LocaleId":
        """Parse a locale tag.

        Supports formats:
        - Simple: "en", "tr"
        - With region: "en-US", "en_US"
        - With script: "zh-Hans", "sr-Latn-RS"
        - Pseudo-locales: "C", "POSIX"

        Args:
            tag: Locale tag string

        Returns:
            Parsed LocaleId

        Raises:
            ValueError: If the tag is empty or malformed
        """
        if isinstance(tag, LocaleId):
            return tag
        if not isinstance(tag, str) or not tag.strip():
            raise ValueError(f"Invalid locale tag: {tag!r}")

        cleaned = tag.strip()
        if cleaned.lower() in _BYTE_ORDER_ALIASES:
            return cls(language=BYTE_ORDER_LOCALE)

        # Drop a POSIX codeset suffix ("de_DE.UTF-8")
        cleaned = cleaned.split(".", 1)[0]
        parts = cleaned.replace("_", "-").split("-")

        language = parts[0].lower()
        if not (2 <= len(language) <= 3 and language.isalpha()):
            raise ValueError(f"Invalid language subtag in locale tag: {tag!r}")

        script = None
        region = None
        variant = None

        for part in parts[1:]:
            if not part:
                raise ValueError(f"Empty subtag in locale tag: {tag!r}")
            if len(part) == 4 and part.isalpha() and script is None and region is None:
                script = part.capitalize()
            elif len(part) == 2 and part.isalpha() and region is None:
                region = part.upper()
            elif len(part) == 3 and part.isdigit() and region is None:
                # UN M.49 region code
                region = part
            else:
                variant = part.lower()

        return cls(language=language, script=script, region=region, variant=variant)

    def __str__(self) -> str:
        return self.tag


def canonical_tag(tag: str | LocaleId) -> str:
    """Return the canonical BCP 47 form of a locale tag."""
    return LocaleId.parse(tag).tag


@dataclass(frozen=True)
class PathConvention:
    """Separator and home directory used by path normalization.

    Attributes:
        separator: Target platform separator, "/" or "\\"
        home: Value substituted for a leading "~"; None forbids "~"
    """

    separator: str = "/"
    home: str | None = None

    def __post_init__(self) -> None:
        if self.separator not in PATH_SEPARATORS:
            raise ValueError(f"Path separator must be '/' or '\\\\', got {self.separator!r}")


@dataclass(frozen=True)
class Context:
    """Explicit bundle of locale, timezone, path and number choices.

    Two calls with equal Contexts produce equal output on any host.

    Attributes:
        locale_id: Locale tag resolved against the locale store
        timezone_id: IANA timezone name (e.g., "UTC", "Europe/Istanbul")
        path_separator: "/" or "\\"
        decimal_separator: Decimal mark used by number formatting
        group_separator: Digit grouping mark, None disables grouping
        home: Home directory substituted for "~" in paths
    """

    locale_id: str
    timezone_id: str
    path_separator: str = "/"
    decimal_separator: str = "."
    group_separator: str | None = None
    home: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "locale_id", canonical_tag(self.locale_id))
        if not isinstance(self.timezone_id, str) or not self.timezone_id:
            raise ValueError(f"timezone_id must be a non-empty string, got {self.timezone_id!r}")
        if self.path_separator not in PATH_SEPARATORS:
            raise ValueError(
                f"path_separator must be '/' or '\\\\', got {self.path_separator!r}"
            )
        for name in ("decimal_separator", "group_separator"):
            value = getattr(self, name)
            if value is None and name == "group_separator":
                continue
            if not isinstance(value, str) or len(value) != 1:
                raise ValueError(f"{name} must be a single character, got {value!r}")
            if value.isdigit() or value == "-":
                raise ValueError(f"{name} must not be a digit or '-', got {value!r}")
        if self.group_separator == self.decimal_separator:
            raise ValueError("decimal_separator and group_separator must differ")

    @property
    def locale(self) -> LocaleId:
        return LocaleId.parse(self.locale_id)

    @property
    def path_convention(self) -> PathConvention:
        return PathConvention(separator=self.path_separator, home=self.home)

    def replace(self, **changes: Any) -> "Context":
        """Return a copy with the given fields changed."""
        return dc_replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "locale_id": self.locale_id,
            "timezone_id": self.timezone_id,
            "path_separator": self.path_separator,
            "decimal_separator": self.decimal_separator,
            "group_separator": self.group_separator,
            "home": self.home,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Context":
        """Build a Context from a mapping.

        Accepts the short keys used in configuration files ("locale",
        "timezone") as well as the field names.
        """
        values = dict(data)
        if "locale" in values:
            values.setdefault("locale_id", values.pop("locale"))
        if "timezone" in values:
            values.setdefault("timezone_id", values.pop("timezone"))
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown context fields: {', '.join(sorted(unknown))}")
        missing = {"locale_id", "timezone_id"} - set(values)
        if missing:
            raise ValueError(f"Missing context fields: {', '.join(sorted(missing))}")
        return cls(**values)
