"""Exception hierarchy for placeless.

Every failure is raised to the immediate caller. Nothing in the library
logs an error and carries on, and no error triggers an implicit fallback
to a default locale or timezone.

Hierarchy:
    PlacelessError
    ├── UnknownLocale          (also LookupError)
    ├── UnknownTimezone        (also LookupError)
    ├── InvalidPath            (also ValueError)
    ├── ParseError             (also ValueError)
    │   └── AmbiguousFormat
    ├── PatternError           (also ValueError)
    ├── RendererUnavailable    (also LookupError)
    ├── LocaleDataLoadError
    ├── LocaleDataNotInitialized
    └── ConfigError
"""

from __future__ import annotations

from typing import Any, Iterable


class PlacelessError(Exception):
    """Base exception for all placeless errors.

    Attributes:
        message: Human-readable message
        details: Structured details for programmatic handling
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class UnknownLocale(PlacelessError, LookupError):
    """Raised when a locale identifier resolves to no LocaleData entry."""

    def __init__(self, locale_id: str, available: Iterable[str] | None = None) -> None:
        self.locale_id = locale_id
        self.available = tuple(sorted(available)) if available is not None else ()
        message = f"Unknown locale: {locale_id!r}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message, {"locale_id": locale_id})


class UnknownTimezone(PlacelessError, LookupError):
    """Raised when a timezone identifier is not in the bundled database."""

    def __init__(self, timezone_id: str) -> None:
        self.timezone_id = timezone_id
        super().__init__(
            f"Unknown timezone: {timezone_id!r}",
            {"timezone_id": timezone_id},
        )


class InvalidPath(PlacelessError, ValueError):
    """Raised when a raw path cannot be normalized."""

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Invalid path {raw!r}: {reason}", {"raw": raw, "reason": reason})


class ParseError(PlacelessError, ValueError):
    """Raised when text does not match the expected format.

    Attributes:
        reason: What went wrong
        position: Zero-based offset into ``text`` where matching failed
        text: The input being parsed
    """

    def __init__(self, reason: str, position: int, text: str = "") -> None:
        self.reason = reason
        self.position = position
        self.text = text
        super().__init__(
            f"{reason} at position {position}" + (f" in {text!r}" if text else ""),
            {"reason": reason, "position": position},
        )


class AmbiguousFormat(ParseError):
    """Raised when a pattern admits more than one valid reading of the input.

    Surfaced instead of picking one of the candidates.
    """

    def __init__(
        self,
        reason: str,
        position: int,
        text: str = "",
        candidates: Iterable[str] = (),
    ) -> None:
        self.candidates = tuple(candidates)
        super().__init__(reason, position, text)
        if self.candidates:
            self.details["candidates"] = list(self.candidates)


class PatternError(PlacelessError, ValueError):
    """Raised for a malformed date/time pattern."""

    def __init__(self, pattern: str, position: int, reason: str) -> None:
        self.pattern = pattern
        self.position = position
        self.reason = reason
        super().__init__(
            f"Invalid pattern {pattern!r} at position {position}: {reason}",
            {"pattern": pattern, "position": position, "reason": reason},
        )


class RendererUnavailable(PlacelessError, LookupError):
    """Raised when no registered renderer satisfies the requested capabilities."""

    def __init__(self, requested: Any) -> None:
        self.requested = requested
        super().__init__(f"No renderer provides {requested!r}", {"requested": str(requested)})


class LocaleDataLoadError(PlacelessError):
    """Raised when locale data cannot be loaded at startup.

    This is the only fatal condition: no component can operate without
    locale data.
    """


class LocaleDataNotInitialized(PlacelessError):
    """Raised when the process-wide locale store is used before initialize()."""

    def __init__(self) -> None:
        super().__init__(
            "Locale data has not been initialized; call placeless.initialize() first"
        )


class ConfigError(PlacelessError):
    """Raised for a missing or malformed configuration file."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message, {"path": path})
