"""Timezone resolution and the Instant type.

Timezones come from the database bundled with ``pytz``, never from the
host, so a given timezone id behaves identically everywhere. There is no
"local" timezone; callers always name one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from decimal import Decimal, ROUND_HALF_EVEN

import pytz

from placeless.errors import UnknownTimezone

EPOCH = datetime(1970, 1, 1, tzinfo=pytz.utc)
_MICROSECOND = timedelta(microseconds=1)


def resolve_timezone(timezone_id: str | tzinfo) -> tzinfo:
    """Resolve an IANA timezone id.

    Args:
        timezone_id: IANA name such as "Europe/Istanbul", or a pytz tzinfo

    Returns:
        pytz timezone

    Raises:
        UnknownTimezone: If the name is not in the bundled database
    """
    if isinstance(timezone_id, tzinfo):
        return timezone_id
    if not isinstance(timezone_id, str) or not timezone_id:
        raise UnknownTimezone(str(timezone_id))
    try:
        return pytz.timezone(timezone_id)
    except pytz.UnknownTimeZoneError:
        raise UnknownTimezone(timezone_id) from None


def timezone_name(zone: tzinfo) -> str:
    """Return the IANA id of a resolved timezone."""
    name = getattr(zone, "zone", None)
    if name:
        return name
    return str(zone)


def available_timezones() -> frozenset[str]:
    return frozenset(pytz.all_timezones)


@dataclass(frozen=True, order=True)
class Instant:
    """Absolute point in time, independent of any timezone.

    Attributes:
        epoch_micros: Microseconds since 1970-01-01T00:00:00Z
    """

    epoch_micros: int

    @classmethod
    def from_datetime(cls, value: datetime) -> "Instant":
        """Build from an aware datetime.

        Raises:
            ValueError: If ``value`` is naive, since its meaning would depend
                on an unstated timezone
        """
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("Instant.from_datetime requires an aware datetime")
        return cls((value - EPOCH) // _MICROSECOND)

    @classmethod
    def from_epoch_seconds(cls, seconds: int | float | Decimal) -> "Instant":
        exact = Decimal(repr(seconds)) if isinstance(seconds, float) else Decimal(seconds)
        micros = (exact * 1_000_000).to_integral_value(rounding=ROUND_HALF_EVEN)
        return cls(int(micros))

    @property
    def epoch_seconds(self) -> float:
        return self.epoch_micros / 1_000_000

    def to_datetime(self, zone: str | tzinfo) -> datetime:
        """Return the aware datetime for this instant in ``zone``.

        Raises:
            UnknownTimezone: If ``zone`` is an unknown id
        """
        utc = EPOCH + timedelta(microseconds=self.epoch_micros)
        return utc.astimezone(resolve_timezone(zone))

    def __str__(self) -> str:
        return self.to_datetime(pytz.utc).isoformat()
