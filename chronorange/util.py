"""Tick resolution helpers for chronorange.

Ranges accept either timezone-aware datetimes (with timedelta intervals) or
integer ticks (with integer intervals). A tick is 100 nanoseconds, counted
from the Unix epoch, which is finer than what ``datetime`` can hold.
"""

from datetime import datetime, timedelta, timezone, tzinfo

# Tick unit constants (all values in ticks)
TICK = 1
MICROSECOND = 10
MILLISECOND = 10_000
SECOND = 10_000_000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR

TICKS_PER_SECOND = SECOND

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ticks(moment: datetime) -> int:
    """Convert a timezone-aware datetime to ticks since the Unix epoch.

    Raises:
        TypeError: If ``moment`` is a naive datetime
    """
    if moment.tzinfo is None:
        raise TypeError(
            f"ticks() needs a timezone-aware datetime.\n"
            f"Got naive datetime: {moment!r}\n"
            f"Hint: Add timezone info:\n"
            f"  from zoneinfo import ZoneInfo\n"
            f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))"
        )
    return (moment - EPOCH) // timedelta(microseconds=1) * MICROSECOND


def from_ticks(value: int, tz: tzinfo = timezone.utc) -> datetime:
    """Convert ticks since the Unix epoch back to an aware datetime.

    Sub-microsecond ticks are truncated towards the past.
    """
    return (EPOCH + timedelta(microseconds=value // MICROSECOND)).astimezone(tz)
