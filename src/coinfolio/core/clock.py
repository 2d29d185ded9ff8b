"""Time helpers. All cache timestamps are UTC."""

from datetime import datetime
from typing import Callable

import pytz

UTC = pytz.utc

Clock = Callable[[], datetime]


def now_utc() -> datetime:
    """Return current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC; naive datetimes are assumed to be UTC already."""
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def age_seconds(since: datetime, now: datetime) -> float:
    """Seconds elapsed between two datetimes, in UTC."""
    return (to_utc(now) - to_utc(since)).total_seconds()
