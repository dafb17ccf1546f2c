from __future__ import annotations

import calendar
import math
from datetime import date, datetime, timedelta, timezone
from typing import Union

from .errors import DateRangeError

DateLike = Union[date, datetime]

JDE_UNIX_EPOCH = 2440587.5  # JD at 1970-01-01 00:00:00 UTC
MS_PER_DAY = 86400000.0

# Instants a datetime can hold: [0001-01-01 00:00, 10000-01-01 00:00)
JDE_MIN = 1721425.5
JDE_MAX = 5373484.5

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def as_utc(d: DateLike) -> datetime:
    """Promote a date or datetime to an aware UTC datetime (naive input is taken as UTC)."""
    if not isinstance(d, datetime):
        return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
    if d.tzinfo is None:
        return d.replace(tzinfo=timezone.utc)
    return d.astimezone(timezone.utc)


def jde_to_unix_ms(jde: float) -> float:
    """
    Milliseconds since the Unix epoch for a Julian Ephemeris Day.

    Dynamical time is read directly as UTC (no ΔT). Non-finite input
    gives non-finite output.
    """
    return (jde - JDE_UNIX_EPOCH) * MS_PER_DAY


def in_datetime_range(jde: float) -> bool:
    return JDE_MIN <= jde < JDE_MAX


def jde_to_datetime(jde: float) -> datetime:
    """
    JDE -> timezone-aware UTC datetime, rounded to the millisecond.

    Raises DateRangeError outside the years 1-9999.
    """
    if not math.isfinite(jde):
        raise ValueError(f"jde must be finite, got {jde!r}")
    if not in_datetime_range(jde):
        raise DateRangeError(f"JDE {jde:.5f} is outside the supported range [{JDE_MIN}, {JDE_MAX}) (years 1-9999)")
    ms = round(jde_to_unix_ms(jde))
    try:
        return _UNIX_EPOCH + timedelta(milliseconds=ms)
    except OverflowError as e:
        # rounding up into 10000-01-01
        raise DateRangeError(f"JDE {jde:.5f} rounds past 9999-12-31") from e


def datetime_to_jde(d: DateLike) -> float:
    """Inverse of jde_to_datetime. Dates map to 00:00 UTC."""
    delta = as_utc(d) - _UNIX_EPOCH
    ms = (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds / 1000.0
    return JDE_UNIX_EPOCH + ms / MS_PER_DAY


def year_decimal(d: DateLike) -> float:
    """Decimal year: year + elapsed/length, counting the time of day for datetimes."""
    dt = as_utc(d)
    start = datetime(dt.year, 1, 1, tzinfo=timezone.utc)
    span = timedelta(days=366 if calendar.isleap(dt.year) else 365)
    return dt.year + (dt - start) / span
