# tests/test_time.py

import math
import random
from datetime import date, datetime, timedelta, timezone

import pytest

from lunaphase.core import time as ts
from lunaphase.core.errors import DateRangeError, LunaphaseError


def test_known_epochs():
    """
    Validate standard J2000.0 and Unix epochs.
    """
    unix_dt = datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert ts.jde_to_datetime(2440587.5) == unix_dt
    assert ts.datetime_to_jde(unix_dt) == 2440587.5

    # J2000.0 is 2000-01-01 12:00
    assert ts.jde_to_datetime(2451545.0) == datetime(2000, 1, 1, 12, tzinfo=timezone.utc)
    assert ts.datetime_to_jde(date(2000, 1, 1)) == 2451544.5

def test_unix_ms_affine():
    assert ts.jde_to_unix_ms(2440587.5) == 0.0
    assert ts.jde_to_unix_ms(2440588.5) == 86400000.0
    assert ts.jde_to_unix_ms(2440586.5) == -86400000.0
    assert math.isnan(ts.jde_to_unix_ms(float("nan")))

def test_millisecond_rounding():
    # 1.4 ms and 1.6 ms past the epoch
    dt = ts.jde_to_datetime(2440587.5 + 1.4 / 86400000.0)
    assert dt.microsecond == 1000
    dt = ts.jde_to_datetime(2440587.5 + 1.6 / 86400000.0)
    assert dt.microsecond == 2000

def test_result_is_utc_aware():
    dt = ts.jde_to_datetime(2451550.26)
    assert dt.tzinfo is not None
    assert dt.utcoffset() == timedelta(0)

def test_pre_unix_epoch():
    # Meeus 49.a instant, 1977 Feb 18 3h37m42s
    dt = ts.jde_to_datetime(2443192.65118)
    assert abs(dt - datetime(1977, 2, 18, 3, 37, 42, tzinfo=timezone.utc)) < timedelta(seconds=1)
    dt = ts.jde_to_datetime(2415020.5)
    assert dt == datetime(1900, 1, 1, tzinfo=timezone.utc)

def test_non_finite_jde_rejected():
    with pytest.raises(ValueError):
        ts.jde_to_datetime(float("nan"))
    with pytest.raises(ValueError):
        ts.jde_to_datetime(float("inf"))

def test_jd_datetime_roundtrip():
    random.seed(42)
    for _ in range(1000):
        jd_in = random.uniform(2000000.5, 2800000.5)
        dt = ts.jde_to_datetime(jd_in)
        jd_out = ts.datetime_to_jde(dt)
        # 1e-8 days is roughly a millisecond
        assert jd_in == pytest.approx(jd_out, abs=1e-8)

def test_naive_datetime_is_utc():
    naive = datetime(2000, 1, 6, 18, 14)
    aware = naive.replace(tzinfo=timezone.utc)
    assert ts.datetime_to_jde(naive) == ts.datetime_to_jde(aware)
    shifted = datetime(2000, 1, 7, 3, 14, tzinfo=timezone(timedelta(hours=9)))
    assert ts.datetime_to_jde(shifted) == pytest.approx(ts.datetime_to_jde(aware), abs=1e-12)

def test_year_decimal():
    assert ts.year_decimal(date(2000, 1, 1)) == 2000.0
    assert ts.year_decimal(date(2001, 7, 2)) == pytest.approx(2001 + 182 / 365)
    assert ts.year_decimal(datetime(2000, 1, 1, 12)) == pytest.approx(2000 + 0.5 / 366)

def test_year_decimal_range_edges():
    assert ts.year_decimal(date(1, 1, 1)) == 1.0
    assert ts.year_decimal(date(9999, 12, 31)) == pytest.approx(9999 + 364 / 365)
    assert ts.year_decimal(datetime(9999, 12, 31, 23, 59, 59)) < 10000.0
    # 2000 is a leap year, 1900 is not
    assert ts.year_decimal(date(2000, 12, 31)) == pytest.approx(2000 + 365 / 366)
    assert ts.year_decimal(date(1900, 12, 31)) == pytest.approx(1900 + 364 / 365)

def test_datetime_range_edges():
    assert ts.jde_to_datetime(ts.JDE_MIN) == datetime(1, 1, 1, tzinfo=timezone.utc)
    assert ts.datetime_to_jde(date(1, 1, 1)) == ts.JDE_MIN
    assert ts.datetime_to_jde(date(9999, 12, 31)) == ts.JDE_MAX - 1.0
    last = ts.jde_to_datetime(ts.JDE_MAX - 0.5)
    assert last == datetime(9999, 12, 31, 12, tzinfo=timezone.utc)

@pytest.mark.parametrize("jde", [ts.JDE_MIN - 0.001, ts.JDE_MAX, ts.JDE_MAX + 1.0, 0.0, -1e7, 1e9])
def test_out_of_range_jde_rejected(jde):
    assert not ts.in_datetime_range(jde)
    with pytest.raises(DateRangeError, match="years 1-9999"):
        ts.jde_to_datetime(jde)

def test_date_range_error_is_value_error():
    assert issubclass(DateRangeError, ValueError)
    assert issubclass(DateRangeError, LunaphaseError)
