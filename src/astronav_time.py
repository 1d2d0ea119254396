"""
Time Basis and Sidereal Time

This module provides the time conversions the coordinate transforms need:
- Calendar date/time to Julian Date and Julian centuries since J2000.0
- Julian Date back to a calendar Instant
- Day of year
- Greenwich and Local Mean Sidereal Time

Only Gregorian calendar dates (1582-10-15 onwards) are supported; earlier
dates raise InvalidDate instead of silently using the wrong calendar.
"""

import math
import logging
from datetime import datetime, timedelta
from typing import Union

from astronav_types import (
    DAYS_PER_CENTURY, DEGREES_PER_HOUR, JD_EPOCH_2000, SECONDS_PER_DAY,
    Config, Instant, InvalidDate, JulianTime,
    days_in_month, is_leap_year, normalize_degrees,
    validate_angle, validate_date, validate_instant, validate_julian_day, validate_longitude,
)

logger = logging.getLogger(__name__)

JulianDayLike = Union[JulianTime, float]

# JD of 1582-10-15 00:00 UT plus 0.5, first day number of the Gregorian calendar
GREGORIAN_START_JDN = 2299161

# Sidereal rate: sidereal degrees per solar degree of UT
SIDEREAL_RATE = 1.00273790935

__all__ = [
    "julian_day",
    "julian_day_number",
    "julian_centuries",
    "julian_day_to_instant",
    "instant_from_datetime",
    "day_of_year",
    "is_leap_year",
    "days_in_month",
    "gmst",
    "lmst",
    "lmst_hours",
]


def _as_jd(value: JulianDayLike) -> float:
    jd = value.julian_day if isinstance(value, JulianTime) else float(value)
    validate_julian_day(jd)
    return jd


# ============================================================================
# Time Conversion Functions
# ============================================================================

def _calendar_to_jd(year: int, month: int, day: float) -> float:
    """Meeus (ch. 7) Gregorian calendar to JD, day may carry a fraction"""
    # Adjust for January/February
    if month <= 2:
        year -= 1
        month += 12

    a = int(year / 100)
    b = 2 - a + int(a / 4)

    return (int(365.25 * (year + 4716)) +
            int(30.6001 * (month + 1)) +
            day + b - 1524.5)


def julian_day(instant: Instant) -> JulianTime:
    """
    Calculate the Julian Date for an instant.

    Args:
        instant: Civil date and time with its UTC offset

    Returns:
        JulianTime with the Julian Date (UT) and centuries since J2000.0

    Raises:
        InvalidDate: Calendar or clock field out of range
    """
    validate_instant(instant)

    # Decimal hours of UT; may leave 0-24, the day term absorbs it
    ut_hours = instant.decimal_hours - instant.utc_offset
    jd = _calendar_to_jd(instant.year, instant.month, instant.day + ut_hours / 24.0)

    return JulianTime(jd, (jd - JD_EPOCH_2000) / DAYS_PER_CENTURY)


def julian_day_number(year: int, month: int, day: int) -> int:
    """Integer Julian Day Number of a civil date (the JD at noon UT)"""
    validate_date(year, month, day)
    return int(round(_calendar_to_jd(year, month, day + 0.5)))


def julian_centuries(jd: JulianDayLike) -> float:
    """Julian centuries since J2000.0"""
    return (_as_jd(jd) - JD_EPOCH_2000) / DAYS_PER_CENTURY


def julian_day_to_instant(jd: JulianDayLike, utc_offset: float = 0.0) -> Instant:
    """
    Convert a Julian Date to a civil Instant.

    Args:
        jd: Julian Date (UT)
        utc_offset: Hours east of Greenwich for the returned local time

    Returns:
        Instant in local time, seconds rounded to the microsecond
    """
    if not (math.isfinite(utc_offset) and abs(utc_offset) <= Config.MAX_UTC_OFFSET):
        raise InvalidDate(f"UTC offset {utc_offset} out of range +/-{Config.MAX_UTC_OFFSET} hours")

    # Algorithm from Meeus
    jd_frac = _as_jd(jd) + utc_offset / 24.0 + 0.5
    z = int(jd_frac)
    f = jd_frac - z

    if z < GREGORIAN_START_JDN:
        raise InvalidDate(f"JD {_as_jd(jd)} is before the Gregorian calendar")

    alpha = int((z - 1867216.25) / 36524.25)
    a = z + 1 + alpha - int(alpha / 4)

    b = a + 1524
    c = int((b - 122.1) / 365.25)
    d = int(365.25 * c)
    e = int((b - d) / 30.6001)

    day = b - d - int(30.6001 * e)
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    # timedelta carries a fraction that rounds up to a whole day
    dt = datetime(year, month, day) + timedelta(
        microseconds=round(f * SECONDS_PER_DAY * 1e6))

    return Instant(dt.year, dt.month, dt.day, dt.hour, dt.minute,
                   dt.second + dt.microsecond / 1e6, utc_offset)


def instant_from_datetime(dt: datetime) -> Instant:
    """
    Build an Instant from a datetime.

    Naive datetimes are taken as UTC; aware datetimes keep their own offset.
    """
    offset = dt.utcoffset()
    utc_offset = offset.total_seconds() / 3600.0 if offset is not None else 0.0
    return Instant(dt.year, dt.month, dt.day, dt.hour, dt.minute,
                   dt.second + dt.microsecond / 1e6, utc_offset)


def day_of_year(date) -> int:
    """
    Day of the year, 1 for January 1st.

    Args:
        date: Any object with year, month and day attributes
              (Instant, datetime.date, datetime.datetime)

    Returns:
        Day number 1-366
    """
    validate_date(date.year, date.month, date.day)
    return sum(days_in_month(date.year, m) for m in range(1, date.month)) + date.day


# ============================================================================
# Sidereal Time
# ============================================================================

def gmst(jd: JulianDayLike) -> float:
    """
    Calculate Greenwich Mean Sidereal Time.

    Args:
        jd: Julian Date (UT) or JulianTime

    Returns:
        GMST in degrees (0-360)
    """
    jd = _as_jd(jd)

    # JD of the preceding 0h UT and its time in Julian centuries
    jd0 = math.floor(jd - 0.5) + 0.5
    t = (jd0 - JD_EPOCH_2000) / DAYS_PER_CENTURY

    # GMST at 0h UT
    gmst0 = (100.46061837 +
             36000.770053608 * t +
             0.000387933 * t * t -
             t * t * t / 38710000.0)

    # Add the sidereal angle turned since 0h UT
    ut_hours = (jd - jd0) * 24.0
    return normalize_degrees(gmst0 + ut_hours * SIDEREAL_RATE * DEGREES_PER_HOUR)


def lmst(gmst_degrees: float, longitude: float) -> float:
    """
    Calculate Local Mean Sidereal Time.

    Args:
        gmst_degrees: Greenwich Mean Sidereal Time in degrees
        longitude: Observer longitude in degrees (east positive)

    Returns:
        LMST in degrees (0-360)
    """
    validate_angle("GMST", gmst_degrees)
    validate_longitude(longitude)
    return normalize_degrees(gmst_degrees + longitude)


def lmst_hours(gmst_degrees: float, longitude: float) -> float:
    """Local Mean Sidereal Time in decimal hours (0-24)"""
    return lmst(gmst_degrees, longitude) / DEGREES_PER_HOUR
