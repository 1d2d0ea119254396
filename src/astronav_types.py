"""
Value Records, Errors and Constants for astronav

This module holds everything the calculation modules share:
- Unit conversion constants and the J2000.0 epoch
- The Config class of tunable defaults
- The exception hierarchy
- Immutable value records (Instant, GeoPosition, EquatorialCoord, ...)
- Validation and angle normalization helpers

Conventions used throughout the package:
- Angles are decimal degrees unless a name says otherwise
- Longitude is east positive (west negative), -180..180
- Right ascension is stored in degrees (15 degrees = 1 hour)
- Azimuth is measured from north through east (N=0, E=90, S=180, W=270)
- UTC offsets are hours east of Greenwich (UT = local time - offset)
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi
DEGREES_PER_HOUR = 15.0
DEGREES_PER_CIRCLE = 360.0
MINUTES_PER_DAY = 1440.0
SECONDS_PER_DAY = 86400.0
JD_EPOCH_2000 = 2451545.0  # JD for 2000-01-01 12:00 UT
DAYS_PER_CENTURY = 36525.0


class Config:
    """Default parameters for the calculations"""

    # Sun altitude thresholds (degrees)
    SUNRISE_ALTITUDE = -0.833  # Refraction plus solar semi-diameter
    CIVIL_ALTITUDE = -6.0
    NAUTICAL_ALTITUDE = -12.0
    ASTRONOMICAL_ALTITUDE = -18.0

    # Zenith distance used by the almanac sunrise/sunset method (degrees)
    ALMANAC_ZENITH = 90.833

    # Solar event refinement passes (first pass uses local noon)
    EVENT_ITERATIONS = 2

    # Within this many degrees of +/-90 altitude the azimuth is reported as 0
    ZENITH_TOLERANCE = 1e-9

    # First day of the Gregorian calendar
    GREGORIAN_START = date(1582, 10, 15)

    # Largest accepted UTC offset magnitude (hours)
    MAX_UTC_OFFSET = 14.0


# ============================================================================
# Exceptions
# ============================================================================

class AstroError(ValueError):
    """Base class for astronav calculation errors"""


class InvalidDate(AstroError):
    """Calendar field out of range, or a date before the Gregorian calendar"""


class InvalidCoordinate(AstroError):
    """Latitude, longitude or declination outside its valid range"""


class InvalidAngleFormat(AstroError):
    """Sexagesimal angle string that cannot be parsed"""


class NoSunriseOrSunset(AstroError):
    """The sun does not cross the requested altitude on the given date.

    ``sun_always_down`` is True for polar night (the sun stays below the
    altitude all day) and False for polar day.
    """

    def __init__(self, message: str, sun_always_down: bool,
                 date: Optional[date] = None,
                 observer: Optional["GeoPosition"] = None):
        super().__init__(message)
        self.sun_always_down = sun_always_down
        self.date = date
        self.observer = observer


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class Instant:
    """Civil date and time with a caller-supplied UTC offset"""
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: float = 0.0
    utc_offset: float = 0.0  # hours, east positive

    @property
    def date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def decimal_hours(self) -> float:
        return self.hour + self.minute / 60.0 + self.second / 3600.0


@dataclass(frozen=True)
class GeoPosition:
    """Observer location"""
    latitude: float   # degrees, north positive
    longitude: float  # degrees, east positive


@dataclass(frozen=True)
class EquatorialCoord:
    """Equatorial coordinates"""
    right_ascension: float  # degrees, 0-360
    declination: float      # degrees

    @property
    def right_ascension_hours(self) -> float:
        return self.right_ascension / DEGREES_PER_HOUR


@dataclass(frozen=True)
class HorizontalCoord:
    """Horizontal coordinates"""
    altitude: float  # degrees above the horizon
    azimuth: float   # degrees from north through east, 0-360


@dataclass(frozen=True)
class JulianTime:
    """Julian Date and Julian centuries since J2000.0"""
    julian_day: float
    julian_centuries: float


@dataclass(frozen=True)
class SolarPosition:
    """
    Low-precision apparent position of the sun.

    All angles in degrees, equation of time in minutes. Values may differ
    from a full ephemeris by up to about an arcminute.
    """
    julian_time: JulianTime
    mean_longitude: float
    mean_anomaly: float
    eccentricity: float
    equation_of_center: float
    apparent_longitude: float
    obliquity: float
    right_ascension: float
    declination: float
    equation_of_time: float

    @property
    def equatorial(self) -> EquatorialCoord:
        return EquatorialCoord(self.right_ascension, self.declination)


@dataclass(frozen=True)
class SolarEvent:
    """Sunrise, solar noon and sunset for one date and observer (local time)"""
    date: date
    observer: GeoPosition
    utc_offset: float
    sunrise: Instant
    solar_noon: Instant
    sunset: Instant
    reference_altitude: float = Config.SUNRISE_ALTITUDE
    sunrise_minutes: float = 0.0    # minutes after local midnight
    solar_noon_minutes: float = 0.0
    sunset_minutes: float = 0.0

    @property
    def day_length(self) -> float:
        """Hours between sunrise and sunset"""
        return (self.sunset_minutes - self.sunrise_minutes) / 60.0


# ============================================================================
# Normalization
# ============================================================================

def normalize_degrees(angle: float) -> float:
    """Reduce an angle to [0, 360)"""
    angle = angle % DEGREES_PER_CIRCLE
    # A tiny negative input can round up to exactly 360.0
    if angle >= DEGREES_PER_CIRCLE:
        angle = 0.0
    return angle


def normalize_signed_degrees(angle: float) -> float:
    """Reduce an angle to [-180, 180)"""
    return normalize_degrees(angle + 180.0) - 180.0


def normalize_hours(hours: float) -> float:
    """Reduce a time of day in hours to [0, 24)"""
    return normalize_degrees(hours * DEGREES_PER_HOUR) / DEGREES_PER_HOUR


# ============================================================================
# Validation
# ============================================================================

def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def validate_date(year: int, month: int, day: int) -> None:
    """Raise InvalidDate unless year/month/day is a Gregorian calendar date"""
    if not 1 <= month <= 12:
        raise InvalidDate(f"Month {month} out of range 1-12")
    n_days = days_in_month(year, month)
    if not 1 <= day <= n_days:
        raise InvalidDate(f"Day {day} out of range 1-{n_days} for {year:04d}-{month:02d}")
    if (year, month, day) < (Config.GREGORIAN_START.year,
                             Config.GREGORIAN_START.month,
                             Config.GREGORIAN_START.day):
        raise InvalidDate(
            f"{year:04d}-{month:02d}-{day:02d} is before the Gregorian calendar "
            f"({Config.GREGORIAN_START.isoformat()})"
        )


def validate_instant(instant: Instant) -> None:
    """Raise InvalidDate if any calendar or clock field is out of range"""
    validate_date(instant.year, instant.month, instant.day)
    if not 0 <= instant.hour <= 23:
        raise InvalidDate(f"Hour {instant.hour} out of range 0-23")
    if not 0 <= instant.minute <= 59:
        raise InvalidDate(f"Minute {instant.minute} out of range 0-59")
    if not (math.isfinite(instant.second) and 0.0 <= instant.second < 60.0):
        raise InvalidDate(f"Second {instant.second} out of range [0, 60)")
    if not (math.isfinite(instant.utc_offset)
            and abs(instant.utc_offset) <= Config.MAX_UTC_OFFSET):
        raise InvalidDate(f"UTC offset {instant.utc_offset} out of range "
                          f"+/-{Config.MAX_UTC_OFFSET} hours")


def _validate_range(name: str, value: float, limit: float) -> None:
    if not (math.isfinite(value) and -limit <= value <= limit):
        raise InvalidCoordinate(f"{name} {value} out of range -{limit:g}..{limit:g}")


def validate_latitude(latitude: float) -> None:
    _validate_range("Latitude", latitude, 90.0)


def validate_longitude(longitude: float) -> None:
    _validate_range("Longitude", longitude, 180.0)


def validate_declination(declination: float) -> None:
    _validate_range("Declination", declination, 90.0)


def validate_position(position: GeoPosition) -> None:
    validate_latitude(position.latitude)
    validate_longitude(position.longitude)


def validate_angle(name: str, value: float) -> None:
    """Raise InvalidCoordinate for a non-finite angle (any magnitude is allowed)"""
    if not math.isfinite(value):
        raise InvalidCoordinate(f"{name} {value} is not a finite angle")


def validate_altitude(altitude: float) -> None:
    _validate_range("Altitude", altitude, 90.0)


def validate_zenith(zenith: float) -> None:
    if not (math.isfinite(zenith) and 0.0 <= zenith <= 180.0):
        raise InvalidCoordinate(f"Zenith distance {zenith} out of range 0..180")


def validate_julian_day(jd: float) -> None:
    if not math.isfinite(jd):
        raise InvalidDate(f"Julian Date {jd} is not finite")
