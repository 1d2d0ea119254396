"""
Equatorial to Horizontal Coordinate Transformation

This module provides:
- Hour angle from local sidereal time and right ascension
- Altitude/azimuth from equatorial coordinates
- Sexagesimal angle parsing and formatting (DD:MM:SS, HH:MM:SS)

Hour angles are in degrees, normalized to [-180, 180) and positive west of
the meridian. Azimuth is measured from north through east.
"""

import math
import logging
from typing import Tuple

from astronav_types import (
    DEG_TO_RAD, DEGREES_PER_HOUR, RAD_TO_DEG,
    Config, EquatorialCoord, HorizontalCoord, InvalidAngleFormat,
    normalize_degrees, normalize_signed_degrees,
    validate_angle, validate_declination, validate_latitude,
)

logger = logging.getLogger(__name__)

__all__ = [
    "hour_angle",
    "horizontal_coord",
    "horizontal_from_hour_angle",
    "dms_to_deg",
    "hms_to_deg",
    "hours_to_hms",
    "hours_to_hms_tuple",
    "deg_to_dms",
    "deg_to_dms_tuple",
]


# ============================================================================
# Coordinate Transformation Functions
# ============================================================================

def hour_angle(lmst: float, right_ascension: float) -> float:
    """
    Calculate the hour angle of an object.

    Args:
        lmst: Local mean sidereal time in degrees
        right_ascension: Right ascension in degrees

    Returns:
        Hour angle in degrees (-180 to 180, west positive)
    """
    validate_angle("LMST", lmst)
    validate_angle("Right ascension", right_ascension)
    return normalize_signed_degrees(lmst - right_ascension)


def horizontal_from_hour_angle(ha: float, declination: float,
                               latitude: float) -> HorizontalCoord:
    """
    Calculate altitude and azimuth from an hour angle.

    Args:
        ha: Hour angle in degrees (west positive)
        declination: Declination in degrees
        latitude: Observer latitude in degrees

    Returns:
        HorizontalCoord in degrees. At the zenith or nadir the azimuth is
        undefined and 0.0 is returned by convention.
    """
    validate_angle("Hour angle", ha)
    validate_declination(declination)
    validate_latitude(latitude)

    # Convert to radians
    ha_rad = normalize_signed_degrees(ha) * DEG_TO_RAD
    dec_rad = declination * DEG_TO_RAD
    lat_rad = latitude * DEG_TO_RAD

    # Calculate altitude
    sin_alt = (math.sin(dec_rad) * math.sin(lat_rad) +
               math.cos(dec_rad) * math.cos(lat_rad) * math.cos(ha_rad))

    # Handle numerical errors
    if sin_alt > 1.0:
        sin_alt = 1.0
    elif sin_alt < -1.0:
        sin_alt = -1.0

    alt = math.asin(sin_alt) * RAD_TO_DEG

    if 90.0 - abs(alt) <= Config.ZENITH_TOLERANCE:
        logger.debug(f"Altitude {alt:.9f} at zenith/nadir, azimuth set to 0")
        return HorizontalCoord(alt, 0.0)

    # Calculate azimuth
    y = -math.sin(ha_rad) * math.cos(dec_rad)
    x = (math.cos(lat_rad) * math.sin(dec_rad) -
         math.sin(lat_rad) * math.cos(dec_rad) * math.cos(ha_rad))
    az = normalize_degrees(math.atan2(y, x) * RAD_TO_DEG)

    return HorizontalCoord(alt, az)


def horizontal_coord(equatorial: EquatorialCoord, lmst: float,
                     latitude: float) -> HorizontalCoord:
    """
    Calculate altitude and azimuth for an equatorial position.

    Args:
        equatorial: Right ascension and declination in degrees
        lmst: Local mean sidereal time in degrees
        latitude: Observer latitude in degrees

    Returns:
        HorizontalCoord (altitude -90..90, azimuth 0-360)
    """
    ha = hour_angle(lmst, equatorial.right_ascension)
    return horizontal_from_hour_angle(ha, equatorial.declination, latitude)


# ============================================================================
# Sexagesimal Conversions
# ============================================================================

def _split_sexagesimal(text: str) -> Tuple[bool, float, float, float]:
    parts = text.strip().split(":")
    if len(parts) != 3:
        raise InvalidAngleFormat(f"Expected three ':' separated fields, got {text!r}")
    try:
        whole, minutes, seconds = (float(p) for p in parts)
    except ValueError as e:
        raise InvalidAngleFormat(f"Cannot parse {text!r}: {e}") from e
    if not all(math.isfinite(v) for v in (whole, minutes, seconds)):
        raise InvalidAngleFormat(f"Non-finite field in {text!r}")
    if not (0.0 <= minutes < 60.0 and 0.0 <= seconds < 60.0):
        raise InvalidAngleFormat(f"Minutes and seconds must be in [0, 60): {text!r}")
    return parts[0].strip().startswith("-"), abs(whole), minutes, seconds


def dms_to_deg(dms: str) -> float:
    """
    Convert "DD:MM:SS" to decimal degrees.

    A leading '-' on the degrees applies to the whole angle,
    e.g. "-26:29:11.8" -> -26.4866...
    """
    negative, degrees, minutes, seconds = _split_sexagesimal(dms)
    value = degrees + minutes / 60.0 + seconds / 3600.0
    return -value if negative else value


def hms_to_deg(hms: str) -> float:
    """Convert "HH:MM:SS" (24 hour) to decimal degrees"""
    negative, hours, minutes, seconds = _split_sexagesimal(hms)
    if negative:
        raise InvalidAngleFormat(f"Negative hours not allowed: {hms!r}")
    return (hours + minutes / 60.0 + seconds / 3600.0) * DEGREES_PER_HOUR


def _split_decimal(value: float) -> Tuple[int, int, float]:
    value = abs(value)
    whole = math.floor(value)
    minutes_f = (value - whole) * 60.0
    minutes = math.floor(minutes_f)
    return int(whole), int(minutes), (minutes_f - minutes) * 60.0


def hours_to_hms_tuple(hours: float) -> Tuple[int, int, float]:
    """Split decimal hours (0-24) into (hours, minutes, seconds)"""
    if hours < 0:
        raise InvalidAngleFormat(f"Negative hours not allowed: {hours}")
    return _split_decimal(hours)


def hours_to_hms(hours: float) -> str:
    """Format decimal hours as "H:M:S" """
    h, m, s = hours_to_hms_tuple(hours)
    return f"{h}:{m}:{s}"


def deg_to_dms_tuple(degrees: float) -> Tuple[int, int, float]:
    """Split the magnitude of decimal degrees into (degrees, minutes, seconds)"""
    return _split_decimal(degrees)


def deg_to_dms(degrees: float) -> str:
    """Format decimal degrees as "D:M:S", with a leading '-' when negative"""
    d, m, s = deg_to_dms_tuple(degrees)
    sign = "-" if degrees < 0 else ""
    return f"{sign}{d}:{m}:{s}"
