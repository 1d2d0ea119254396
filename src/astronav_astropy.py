"""
Reference Calculations using Astropy

This module recomputes the closed-form results of astronav_time,
astronav_coords and astronav_sun with the astropy package, so the
low-precision formulas can be checked against a full implementation:
- Julian Date from a civil Instant
- Greenwich and Local Mean Sidereal Time (IAU 1982 model)
- Equatorial to horizontal transformation
- Apparent solar right ascension and declination (true equator of date)

Function names and argument conventions match the astronav modules.
"""

import logging
from datetime import datetime, timedelta

import numpy as np

from astropy import units as u
from astropy.time import Time
from astropy.coordinates import Angle, Latitude, Longitude, TETE, get_sun

from astronav_types import (
    EquatorialCoord, HorizontalCoord, Instant, JulianTime,
    DAYS_PER_CENTURY, JD_EPOCH_2000,
    validate_angle, validate_declination, validate_instant, validate_julian_day,
    validate_latitude, validate_longitude,
)

logger = logging.getLogger(__name__)

__all__ = [
    "julian_day",
    "gmst",
    "lmst",
    "horizontal_coord",
    "sun_equatorial",
]


def _as_jd(value) -> float:
    jd = value.julian_day if isinstance(value, JulianTime) else float(value)
    validate_julian_day(jd)
    return jd


# ============================================================================
# Time Conversion Functions
# ============================================================================

def julian_day(instant: Instant) -> JulianTime:
    """
    Calculate the Julian Date for an instant using astropy.

    The Julian Date is taken on the UT1 scale with no leap-second handling,
    matching astronav_time.julian_day.
    """
    validate_instant(instant)

    dt = datetime(instant.year, instant.month, instant.day,
                  instant.hour, instant.minute, int(instant.second))
    dt = dt + timedelta(seconds=instant.second % 1, hours=-instant.utc_offset)

    t = Time(dt, scale='ut1')
    jd = t.jd
    return JulianTime(jd, (jd - JD_EPOCH_2000) / DAYS_PER_CENTURY)


def gmst(jd) -> float:
    """
    Calculate Greenwich Mean Sidereal Time using astropy.

    Args:
        jd: Julian Date (UT1) or JulianTime

    Returns:
        GMST in degrees (0-360)
    """
    t = Time(_as_jd(jd), format='jd', scale='ut1')
    gmst_angle = t.sidereal_time('mean', 'greenwich', model='IAU1982')
    return float(gmst_angle.deg)


def lmst(gmst_degrees: float, longitude: float) -> float:
    """
    Calculate Local Mean Sidereal Time using astropy angles.

    Args:
        gmst_degrees: GMST in degrees
        longitude: Observer longitude in degrees (east positive)

    Returns:
        LMST in degrees (0-360)
    """
    validate_angle("GMST", gmst_degrees)
    validate_longitude(longitude)
    return float(Longitude((gmst_degrees + longitude) * u.deg).deg)


# ============================================================================
# Coordinate Transformation Functions
# ============================================================================

def horizontal_coord(equatorial: EquatorialCoord, lmst_degrees: float,
                     latitude: float) -> HorizontalCoord:
    """
    Calculate altitude and azimuth with astropy angles and numpy trigonometry.

    Args:
        equatorial: Right ascension and declination in degrees
        lmst_degrees: Local mean sidereal time in degrees
        latitude: Observer latitude in degrees

    Returns:
        HorizontalCoord in degrees
    """
    validate_angle("LMST", lmst_degrees)
    validate_angle("Right ascension", equatorial.right_ascension)
    validate_declination(equatorial.declination)
    validate_latitude(latitude)

    ha = Angle((lmst_degrees - equatorial.right_ascension) * u.deg).wrap_at(180 * u.deg)
    dec = Latitude(equatorial.declination * u.deg)
    lat = Latitude(latitude * u.deg)

    sin_alt = (np.sin(dec) * np.sin(lat) +
               np.cos(dec) * np.cos(lat) * np.cos(ha)).to_value(u.one)
    alt = np.arcsin(np.clip(sin_alt, -1.0, 1.0)) * u.rad

    y = (-np.sin(ha) * np.cos(dec)).to_value(u.one)
    x = (np.cos(lat) * np.sin(dec) -
         np.sin(lat) * np.cos(dec) * np.cos(ha)).to_value(u.one)
    az = Longitude(np.arctan2(y, x) * u.rad)

    return HorizontalCoord(float(alt.to_value(u.deg)), float(az.deg))


# ============================================================================
# Sun Calculations using Astropy
# ============================================================================

def sun_equatorial(jd) -> EquatorialCoord:
    """
    Calculate the apparent solar position using astropy.

    Args:
        jd: Julian Date or JulianTime

    Returns:
        EquatorialCoord on the true equator and equinox of date, in degrees
    """
    # TT differs from UT by about a minute; the sun moves ~0.0007 deg in that time
    t = Time(_as_jd(jd), format='jd', scale='tt')
    sun = get_sun(t).transform_to(TETE(obstime=t))

    return EquatorialCoord(float(sun.ra.deg), float(sun.dec.deg))
