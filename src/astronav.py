"""
astronav: Positional Astronomy Calculations

Converts equatorial coordinates to horizontal coordinates for an observer
and instant, and derives the time bases those conversions need (Julian
Date, Julian centuries, sidereal time, day of year). The solar extension
adds solar position, sunrise/noon/sunset and twilight.

Modules:
    astronav_types   - value records, errors, Config
    astronav_time    - Julian Date, day of year, GMST/LMST
    astronav_coords  - hour angle, altitude/azimuth, sexagesimal angles
    astronav_sun     - solar position and events (optional extension)
    astronav_astropy - astropy reference implementations

Example:
    from astronav import Instant, EquatorialCoord, julian_day, gmst, lmst, horizontal_coord

    jt = julian_day(Instant(2024, 5, 12, 17, 30, 45))
    local = lmst(gmst(jt), 12.45)
    sirius = horizontal_coord(EquatorialCoord(101.5504, -16.75122), local, 12.45)
"""

from astronav_types import (
    Config,
    AstroError, InvalidDate, InvalidCoordinate, InvalidAngleFormat, NoSunriseOrSunset,
    Instant, GeoPosition, EquatorialCoord, HorizontalCoord,
    JulianTime, SolarPosition, SolarEvent,
    normalize_degrees,
)

from astronav_time import (
    julian_day, julian_day_number, julian_centuries, julian_day_to_instant,
    instant_from_datetime, day_of_year, is_leap_year, days_in_month,
    gmst, lmst, lmst_hours,
)

from astronav_coords import (
    hour_angle, horizontal_coord, horizontal_from_hour_angle,
    dms_to_deg, hms_to_deg, hours_to_hms, hours_to_hms_tuple,
    deg_to_dms, deg_to_dms_tuple,
)

from astronav_sun import (
    solar_position, solar_horizontal, solar_events,
    twilight_times, almanac_sun_times,
)

__version__ = "0.3.0"

__all__ = [
    "Config",
    "AstroError", "InvalidDate", "InvalidCoordinate", "InvalidAngleFormat",
    "NoSunriseOrSunset",
    "Instant", "GeoPosition", "EquatorialCoord", "HorizontalCoord",
    "JulianTime", "SolarPosition", "SolarEvent",
    "normalize_degrees",
    "julian_day", "julian_day_number", "julian_centuries", "julian_day_to_instant",
    "instant_from_datetime", "day_of_year", "is_leap_year", "days_in_month",
    "gmst", "lmst", "lmst_hours",
    "hour_angle", "horizontal_coord", "horizontal_from_hour_angle",
    "dms_to_deg", "hms_to_deg", "hours_to_hms", "hours_to_hms_tuple",
    "deg_to_dms", "deg_to_dms_tuple",
    "solar_position", "solar_horizontal", "solar_events",
    "twilight_times", "almanac_sun_times",
]
