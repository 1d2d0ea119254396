"""
Solar Position Engine

Low-precision solar calculations built on the time and coordinate modules:
- Solar ecliptic longitude, right ascension, declination, equation of time
  (NOAA solar calculator / Meeus low-precision series)
- Solar altitude/azimuth for an observer
- Sunrise, solar noon and sunset
- Civil, nautical and astronomical twilight
- Almanac sunrise/sunset (day-of-year approximation)

Accuracy is that of the published approximations: angles to roughly an
arcminute, event times to a minute or two at mid latitudes. Larger errors
are expected close to the polar circles, where the sun grazes the horizon.
"""

import math
import logging
from typing import Dict, Tuple

from astronav_types import (
    DEG_TO_RAD, DEGREES_PER_HOUR, MINUTES_PER_DAY, RAD_TO_DEG,
    Config, GeoPosition, HorizontalCoord, Instant, JulianTime,
    NoSunriseOrSunset, SolarEvent, SolarPosition,
    normalize_degrees, normalize_hours,
    validate_altitude, validate_instant, validate_position, validate_zenith,
)
from astronav_time import julian_centuries, julian_day, julian_day_to_instant, day_of_year
from astronav_coords import horizontal_from_hour_angle

logger = logging.getLogger(__name__)

__all__ = [
    "solar_position",
    "solar_horizontal",
    "solar_events",
    "twilight_times",
    "almanac_sun_times",
]

# Sunrise/sunset pairs and the sun altitude that defines them
TWILIGHT_THRESHOLDS = (
    ('sunrise', 'sunset', Config.SUNRISE_ALTITUDE),
    ('civil_dawn', 'civil_dusk', Config.CIVIL_ALTITUDE),
    ('nautical_dawn', 'nautical_dusk', Config.NAUTICAL_ALTITUDE),
    ('astronomical_dawn', 'astronomical_dusk', Config.ASTRONOMICAL_ALTITUDE),
)


# ============================================================================
# Solar Position
# ============================================================================

def _solar_position_at(julian_time: JulianTime) -> SolarPosition:
    t = julian_time.julian_centuries

    # Geometric mean longitude, mean anomaly and orbital eccentricity
    l0 = normalize_degrees(280.46646 + t * (36000.76983 + t * 0.0003032))
    m = normalize_degrees(357.52911 + t * (35999.05029 - 0.0001537 * t))
    e = 0.016708634 - t * (0.000042037 + 0.0000001267 * t)

    m_rad = m * DEG_TO_RAD

    # Equation of center
    c = (math.sin(m_rad) * (1.914602 - t * (0.004817 + 0.000014 * t)) +
         math.sin(2 * m_rad) * (0.019993 - 0.000101 * t) +
         math.sin(3 * m_rad) * 0.000289)

    # Apparent longitude: aberration and nutation in longitude
    omega_rad = (125.04 - 1934.136 * t) * DEG_TO_RAD
    lambda_sun = normalize_degrees(l0 + c - 0.00569 - 0.00478 * math.sin(omega_rad))

    # Obliquity of the ecliptic, corrected for nutation
    eps0 = 23.0 + (26.0 + (21.448 - t * (46.815 + t * (0.00059 - t * 0.001813))) / 60.0) / 60.0
    eps = eps0 + 0.00256 * math.cos(omega_rad)

    lambda_rad = lambda_sun * DEG_TO_RAD
    eps_rad = eps * DEG_TO_RAD

    ra = math.atan2(math.cos(eps_rad) * math.sin(lambda_rad), math.cos(lambda_rad))
    dec = math.asin(math.sin(eps_rad) * math.sin(lambda_rad))

    # Equation of time in minutes
    y = math.tan(eps_rad / 2.0) ** 2
    l0_rad = l0 * DEG_TO_RAD
    eot = 4.0 * RAD_TO_DEG * (y * math.sin(2 * l0_rad) -
                              2.0 * e * math.sin(m_rad) +
                              4.0 * e * y * math.sin(m_rad) * math.cos(2 * l0_rad) -
                              0.5 * y * y * math.sin(4 * l0_rad) -
                              1.25 * e * e * math.sin(2 * m_rad))

    return SolarPosition(
        julian_time=julian_time,
        mean_longitude=l0,
        mean_anomaly=m,
        eccentricity=e,
        equation_of_center=c,
        apparent_longitude=lambda_sun,
        obliquity=eps,
        right_ascension=normalize_degrees(ra * RAD_TO_DEG),
        declination=dec * RAD_TO_DEG,
        equation_of_time=eot,
    )


def solar_position(instant: Instant) -> SolarPosition:
    """
    Calculate the apparent position of the sun.

    Args:
        instant: Civil date and time with its UTC offset

    Returns:
        SolarPosition (degrees; equation of time in minutes)
    """
    return _solar_position_at(julian_day(instant))


def solar_horizontal(instant: Instant, observer: GeoPosition) -> HorizontalCoord:
    """
    Calculate solar altitude and azimuth for an observer.

    The hour angle comes from true solar time, i.e. UT corrected by the
    equation of time and the observer longitude.
    """
    validate_position(observer)
    sun = solar_position(instant)

    ut_minutes = (instant.decimal_hours - instant.utc_offset) * 60.0
    true_solar_time = ut_minutes + sun.equation_of_time + 4.0 * observer.longitude
    ha = true_solar_time / 4.0 - 180.0

    return horizontal_from_hour_angle(ha, sun.declination, observer.latitude)


# ============================================================================
# Sunrise, Noon and Sunset
# ============================================================================

def _sunrise_hour_angle(declination: float, observer: GeoPosition,
                        reference_altitude: float, date) -> float:
    """Hour angle (degrees) at which the sun crosses reference_altitude"""
    lat_rad = observer.latitude * DEG_TO_RAD
    dec_rad = declination * DEG_TO_RAD

    numerator = (math.sin(reference_altitude * DEG_TO_RAD) -
                 math.sin(lat_rad) * math.sin(dec_rad))
    denominator = math.cos(lat_rad) * math.cos(dec_rad)

    # At a pole the sun keeps a constant altitude all day
    if abs(denominator) < 1e-12:
        cos_ha = math.inf if numerator > 0 else -math.inf
    else:
        cos_ha = numerator / denominator

    if cos_ha > 1.0:
        raise NoSunriseOrSunset(
            f"Sun stays below {reference_altitude} deg on {date} at "
            f"lat {observer.latitude}, lon {observer.longitude} (polar night)",
            sun_always_down=True, date=date, observer=observer)
    if cos_ha < -1.0:
        raise NoSunriseOrSunset(
            f"Sun stays above {reference_altitude} deg on {date} at "
            f"lat {observer.latitude}, lon {observer.longitude} (polar day)",
            sun_always_down=False, date=date, observer=observer)

    return math.acos(cos_ha) * RAD_TO_DEG


def _event_minutes(jd: float, observer: GeoPosition, utc_offset: float,
                   reference_altitude: float, direction: int, date) -> float:
    """
    Local minutes after midnight of an event, with the sun evaluated at jd.

    direction is -1 for the rising crossing, 0 for solar noon, 1 for setting.
    """
    sun = _solar_position_at(JulianTime(jd, julian_centuries(jd)))
    noon = 720.0 - 4.0 * observer.longitude - sun.equation_of_time + 60.0 * utc_offset
    if direction == 0:
        return noon
    ha = _sunrise_hour_angle(sun.declination, observer, reference_altitude, date)
    return noon + direction * 4.0 * ha


def solar_events(date, observer: GeoPosition, utc_offset: float = 0.0,
                 reference_altitude: float = Config.SUNRISE_ALTITUDE) -> SolarEvent:
    """
    Calculate sunrise, solar noon and sunset.

    Args:
        date: Any object with year, month and day (date, datetime, Instant)
        observer: Observer position (longitude east positive)
        utc_offset: Hours east of Greenwich of the local clock
        reference_altitude: Sun altitude defining rise/set in degrees

    Returns:
        SolarEvent with local Instants

    Raises:
        NoSunriseOrSunset: The sun never crosses reference_altitude that day
        InvalidCoordinate: Observer or reference_altitude out of range
    """
    midnight = Instant(date.year, date.month, date.day, 0, 0, 0.0, utc_offset)
    validate_instant(midnight)
    validate_position(observer)
    validate_altitude(reference_altitude)

    zone_hours = observer.longitude / DEGREES_PER_HOUR
    if abs(utc_offset - zone_hours) > 3.0:
        logger.warning(f"UTC offset {utc_offset:+.2f} h is far from the "
                       f"longitude's zone {zone_hours:+.2f} h; events may fall on adjacent days")

    jd_midnight = julian_day(midnight).julian_day
    civil_date = midnight.date

    # Start from local noon, then re-evaluate the sun at each estimate
    estimates = {-1: 720.0, 0: 720.0, 1: 720.0}
    for _ in range(Config.EVENT_ITERATIONS):
        estimates = {
            direction: _event_minutes(jd_midnight + minutes / MINUTES_PER_DAY,
                                      observer, utc_offset, reference_altitude,
                                      direction, civil_date)
            for direction, minutes in estimates.items()
        }
    logger.debug(f"Solar events {civil_date} at {observer}: rise {estimates[-1]:.2f} min, "
                 f"noon {estimates[0]:.2f} min, set {estimates[1]:.2f} min")

    def to_instant(minutes: float) -> Instant:
        return julian_day_to_instant(jd_midnight + minutes / MINUTES_PER_DAY, utc_offset)

    return SolarEvent(
        date=civil_date,
        observer=observer,
        utc_offset=utc_offset,
        sunrise=to_instant(estimates[-1]),
        solar_noon=to_instant(estimates[0]),
        sunset=to_instant(estimates[1]),
        reference_altitude=reference_altitude,
        sunrise_minutes=estimates[-1],
        solar_noon_minutes=estimates[0],
        sunset_minutes=estimates[1],
    )


# ============================================================================
# Twilight Calculations
# ============================================================================

def twilight_times(date, observer: GeoPosition, utc_offset: float = 0.0) -> Dict[str, Instant]:
    """
    Calculate sunrise/sunset and twilight times for a date and location.

    Args:
        date: Any object with year, month and day
        observer: Observer position
        utc_offset: Hours east of Greenwich of the local clock

    Returns:
        Dictionary of local Instants keyed 'sunrise', 'sunset', 'civil_dawn',
        'civil_dusk', 'nautical_dawn', 'nautical_dusk', 'astronomical_dawn',
        'astronomical_dusk'. Pairs that do not occur on the date are omitted.
    """
    times = {}

    for dawn_key, dusk_key, altitude in TWILIGHT_THRESHOLDS:
        try:
            events = solar_events(date, observer, utc_offset, altitude)
        except NoSunriseOrSunset as e:
            logger.debug(f"No {dawn_key}/{dusk_key}: {e}")
            continue
        times[dawn_key] = events.sunrise
        times[dusk_key] = events.sunset

    return times


# ============================================================================
# Almanac Sunrise/Sunset
# ============================================================================

def _almanac_event(doy: int, observer: GeoPosition, utc_offset: float,
                   zenith: float, rising: bool, date) -> float:
    lng_hour = observer.longitude / DEGREES_PER_HOUR

    # Approximate time of the event in days
    t = doy + ((6.0 if rising else 18.0) - lng_hour) / 24.0

    # Sun's mean anomaly and true longitude
    m = 0.9856 * t - 3.289
    m_rad = m * DEG_TO_RAD
    true_long = normalize_degrees(m + 1.916 * math.sin(m_rad) +
                                  0.020 * math.sin(2 * m_rad) + 282.634)
    true_long_rad = true_long * DEG_TO_RAD

    # Right ascension, put in the same quadrant as the true longitude
    ra = normalize_degrees(math.atan(0.91764 * math.tan(true_long_rad)) * RAD_TO_DEG)
    ra += math.floor(true_long / 90.0) * 90.0 - math.floor(ra / 90.0) * 90.0
    ra_hours = ra / DEGREES_PER_HOUR

    sin_dec = 0.39782 * math.sin(true_long_rad)
    cos_dec = math.cos(math.asin(sin_dec))

    lat_rad = observer.latitude * DEG_TO_RAD
    numerator = math.cos(zenith * DEG_TO_RAD) - sin_dec * math.sin(lat_rad)
    denominator = cos_dec * math.cos(lat_rad)
    if abs(denominator) < 1e-12:
        cos_ha = math.inf if numerator > 0 else -math.inf
    else:
        cos_ha = numerator / denominator

    if cos_ha > 1.0:
        raise NoSunriseOrSunset(f"Sun never rises on {date} at lat {observer.latitude}",
                                sun_always_down=True, date=date, observer=observer)
    if cos_ha < -1.0:
        raise NoSunriseOrSunset(f"Sun never sets on {date} at lat {observer.latitude}",
                                sun_always_down=False, date=date, observer=observer)

    ha = math.acos(cos_ha) * RAD_TO_DEG
    if rising:
        ha = 360.0 - ha
    ha_hours = ha / DEGREES_PER_HOUR

    # Local mean time of the event, then UT and the local clock
    local_mean_time = ha_hours + ra_hours - 0.06571 * t - 6.622
    ut = local_mean_time - lng_hour
    return normalize_hours(ut + utc_offset)


def almanac_sun_times(date, observer: GeoPosition, utc_offset: float = 0.0,
                      zenith: float = Config.ALMANAC_ZENITH) -> Tuple[float, float]:
    """
    Sunrise and sunset by the Almanac for Computers approximation.

    Cheaper and coarser than solar_events; depends only on the day of year.

    Returns:
        Tuple of (sunrise, sunset) in local decimal hours (0-24)

    Raises:
        NoSunriseOrSunset: The sun never reaches the given zenith distance
    """
    validate_instant(Instant(date.year, date.month, date.day, 0, 0, 0.0, utc_offset))
    validate_position(observer)
    validate_zenith(zenith)
    doy = day_of_year(date)

    sunrise = _almanac_event(doy, observer, utc_offset, zenith, True, date)
    sunset = _almanac_event(doy, observer, utc_offset, zenith, False, date)
    return sunrise, sunset
