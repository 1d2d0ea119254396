#!/usr/bin/env python3
"""
Test script for astronav_coords.py functions
Tests hour angle, altitude/azimuth and sexagesimal conversions
"""

import sys
import os

import numpy as np
import pytest

# Add src directory to path to import astronav modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from astronav_types import EquatorialCoord, HorizontalCoord, InvalidAngleFormat, InvalidCoordinate
from astronav_coords import (
    hour_angle,
    horizontal_coord,
    horizontal_from_hour_angle,
    dms_to_deg,
    hms_to_deg,
    hours_to_hms,
    hours_to_hms_tuple,
    deg_to_dms,
    deg_to_dms_tuple,
)


# Observer at latitude 12.45 N (LMST values in degrees)
OBSERVER_LAT = 12.45

# (name, ra, dec, lmst, expected altitude, expected azimuth)
STARS = [
    ("Sirius", 101.5504, -16.75122, 199.05, -10.613191752481162, 254.99375998808006),
    ("Antares", 247.73, -26.4866, 200.875, 30.101068424513866, 130.98869628774506),
    ("Fomalhaut", 344.745, -29.4925, 27.15, 31.430612305028138, 223.46562682045789),
]


def compare_values(name, val1, val2, tolerance=0.01, unit=""):
    """Compare two values and report differences"""
    diff = abs(val1 - val2)
    status = "OK" if diff <= tolerance else "MISMATCH"
    print(f"  {name:30s}: {val1:.8f} vs {val2:.8f} {unit} (diff: {diff:.2e}) - {status}")
    return diff <= tolerance


@pytest.mark.parametrize("name,ra,dec,lmst,alt,az", STARS)
def test_star_altitude_azimuth(name, ra, dec, lmst, alt, az):
    """Worked examples for bright stars"""
    result = horizontal_coord(EquatorialCoord(ra, dec), lmst, OBSERVER_LAT)
    assert isinstance(result, HorizontalCoord)
    assert compare_values(f"{name} altitude", result.altitude, alt, tolerance=1e-6, unit="deg")
    assert compare_values(f"{name} azimuth", result.azimuth, az, tolerance=1e-6, unit="deg")


def test_antares_sexagesimal():
    """Same Antares example with every input given as a sexagesimal string"""
    dec = dms_to_deg("-26:29:11.8")
    lat = dms_to_deg("12:27:0")
    lmst = hms_to_deg("13:23:30")
    ra = hms_to_deg("16:30:55.2")

    assert compare_values("Declination", dec, -26.48661111111111, tolerance=1e-12)
    assert compare_values("Latitude", lat, 12.45, tolerance=1e-12)
    assert compare_values("LMST", lmst, 200.875, tolerance=1e-9)
    assert compare_values("Right ascension", ra, 247.73000000000002, tolerance=1e-9)

    result = horizontal_coord(EquatorialCoord(ra, dec), lmst, lat)
    assert compare_values("Antares altitude", result.altitude, 30.10106212143597, tolerance=1e-6)
    assert compare_values("Antares azimuth", result.azimuth, 130.98870686438966, tolerance=1e-6)


def test_hour_angle():
    assert compare_values("Positive HA", hour_angle(10.0, 350.0), 20.0, tolerance=1e-9)
    assert compare_values("Negative HA", hour_angle(350.0, 10.0), -20.0, tolerance=1e-9)
    assert hour_angle(180.0, 0.0) == -180.0
    for lmst in np.linspace(0.0, 359.0, 37):
        for ra in np.linspace(0.0, 359.0, 37):
            ha = hour_angle(float(lmst), float(ra))
            assert -180.0 <= ha < 180.0


def test_zenith_and_nadir():
    """Azimuth is 0 by convention where it is undefined"""
    zenith = horizontal_coord(EquatorialCoord(0.0, 0.0), 0.0, 0.0)
    assert compare_values("Zenith altitude", zenith.altitude, 90.0, tolerance=1e-9)
    assert zenith.azimuth == 0.0

    nadir = horizontal_from_hour_angle(180.0, 0.0, 0.0)
    assert compare_values("Nadir altitude", nadir.altitude, -90.0, tolerance=1e-9)
    assert nadir.azimuth == 0.0

    pole = horizontal_from_hour_angle(37.0, 90.0, 90.0)
    assert compare_values("Pole star at pole", pole.altitude, 90.0, tolerance=1e-9)
    assert pole.azimuth == 0.0


def test_meridian_transit():
    """On the meridian objects are due south or due north"""
    south = horizontal_from_hour_angle(0.0, 20.0, 40.0)
    assert compare_values("South transit altitude", south.altitude, 70.0, tolerance=1e-9)
    assert compare_values("South transit azimuth", south.azimuth, 180.0, tolerance=1e-9)

    north = horizontal_from_hour_angle(0.0, 60.0, 40.0)
    assert compare_values("North transit altitude", north.altitude, 70.0, tolerance=1e-9)
    assert min(north.azimuth, 360.0 - north.azimuth) < 1e-9


def test_east_west():
    """Rising objects are in the east, setting objects in the west"""
    rising = horizontal_from_hour_angle(-60.0, 0.0, 40.0)
    setting = horizontal_from_hour_angle(60.0, 0.0, 40.0)
    print(f"\nRising az {rising.azimuth:.4f}, setting az {setting.azimuth:.4f}")

    assert 0.0 < rising.azimuth < 180.0
    assert 180.0 < setting.azimuth < 360.0
    assert compare_values("Mirror azimuth", rising.azimuth + setting.azimuth, 360.0, tolerance=1e-9)
    assert compare_values("Equal altitude", rising.altitude, setting.altitude, tolerance=1e-12)


def test_output_ranges():
    """Altitude stays in [-90, 90] and azimuth in [0, 360) over a grid"""
    for ra in np.linspace(0.0, 359.0, 13):
        for dec in np.linspace(-89.0, 89.0, 9):
            for lat in np.linspace(-89.0, 89.0, 7):
                for lmst in (0.0, 97.3, 181.0, 359.9):
                    result = horizontal_coord(EquatorialCoord(float(ra), float(dec)), lmst, float(lat))
                    assert -90.0 <= result.altitude <= 90.0
                    assert 0.0 <= result.azimuth < 360.0


@pytest.mark.parametrize("dec,lat", [
    (91.0, 0.0),
    (-90.5, 0.0),
    (0.0, 91.0),
    (0.0, -91.0),
    (float('nan'), 0.0),
])
def test_invalid_coordinates(dec, lat):
    with pytest.raises(InvalidCoordinate):
        horizontal_coord(EquatorialCoord(10.0, dec), 100.0, lat)


@pytest.mark.parametrize("ra,lmst", [
    (float('nan'), 100.0),
    (10.0, float('nan')),
    (float('inf'), 100.0),
    (10.0, float('-inf')),
])
def test_non_finite_angles(ra, lmst):
    """Non-finite RA or LMST raise instead of returning NaN alt/az"""
    with pytest.raises(InvalidCoordinate):
        horizontal_coord(EquatorialCoord(ra, 10.0), lmst, 40.0)
    with pytest.raises(InvalidCoordinate):
        hour_angle(lmst, ra)


def test_non_finite_hour_angle():
    with pytest.raises(InvalidCoordinate):
        horizontal_from_hour_angle(float('nan'), 10.0, 40.0)


def test_dms_hms_parsing():
    assert compare_values("dms_to_deg", dms_to_deg("-26:29:11.8"), -26.48661111111111, tolerance=1e-12)
    assert compare_values("dms_to_deg", dms_to_deg("14:16:12.2"), 14.270055555555556, tolerance=1e-12)
    assert compare_values("hms_to_deg", hms_to_deg("16:30:55.2"), 247.73000000000002, tolerance=1e-9)
    # Sign on zero degrees still applies
    assert compare_values("dms_to_deg", dms_to_deg("-0:30:0"), -0.5, tolerance=1e-12)


@pytest.mark.parametrize("text", [
    "-26-29:11.8", "26:29", "ab:cd:ef", "1:2:3:4", "",
    "12:75:0", "12:-30:0", "12:30:60", "12:30:-1.5",
    "nan:0:0", "12:inf:0", "12:0:nan",
])
def test_bad_sexagesimal(text):
    with pytest.raises(InvalidAngleFormat):
        dms_to_deg(text)


def test_negative_hours_rejected():
    with pytest.raises(InvalidAngleFormat):
        hms_to_deg("-1:0:0")
    with pytest.raises(InvalidAngleFormat):
        hours_to_hms(-0.5)


def test_formatting():
    h, m, s = hours_to_hms_tuple(5.6219597)
    assert (h, m) == (5, 37)
    assert compare_values("Seconds", s, 19.05492, tolerance=1e-3)

    assert hours_to_hms(12.5) == "12:30:0.0"
    assert deg_to_dms(-26.5) == "-26:30:0.0"
    assert deg_to_dms(26.5) == "26:30:0.0"
    assert deg_to_dms_tuple(-26.5) == (26, 30, 0.0)


def main():
    """Main function to run tests"""
    print("\n" + "=" * 70)
    print(" astronav coordinate transformation tests")
    print("=" * 70)

    for star in STARS:
        test_star_altitude_azimuth(*star)
    test_antares_sexagesimal()
    test_hour_angle()
    test_zenith_and_nadir()
    test_meridian_transit()
    test_east_west()
    test_output_ranges()
    test_dms_hms_parsing()
    test_formatting()

    print("\n" + "=" * 70)
    print("Tests complete!")
    print("=" * 70 + "\n")


if __name__ == "__main__":
    main()
