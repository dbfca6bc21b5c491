from datetime import datetime, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from prayer_times.decmath import D
from prayer_times.julian import J2000, julian_date
from prayer_times.methods import Target
from prayer_times.solar import (
    SUNRISE_SUNSET,
    hour_angle,
    solar_coordinates,
    sun_altitude,
    transit_time,
)

latitudes = st.floats(min_value=-89, max_value=89, allow_nan=False)
declinations = st.floats(min_value=-23.44, max_value=23.44, allow_nan=False)
altitudes = st.floats(min_value=-30, max_value=60, allow_nan=False)

ALTITUDE_ARGS = dict(
    latitude=D(21.4225),
    declination=D(-2.3),
    elevation=D(0),
    fajr_angle=D(18),
    isha_angle=D(17),
    asr_coefficient=D(1),
)


def test_julian_date_epoch():
    """J2000.0 is 2000-01-01 12:00 UTC"""
    assert julian_date(datetime(2000, 1, 1, 12, tzinfo=timezone.utc)) == J2000


def test_julian_date_naive_rejected():
    with pytest.raises(AssertionError):
        julian_date(datetime(2000, 1, 1, 12))


def test_declination_at_solstices():
    june = julian_date(datetime(2024, 6, 20, 12, tzinfo=timezone.utc))
    december = julian_date(datetime(2024, 12, 21, 12, tzinfo=timezone.utc))
    assert solar_coordinates(june)[0] == pytest.approx(23.44, abs=0.05)
    assert solar_coordinates(december)[0] == pytest.approx(-23.44, abs=0.05)


def test_transit_on_greenwich_follows_equation_of_time():
    """Early November the sun runs ~16 minutes fast"""
    jd = julian_date(datetime(2024, 11, 3, 12, tzinfo=timezone.utc))
    transit = transit_time(jd, D(0), D(0))
    assert abs(transit - (12 - D(16.4) / 60)) < D(1) / 60


def test_fixed_altitudes():
    assert sun_altitude(Target.FAJR, **ALTITUDE_ARGS) == -18
    assert sun_altitude(Target.ISHA, **ALTITUDE_ARGS) == -17
    assert sun_altitude(Target.SUNRISE, **ALTITUDE_ARGS) == SUNRISE_SUNSET
    assert SUNRISE_SUNSET == D("-0.8333")


def test_elevation_lowers_horizon():
    args = dict(ALTITUDE_ARGS, elevation=D(100))
    lowered = sun_altitude(Target.MAGHRIB, **args)
    assert float(lowered) == pytest.approx(float(SUNRISE_SUNSET) - 0.347)
    assert sun_altitude(Target.MAGHRIB, ignore_elevation=True, **args) == SUNRISE_SUNSET


def test_asr_altitude_on_equator_at_equinox():
    """Shadow equal to object length means 45° altitude when noon shadow is zero"""
    args = dict(ALTITUDE_ARGS, latitude=D(0), declination=D(0))
    assert float(sun_altitude(Target.ASR, **args)) == pytest.approx(45)
    hanafi = dict(args, asr_coefficient=D(2))
    assert float(sun_altitude(Target.ASR, **hanafi)) == pytest.approx(26.565, abs=1e-3)


def test_zuhr_has_no_altitude():
    with pytest.raises(ValueError):
        sun_altitude(Target.ZUHR, **ALTITUDE_ARGS)


@given(altitudes, declinations, latitudes)
def test_hour_angle_range(altitude, declination, latitude):
    angle = hour_angle(D(altitude), D(declination), D(latitude))
    assert angle is None or 0 <= angle <= 180


def test_hour_angle_equinox_horizon():
    """Geometric horizon crossing on the equator at equinox is 6 hours from noon"""
    assert float(hour_angle(D(0), D(0), D(0))) == pytest.approx(90)


def test_hour_angle_unreachable():
    # Midnight sun at 80°N in June never dips to -18°
    assert hour_angle(D(-18), D(23.4), D(80)) is None
    # Polar night at 80°N in December never climbs to the horizon
    assert hour_angle(SUNRISE_SUNSET, D(-23.4), D(80)) is None
