"""
Solar position and hour-angle solver.

Low-precision NOAA series for declination and equation of time, plus the
inversion of the altitude equation that turns a required sun altitude into
an hour angle.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from . import decmath
from .decmath import D
from .julian import julian_century, julian_date
from .methods import Target

# Solar semi-diameter plus standard refraction, degrees
SUNRISE_SUNSET = D("-0.8333")
ELEVATION_DIP = D("0.0347")  # Degrees per sqrt(meter) of observer height

_FIFTEEN = D(15)
_SIXTY = D(60)
_NOON = D(12)


def solar_coordinates(jd: float) -> tuple[float, float]:
    """NOAA solar position: (declination in degrees, equation of time in minutes)."""
    T = julian_century(jd)

    # Mean solar geometry
    L = (280.46646 + 36000.76983 * T + 0.0003032 * T**2) % 360
    M = (357.52911 + 35999.05029 * T - 0.0001537 * T**2) % 360
    e = 0.016708634 - 0.000042037 * T - 0.0000001267 * T**2

    # Equation of center
    C = (
        (1.914602 - 0.004817 * T - 0.000014 * T**2) * math.sin(math.radians(M))
        + (0.019993 - 0.000101 * T) * math.sin(2 * math.radians(M))
        + 0.000289 * math.sin(3 * math.radians(M))
    )

    # True solar longitude and declination
    λ = (L + C) % 360
    δ = math.degrees(math.asin(math.sin(math.radians(λ)) * 0.3977895))

    # Equation of time (minutes)
    ε = 23.4393 - 0.01300 * T
    y = math.tan(math.radians(ε / 2)) ** 2
    eot = (
        y * math.sin(2 * math.radians(L))
        - 2 * e * math.sin(math.radians(M))
        + 4 * e * y * math.sin(math.radians(M)) * math.cos(2 * math.radians(L))
        - 0.5 * y**2 * math.sin(4 * math.radians(L))
        - 1.25 * e**2 * math.sin(2 * math.radians(M))
    )
    eot = math.degrees(eot) * 4  # Convert radians to minutes

    return δ, eot


def sun_declination(jd: float) -> Decimal:
    return D(solar_coordinates(jd)[0])


def transit_time(jd: float, longitude: Decimal, timezone: Decimal) -> Decimal:
    """Local clock hour of solar noon, corrected for the equation of time."""
    _, eot = solar_coordinates(jd)
    return _NOON + timezone - longitude / _FIFTEEN - D(eot) / _SIXTY


@dataclass(frozen=True)
class SolarPosition:
    """Sun state evaluated at one instant."""

    jd: float
    transit: Decimal  # Local clock hours
    declination: Decimal  # Degrees


def solar_position(dt: datetime, longitude: Decimal, timezone: Decimal) -> SolarPosition:
    jd = julian_date(dt)
    return SolarPosition(
        jd=jd,
        transit=transit_time(jd, longitude, timezone),
        declination=sun_declination(jd),
    )


def sun_altitude(
    target: Target,
    *,
    latitude: Decimal,
    declination: Decimal,
    elevation: Decimal,
    fajr_angle: Decimal,
    isha_angle: Decimal,
    asr_coefficient: Decimal,
    ignore_elevation: bool = False,
) -> Decimal:
    """Sun altitude in degrees that defines ``target``."""
    if target is Target.FAJR:
        return -fajr_angle
    if target is Target.ISHA:
        return -isha_angle
    if target in (Target.SUNRISE, Target.MAGHRIB):
        if ignore_elevation or elevation <= 0:
            return SUNRISE_SUNSET
        return SUNRISE_SUNSET - ELEVATION_DIP * decmath.sqrt(elevation)
    if target is Target.ASR:
        # Shadow ratio to altitude: arccot(k + tan|φ - δ|)
        shadow = asr_coefficient + decmath.tan(abs(latitude - declination))
        return decmath.atan(1 / shadow)
    raise ValueError(f"{target.name} has no altitude definition")


def hour_angle(
    altitude: Decimal, declination: Decimal, latitude: Decimal
) -> Optional[Decimal]:
    """Hour angle in degrees [0, 180] at which the sun reaches ``altitude``.

    Returns None when the sun never reaches that altitude on the day.
    """
    denominator = decmath.cos(latitude) * decmath.cos(declination)
    if denominator == 0:
        return None

    cos_ha = (
        decmath.sin(altitude) - decmath.sin(latitude) * decmath.sin(declination)
    ) / denominator
    if cos_ha < -1 or cos_ha > 1:
        return None
    return decmath.acos(cos_ha)
