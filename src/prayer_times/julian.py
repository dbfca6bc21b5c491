"""Civil datetime to continuous Julian Date."""

from datetime import datetime, timezone

J2000 = 2451545.0


def julian_date(dt: datetime) -> float:
    """Convert an aware datetime to Julian Date (UT) with microsecond precision."""
    assert dt.tzinfo is not None, "Requires timezone-aware datetime"
    dt = dt.astimezone(timezone.utc)
    a = (14 - dt.month) // 12
    y = dt.year + 4800 - a
    m = dt.month + 12 * a - 3
    jdn = dt.day + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045
    frac = (
        (dt.hour - 12) / 24
        + dt.minute / 1440
        + dt.second / 86400
        + dt.microsecond / 86400e6
    )
    return jdn + frac


def julian_century(jd: float) -> float:
    """Julian centuries elapsed since J2000."""
    return (jd - J2000) / 36525.0
