from datetime import datetime, timedelta

import pytest
from tqdm import tqdm

from prayer_times import CalculationMethod, Calculator, Target

from conftest import local_zone

SITES = {
    "mecca": (21.4225, 39.8262),
    "jakarta": (-6.2088, 106.8456),
    "cape_town": (-33.9249, 18.4241),
    "new_york": (40.7128, -74.0060),
}


def iterate_over_days_in_year(year, tz):
    """Yields local midnight of every day in ``year``."""
    start = datetime(year, 1, 1, tzinfo=tz)
    total_days = (datetime(year + 1, 1, 1, tzinfo=tz) - start).days
    for i in tqdm(range(total_days), desc=str(year), leave=False):
        yield start + timedelta(days=i)


@pytest.mark.parametrize("site", SITES)
def test_every_day_of_2024(site):
    """Available times keep their order and re-solve to themselves all year"""
    latitude, longitude = SITES[site]
    calc = Calculator(
        latitude=latitude,
        longitude=longitude,
        method=CalculationMethod.MWL,
        precise_to_seconds=True,
    ).finalize()

    failures = []
    for day in iterate_over_days_in_year(2024, local_zone(longitude)):
        times = calc.set_date(day).calculate_all()
        ordered = [times[t] for t in Target if t in times]
        if ordered != sorted(ordered):
            failures.append((day.date(), "order", times))
        for target, target_time in times.items():
            if target is Target.ZUHR:
                continue
            resolved = calc.solve_at(target, target_time)
            if resolved is None or abs(resolved - target_time) > timedelta(seconds=1):
                failures.append((day.date(), target.name, target_time, resolved))

    assert not failures, failures[:5]
