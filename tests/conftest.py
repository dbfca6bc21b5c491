from datetime import datetime, timedelta, timezone

import pytest

from prayer_times import Calculator

MECCA = dict(latitude=21.4225, longitude=39.8262)
AST = timezone(timedelta(hours=3))


@pytest.fixture
def mecca() -> Calculator:
    """Mecca, MWL angles (18°/17°), Shafii Asr, dated 2024-03-15."""
    calc = Calculator(**MECCA, precise_to_seconds=True).finalize()
    return calc.set_date(datetime(2024, 3, 15, tzinfo=AST))


def local_zone(longitude: float) -> timezone:
    """Fixed offset closest to mean solar time at ``longitude``."""
    return timezone(timedelta(hours=round(longitude / 15)))
