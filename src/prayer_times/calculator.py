"""
Observance time calculator.

A Calculator is configured through its fields, finalized once, then pointed
at a date. Every target other than Zuhr is solved by fixed-point iteration:
declination and transit depend on the time of day, which is exactly what is
being solved for, so each candidate time is fed back to refine the solar
position until two candidates agree to the second.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple, Optional

from .decmath import D
from .methods import AsrConvention, CalculationMethod, Phase, Target
from .solar import SolarPosition, hour_angle, solar_position, sun_altitude

log = logging.getLogger(__name__)

MAX_ITERATIONS = 5
CONVERGENCE_TOLERANCE = timedelta(seconds=1)

_FIFTEEN = D(15)
_SECONDS_PER_HOUR = D(3600)


class TargetTime(NamedTuple):
    """Clock time of a target; ``time`` is None when the sun never gets there."""

    time: Optional[datetime]
    available: bool


UNAVAILABLE = TargetTime(None, False)


@dataclass(frozen=True)
class Settings:
    """Numeric configuration resolved by Calculator.finalize()."""

    latitude: Decimal
    longitude: Decimal
    elevation: Decimal
    fajr_angle: Decimal
    isha_angle: Decimal
    asr_coefficient: Decimal
    maghrib_duration: Optional[timedelta]


@dataclass(frozen=True)
class DayState:
    """Per-date snapshot, replaced wholesale by Calculator.set_date()."""

    date: datetime  # Local noon
    timezone: Decimal  # Hours east of UTC
    position: SolarPosition


@dataclass
class Calculator:
    latitude: float
    longitude: float
    elevation: float = 0.0
    fajr_angle: float = 0.0  # 0 keeps the method default
    isha_angle: float = 0.0  # 0 keeps the method default
    maghrib_duration: Optional[timedelta] = None  # Fixed Isha delay after Maghrib
    method: CalculationMethod = CalculationMethod.DEFAULT
    asr_convention: AsrConvention = AsrConvention.SHAFII
    precise_to_seconds: bool = False
    ignore_elevation: bool = False
    angle_correction: dict[Target, float] = field(default_factory=dict)
    time_correction: dict[Target, timedelta] = field(default_factory=dict)

    _settings: Optional[Settings] = field(default=None, init=False, repr=False)
    _day: Optional[DayState] = field(default=None, init=False, repr=False)

    @property
    def settings(self) -> Optional[Settings]:
        return self._settings

    @property
    def day(self) -> Optional[DayState]:
        return self._day

    def finalize(self) -> "Calculator":
        """Resolve method and convention defaults. Must be called exactly once."""
        assert self._settings is None, "Calculator already finalized"
        profile = self.method.profile
        self._settings = Settings(
            latitude=D(self.latitude),
            longitude=D(self.longitude),
            elevation=D(self.elevation),
            fajr_angle=D(self.fajr_angle or profile.fajr_angle),
            isha_angle=D(self.isha_angle or profile.isha_angle),
            asr_coefficient=D(self.asr_convention.coefficient),
            maghrib_duration=self.maghrib_duration or profile.maghrib_duration,
        )
        log.debug(f"Finalized {self.method.name} calculator: {self._settings}")
        return self

    def set_date(self, date: datetime) -> "Calculator":
        """Make ``date`` (timezone-aware) the active day."""
        assert self._settings is not None, "Call finalize() before set_date()"
        assert date.tzinfo is not None, "Requires timezone-aware datetime"
        noon = date.replace(hour=12, minute=0, second=0, microsecond=0)
        timezone = D(noon.utcoffset().total_seconds()) / _SECONDS_PER_HOUR
        self._day = DayState(
            date=noon,
            timezone=timezone,
            position=solar_position(noon, self._settings.longitude, timezone),
        )
        log.debug(
            f"Date set to {noon.date()} (UTC{timezone:+}): "
            f"transit={self._day.position.transit:.4f}h, "
            f"declination={self._day.position.declination:.4f}°"
        )
        return self

    def calculate(self, target: Target) -> TargetTime:
        """Clock time of ``target`` on the active date."""
        assert self._day is not None, "Call set_date() before calculate()"
        settings = self._settings

        if target is Target.ISHA and settings.maghrib_duration:
            maghrib = self.calculate(Target.MAGHRIB)
            if not maghrib.available:
                return UNAVAILABLE
            return TargetTime(maghrib.time + settings.maghrib_duration, True)

        position = self._day.position
        if target.phase is Phase.NOON:
            hours = self._apply_corrections(target, position.transit)
            return TargetTime(self._to_clock(hours), True)

        altitude = self._altitude(target, position)
        candidate = None
        for iteration in range(MAX_ITERATIONS):
            previous = candidate
            candidate = self._solve(target, position, altitude)
            if candidate is None:
                log.debug(f"{target.name} unreachable on {self._day.date.date()}")
                return UNAVAILABLE
            if previous is not None and abs(candidate - previous) < CONVERGENCE_TOLERANCE:
                log.debug(f"{target.name} converged after {iteration + 1} iterations")
                break

            position = solar_position(
                candidate, settings.longitude, self._day.timezone
            )
            if target is Target.ASR:
                altitude = self._altitude(target, position)
        else:
            log.debug(f"{target.name} not converged, using {candidate.time()}")

        return TargetTime(candidate, True)

    def calculate_all(self) -> dict[Target, datetime]:
        """Times of every available target, Fajr through Isha."""
        result = {}
        for target in Target:
            target_time, available = self.calculate(target)
            if available:
                result[target] = target_time
        return result

    def solve_at(self, target: Target, moment: datetime) -> Optional[datetime]:
        """Single solve with the sun's position evaluated at ``moment``."""
        assert self._day is not None, "Call set_date() before solve_at()"
        position = solar_position(moment, self._settings.longitude, self._day.timezone)
        return self._solve(target, position, self._altitude(target, position))

    def _altitude(self, target: Target, position: SolarPosition) -> Decimal:
        settings = self._settings
        return sun_altitude(
            target,
            latitude=settings.latitude,
            declination=position.declination,
            elevation=settings.elevation,
            fajr_angle=settings.fajr_angle,
            isha_angle=settings.isha_angle,
            asr_coefficient=settings.asr_coefficient,
            ignore_elevation=self.ignore_elevation,
        )

    def _solve(
        self, target: Target, position: SolarPosition, altitude: Decimal
    ) -> Optional[datetime]:
        angle = hour_angle(altitude, position.declination, self._settings.latitude)
        if angle is None:
            return None
        hours = position.transit + D(target.phase.value) * angle / _FIFTEEN
        return self._to_clock(self._apply_corrections(target, hours))

    def _apply_corrections(self, target: Target, hours: Decimal) -> Decimal:
        if target in self.angle_correction:
            hours += D(self.angle_correction[target]) / _FIFTEEN
        if target in self.time_correction:
            seconds = D(self.time_correction[target].total_seconds())
            hours += seconds / _SECONDS_PER_HOUR
        return hours

    def _to_clock(self, hours: Decimal) -> datetime:
        """Local time ``hours`` after midnight of the active date."""
        unit = 1 if self.precise_to_seconds else 60
        steps = (hours * _SECONDS_PER_HOUR / unit).quantize(Decimal(1), ROUND_HALF_UP)
        midnight = self._day.date.replace(hour=0)
        return midnight + timedelta(seconds=int(steps) * unit)


if __name__ == "__main__":
    from datetime import timezone

    logging.basicConfig(level=logging.DEBUG)
    calc = Calculator(latitude=21.4225, longitude=39.8262).finalize()
    calc.set_date(datetime.now(timezone(timedelta(hours=3))))
    for target, target_time in calc.calculate_all().items():
        print(f"{target.name:<8} {target_time.strftime('%H:%M:%S')}")
