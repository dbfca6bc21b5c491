"""Observance targets and the regional convention tables."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum, IntEnum
from typing import Optional


class Phase(Enum):
    BEFORE_NOON = -1
    NOON = 0
    AFTER_NOON = 1


class Target(IntEnum):
    """Daily observances in the order they occur."""

    FAJR = 0
    SUNRISE = 1
    ZUHR = 2
    ASR = 3
    MAGHRIB = 4
    ISHA = 5

    @property
    def phase(self) -> Phase:
        return _PHASES[self]


_PHASES = {
    Target.FAJR: Phase.BEFORE_NOON,
    Target.SUNRISE: Phase.BEFORE_NOON,
    Target.ZUHR: Phase.NOON,
    Target.ASR: Phase.AFTER_NOON,
    Target.MAGHRIB: Phase.AFTER_NOON,
    Target.ISHA: Phase.AFTER_NOON,
}


@dataclass(frozen=True)
class MethodProfile:
    """Twilight angles (degrees below horizon) and optional fixed Isha delay."""

    fajr_angle: float
    isha_angle: float = 0.0
    maghrib_duration: Optional[timedelta] = None


class CalculationMethod(Enum):
    DEFAULT = "default"
    MWL = "mwl"  # Muslim World League
    ALGERIAN = "algerian"
    DIYANET = "diyanet"
    ISNA = "isna"  # Islamic Society of North America
    UMM_AL_QURA = "umm_al_qura"
    GULF = "gulf"
    KARACHI = "karachi"
    FRANCE18 = "france18"
    TUNISIA = "tunisia"
    EGYPT = "egypt"
    EGYPT_BIS = "egypt_bis"
    KEMENAG = "kemenag"
    MUIS = "muis"
    JAKIM = "jakim"
    UOIF = "uoif"
    FRANCE15 = "france15"
    TEHRAN = "tehran"
    JAFARI = "jafari"

    @property
    def profile(self) -> MethodProfile:
        return METHOD_PROFILES[self]


_NINETY_MINUTES = timedelta(minutes=90)

METHOD_PROFILES = {
    CalculationMethod.DEFAULT: MethodProfile(18, 17),
    CalculationMethod.MWL: MethodProfile(18, 17),
    CalculationMethod.ALGERIAN: MethodProfile(18, 17),
    CalculationMethod.DIYANET: MethodProfile(18, 17),
    CalculationMethod.ISNA: MethodProfile(15, 15),
    CalculationMethod.UMM_AL_QURA: MethodProfile(18.5, maghrib_duration=_NINETY_MINUTES),
    CalculationMethod.GULF: MethodProfile(19.5, maghrib_duration=_NINETY_MINUTES),
    CalculationMethod.KARACHI: MethodProfile(18, 18),
    CalculationMethod.FRANCE18: MethodProfile(18, 18),
    CalculationMethod.TUNISIA: MethodProfile(18, 18),
    CalculationMethod.EGYPT: MethodProfile(19.5, 17.5),
    CalculationMethod.EGYPT_BIS: MethodProfile(20, 18),
    CalculationMethod.KEMENAG: MethodProfile(20, 18),
    CalculationMethod.MUIS: MethodProfile(20, 18),
    CalculationMethod.JAKIM: MethodProfile(20, 18),
    CalculationMethod.UOIF: MethodProfile(12, 12),
    CalculationMethod.FRANCE15: MethodProfile(15, 15),
    CalculationMethod.TEHRAN: MethodProfile(17.7, 14),
    CalculationMethod.JAFARI: MethodProfile(16, 14),
}


class AsrConvention(Enum):
    """Afternoon shadow rule: shadow length = coefficient * object + noon shadow."""

    SHAFII = "shafii"
    HANAFI = "hanafi"

    @property
    def coefficient(self) -> int:
        return 2 if self is AsrConvention.HANAFI else 1
