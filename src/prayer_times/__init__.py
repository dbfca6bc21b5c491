from .calculator import (
    CONVERGENCE_TOLERANCE,
    MAX_ITERATIONS,
    Calculator,
    TargetTime,
)
from .config import calculator_from_mapping, load_calculator
from .exceptions import ConfigurationError, PrayerTimesError
from .methods import AsrConvention, CalculationMethod, Target

__all__ = [
    "AsrConvention",
    "CalculationMethod",
    "Calculator",
    "ConfigurationError",
    "CONVERGENCE_TOLERANCE",
    "MAX_ITERATIONS",
    "PrayerTimesError",
    "Target",
    "TargetTime",
    "calculator_from_mapping",
    "load_calculator",
]
