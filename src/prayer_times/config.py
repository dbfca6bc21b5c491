"""Build calculators from plain mappings or TOML files.

Example TOML::

    latitude = 21.4225
    longitude = 39.8262
    method = "umm_al_qura"
    asr_convention = "shafii"

    [angle_correction]
    fajr = 0.5

    [time_correction]  # minutes
    maghrib = 2
"""

import logging
import os
import tomllib
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, Mapping, Type, TypeVar

from .calculator import Calculator
from .exceptions import ConfigurationError
from .methods import AsrConvention, CalculationMethod, Target

log = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_PLAIN_KEYS = (
    "latitude",
    "longitude",
    "elevation",
    "fajr_angle",
    "isha_angle",
    "precise_to_seconds",
    "ignore_elevation",
)
_KNOWN_KEYS = set(_PLAIN_KEYS) | {
    "maghrib_duration",
    "method",
    "asr_convention",
    "angle_correction",
    "time_correction",
}


def load_toml(path: str) -> Dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def parse_enum(enum_type: Type[E], name: str) -> E:
    """Case-insensitive lookup of an enum member by name."""
    key = str(name).strip().upper().replace("-", "_")
    try:
        return enum_type[key]
    except KeyError:
        choices = ", ".join(m.name.lower() for m in enum_type)
        raise ConfigurationError(
            f"Unknown {enum_type.__name__} '{name}'. Expected one of: {choices}"
        ) from None


def _parse_table(raw: Mapping[str, Any], convert) -> Dict[Target, Any]:
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Correction table must be a mapping, got: {raw!r}")
    return {parse_enum(Target, name): convert(value) for name, value in raw.items()}


def calculator_from_mapping(cfg: Mapping[str, Any]) -> Calculator:
    """Create a finalized Calculator from a configuration mapping.

    ``maghrib_duration`` and ``time_correction`` values are minutes.
    """
    unknown = set(cfg) - _KNOWN_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
    for required in ("latitude", "longitude"):
        if required not in cfg:
            raise ConfigurationError(f"Missing required key: {required}")

    kwargs: Dict[str, Any] = {k: cfg[k] for k in _PLAIN_KEYS if k in cfg}
    if "method" in cfg:
        kwargs["method"] = parse_enum(CalculationMethod, cfg["method"])
    if "asr_convention" in cfg:
        kwargs["asr_convention"] = parse_enum(AsrConvention, cfg["asr_convention"])
    if "maghrib_duration" in cfg:
        kwargs["maghrib_duration"] = timedelta(minutes=cfg["maghrib_duration"])
    if "angle_correction" in cfg:
        kwargs["angle_correction"] = _parse_table(cfg["angle_correction"], float)
    if "time_correction" in cfg:
        kwargs["time_correction"] = _parse_table(
            cfg["time_correction"], lambda minutes: timedelta(minutes=minutes)
        )

    log.debug(f"Calculator configuration: {kwargs}")
    return Calculator(**kwargs).finalize()


def load_calculator(path: str) -> Calculator:
    """Read a TOML file and return a finalized Calculator."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Calculator config not found: {path}")
    return calculator_from_mapping(load_toml(path))
