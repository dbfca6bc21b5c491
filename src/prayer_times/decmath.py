"""Degree-based trigonometry over Decimal.

Hours, corrections and convergence checks are kept as Decimal so repeated
refinement does not accumulate binary float drift. The transcendental
functions themselves go through ``math``.
"""

import math
from decimal import Decimal
from typing import Union

Number = Union[int, float, str, Decimal]


def D(value: Number) -> Decimal:
    """Decimal from anything numeric; floats pass through str to stay short."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def sin(deg: Decimal) -> Decimal:
    return D(math.sin(math.radians(deg)))


def cos(deg: Decimal) -> Decimal:
    return D(math.cos(math.radians(deg)))


def tan(deg: Decimal) -> Decimal:
    return D(math.tan(math.radians(deg)))


def atan(x: Decimal) -> Decimal:
    return D(math.degrees(math.atan(x)))


def acos(x: Decimal) -> Decimal:
    return D(math.degrees(math.acos(x)))


def sqrt(x: Decimal) -> Decimal:
    return x.sqrt()
