"""Measurement conversion into twips, the base unit of RTF."""

from __future__ import annotations

import math
from enum import Enum

TWIPS_PER_POINT = 20
TWIPS_PER_INCH = 1440
TWIPS_PER_CM = 566.9


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class Unit(str, Enum):
    """Units accepted wherever a distance is given."""

    TWIPS = "twips"
    POINT = "pt"
    INCH = "in"
    CM = "cm"
    MM = "mm"

    def to_twips(self, value: float) -> int:
        """Convert ``value`` given in this unit to whole twips."""
        if self is Unit.TWIPS:
            return int(value)
        if self is Unit.POINT:
            return int(value * TWIPS_PER_POINT)
        if self is Unit.INCH:
            return int(value * TWIPS_PER_INCH)
        if self is Unit.CM:
            return _round_half_away(value * TWIPS_PER_CM)
        return _round_half_away(value * TWIPS_PER_CM / 10.0)


def to_twips(value: float, unit: Unit = Unit.TWIPS) -> int:
    """Convert a measurement to twips (1/20 point)."""
    return Unit(unit).to_twips(value)


def distance_to_twips(value: float, unit: Unit = Unit.TWIPS) -> int:
    """Like :func:`to_twips` for controls where the sign carries no meaning."""
    return to_twips(abs(value), unit)
