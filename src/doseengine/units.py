# src/doseengine/units.py
"""
Mass and time units plus the conversions between units of the same kind.

Unit symbols from external data are parsed through static tables; anything
unknown becomes INVALID instead of raising. INVALID only fails later, when a
conversion actually needs a known unit.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from .errors import UnrecognizedUnit, UnsupportedUnitConversion


class MassUnit(Enum):
    MG = "mg"
    UG = "µg"
    G = "g"
    ML = "ml"
    INVALID = "invalid"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: Optional[str]) -> "MassUnit":
        """Case-insensitive lookup; unknown or missing text -> INVALID."""
        if text is None:
            return cls.INVALID
        return _MASS_SYMBOLS.get(text.lower(), cls.INVALID)


class TimeUnit(Enum):
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    INVALID = "invalid"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: Optional[str]) -> "TimeUnit":
        """Case-insensitive lookup; unknown or missing text -> INVALID."""
        if text is None:
            return cls.INVALID
        return _TIME_SYMBOLS.get(text.lower(), cls.INVALID)


_MASS_SYMBOLS = {
    "mg": MassUnit.MG,
    "µg": MassUnit.UG,   # micro sign U+00B5
    "μg": MassUnit.UG,   # greek small mu U+03BC
    "ug": MassUnit.UG,
    "mcg": MassUnit.UG,
    "g": MassUnit.G,
    "ml": MassUnit.ML,
}

_TIME_SYMBOLS = {
    "seconds": TimeUnit.SECONDS,
    "minutes": TimeUnit.MINUTES,
    "hours": TimeUnit.HOURS,
}

# Size of each unit in the smallest unit of its kind. ML is volume and has no entry.
_MICROGRAMS_PER = {MassUnit.UG: 1.0, MassUnit.MG: 1e3, MassUnit.G: 1e6}
_SECONDS_PER = {TimeUnit.SECONDS: 1.0, TimeUnit.MINUTES: 60.0, TimeUnit.HOURS: 3600.0}


def _rescale(value: float, from_size: float, to_size: float) -> float:
    # Always apply one exact power-of-ten (or 60/3600) factor, multiplying when
    # going to a smaller unit and dividing when going to a larger one.
    if from_size >= to_size:
        return value * (from_size / to_size)
    return value / (to_size / from_size)


def convert_mass(amount: float, from_unit: MassUnit, to_unit: MassUnit) -> float:
    """
    Convert an amount between mass units (mg, µg, g).

    Raises UnrecognizedUnit for INVALID and UnsupportedUnitConversion for ml,
    which is a volume and cannot be turned into a mass.
    """
    if from_unit is MassUnit.INVALID or to_unit is MassUnit.INVALID:
        raise UnrecognizedUnit(from_unit, to_unit)
    if from_unit is to_unit:
        return amount
    if from_unit not in _MICROGRAMS_PER or to_unit not in _MICROGRAMS_PER:
        raise UnsupportedUnitConversion(from_unit, to_unit)
    return _rescale(amount, _MICROGRAMS_PER[from_unit], _MICROGRAMS_PER[to_unit])


def convert_time(value: float, from_unit: TimeUnit, to_unit: TimeUnit) -> float:
    """Convert a value between seconds, minutes and hours."""
    if from_unit is TimeUnit.INVALID or to_unit is TimeUnit.INVALID:
        raise UnrecognizedUnit(from_unit, to_unit)
    if from_unit is to_unit:
        return value
    return _rescale(value, _SECONDS_PER[from_unit], _SECONDS_PER[to_unit])
