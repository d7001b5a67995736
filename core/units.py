"""
core/units.py
────────────────────────────────────────────────────────────────────────
User-facing units ➜ metric.  The calculator only ever sees meters,
kilograms and kilocalories; callers convert with these helpers first.
"""

from __future__ import annotations

M_PER_FT = 0.3048
M_PER_CM = 0.01
KG_PER_LB = 0.453592
ML_PER_FL_OZ = 29.5735

_HEIGHT = {"m": 1.0, "cm": M_PER_CM, "ft": M_PER_FT}
_WEIGHT = {"kg": 1.0, "lb": KG_PER_LB}
_VOLUME = {"ml": 1.0, "fl oz": ML_PER_FL_OZ}


def _convert(value: float, unit: str, table: dict[str, float], kind: str) -> float:
    try:
        return value * table[unit]
    except KeyError:
        raise ValueError(f"unknown {kind} unit {unit!r}; expected one of {sorted(table)}") from None


def height_to_meters(value: float, unit: str = "cm") -> float:
    return _convert(value, unit, _HEIGHT, "height")


def weight_to_kg(value: float, unit: str = "kg") -> float:
    return _convert(value, unit, _WEIGHT, "weight")


def volume_to_ml(value: float, unit: str = "ml") -> float:
    return _convert(value, unit, _VOLUME, "volume")
