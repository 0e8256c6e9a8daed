# src/vetengine/units.py
from .helpers import finite_or_zero
from .types import WeightUnit

# Exact, by definition of the international avoirdupois pound.
LB_TO_KG = 0.45359237


def to_kilograms(value: float, unit: WeightUnit) -> float:
    """
    Canonical patient weight in kg. Weight cannot be negative, so negative
    or non-finite input is treated as 0.
    """
    _validate_unit(unit)
    v = finite_or_zero(value)
    if v < 0:
        v = 0.0
    return v if unit == "kg" else v * LB_TO_KG


def weight_text_to_kg(text: str, unit: WeightUnit) -> float:
    """
    Weight field text -> kg. An empty field counts as 0.
    """
    raw = (text or "").strip()
    if raw == "":
        return to_kilograms(0.0, unit)
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    return to_kilograms(value, unit)


def _validate_unit(unit: str) -> None:
    if unit not in ("kg", "lb"):
        raise ValueError(f"unit must be 'kg' or 'lb' (got {unit!r}).")
