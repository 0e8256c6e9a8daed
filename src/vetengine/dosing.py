# src/vetengine/dosing.py
from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from .helpers import finite_or_zero
from .types import DisplayResult, DoseRange, Presentation, SentinelKind

NO_RESULT_TEXT = "—"

_SENTINEL_TEXT = {
    SentinelKind.NO_RESULT: NO_RESULT_TEXT,
    SentinelKind.SET_CONCENTRATION: "Set conc",
    SentinelKind.SET_MASS_PER_UNIT: "Set mg/tab",
}

_QUANTITY_UNIT = {"liquid": "mL", "solid": "tabs"}


def parse_dose_text(text: Optional[str]) -> Optional[float]:
    """
    Dose field text -> dose per kg.

    Accepts a comma decimal separator ("0,5"). Empty or unparseable text
    means "no dose entered" and returns None; "0" is a real dose of 0.
    """
    raw = (text or "").strip()
    if raw == "":
        return None
    try:
        n = float(raw.replace(",", ".", 1))
    except ValueError:
        return None
    return n if math.isfinite(n) else None


def compute_dose_mass(dose_per_kg: float, weight_kg: float) -> float:
    """
    Administered mass (or units) = dose per kg * weight. Never negative.
    """
    d = finite_or_zero(dose_per_kg)
    w = max(0.0, finite_or_zero(weight_kg))
    mass = d * w
    return mass if mass > 0 else 0.0


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round with ties going up (1.005 -> 1.01), unlike round()'s banker's rule.
    Works on the shortest repr of the float so 1.005 is treated as typed.
    """
    if not math.isfinite(value):
        return 0.0
    q = Decimal(1).scaleb(-places)
    try:
        return float(Decimal(repr(value)).quantize(q, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return value


def sentinel(kind: SentinelKind) -> DisplayResult:
    return DisplayResult(text=_SENTINEL_TEXT[kind], sentinel=kind)


def compute_administered_quantity(dose_mass: Optional[float],
                                  presentation: Optional[Presentation]) -> DisplayResult:
    """
    How much of the selected presentation to give.

      dose_mass None (no dose entered)  -> "—"
      presentation None                  -> "—"
      presentation.value <= 0            -> "Set conc" / "Set mg/tab"
      otherwise                          -> "<qty> mL" / "<qty> tabs", qty to 2 places
    """
    if dose_mass is None or presentation is None:
        return sentinel(SentinelKind.NO_RESULT)
    if presentation.needs_concentration:
        if presentation.kind == "liquid":
            return sentinel(SentinelKind.SET_CONCENTRATION)
        return sentinel(SentinelKind.SET_MASS_PER_UNIT)

    qty = round_half_up(finite_or_zero(dose_mass) / float(presentation.value), 2)
    unit = _QUANTITY_UNIT.get(presentation.kind, "tabs")
    return DisplayResult(text=f"{_short(qty)} {unit}", quantity=qty, unit=unit)


def is_out_of_range(dose: Optional[float], dose_range: Optional[DoseRange]) -> bool:
    """Inclusive bounds; nothing to flag when either side is missing."""
    if dose is None or dose_range is None:
        return False
    return dose < dose_range.min or dose > dose_range.max


def _short(x: float) -> str:
    # 1.0 -> "1", 0.5 -> "0.5", 2.25 -> "2.25"
    text = f"{x:.2f}".rstrip("0").rstrip(".")
    return text or "0"
