# src/vetengine/ranges.py
from __future__ import annotations

from typing import Optional

from .types import Drug, DoseRange


def resolve_range(drug: Drug, species: str) -> Optional[DoseRange]:
    """
    Active per-kg range for a drug/species pair.

    A species override wins outright; otherwise the generic range applies
    when both bounds are known. No range -> None (not zero).
    """
    override = drug.dose_ranges.get(species) if drug.dose_ranges else None
    if override is not None:
        return DoseRange(min=override.min, max=override.max)
    if drug.dose_min is not None and drug.dose_max is not None:
        return DoseRange(min=drug.dose_min, max=drug.dose_max)
    return None


def default_dose(drug: Drug, species: str) -> Optional[float]:
    """Midpoint of the active range, used to seed a row's dose field."""
    r = resolve_range(drug, species)
    if r is None:
        return None
    return (r.min + r.max) / 2


def format_dose(value: float) -> str:
    """
    Shortest text for a dose number: 1.0 -> "1", 0.25 -> "0.25".
    Float noise from midpoints ((0.2 + 0.4) / 2) is rounded away.
    """
    value = round(float(value), 10)
    text = repr(value)
    if "e" in text or "E" in text:
        text = f"{value:.10f}".rstrip("0").rstrip(".")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_range(r: Optional[DoseRange], unit_label: str) -> str:
    if r is None:
        return ""
    return f"{format_dose(r.min)}–{format_dose(r.max)} {unit_label}"
