# src/vetengine/rows.py
"""
Per-drug row working state and the computation of a row's result.

A row's dose text and presentation choice are a derived default with a
manual override: the default comes from the drug and its active range, the
user may overwrite it freely, and only a change of (drug, range) resets it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional

from .dosing import compute_administered_quantity, compute_dose_mass, is_out_of_range, parse_dose_text
from .ranges import default_dose, format_dose, resolve_range
from .types import DisplayResult, Drug, DoseRange, Presentation, SelectedItem


def source_key(drug: Drug, species: str) -> Hashable:
    return (drug.id, resolve_range(drug, species))


def _seed_dose_text(drug: Drug, species: str) -> str:
    mid = default_dose(drug, species)
    return format_dose(mid) if mid is not None else ""


@dataclass
class RowState:
    """
    source_key         : (drug id, active range) the defaults were derived from
    dose_text          : raw dose field text, freely editable
    presentation_index : index into drug.presentations, -1 when there are none
    """
    source_key: Hashable
    dose_text: str
    presentation_index: int

    @classmethod
    def for_drug(cls, drug: Drug, species: str) -> "RowState":
        return cls(
            source_key=source_key(drug, species),
            dose_text=_seed_dose_text(drug, species),
            presentation_index=0 if drug.has_presentations else -1,
        )

    def sync(self, drug: Drug, species: str) -> bool:
        """
        Re-derive defaults if the drug or its active range changed.
        Returns True when the row was reset.
        """
        key = source_key(drug, species)
        if key == self.source_key:
            return False
        fresh = RowState.for_drug(drug, species)
        self.source_key = fresh.source_key
        self.dose_text = fresh.dose_text
        self.presentation_index = fresh.presentation_index
        return True


@dataclass(frozen=True)
class RowResult:
    drug: Drug
    dose_range: Optional[DoseRange]
    dose: Optional[float]
    dose_mass: Optional[float]
    presentation: Optional[Presentation]
    display: DisplayResult
    out_of_range: bool

    @property
    def result_text(self) -> str:
        return self.display.text


def current_presentation(drug: Drug, index: int) -> Optional[Presentation]:
    if not drug.has_presentations or index < 0 or index >= len(drug.presentations):
        return None
    return drug.presentations[index]


def compute_row(drug: Drug, species: str, weight_kg: float, state: RowState) -> RowResult:
    """
    Full result for one row: range, parsed dose, mass, quantity and range flag.
    """
    r = resolve_range(drug, species)
    dose = parse_dose_text(state.dose_text)
    mass = None if dose is None else compute_dose_mass(dose, weight_kg)
    pres = current_presentation(drug, state.presentation_index)
    return RowResult(
        drug=drug,
        dose_range=r,
        dose=dose,
        dose_mass=mass,
        presentation=pres,
        display=compute_administered_quantity(mass, pres),
        out_of_range=is_out_of_range(dose, r),
    )


def snapshot(result: RowResult) -> SelectedItem:
    """Worksheet entry for a row. notes stay None so user notes are kept."""
    d = result.drug
    return SelectedItem(
        id=d.id,
        name=d.name,
        category=d.category,
        route=d.route,
        unit_label=d.dose_label,
        dose=result.dose,
        presentation=result.presentation,
        result_text=result.result_text,
        dose_range=result.dose_range,
        out_of_range=result.out_of_range,
    )
