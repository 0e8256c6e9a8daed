# src/vetengine/types.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Mapping, Optional, Sequence

# Doses are always per KILOGRAM internally; pounds only exist at the input edge.
Species = Literal["dog", "cat", "rabbit", "gpig", "rat"]
WeightUnit = Literal["kg", "lb"]
PresentationKind = Literal["liquid", "solid"]

SPECIES: tuple[Species, ...] = ("dog", "cat", "rabbit", "gpig", "rat")
SPECIES_LABELS: dict[str, str] = {
    "dog": "Dog",
    "cat": "Cat",
    "rabbit": "Rabbit",
    "gpig": "Guinea pig",
    "rat": "Rat",
}

DEFAULT_UNIT_LABEL = "mg/kg"


@dataclass(frozen=True)
class DoseRange:
    """
    Clinically acceptable dose per kilogram, bounds inclusive.
    """
    min: float
    max: float


@dataclass(frozen=True)
class Presentation:
    """
    A physical form the drug is dispensed in.

    label : display text, e.g. "10 mg/mL" or "16 mg tab"
    kind  : "liquid" (value is unit/mL) or "solid" (value is unit/tablet)
    value : concentration; <= 0 means the catalog entry is incomplete
    """
    label: str
    kind: PresentationKind
    value: float

    @property
    def needs_concentration(self) -> bool:
        try:
            v = float(self.value)
        except (TypeError, ValueError):
            return True
        return not math.isfinite(v) or v <= 0


@dataclass(frozen=True)
class Drug:
    """
    One formulary entry. Immutable, part of the static catalog.

    dose_min/dose_max : generic per-kg range used when no species override exists
    dose_ranges       : species -> DoseRange overrides (all-or-nothing per species)
    presentations     : ordered; may be empty
    """
    id: str
    name: str
    category: str
    species: frozenset[str]
    unit_label: str = DEFAULT_UNIT_LABEL
    dose_min: Optional[float] = None
    dose_max: Optional[float] = None
    dose_ranges: Mapping[str, DoseRange] = field(default_factory=dict)
    presentations: Sequence[Presentation] = ()
    route: Optional[str] = None
    notes: Optional[str] = None

    @property
    def dose_label(self) -> str:
        return self.unit_label or DEFAULT_UNIT_LABEL

    @property
    def has_presentations(self) -> bool:
        return len(self.presentations) > 0


class SentinelKind(Enum):
    NO_RESULT = "no_result"
    SET_CONCENTRATION = "set_concentration"
    SET_MASS_PER_UNIT = "set_mass_per_unit"


@dataclass(frozen=True)
class DisplayResult:
    """
    What the result cell shows for a drug row.

    Either a computed quantity (quantity/unit set, sentinel None) or a
    sentinel explaining why there is nothing to show.
    """
    text: str
    quantity: Optional[float] = None
    unit: Optional[str] = None
    sentinel: Optional[SentinelKind] = None

    @property
    def is_sentinel(self) -> bool:
        return self.sentinel is not None


@dataclass(frozen=True)
class SelectedItem:
    """
    Snapshot of a selected drug row for the worksheet.

    notes is user-owned. A None here means "not supplied" when the item is
    used as an update (see Selection.upsert_if_present).
    """
    id: str
    name: str
    category: str
    route: Optional[str] = None
    unit_label: str = DEFAULT_UNIT_LABEL
    dose: Optional[float] = None
    presentation: Optional[Presentation] = None
    result_text: str = "—"
    notes: Optional[str] = None
    dose_range: Optional[DoseRange] = None
    out_of_range: bool = False


@dataclass(frozen=True)
class PatientSummary:
    """Header data for the printed worksheet."""
    species: str
    weight_kg: float
