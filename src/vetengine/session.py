# src/vetengine/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .catalog import ALL_DRUGS, get_tab
from .config import DEFAULTS, Defaults
from .formulary import filter_formulary
from .numeric import clean_while_typing, normalize_on_commit
from .rows import RowResult, RowState, compute_row, snapshot
from .selection import Selection
from .types import SPECIES, Drug, PatientSummary, SelectedItem, Species, WeightUnit
from .units import weight_text_to_kg

logger = logging.getLogger(__name__)


@dataclass
class PatientContext:
    """
    species     : the single active species
    unit        : unit the weight field is typed in
    weight_text : raw weight field text
    """
    species: Species = "dog"
    unit: WeightUnit = "lb"
    weight_text: str = "10"

    @property
    def weight_kg(self) -> float:
        return weight_text_to_kg(self.weight_text, self.unit)


class Session:
    """
    Owns everything one user edits: patient context, search state, per-row
    working state and the worksheet selection.

    Every input event is one method call. Methods that can change a dose
    result refresh the snapshots of selected drugs before returning.
    """

    def __init__(self, defaults: Defaults = DEFAULTS, catalog: Sequence[Drug] = ALL_DRUGS):
        self.defaults = defaults
        self.catalog: tuple[Drug, ...] = tuple(catalog)
        self._by_id: dict[str, Drug] = {d.id: d for d in self.catalog}
        self.reset()

    def reset(self) -> None:
        d = self.defaults
        self.patient = PatientContext(species=d.species, unit=d.unit, weight_text=d.weight_text)
        self.query = ""
        self.only_my_species = d.only_my_species
        self.selection = Selection()
        self._rows: dict[str, RowState] = {}
        logger.debug("session reset to defaults %s", d)

    # --------------------------
    # Patient context
    # --------------------------
    def set_species(self, species: Species) -> None:
        if species not in SPECIES:
            raise ValueError(f"species must be one of {SPECIES} (got {species!r}).")
        self.patient.species = species
        self._refresh_selection()

    def set_unit(self, unit: WeightUnit) -> None:
        if unit not in ("kg", "lb"):
            raise ValueError(f"unit must be 'kg' or 'lb' (got {unit!r}).")
        self.patient.unit = unit
        self._refresh_selection()

    def edit_weight(self, text: str) -> str:
        """Keystroke in the weight field. Returns the cleaned text to show."""
        self.patient.weight_text = clean_while_typing(text, self.defaults.max_decimals)
        self._refresh_selection()
        return self.patient.weight_text

    def commit_weight(self) -> str:
        """Weight field lost focus. Returns the normalized text to show."""
        self.patient.weight_text = normalize_on_commit(self.patient.weight_text, self.defaults.max_decimals)
        self._refresh_selection()
        return self.patient.weight_text

    @property
    def weight_kg(self) -> float:
        return self.patient.weight_kg

    def summary(self) -> PatientSummary:
        return PatientSummary(species=self.patient.species, weight_kg=self.weight_kg)

    # --------------------------
    # Search
    # --------------------------
    def set_query(self, query: str) -> None:
        self.query = query

    def set_only_my_species(self, enabled: bool) -> None:
        self.only_my_species = bool(enabled)

    def visible_drugs(self, tab_key: str) -> list[Drug]:
        tab = get_tab(tab_key)
        return filter_formulary(tab.drugs, self.catalog, self.query,
                                self.only_my_species, self.patient.species)

    # --------------------------
    # Rows
    # --------------------------
    def drug(self, drug_id: str) -> Drug:
        try:
            return self._by_id[drug_id]
        except KeyError:
            raise KeyError(f"Unknown drug id: {drug_id!r}") from None

    def row_state(self, drug_id: str) -> RowState:
        """Working state of a row, reset first if species changed its range."""
        drug = self.drug(drug_id)
        state = self._rows.get(drug_id)
        if state is None:
            state = RowState.for_drug(drug, self.patient.species)
            self._rows[drug_id] = state
        elif state.sync(drug, self.patient.species):
            logger.debug("row %s reset to defaults for %s", drug_id, self.patient.species)
        return state

    def edit_dose(self, drug_id: str, text: str) -> RowResult:
        self.row_state(drug_id).dose_text = text
        self._refresh_selection()
        return self.compute(drug_id)

    def select_presentation(self, drug_id: str, index: int) -> RowResult:
        drug = self.drug(drug_id)
        count = len(drug.presentations)
        if not (index == -1 or 0 <= index < count):
            raise ValueError(f"presentation index must be -1 or in [0, {count}) (got {index}).")
        self.row_state(drug_id).presentation_index = index
        self._refresh_selection()
        return self.compute(drug_id)

    def compute(self, drug_id: str, weight_kg: Optional[float] = None) -> RowResult:
        w = self.weight_kg if weight_kg is None else weight_kg
        return compute_row(self.drug(drug_id), self.patient.species, w, self.row_state(drug_id))

    def recompute(self, drugs: Optional[Iterable[Drug]] = None) -> dict[str, RowResult]:
        """
        One pass over the given rows (default: whole catalog) plus every
        selected drug. All rows see the same weight; the selection is swapped
        in once, after every row has been computed.
        """
        ids = [d.id for d in (self.catalog if drugs is None else drugs)]
        ids += [i.id for i in self.selection if i.id not in ids]
        w = self.weight_kg
        results = {drug_id: self.compute(drug_id, weight_kg=w) for drug_id in ids}

        updated = self.selection
        for result in results.values():
            updated = updated.upsert_if_present(snapshot(result))
        self.selection = updated
        logger.debug("recomputed %d row(s) at %.4f kg", len(results), w)
        return results

    # --------------------------
    # Worksheet
    # --------------------------
    def toggle(self, drug_id: str) -> bool:
        """Check/uncheck a drug. Returns True if it is now selected."""
        self.selection = self.selection.toggle(snapshot(self.compute(drug_id)))
        return drug_id in self.selection

    def is_selected(self, drug_id: str) -> bool:
        return drug_id in self.selection

    def set_notes(self, drug_id: str, notes: str) -> None:
        self.selection = self.selection.set_notes(drug_id, notes)

    def clear_selection(self) -> None:
        self.selection = self.selection.clear()

    def selected_items(self) -> list[SelectedItem]:
        return self.selection.items()

    def _refresh_selection(self) -> None:
        if len(self.selection):
            self.recompute(drugs=())
