# src/vetengine/formulary.py
from __future__ import annotations

from typing import Sequence

from .types import Drug


def filter_formulary(subset: Sequence[Drug], all_drugs: Sequence[Drug], query: str,
                     only_active_species: bool, species: str) -> list[Drug]:
    """
    Drugs to list on a formulary tab.

    subset              : the tab's own drugs
    all_drugs           : the whole catalog; a non-empty query searches it
                          instead of the tab (cross-tab search)
    query               : case-insensitive substring of name or category
    only_active_species : keep only drugs listed for `species`
    """
    q = (query or "").strip().lower()
    source = all_drugs if q else subset
    return [
        d for d in source
        if (not only_active_species or species in d.species)
        and (not q or q in d.name.lower() or q in d.category.lower())
    ]
