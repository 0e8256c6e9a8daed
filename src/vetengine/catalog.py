# src/vetengine/catalog.py
"""
Static seed formulary, grouped by the tab it is listed under.

Example ranges only; clinics are expected to verify against their own
protocols before administering anything.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .types import Drug, DoseRange, Presentation


def _tab(mg: float) -> Presentation:
    return Presentation(label=f"{mg:g} mg tab", kind="solid", value=mg)


def _liquid(conc: float, unit: str = "mg") -> Presentation:
    return Presentation(label=f"{conc:g} {unit}/mL", kind="liquid", value=conc)


SOLID_DRUGS: tuple[Drug, ...] = (
    Drug(
        id="marop",
        name="Maropitant (Cerenia)",
        category="Antiemetic",
        species=frozenset({"dog", "cat"}),
        dose_ranges={"dog": DoseRange(1, 1), "cat": DoseRange(1, 1)},
        presentations=(_tab(16), _tab(24), _liquid(10)),
        route="SC/IV/PO",
    ),
    Drug(
        id="butor",
        name="Butorphanol",
        category="Opioid",
        species=frozenset({"dog", "cat", "rabbit", "gpig", "rat"}),
        dose_ranges={"dog": DoseRange(0.2, 0.4), "cat": DoseRange(0.1, 0.4)},
        presentations=(_liquid(2), _liquid(5), _liquid(10)),
        route="IM/IV/SC",
    ),
    Drug(
        id="amoxi",
        name="Amoxicillin/Clavulanate",
        category="Antibiotic",
        species=frozenset({"dog", "cat"}),
        dose_min=12.5,
        dose_max=25,
        presentations=(_tab(62.5), _tab(125), _tab(250), _liquid(62.5), _liquid(100)),
        route="PO",
        notes="Side effects include diarrhea.",
    ),
)

INJECTABLE_DRUGS: tuple[Drug, ...] = (
    Drug(
        id="ket",
        name="Ketamine",
        category="Dissociative",
        species=frozenset({"dog", "cat", "rabbit"}),
        dose_ranges={"dog": DoseRange(2, 10), "cat": DoseRange(2, 10), "rabbit": DoseRange(2, 10)},
        presentations=(_liquid(100),),
        route="IM/IV",
        notes=(
            "Avoid in significant cardiac disease or uncontrolled hypertension; increases "
            "sympathetic tone. Use caution with hyperthyroid cats. Consider alternative "
            "induction for HCM/CHF."
        ),
    ),
    Drug(
        id="prop_inj",
        name="Propofol (inj)",
        category="Induction",
        species=frozenset({"dog", "cat"}),
        dose_ranges={"dog": DoseRange(2, 6), "cat": DoseRange(2, 6)},
        presentations=(_liquid(10),),
        route="IV",
    ),
    Drug(
        id="vetsu_inj",
        name="Vetsulin (inj)",
        category="Insulin",
        species=frozenset({"dog", "cat"}),
        unit_label="U/kg",
        dose_ranges={"dog": DoseRange(2, 6), "cat": DoseRange(2, 6)},
        presentations=(_liquid(10, unit="U"),),
        route="IV/IM",
    ),
)

ANES_DRUGS: tuple[Drug, ...] = (
    Drug(
        id="meth",
        name="Methadone",
        category="Opioid",
        species=frozenset({"dog", "cat", "rabbit"}),
        dose_ranges={"dog": DoseRange(0.2, 0.5), "cat": DoseRange(0.1, 0.3), "rabbit": DoseRange(0.1, 0.3)},
        presentations=(_liquid(10),),
        route="IM/IV",
    ),
    Drug(
        id="dexd",
        name="Dexmedetomidine",
        category="Alpha-2",
        species=frozenset({"dog", "cat"}),
        dose_ranges={"dog": DoseRange(0.002, 0.01), "cat": DoseRange(0.002, 0.008)},
        presentations=(_liquid(0.5),),
        route="IM/IV",
        notes="Avoid in significant heart disease. Use caution in compromised cardiovascular patients.",
    ),
    Drug(
        id="prop",
        name="Propofol",
        category="Induction",
        species=frozenset({"dog", "cat"}),
        dose_ranges={"dog": DoseRange(2, 6), "cat": DoseRange(2, 6)},
        presentations=(_liquid(10),),
        route="IV",
    ),
)

ALL_DRUGS: tuple[Drug, ...] = SOLID_DRUGS + ANES_DRUGS + INJECTABLE_DRUGS


@dataclass(frozen=True)
class Tab:
    key: str
    title: str
    drugs: Sequence[Drug]


# Display order of the formulary tabs; the worksheet tab is not a formulary.
TABS: dict[str, Tab] = {
    "solids": Tab("solids", "Solids", SOLID_DRUGS),
    "inject": Tab("inject", "Injectable Medications", INJECTABLE_DRUGS),
    "anes": Tab("anes", "Anesthesia Medications", ANES_DRUGS),
}

_BY_ID: dict[str, Drug] = {d.id: d for d in ALL_DRUGS}


def get_drug(drug_id: str) -> Drug:
    try:
        return _BY_ID[drug_id]
    except KeyError:
        raise KeyError(f"Unknown drug id: {drug_id!r}") from None


def get_tab(key: str) -> Tab:
    try:
        return TABS[key]
    except KeyError:
        raise KeyError(f"Unknown formulary tab: {key!r}") from None
