import math
from dataclasses import replace

import pytest

from vetengine.config import DEFAULTS
from vetengine.report import render_summary_html
from vetengine.session import Session
from vetengine.types import PatientSummary, SentinelKind
from vetengine.units import LB_TO_KG


@pytest.fixture
def session():
    return Session(replace(DEFAULTS, unit="kg", weight_text="10"))


def test_defaults_are_ten_pounds_of_dog():
    s = Session()
    assert s.patient.species == "dog"
    assert s.patient.unit == "lb"
    assert math.isclose(s.weight_kg, 10 * LB_TO_KG)
    assert s.only_my_species is True
    assert len(s.selection) == 0


def test_row_is_seeded_with_range_midpoint(session):
    assert session.row_state("butor").dose_text == "0.3"
    assert session.row_state("marop").dose_text == "1"
    assert session.row_state("marop").presentation_index == 0


def test_maropitant_scenario(session):
    """10 kg dog, 1 mg/kg, 10 mg/mL -> 1 mL, in range."""
    result = session.select_presentation("marop", 2)
    assert result.dose == 1.0
    assert result.dose_mass == 10.0
    assert result.result_text == "1 mL"
    assert result.out_of_range is False

    result = session.edit_dose("marop", "2")
    assert result.result_text == "2 mL"
    assert result.out_of_range is True


def test_tablet_result(session):
    result = session.compute("marop")  # 16 mg tab
    assert result.result_text == "0.63 tabs"


def test_dose_override_survives_unrelated_changes(session):
    session.edit_dose("butor", "0.35")
    session.edit_weight("12")
    session.set_unit("lb")
    assert session.row_state("butor").dose_text == "0.35"


def test_species_change_resets_row_when_range_changes(session):
    session.edit_dose("butor", "0.35")
    session.select_presentation("butor", 2)
    session.set_species("cat")
    state = session.row_state("butor")
    assert state.dose_text == "0.25"
    assert state.presentation_index == 0


def test_species_change_keeps_override_when_range_is_the_same(session):
    """Maropitant is 1 mg/kg for dogs and cats, so the user's dose stays."""
    session.edit_dose("marop", "1.5")
    session.set_species("cat")
    assert session.row_state("marop").dose_text == "1.5"


def test_species_without_range_gives_empty_dose(session):
    session.set_species("rabbit")
    result = session.compute("butor")
    assert session.row_state("butor").dose_text == ""
    assert result.dose_range is None
    assert result.display.sentinel is SentinelKind.NO_RESULT
    assert result.out_of_range is False


def test_weight_field_cleaning_and_commit(session):
    assert session.edit_weight("12.3.4") == "12.34"
    assert session.edit_weight("3.50") == "3.50"
    assert session.commit_weight() == "3.5"
    assert session.weight_kg == 3.5
    assert session.edit_weight("") == ""
    assert session.weight_kg == 0.0


def test_selected_snapshot_follows_recomputation_and_keeps_notes(session):
    session.select_presentation("marop", 2)
    assert session.toggle("marop") is True
    session.set_notes("marop", "q24h")
    assert session.selection.get("marop").result_text == "1 mL"

    session.edit_weight("20")
    item = session.selection.get("marop")
    assert item.result_text == "2 mL"
    assert item.notes == "q24h"

    session.edit_dose("marop", "")
    item = session.selection.get("marop")
    assert item.dose is None
    assert item.result_text == "—"
    assert item.notes == "q24h"


def test_unselected_rows_are_not_resurrected(session):
    session.toggle("ket")
    assert session.toggle("ket") is False
    session.edit_weight("30")
    session.recompute()
    assert "ket" not in session.selection


def test_recompute_covers_selected_rows_outside_the_view(session):
    session.toggle("ket")
    session.patient.weight_text = "20"  # changed behind the session's back
    results = session.recompute(session.visible_drugs("solids"))
    assert "ket" in results
    assert set(results) == {"marop", "butor", "amoxi", "ket"}
    assert session.selection.get("ket").result_text == "1.2 mL"


def test_recompute_uses_one_weight_for_every_row(session):
    results = session.recompute()
    masses = {drug_id: r.dose_mass / r.dose for drug_id, r in results.items() if r.dose}
    assert masses
    assert all(math.isclose(m, 10.0) for m in masses.values())


def test_visible_drugs_follow_search_state(session):
    assert [d.id for d in session.visible_drugs("anes")] == ["meth", "dexd", "prop"]
    session.set_species("rabbit")
    assert [d.id for d in session.visible_drugs("anes")] == ["meth"]
    session.set_only_my_species(False)
    session.set_query("induction")
    assert [d.id for d in session.visible_drugs("anes")] == ["prop", "prop_inj"]


def test_invalid_events_are_programming_errors(session):
    with pytest.raises(ValueError):
        session.set_species("horse")
    with pytest.raises(ValueError):
        session.set_unit("g")
    with pytest.raises(ValueError):
        session.select_presentation("marop", 3)
    with pytest.raises(KeyError):
        session.toggle("nope")


def test_clear_and_reset(session):
    session.toggle("marop")
    session.toggle("ket")
    session.clear_selection()
    assert session.selected_items() == []

    session.toggle("marop")
    session.set_species("cat")
    session.set_query("opioid")
    session.reset()
    assert len(session.selection) == 0
    assert session.patient.species == "dog"
    assert session.patient.weight_text == "10"
    assert session.query == ""


def test_print_sheet_contains_selection(session):
    session.select_presentation("marop", 2)
    session.toggle("marop")
    session.set_notes("marop", "<give with food>")
    html = render_summary_html(session.selected_items(), session.summary())
    assert "Selected Meds — Dog — 10 kg" in html
    assert "Maropitant (Cerenia)" in html
    assert "(10 mg/mL)" in html
    assert "1 mg/kg" in html
    assert "<b>1 mL</b>" in html
    assert "&lt;give with food&gt;" in html
    assert "<give with food>" not in html


def test_print_sheet_rounds_weight():
    html = render_summary_html([], PatientSummary(species="gpig", weight_kg=10 * LB_TO_KG))
    assert "Guinea pig — 4.54 kg" in html
    assert "<tbody></tbody>" in html
