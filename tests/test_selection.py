from dataclasses import replace

from vetengine.selection import Selection
from vetengine.types import Presentation, SelectedItem


def _item(drug_id="marop", **kw) -> SelectedItem:
    base = dict(id=drug_id, name=drug_id.title(), category="Antiemetic", dose=1.0, result_text="1 mL")
    base.update(kw)
    return SelectedItem(**base)


def test_toggle_twice_restores_empty_set():
    empty = Selection()
    once = empty.toggle(_item())
    assert "marop" in once and len(once) == 1
    twice = once.toggle(_item(dose=5.0))  # removal is by id only
    assert len(twice) == 0
    assert twice == empty


def test_toggle_never_mutates_previous_value():
    before = Selection()
    after = before.toggle(_item())
    assert len(before) == 0
    assert len(after) == 1


def test_toggle_inserts_item_verbatim():
    item = _item(notes="after food")
    sel = Selection().toggle(item)
    assert sel.get("marop") == item


def test_upsert_is_noop_when_absent():
    sel = Selection().toggle(_item("ket"))
    assert sel.upsert_if_present(_item("marop")) is sel
    assert "marop" not in sel


def test_upsert_merges_and_keeps_user_notes():
    sel = Selection().toggle(_item()).set_notes("marop", "give with food")
    fresh = _item(dose=2.0, result_text="2 mL", out_of_range=True,
                  presentation=Presentation("10 mg/mL", "liquid", 10))
    sel = sel.upsert_if_present(fresh)
    got = sel.get("marop")
    assert got.dose == 2.0
    assert got.result_text == "2 mL"
    assert got.out_of_range is True
    assert got.presentation.label == "10 mg/mL"
    assert got.notes == "give with food"


def test_upsert_with_notes_supplied_overwrites_them():
    sel = Selection().toggle(_item(notes="old"))
    sel = sel.upsert_if_present(_item(notes="new"))
    assert sel.get("marop").notes == "new"


def test_upsert_without_changes_returns_same_value():
    sel = Selection().toggle(_item())
    assert sel.upsert_if_present(_item()) is sel


def test_set_notes_on_unselected_drug_is_noop():
    sel = Selection().toggle(_item())
    assert sel.set_notes("ket", "x") is sel


def test_clear_and_insertion_order():
    sel = Selection()
    for drug_id in ("ket", "marop", "amoxi"):
        sel = sel.toggle(_item(drug_id))
    assert [i.id for i in sel.items()] == ["ket", "marop", "amoxi"]
    assert [i.id for i in sel] == ["ket", "marop", "amoxi"]
    cleared = sel.clear()
    assert len(cleared) == 0
    assert len(sel) == 3


def test_one_entry_per_drug():
    sel = Selection().toggle(_item())
    sel = sel.upsert_if_present(replace(_item(), dose=3.0))
    assert len(sel) == 1
    assert sel.get("marop").dose == 3.0
