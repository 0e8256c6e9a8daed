import pytest

from vetengine.catalog import ALL_DRUGS, ANES_DRUGS, INJECTABLE_DRUGS, SOLID_DRUGS, TABS, get_drug, get_tab
from vetengine.formulary import filter_formulary


def _ids(drugs):
    return [d.id for d in drugs]


def test_catalog_ids_are_unique_and_tabs_cover_catalog():
    ids = _ids(ALL_DRUGS)
    assert len(ids) == len(set(ids))
    in_tabs = [d.id for tab in TABS.values() for d in tab.drugs]
    assert sorted(in_tabs) == sorted(ids)


def test_catalog_lookup():
    assert get_drug("vetsu_inj").dose_label == "U/kg"
    assert get_drug("marop").dose_label == "mg/kg"
    assert get_tab("anes").drugs == ANES_DRUGS
    with pytest.raises(KeyError):
        get_drug("nope")
    with pytest.raises(KeyError):
        get_tab("selected")


def test_no_query_stays_on_tab_and_filters_species():
    assert _ids(filter_formulary(SOLID_DRUGS, ALL_DRUGS, "", True, "rabbit")) == ["butor"]
    assert _ids(filter_formulary(SOLID_DRUGS, ALL_DRUGS, "   ", False, "rabbit")) == ["marop", "butor", "amoxi"]


def test_query_widens_to_whole_catalog():
    """Searching from the Solids tab still finds anesthesia opioids."""
    found = filter_formulary(SOLID_DRUGS, ALL_DRUGS, "opioid", True, "cat")
    assert _ids(found) == ["butor", "meth"]


def test_query_is_case_insensitive_on_name_and_category():
    assert _ids(filter_formulary(INJECTABLE_DRUGS, ALL_DRUGS, "PROPOFOL", True, "dog")) == ["prop", "prop_inj"]
    assert _ids(filter_formulary(ANES_DRUGS, ALL_DRUGS, "insul", False, "dog")) == ["vetsu_inj"]
    assert _ids(filter_formulary(ANES_DRUGS, ALL_DRUGS, "cerenia", True, "dog")) == ["marop"]


def test_species_and_query_compose():
    assert filter_formulary(SOLID_DRUGS, ALL_DRUGS, "propofol", True, "rabbit") == []
    assert _ids(filter_formulary(SOLID_DRUGS, ALL_DRUGS, "propofol", False, "rabbit")) == ["prop", "prop_inj"]
