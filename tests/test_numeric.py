import pytest

from vetengine.numeric import clean_while_typing, normalize_on_commit


def test_extra_periods_collapse_first_wins():
    """
    Later periods are dropped, not read as thousands separators.
    """
    assert clean_while_typing("12.3.4.5", 4) == "12.345"
    assert clean_while_typing("1..2", 4) == "1.2"


def test_fraction_is_truncated_while_typing():
    """Typing never rounds: 1.23456789 at 3 decimals stays 1.234."""
    assert clean_while_typing("1.23456789", 3) == "1.234"
    assert clean_while_typing("0.999", 2) == "0.99"


@pytest.mark.parametrize("raw, expected", [
    ("", ""),
    ("3.", "3."),
    (".", "."),
    ("a1b2.c3", "12.3"),
    ("-5", "5"),
    ("1,5", "15"),
    (" 7 kg", "7"),
])
def test_partial_input_survives_cleaning(raw, expected):
    assert clean_while_typing(raw, 4) == expected


def test_zero_decimals_keeps_trailing_period():
    assert clean_while_typing("3.7", 0) == "3."
    assert normalize_on_commit("3.7", 0) == "3"


@pytest.mark.parametrize("raw, expected", [
    ("3.50", "3.5"),
    ("", ""),
    ("abc", ""),
    (".", ""),
    ("007", "7"),
    ("10.0", "10"),
    ("0.0", "0"),
    ("3.", "3"),
    (".5", "0.5"),
    ("12.3.4.5", "12.345"),
    ("100", "100"),
])
def test_commit_renders_shortest_text(raw, expected):
    assert normalize_on_commit(raw, 4) == expected


def test_commit_uses_cleaned_text():
    """Decimals past the limit are cut before rounding, so 0.125 at 2 is 0.12."""
    assert normalize_on_commit("0.125", 2) == "0.12"
    assert normalize_on_commit("3.50", 2) == "3.5"


@pytest.mark.parametrize("raw", ["3.50", "007.100", "1.23456", "12.3.4", "", "x", "0", "45.", "9.9999"])
def test_commit_is_idempotent(raw):
    once = normalize_on_commit(raw, 3)
    assert normalize_on_commit(once, 3) == once


def test_commit_of_oversized_number_degrades_to_empty():
    """More digits than the decimal context can hold is treated as unparseable."""
    assert normalize_on_commit("9" * 40, 4) == ""
