import pytest

from unitlabels.numbering.next_available import (
    next_available_label,
    suggested_starting_label,
)


def test_sequential():
    assert next_available_label(["101", "102", "103"], "sequential") == "104"


def test_default_mode_is_sequential():
    assert next_available_label(["101"]) == "102"


def test_sequential_empty():
    assert next_available_label([], "sequential") == "1"


def test_floor_based_fills_first_gap():
    assert next_available_label(["101", "102", "201"], "floorBased") == "103"


def test_floor_based_moves_to_next_floor():
    existing = [str(100 + u) for u in range(1, 100)]
    assert next_available_label(existing, "floorBased") == "201"


def test_floor_based_exhausted_falls_back_to_sequential():
    existing = [str(f * 100 + u) for f in range(1, 51) for u in range(1, 100)]
    assert next_available_label(existing, "floorBased") == "5100"


def test_custom_infers_prefix_and_width():
    assert next_available_label(["A-1001", "A-1002", "B-1001"], "custom") == "A-1003"
    assert next_available_label(["Apt-07", "101"], "custom") == "Apt-08"


def test_custom_without_custom_labels():
    assert next_available_label(["101"], "custom") == "Unit-001"


def test_unknown_mode():
    with pytest.raises(ValueError):
        next_available_label([], "zigzag")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "property_type,expected",
    [
        ("apartment", "101"),
        ("condominium", "101"),
        ("commercial", "A-1001"),
        ("industrial", "A-1001"),
        ("house", "1"),
        ("Townhouse", "1"),
        ("unknown", "101"),
        (None, "101"),
    ],
)
def test_suggested_starting_label(property_type, expected):
    assert suggested_starting_label(property_type) == expected
