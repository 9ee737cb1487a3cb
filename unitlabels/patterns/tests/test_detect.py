import pytest

from unitlabels.patterns.detect import detect_pattern, parse_custom_label
from unitlabels.patterns.schema import SchemeId


@pytest.mark.parametrize(
    "label,expected",
    [
        # alpha_numeric wins over everything else
        ("A-1001", SchemeId.ALPHA_NUMERIC),
        ("B-205", SchemeId.ALPHA_NUMERIC),
        ("Z-1", SchemeId.ALPHA_NUMERIC),
        # building_unit
        ("B1U01", SchemeId.BUILDING_UNIT),
        ("B10U05", SchemeId.BUILDING_UNIT),
        ("B1U100", SchemeId.BUILDING_UNIT),
        # exactly four digits
        ("1001", SchemeId.FLOOR_BASED),
        ("2105", SchemeId.FLOOR_BASED),
        ("0001", SchemeId.FLOOR_BASED),
        # suite, any case
        ("Suite-101", SchemeId.SUITE),
        ("suite-205", SchemeId.SUITE),
        ("SUITE-7", SchemeId.SUITE),
        # wing_unit
        ("A101", SchemeId.WING_UNIT),
        ("B205", SchemeId.WING_UNIT),
        ("C999", SchemeId.WING_UNIT),
        # remaining all-digit labels
        ("1", SchemeId.SEQUENTIAL),
        ("25", SchemeId.SEQUENTIAL),
        ("101", SchemeId.SEQUENTIAL),
        ("10001", SchemeId.SEQUENTIAL),
        # everything else
        ("Unit-007", SchemeId.CUSTOM),
        ("Apt-123", SchemeId.CUSTOM),
        ("XYZ-123", SchemeId.CUSTOM),
        ("a-1001", SchemeId.CUSTOM),
        ("A1001", SchemeId.CUSTOM),
        ("Suite-", SchemeId.CUSTOM),
        ("101 ", SchemeId.CUSTOM),
        ("Penthouse", SchemeId.CUSTOM),
    ],
)
def test_detect_pattern(label, expected):
    assert detect_pattern(label) == expected


@pytest.mark.parametrize("label", ["", None])
def test_detect_pattern_empty_input_is_custom(label):
    assert detect_pattern(label) == SchemeId.CUSTOM


def test_detect_pattern_returns_string_compatible_ids():
    assert detect_pattern("A-1001") == "alpha_numeric"
    assert str(detect_pattern("103")) == "sequential"


def test_detect_pattern_ignores_non_ascii_digits():
    # fullwidth digits are not numbers for label purposes
    assert detect_pattern("１０１") == SchemeId.CUSTOM


@pytest.mark.parametrize(
    "label,expected",
    [
        ("Unit-007", ("Unit", 7)),
        ("A-1001", ("A", 1001)),
        ("Apt-12", ("Apt", 12)),
        ("Unit007", None),
        ("Unit-", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_custom_label(label, expected):
    assert parse_custom_label(label) == expected
