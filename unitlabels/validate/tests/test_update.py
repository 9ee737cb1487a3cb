from pydantic import TypeAdapter

from unitlabels.patterns.schema import (
    Conflict,
    FloorMismatch,
    SchemeId,
    UnitContext,
    Valid,
    ValidationVerdict,
)
from unitlabels.validate.update import validate_unit_number_update


def _units():
    return [
        UnitContext(label="101", floor=1, id="u1"),
        UnitContext(label="102", floor=1, id="u2"),
        UnitContext(label="B-2001", floor=2, id="u3"),
    ]


def test_valid_new_unit():
    v = validate_unit_number_update("103", 1, _units())
    assert isinstance(v, Valid)
    assert v.is_valid
    assert v.scheme == SchemeId.SEQUENTIAL
    assert v.message == "Unit number is valid"


def test_updating_a_unit_to_its_own_label_is_valid():
    v = validate_unit_number_update("101", 1, _units(), exclude_self_id="u1")
    assert isinstance(v, Valid)


def test_conflict_wins():
    v = validate_unit_number_update("102", 1, _units(), exclude_self_id="u1")
    assert isinstance(v, Conflict)
    assert not v.is_valid
    assert v.with_label == "102"
    assert v.message == 'Unit number "102" already exists'
    assert v.suggestion == "103"


def test_conflict_reported_before_floor_mismatch():
    # wrong floor and already taken: the conflict is what gets reported
    v = validate_unit_number_update("B-2001", 1, _units())
    assert v.kind == "conflict"


def test_floor_mismatch_with_suggestion():
    v = validate_unit_number_update("B205", 3, [])
    assert isinstance(v, FloorMismatch)
    assert v.expected_floor == 2
    assert v.asserted_floor == 3
    assert v.message == (
        'Unit number "B205" suggests Floor 2 (wing-unit format), but Floor 3 is selected.'
    )
    assert v.suggestion == "A301"


def test_floor_mismatch_suggestion_follows_units_on_floor():
    v = validate_unit_number_update("A-1005", 2, _units())
    assert isinstance(v, FloorMismatch)
    assert v.suggestion == "B-2002"


def test_verdict_serializes_with_discriminator():
    v = validate_unit_number_update("102", 1, _units())
    data = v.model_dump(mode="json")
    assert data["kind"] == "conflict"
    back = TypeAdapter(ValidationVerdict).validate_python(data)
    assert back == v


def test_plain_strings_are_accepted():
    v = validate_unit_number_update("101", 1, ["101"])
    assert isinstance(v, Conflict)
    assert v.suggestion == "102"


def test_floors_outside_the_request_range_are_still_checked():
    units = [UnitContext(label="B-2001", floor=120)]
    v = validate_unit_number_update("A-1001", 120, units)
    assert isinstance(v, FloorMismatch)
    assert v.expected_floor == 1
    assert v.asserted_floor == 120
    assert v.suggestion == "Z-2002"


def test_long_labels_are_accepted():
    units = [UnitContext(label="Building-North-Unit-0001", floor=1)]
    v = validate_unit_number_update("Building-North-Unit-0002", 1, units)
    assert isinstance(v, Valid)
    assert v.scheme == SchemeId.CUSTOM
    assert validate_unit_number_update("Building-North-Unit-0001", 1, units).kind == "conflict"
