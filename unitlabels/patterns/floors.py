from __future__ import annotations

from typing import Optional, Union

from unitlabels.patterns.catalog import get_descriptor
from unitlabels.patterns.detect import detect_pattern
from unitlabels.patterns.schema import FloorMismatch, SchemeId, Valid


def extract_expected_floor(
    label: Optional[str], scheme: Optional[Union[SchemeId, str]] = None
) -> Optional[int]:
    """
    Floor implied by the label, or None if its scheme carries no floor.
    Depends on the label alone; `scheme` defaults to the detected one.
    """
    if not label:
        return None
    sid = SchemeId(scheme) if scheme is not None else detect_pattern(label)
    return get_descriptor(sid).extract_floor(label)


def floor_mismatch_message(label: str, scheme: SchemeId, expected: int, floor: int) -> str:
    kind = get_descriptor(scheme).kind_name
    return (
        f'Unit number "{label}" suggests Floor {expected} ({kind}), '
        f"but Floor {floor} is selected."
    )


def validate_floor_correlation(label: str, floor: int) -> Union[Valid, FloorMismatch]:
    scheme = detect_pattern(label)
    expected = extract_expected_floor(label, scheme)

    if expected is None or expected == int(floor):
        return Valid(scheme=scheme)

    return FloorMismatch(
        scheme=scheme,
        expected_floor=expected,
        asserted_floor=int(floor),
        message=floor_mismatch_message(label, scheme, expected, int(floor)),
    )
