from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from unitlabels.numbering.sequence import suggest_label_for_floor
from unitlabels.patterns.detect import detect_pattern
from unitlabels.patterns.floors import validate_floor_correlation
from unitlabels.patterns.schema import (
    Conflict,
    FloorMismatch,
    LabelSource,
    UnitContext,
    Valid,
)
from unitlabels.validate.conflicts import detect_conflict

log = logging.getLogger(__name__)


def validate_unit_number_update(
    label: str,
    floor: int,
    existing_units: Optional[Iterable[LabelSource]],
    exclude_self_id: Optional[str] = None,
) -> Union[Valid, Conflict, FloorMismatch]:
    """
    Conflict check first, then floor correlation; the first failure wins.
    Used for both creates and updates (pass the unit's own id when updating).
    """
    units = [
        u
        for u in existing_units or ()
        if not (
            isinstance(u, UnitContext)
            and exclude_self_id is not None
            and u.id == exclude_self_id
        )
    ]
    scheme = detect_pattern(label)

    conflict = detect_conflict(label, units, floor=floor)
    if conflict.has_conflict:
        log.debug("label %r conflicts; suggesting %r", label, conflict.suggestion)
        return Conflict(
            scheme=scheme,
            with_label=conflict.conflicting_label or label,
            message=f'Unit number "{label}" already exists',
            suggestion=conflict.suggestion,
        )

    verdict = validate_floor_correlation(label, floor)
    if isinstance(verdict, FloorMismatch):
        suggestion = suggest_label_for_floor(floor, units, scheme).next_label
        return verdict.model_copy(update={"suggestion": suggestion})

    return Valid(scheme=scheme, message="Unit number is valid")
