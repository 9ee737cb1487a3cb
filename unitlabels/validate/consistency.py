from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from unitlabels.patterns.detect import detect_pattern
from unitlabels.patterns.schema import (
    BatchConsistency,
    LabelSource,
    SchemeId,
    labels_of,
)


def validate_pattern_consistency(
    units: Optional[Iterable[LabelSource]],
) -> BatchConsistency:
    """
    Classify every label of a batch and report whether they share one scheme.
    """
    labels = labels_of(units)
    if not labels:
        return BatchConsistency(
            detected_schemes=frozenset(),
            is_consistent=True,
            recommendation="no units to validate",
        )

    # dict keeps first-seen order for the message
    seen: Dict[SchemeId, None] = {}
    for label in labels:
        seen.setdefault(detect_pattern(label), None)
    schemes = list(seen)

    if len(schemes) == 1:
        return BatchConsistency(
            detected_schemes=frozenset(schemes),
            is_consistent=True,
            recommendation=f"all units follow {schemes[0]} pattern",
        )

    listed = ", ".join(str(s) for s in schemes)
    return BatchConsistency(
        detected_schemes=frozenset(schemes),
        is_consistent=False,
        recommendation=(
            f"mixed patterns detected: {listed}; consider standardizing to one pattern."
        ),
    )


def find_batch_duplicates(units: Optional[Iterable[LabelSource]]) -> List[str]:
    """Labels occurring more than once in a batch, each reported once, in first-repeat order."""
    seen = set()
    dupes: Dict[str, None] = {}
    for label in labels_of(units):
        if label in seen:
            dupes.setdefault(label, None)
        seen.add(label)
    return list(dupes)
