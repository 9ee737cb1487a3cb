from __future__ import annotations

from typing import Iterable, List, Optional

from unitlabels.numbering.sequence import generate_next
from unitlabels.patterns.detect import detect_pattern
from unitlabels.patterns.schema import ConflictResult, LabelSource, UnitContext


def _comparable_labels(
    existing: Optional[Iterable[LabelSource]], exclude_self_id: Optional[str]
) -> List[str]:
    out: List[str] = []
    for item in existing or ():
        if isinstance(item, UnitContext):
            if exclude_self_id is not None and item.id == exclude_self_id:
                continue
            label = item.label
        else:
            label = item
        if label is not None:
            out.append(label)
    return out


def detect_conflict(
    candidate: str,
    existing: Optional[Iterable[LabelSource]],
    exclude_self_id: Optional[str] = None,
    *,
    floor: int = 1,
) -> ConflictResult:
    """
    Exact-match collision check (no case or whitespace folding).
    On a hit, suggest the next label of the candidate's own scheme.
    """
    labels = _comparable_labels(existing, exclude_self_id)
    if candidate not in labels:
        return ConflictResult(has_conflict=False)

    scheme = detect_pattern(candidate)
    suggestion = generate_next(labels, scheme, floor).next_label
    return ConflictResult(
        has_conflict=True,
        conflicting_label=candidate,
        suggestion=suggestion,
    )
