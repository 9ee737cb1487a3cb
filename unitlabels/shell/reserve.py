from __future__ import annotations

import logging
from typing import Optional, Union

from unitlabels.config import get_settings
from unitlabels.numbering.sequence import generate_next
from unitlabels.patterns.schema import SchemeId, SequenceSuggestion
from unitlabels.shell.uniqueness_oracle import LabelTakenError, UniquenessOracle

log = logging.getLogger(__name__)


class ReservationError(RuntimeError):
    pass


def reserve_next_label(
    oracle: UniquenessOracle,
    property_id: str,
    scheme: Union[SchemeId, str],
    floor: int = 1,
    custom_prefix: Optional[str] = None,
    *,
    max_attempts: Optional[int] = None,
) -> SequenceSuggestion:
    """
    Generate against a fresh snapshot, then claim through the oracle.
    Losing the claim to a concurrent writer means the snapshot was stale: refresh and retry.
    """
    if not property_id:
        raise ValueError("Property ID is required")
    attempts = max_attempts or get_settings().reserve_max_attempts

    last: Optional[SequenceSuggestion] = None
    for attempt in range(1, attempts + 1):
        existing = oracle.snapshot(property_id)
        last = generate_next(existing, scheme, floor, custom_prefix)
        try:
            oracle.claim(property_id, last.next_label)
        except LabelTakenError:
            log.info(
                "label %r taken for property %s (attempt %d/%d); retrying",
                last.next_label,
                property_id,
                attempt,
                attempts,
            )
            continue
        return last

    raise ReservationError(
        f"Could not reserve a {SchemeId(scheme)} label for property {property_id} "
        f"after {attempts} attempts (last tried {last.next_label if last else None!r})"
    )
