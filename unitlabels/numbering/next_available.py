"""
Three-mode "next available" numbering.

Kept apart from the scheme engine in `sequence.py`: its sequential/custom rules
differ (custom infers the prefix from existing labels, floorBased fills the first
gap instead of counting past the maximum). Callers pick the variant explicitly.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Literal, Optional, Set

from unitlabels.config import get_settings
from unitlabels.patterns.detect import parse_custom_label
from unitlabels.patterns.schema import LabelSource, labels_of

log = logging.getLogger(__name__)

AvailabilityMode = Literal["sequential", "floorBased", "custom"]

_ALL_DIGITS = re.compile(r"\d+", re.ASCII)

_STARTING_LABELS = {
    "apartment": "101",
    "condominium": "101",
    "commercial": "A-1001",
    "industrial": "A-1001",
    "house": "1",
    "townhouse": "1",
}


def next_available_label(
    existing: Optional[Iterable[LabelSource]],
    mode: AvailabilityMode = "sequential",
) -> str:
    """Next free label in `mode`; never one of `existing`."""
    labels = labels_of(existing)
    used = set(labels)

    if mode == "floorBased":
        found = _first_free_floor_slot(used)
        if found is not None:
            return found
        log.debug("floor slots exhausted; falling back to sequential numbering")
        return _next_sequential(labels, used)
    if mode == "custom":
        return _next_custom(labels, used)
    if mode == "sequential":
        return _next_sequential(labels, used)
    raise ValueError(f"Unknown numbering mode: {mode}. Use 'sequential', 'floorBased' or 'custom'.")


def suggested_starting_label(property_type: Optional[str]) -> str:
    """First label for a property with no units yet; floor-based unless the type says otherwise."""
    return _STARTING_LABELS.get((property_type or "").strip().lower(), "101")


# --- internals ---------------------------------------------------------------


def _next_sequential(labels: List[str], used: Set[str]) -> str:
    numbers = [int(x) for x in labels if _ALL_DIGITS.fullmatch(x)]
    n = max(numbers) + 1 if numbers else 1
    while str(n) in used:
        n += 1
    return str(n)


def _first_free_floor_slot(used: Set[str]) -> Optional[str]:
    cfg = get_settings()
    for floor in range(1, cfg.search_floor_ceiling + 1):
        for unit in range(1, cfg.max_units_per_floor + 1):
            candidate = str(floor * 100 + unit)
            if candidate not in used:
                return candidate
    return None


def _next_custom(labels: List[str], used: Set[str]) -> str:
    parsed = [p for p in (parse_custom_label(x) for x in labels) if p is not None]
    if not parsed:
        prefix, n, width = get_settings().default_custom_prefix, 1, 3
    else:
        prefix = parsed[0][0]
        same = [x for x in labels if (parse_custom_label(x) or ("", 0))[0] == prefix]
        n = max(num for p, num in parsed if p == prefix) + 1
        width = max(len(x.split("-", 1)[1]) for x in same)

    candidate = f"{prefix}-{n:0{width}d}"
    while candidate in used:
        n += 1
        candidate = f"{prefix}-{n:0{width}d}"
    return candidate
