from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set, Union

from unitlabels.config import get_settings
from unitlabels.patterns.catalog import (
    PatternDescriptor,
    building_number,
    get_descriptor,
    wing_letter,
)
from unitlabels.patterns.detect import detect_pattern
from unitlabels.patterns.schema import (
    LabelSource,
    SchemeId,
    SequenceSuggestion,
    UnitContext,
    labels_of,
)

log = logging.getLogger(__name__)


def generate_next(
    existing: Optional[Iterable[LabelSource]],
    scheme: Union[SchemeId, str],
    floor: int = 1,
    custom_prefix: Optional[str] = None,
    hint: Optional[str] = None,
    *,
    taken: Optional[Iterable[LabelSource]] = None,
) -> SequenceSuggestion:
    """
    Next label for `scheme` after the labels in `existing`.

    `taken` holds extra labels that must be avoided without feeding the numbering.
    The result re-detects as `scheme` and is never in existing/taken while the
    scheme still has a free label.
    """
    labels = labels_of(existing)

    if not labels and hint:
        detected = detect_pattern(hint)
        return SequenceSuggestion(
            next_label=hint,
            scheme=detected,
            rationale=f"using suggested number with {detected} pattern",
        )

    return _generate(labels, SchemeId(scheme), int(floor), custom_prefix, taken, True)


def suggest_label_for_floor(
    floor: int,
    units: Optional[Iterable[LabelSource]],
    scheme: Union[SchemeId, str],
    custom_prefix: Optional[str] = None,
) -> SequenceSuggestion:
    """
    Numbering follows the units already on `floor`; collisions are checked against all units.
    With nothing on that floor yet, start at the floor's first number rather than the
    scheme's fixed default.
    """
    units = list(units or ())
    on_floor = [u.label for u in units if isinstance(u, UnitContext) and u.floor == floor]
    return _generate(on_floor, SchemeId(scheme), int(floor), custom_prefix, units, False)


# --- internals ---------------------------------------------------------------


def _generate(
    labels: List[str],
    sid: SchemeId,
    floor: int,
    custom_prefix: Optional[str],
    taken: Optional[Iterable[LabelSource]],
    use_default: bool,
) -> SequenceSuggestion:
    descriptor = get_descriptor(sid)
    prefix = _effective_prefix(sid, custom_prefix)
    blocked: Set[str] = set(labels) | set(labels_of(taken))

    if not labels and use_default:
        default = descriptor.default_label(prefix)
        if default not in blocked:
            return SequenceSuggestion(
                next_label=default,
                scheme=sid,
                rationale=f"starting new {sid} pattern",
            )
        # default already taken elsewhere: number past whatever is blocked
        numbers = _numbers_for(descriptor, blocked, prefix)
    else:
        numbers = _numbers_for(descriptor, labels, prefix)

    number = max(numbers) + 1 if numbers else descriptor.first_number(floor)
    label = _settle(descriptor, floor, number, prefix, blocked)
    return SequenceSuggestion(
        next_label=label, scheme=sid, rationale=_rationale(sid, floor, prefix)
    )


def _effective_prefix(sid: SchemeId, custom_prefix: Optional[str]) -> str:
    default = get_settings().default_custom_prefix
    prefix = (custom_prefix or "").strip() or default
    if sid != SchemeId.CUSTOM or prefix == default:
        return prefix
    sample = get_descriptor(sid).render(1, 1, prefix)
    if detect_pattern(sample) != SchemeId.CUSTOM:
        log.warning(
            "custom prefix %r yields %s labels; using %r instead",
            prefix,
            detect_pattern(sample),
            default,
        )
        return default
    return prefix


def _numbers_for(
    descriptor: PatternDescriptor, labels: Iterable[str], prefix: str
) -> List[int]:
    out: List[int] = []
    for label in labels:
        # custom labels are matched by prefix, everything else by detected shape
        if descriptor.id != SchemeId.CUSTOM and detect_pattern(label) != descriptor.id:
            continue
        n = descriptor.numeric_core(label, prefix)
        if n is not None:
            out.append(n)
    return out


def _settle(
    descriptor: PatternDescriptor,
    floor: int,
    number: int,
    prefix: str,
    blocked: Set[str],
) -> str:
    probes = len(blocked) + 1
    candidate = ""
    for _ in range(probes):
        number = descriptor.normalize_number(number)
        candidate = descriptor.render(floor, number, prefix)
        if candidate not in blocked and detect_pattern(candidate) == descriptor.id:
            return candidate
        number += 1

    log.debug(
        "no free %s label after %d probes on floor %s; searching slots",
        descriptor.id,
        probes,
        floor,
    )
    slot = _search_slots(descriptor, floor, prefix, blocked)
    if slot is not None:
        return slot

    log.warning("%s numbering exhausted; returning %r", descriptor.id, candidate)
    return candidate


def _search_slots(
    descriptor: PatternDescriptor, floor: int, prefix: str, blocked: Set[str]
) -> Optional[str]:
    """First free slot label, trying `floor` before floors 1..ceiling."""
    if not descriptor.has_floor_dimension:
        return None
    cfg = get_settings()
    floors = list(range(1, cfg.search_floor_ceiling + 1))
    if floor in floors:
        floors.remove(floor)
        floors.insert(0, floor)
    for f in floors:
        for unit in range(1, cfg.max_units_per_floor + 1):
            label = descriptor.slot_label(f, unit, prefix)
            if label and label not in blocked and detect_pattern(label) == descriptor.id:
                return label
    return None


def _rationale(sid: SchemeId, floor: int, prefix: str) -> str:
    if sid == SchemeId.ALPHA_NUMERIC:
        return f"following alphabetic pattern for floor {floor}"
    if sid == SchemeId.BUILDING_UNIT:
        return f"following building-unit pattern for building {building_number(floor)}"
    if sid == SchemeId.WING_UNIT:
        return f"following wing-unit pattern for wing {wing_letter(floor)}"
    if sid == SchemeId.CUSTOM:
        return f'following custom pattern with prefix "{prefix}"'
    if sid == SchemeId.FLOOR_BASED:
        return "following floor-based numbering pattern"
    if sid == SchemeId.SUITE:
        return "following suite numbering pattern"
    return "following sequential numbering pattern"
