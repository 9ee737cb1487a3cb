from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from unitlabels.patterns.schema import PatternInfo, SchemeId

# --- shapes ------------------------------------------------------------------
# All matched with fullmatch; ASCII so that exotic digits never count.

_ALPHA = re.compile(r"([A-Z])-(\d+)", re.ASCII)
_BUILDING = re.compile(r"B(\d+)U(\d+)", re.ASCII)
_FOUR_DIGITS = re.compile(r"\d{4}", re.ASCII)
_THREE_DIGITS = re.compile(r"\d{3}", re.ASCII)
_SUITE = re.compile(r"suite-(\d+)", re.ASCII | re.IGNORECASE)
_WING = re.compile(r"([A-Z])(\d{3})", re.ASCII)
_DIGITS = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True)
class PatternDescriptor:
    """
    One label grammar. All callables are pure.

    numeric_core  -> the number the scheme increments (None if the label is not in the scheme)
    first_number  -> number to use on `floor` when no label of the scheme exists yet
    render        -> (floor, number, prefix) -> label
    slot_label    -> (floor, unit, prefix) -> label for the exhaustive search,
                     None for schemes without a floor dimension
    """

    id: SchemeId
    name: str
    kind_name: str  # used in floor-mismatch messages
    description: str
    example: str
    property_types: Tuple[str, ...]
    recognize: Callable[[str], bool]
    extract_floor: Callable[[str], Optional[int]]
    numeric_core: Callable[[str, str], Optional[int]]
    default_label: Callable[[str], str]
    first_number: Callable[[int], int]
    render: Callable[[int, int, str], str]
    slot_label: Callable[[int, int, str], Optional[str]]
    normalize_number: Callable[[int], int] = lambda n: n

    @property
    def has_floor_dimension(self) -> bool:
        return self.slot_label(1, 1, "") is not None

    def info(self) -> PatternInfo:
        return PatternInfo(
            id=self.id,
            name=self.name,
            description=self.description,
            example=self.example,
            property_types=list(self.property_types),
        )


# --- helpers -----------------------------------------------------------------


def _fullmatch(pat: re.Pattern) -> Callable[[str], bool]:
    return lambda label: pat.fullmatch(label) is not None


def _letter(index: int) -> str:
    # saturates to A..Z
    return chr(64 + min(max(index, 1), 26))


def wing_letter(floor: int) -> str:
    return _letter(math.ceil(floor / 10))


def building_number(floor: int) -> int:
    return max(math.ceil(floor / 10), 1)


def _group_int(pat: re.Pattern, group: int) -> Callable[[str, str], Optional[int]]:
    def core(label: str, _prefix: str = "") -> Optional[int]:
        m = pat.fullmatch(label)
        return int(m.group(group)) if m else None

    return core


# --- per-scheme floor rules ---------------------------------------------------


def _alpha_floor(label: str) -> Optional[int]:
    m = _ALPHA.fullmatch(label)
    return ord(m.group(1)) - 64 if m else None


def _building_floor(label: str) -> Optional[int]:
    m = _BUILDING.fullmatch(label)
    return int(m.group(1)) if m else None


def _floor_based_floor(label: str) -> Optional[int]:
    if _FOUR_DIGITS.fullmatch(label):
        return int(label) // 1000
    # 3-digit variant, only reachable when the scheme is forced by the caller
    if _THREE_DIGITS.fullmatch(label):
        return int(label) // 100
    return None


def _wing_floor(label: str) -> Optional[int]:
    m = _WING.fullmatch(label)
    return int(m.group(2)) // 100 if m else None


def _suite_floor(label: str) -> Optional[int]:
    m = _SUITE.fullmatch(label)
    if not m:
        return None
    n = int(m.group(1))
    return n // 100 if n >= 100 else None


def _no_floor(label: str) -> Optional[int]:
    return None


# --- per-scheme numbering ----------------------------------------------------


def _floor_based_first(floor: int) -> int:
    # F + 3-digit unit on floors 0..9, FF + 2-digit unit on floors 10..99
    if 0 <= floor < 10:
        return floor * 1000 + 1
    if 10 <= floor < 100:
        return floor * 100 + 1
    return 1


def _floor_based_slot(floor: int, unit: int, _prefix: str) -> str:
    return _floor_based_render(floor, _floor_based_first(floor) - 1 + unit, _prefix)


def _floor_based_render(_floor: int, number: int, _prefix: str) -> str:
    return f"{number:04d}"


def _sequential_skip_four_digits(number: int) -> int:
    # 4-digit numbers belong to floor_based
    return 10_000 if 1_000 <= number <= 9_999 else number


def _custom_core(label: str, prefix: str) -> Optional[int]:
    m = re.fullmatch(re.escape(prefix) + r"-(\d+)", label, flags=re.ASCII)
    return int(m.group(1)) if m else None


def _custom_recognize(label: str) -> bool:
    return True


# -----------------------------
# The catalog
# -----------------------------
CATALOG: Dict[SchemeId, PatternDescriptor] = {
    SchemeId.SEQUENTIAL: PatternDescriptor(
        id=SchemeId.SEQUENTIAL,
        name="Sequential Numbers",
        kind_name="sequential pattern",
        description="Simple sequential numbering starting from 1 or 101",
        example="1, 2, 3, 101, 102, 103",
        property_types=("house", "townhouse"),
        recognize=_fullmatch(_DIGITS),
        extract_floor=_no_floor,
        numeric_core=_group_int(_DIGITS, 0),
        default_label=lambda _prefix: "1",
        first_number=lambda _floor: 1,
        render=lambda _floor, n, _prefix: str(n),
        slot_label=lambda _floor, _unit, _prefix: None,
        normalize_number=_sequential_skip_four_digits,
    ),
    SchemeId.FLOOR_BASED: PatternDescriptor(
        id=SchemeId.FLOOR_BASED,
        name="Floor-Unit Format",
        kind_name="floor-based pattern",
        description="Four digits: floor followed by unit (Floor 1: 1001-1099, Floor 2: 2001-2099)",
        example="1001, 1002, 2001, 2002",
        property_types=("apartment", "condominium"),
        recognize=_fullmatch(_FOUR_DIGITS),
        extract_floor=_floor_based_floor,
        numeric_core=_group_int(_FOUR_DIGITS, 0),
        default_label=lambda _prefix: "1001",
        first_number=_floor_based_first,
        render=_floor_based_render,
        slot_label=_floor_based_slot,
    ),
    SchemeId.ALPHA_NUMERIC: PatternDescriptor(
        id=SchemeId.ALPHA_NUMERIC,
        name="Letter-Number Format",
        kind_name="alphabetic pattern",
        description="Floor letter, dash, number (A-1001 on floor 1, B-2001 on floor 2)",
        example="A-1001, B-1001, C-1001",
        property_types=("commercial", "industrial"),
        recognize=_fullmatch(_ALPHA),
        extract_floor=_alpha_floor,
        numeric_core=_group_int(_ALPHA, 2),
        default_label=lambda _prefix: "A-1001",
        first_number=lambda floor: max(floor, 0) * 1000 + 1,
        render=lambda floor, n, _prefix: f"{_letter(floor)}-{n}",
        slot_label=lambda floor, unit, _prefix: f"{_letter(floor)}-{floor * 1000 + unit}",
    ),
    SchemeId.BUILDING_UNIT: PatternDescriptor(
        id=SchemeId.BUILDING_UNIT,
        name="Building-Unit Format",
        kind_name="building-unit format",
        description="Building identifier followed by unit identifier",
        example="B1U01, B1U02, B2U01",
        property_types=("apartment", "commercial", "mixed_use"),
        recognize=_fullmatch(_BUILDING),
        extract_floor=_building_floor,
        numeric_core=_group_int(_BUILDING, 2),
        default_label=lambda _prefix: "B1U01",
        first_number=lambda _floor: 1,
        render=lambda floor, n, _prefix: f"B{building_number(floor)}U{n:02d}",
        slot_label=lambda floor, unit, _prefix: f"B{building_number(floor)}U{unit:02d}",
    ),
    SchemeId.WING_UNIT: PatternDescriptor(
        id=SchemeId.WING_UNIT,
        name="Wing-Unit Format",
        kind_name="wing-unit format",
        description="Wing letter followed by 3-digit unit number",
        example="A101, B201, C301",
        property_types=("apartment", "condominium", "commercial"),
        recognize=_fullmatch(_WING),
        extract_floor=_wing_floor,
        numeric_core=_group_int(_WING, 2),
        default_label=lambda _prefix: "A101",
        first_number=lambda floor: max(floor, 0) * 100 + 1,
        render=lambda floor, n, _prefix: f"{wing_letter(floor)}{n:03d}",
        slot_label=lambda floor, unit, _prefix: f"{wing_letter(floor)}{(floor % 10) * 100 + unit:03d}",
    ),
    SchemeId.SUITE: PatternDescriptor(
        id=SchemeId.SUITE,
        name="Suite Format",
        kind_name="suite format",
        description="'Suite-' followed by a zero-padded number",
        example="Suite-101, Suite-102, Suite-201",
        property_types=("commercial",),
        recognize=_fullmatch(_SUITE),
        extract_floor=_suite_floor,
        numeric_core=_group_int(_SUITE, 1),
        default_label=lambda _prefix: "Suite-101",
        first_number=lambda _floor: 1,
        render=lambda _floor, n, _prefix: f"Suite-{n:03d}",
        slot_label=lambda _floor, _unit, _prefix: None,
    ),
    SchemeId.CUSTOM: PatternDescriptor(
        id=SchemeId.CUSTOM,
        name="Custom Prefix",
        kind_name="custom pattern",
        description="Free-form prefix, dash, zero-padded number",
        example="Unit-001, Apt-002",
        property_types=(),
        recognize=_custom_recognize,
        extract_floor=_no_floor,
        numeric_core=_custom_core,
        default_label=lambda prefix: f"{prefix}-001",
        first_number=lambda _floor: 1,
        render=lambda _floor, n, prefix: f"{prefix}-{n:03d}",
        slot_label=lambda _floor, _unit, _prefix: None,
    ),
}

# Detection precedence, first match wins. custom is the total fallback.
DETECTION_ORDER: Tuple[SchemeId, ...] = (
    SchemeId.ALPHA_NUMERIC,
    SchemeId.BUILDING_UNIT,
    SchemeId.FLOOR_BASED,
    SchemeId.SUITE,
    SchemeId.WING_UNIT,
    SchemeId.SEQUENTIAL,
    SchemeId.CUSTOM,
)


def get_descriptor(scheme: Union[SchemeId, str]) -> PatternDescriptor:
    return CATALOG[SchemeId(scheme)]


def get_pattern_info(scheme: Union[SchemeId, str]) -> Optional[PatternInfo]:
    """Public view of a catalog entry; None for unknown ids."""
    try:
        return get_descriptor(scheme).info()
    except ValueError:
        return None


def recommended_schemes(property_type: str) -> List[SchemeId]:
    """Schemes whose catalog entry lists `property_type`, in catalog order."""
    pt = (property_type or "").strip().lower()
    return [sid for sid, d in CATALOG.items() if pt and pt in d.property_types]
