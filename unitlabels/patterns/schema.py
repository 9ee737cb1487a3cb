from __future__ import annotations

from enum import Enum
from typing import Annotated, FrozenSet, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class SchemeId(str, Enum):
    """Closed set of label grammars. Declaration order is catalog order."""

    SEQUENTIAL = "sequential"
    FLOOR_BASED = "floor_based"
    ALPHA_NUMERIC = "alpha_numeric"
    BUILDING_UNIT = "building_unit"
    WING_UNIT = "wing_unit"
    SUITE = "suite"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value

    # hash like the plain string so sets mix with raw values
    def __hash__(self) -> int:
        return hash(self.value)


# -----------------------------
# Unit records
# -----------------------------
class UnitContext(BaseModel):
    """
    The unit record the engine reasons about, stored as-is.
    Labels are opaque and floors are not range-checked here; length and floor
    limits belong to the request payloads.
    `id` is only set when an existing unit is being updated.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    floor: int
    unit_type: str = "residential"
    id: Optional[str] = None


class PatternInfo(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: SchemeId
    name: str
    description: str
    example: str
    property_types: List[str] = Field(default_factory=list)


# -----------------------------
# Verdicts
# -----------------------------
class Valid(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["valid"] = "valid"
    scheme: SchemeId
    message: str = ""

    @property
    def is_valid(self) -> bool:
        return True


class FloorMismatch(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["floor_mismatch"] = "floor_mismatch"
    scheme: SchemeId
    expected_floor: int
    asserted_floor: int
    message: str
    suggestion: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return False


class Conflict(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["conflict"] = "conflict"
    scheme: SchemeId
    with_label: str
    message: str
    suggestion: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return False


ValidationVerdict = Annotated[
    Union[Valid, FloorMismatch, Conflict], Field(discriminator="kind")
]


# -----------------------------
# Other results
# -----------------------------
class BatchConsistency(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    detected_schemes: FrozenSet[SchemeId] = Field(default_factory=frozenset)
    is_consistent: bool
    recommendation: str


class SequenceSuggestion(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    next_label: str = Field(..., min_length=1)
    scheme: SchemeId
    rationale: str


class ConflictResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    has_conflict: bool
    conflicting_label: Optional[str] = None
    suggestion: Optional[str] = None


# -----------------------------
# Helpers
# -----------------------------
LabelSource = Union[str, UnitContext]


def labels_of(items: Optional[Iterable[LabelSource]]) -> List[str]:
    """Plain labels from strings or unit records, unchanged. Only `None` entries are skipped."""
    out: List[str] = []
    for it in items or ():
        label = it.label if isinstance(it, UnitContext) else it
        if label is not None:
            out.append(label)
    return out
