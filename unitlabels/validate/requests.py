from __future__ import annotations

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from unitlabels.config import (
    FLOOR_MAX,
    FLOOR_MIN,
    MAX_BATCH_UNITS,
    MAX_CUSTOM_PREFIX_LENGTH,
    MAX_LABEL_LENGTH,
)
from unitlabels.patterns.schema import (
    BatchConsistency,
    SchemeId,
    SequenceSuggestion,
    UnitContext,
    ValidationVerdict,
)

# -----------------------------
# Request payloads accepted at the validation boundary
# -----------------------------


def _squash(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    return re.sub(r"\s+", " ", v).strip()


class PatternValidationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    label: str = Field(..., min_length=1, max_length=MAX_LABEL_LENGTH)
    floor: int = Field(..., ge=FLOOR_MIN, le=FLOOR_MAX)

    @field_validator("label")
    @classmethod
    def _strip_label(cls, v: str) -> str:
        v = _squash(v) or ""
        if not v:
            raise ValueError("Unit number must not be empty")
        return v


class UnitPayload(UnitContext):
    """A proposed unit as submitted in a batch; same limits as a single label."""

    label: str = Field(..., min_length=1, max_length=MAX_LABEL_LENGTH)
    floor: int = Field(..., ge=FLOOR_MIN, le=FLOOR_MAX)
    unit_type: str = Field("residential", min_length=1)

    @field_validator("label")
    @classmethod
    def _strip_label(cls, v: str) -> str:
        v = _squash(v) or ""
        if not v:
            raise ValueError("Unit number must not be empty")
        return v


class BatchPatternValidationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    units: List[UnitPayload] = Field(..., min_length=1, max_length=MAX_BATCH_UNITS)


class SuggestionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    scheme: SchemeId = SchemeId.SEQUENTIAL
    existing: List[str] = Field(default_factory=list)
    custom_prefix: Optional[str] = Field(default=None, max_length=MAX_CUSTOM_PREFIX_LENGTH)
    current_floor: int = Field(1, ge=FLOOR_MIN, le=FLOOR_MAX)
    suggested_label: Optional[str] = Field(default=None, max_length=MAX_LABEL_LENGTH)

    @field_validator("custom_prefix", "suggested_label")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return _squash(v) or None


class UnitUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    label: str = Field(..., min_length=1, max_length=MAX_LABEL_LENGTH)
    floor: int = Field(..., ge=FLOOR_MIN, le=FLOOR_MAX)
    # stored units are compared verbatim, so they are not squashed or range-checked
    units: List[UnitContext] = Field(default_factory=list)
    exclude_id: Optional[str] = None

    @field_validator("label")
    @classmethod
    def _strip_label(cls, v: str) -> str:
        v = _squash(v) or ""
        if not v:
            raise ValueError("Unit number must not be empty")
        return v


# -----------------------------
# JSON Schema export
# -----------------------------
def export_json_schema() -> dict:
    """JSON Schemas for the request payloads and engine results (Pydantic v2)."""
    return {
        "PatternValidationRequest": PatternValidationRequest.model_json_schema(),
        "BatchPatternValidationRequest": BatchPatternValidationRequest.model_json_schema(),
        "SuggestionRequest": SuggestionRequest.model_json_schema(),
        "UnitUpdateRequest": UnitUpdateRequest.model_json_schema(),
        "ValidationVerdict": TypeAdapter(ValidationVerdict).json_schema(),
        "BatchConsistency": BatchConsistency.model_json_schema(),
        "SequenceSuggestion": SequenceSuggestion.model_json_schema(),
    }
