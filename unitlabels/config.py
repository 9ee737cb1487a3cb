from __future__ import annotations

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Floor range accepted by the unit schemas (basements down to -5).
FLOOR_MIN = -5
FLOOR_MAX = 100

# Exhaustion bound for schemes that encode a floor: floors 1..50 x units 1..99.
MAX_UNITS_PER_FLOOR = 99
SEARCH_FLOOR_CEILING = 50

DEFAULT_CUSTOM_PREFIX = "Unit"

MAX_LABEL_LENGTH = 20
MAX_CUSTOM_PREFIX_LENGTH = 10
MAX_BATCH_UNITS = 20


class Settings(BaseSettings):
    """
    Tunables for label validation and generation.
    Every field can be overridden with an UNITLABELS_* environment variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="UNITLABELS_",
        extra="ignore",
    )

    floor_min: int = Field(default=FLOOR_MIN)
    floor_max: int = Field(default=FLOOR_MAX)
    max_units_per_floor: int = Field(default=MAX_UNITS_PER_FLOOR, ge=1, le=99)
    search_floor_ceiling: int = Field(default=SEARCH_FLOOR_CEILING, ge=1)
    default_custom_prefix: str = Field(default=DEFAULT_CUSTOM_PREFIX, min_length=1)

    # shell only: how often a reservation is retried after losing a race
    reserve_max_attempts: int = Field(default=5, ge=1)

    log_level: str = Field(default="WARNING")

    @field_validator("default_custom_prefix", mode="before")
    @classmethod
    def _strip_prefix(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper() or "WARNING"
        return v

    @model_validator(mode="after")
    def _check_floor_range(self) -> "Settings":
        if self.floor_min > self.floor_max:
            raise ValueError("floor_min must be <= floor_max")
        return self


# Lazy singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
