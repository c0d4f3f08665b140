"""
Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Defaults reproduce the IEEE 754 decimal128 profile (34 digits, HALF_EVEN)

Environment variables use the UNITS_CALCULUS_ prefix, e.g.
UNITS_CALCULUS_PRECISION_SIGNIFICANT_DIGITS=50.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.rounding import RoundingPolicy


class Settings(BaseSettings):
    """Numeric kernel settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="UNITS_CALCULUS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Precision context defaults
    precision_significant_digits: int = Field(34, gt=0)
    precision_rounding: RoundingPolicy = RoundingPolicy.HALF_EVEN

    # Number system selected by currentNumberSystem() on first access
    default_number_system: str = Field("default", min_length=1)

    @field_validator("precision_rounding", mode="before")
    @classmethod
    def normalize_rounding(cls, v: object) -> object:
        """Allow lower-case policy names in the environment."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
