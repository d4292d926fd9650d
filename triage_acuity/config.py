"""Runtime configuration for triage acuity scoring."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scoring settings backed by environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    preset: str = Field(default="default", alias="ACUITY_PRESET")
    reference_ranges: str = Field(default="adult", alias="ACUITY_RANGES")
    log_level: str = Field(default="INFO", alias="ACUITY_LOG_LEVEL")
    export_source: str = Field(default="", alias="ACUITY_EXPORT_SOURCE")

    @field_validator("preset", "reference_ranges", mode="before")
    @classmethod
    def _normalise_name(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value).strip().lower()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: object) -> str:
        if value is None or not str(value).strip():
            return "INFO"
        return str(value).strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
