"""
Configuration Management for Subscription Tracker

Every tunable is read from the environment through pydantic-settings.

DESIGN DECISION: All tunables live here. The overlap weights and thresholds
default to the values the consolidation engine has always used; change them
only when product requirements change.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConsolidationSettings(BaseSettings):
    """Overlap scoring weights and thresholds."""

    model_config = SettingsConfigDict(
        env_prefix="CONSOLIDATION_",
        extra="ignore"
    )

    overlap_threshold: float = Field(
        default=0.6,
        ge=0.0,
        description="Minimum accumulated score for a pair to overlap"
    )

    # Signal weights (additive)
    category_weight: float = Field(
        default=0.3,
        ge=0.0,
        description="Added when both subscriptions share a category"
    )
    competitor_weight: float = Field(
        default=0.7,
        ge=0.0,
        description="Added when the competitor map links the two names"
    )
    name_similarity_weight: float = Field(
        default=0.5,
        ge=0.0,
        description="Added when canonical names are similar"
    )
    provider_similarity_weight: float = Field(
        default=0.4,
        ge=0.0,
        description="Added when providers are similar"
    )

    # Similarity cut-offs (strictly greater than)
    name_similarity_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Name similarity must exceed this to count"
    )
    provider_similarity_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="Provider similarity must exceed this to count"
    )


class SuggestionSettings(BaseSettings):
    """Thresholds for usage-based savings suggestions."""

    model_config = SettingsConfigDict(
        env_prefix="SUGGESTIONS_",
        extra="ignore"
    )

    underused_min_monthly_cost: float = Field(
        default=1000,
        ge=0,
        description="Rarely used services above this monthly cost (minor units) are flagged"
    )
    annual_discount_rate: float = Field(
        default=0.15,
        ge=0.0,
        le=1.0,
        description="Assumed discount for switching to annual billing"
    )


class StorageSettings(BaseSettings):
    """Record store access configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_",
        extra="ignore"
    )

    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for a record store read before giving up"
    )
    retry_wait_min_seconds: float = Field(
        default=0.5,
        ge=0.0,
    )
    retry_wait_max_seconds: float = Field(
        default=5.0,
        ge=0.0,
    )


class AppSettings(BaseSettings):
    """Process-wide settings, also read from a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG regardless of log_level"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for local structured logs"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """Entry point to every settings group. Each property re-reads the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def consolidation(self) -> ConsolidationSettings:
        return ConsolidationSettings()

    @property
    def suggestions(self) -> SuggestionSettings:
        return SuggestionSettings()

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """Cached Settings; get_settings.cache_clear() forces a reload."""
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Instantiate each settings group and report which ones fail validation.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("consolidation", "suggestions", "storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
