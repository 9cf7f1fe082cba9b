"""Configuration package."""

from subtrack.config.settings import (
    AppSettings,
    ConsolidationSettings,
    Settings,
    StorageSettings,
    SuggestionSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ConsolidationSettings",
    "Settings",
    "StorageSettings",
    "SuggestionSettings",
    "get_settings",
    "validate_all_settings",
]
