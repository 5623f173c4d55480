"""Configuration package."""

from ledgerly.config.settings import (
    AppSettings,
    EngineSettings,
    Settings,
    ValidationSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "EngineSettings",
    "Settings",
    "ValidationSettings",
    "get_settings",
    "validate_all_settings",
]
