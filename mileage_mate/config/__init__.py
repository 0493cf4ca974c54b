"""Configuration package."""

from mileage_mate.config.settings import (
    DEFAULT_STORAGE_KEY,
    AppSettings,
    ExportSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "AppSettings",
    "ExportSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
