"""
Configuration Management for Mileage Mate

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Nothing else in the package reads the environment directly.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_STORAGE_KEY = "mileage-mate-data"


class StorageSettings(BaseSettings):
    """Where the ledger is persisted."""

    model_config = SettingsConfigDict(
        env_prefix="MILEAGE_MATE_STORAGE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".mileage_mate",
        description="Directory holding the persisted ledger"
    )
    key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        min_length=1,
        description="Fixed storage key; the ledger file is '<key>.json'"
    )

    @field_validator('key')
    @classmethod
    def validate_key(cls, v: str) -> str:
        """The key becomes a file name, so it must not contain path separators."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Storage key must not contain path separators: {v}")
        return v


class ExportSettings(BaseSettings):
    """Where export files are written."""

    model_config = SettingsConfigDict(
        env_prefix="MILEAGE_MATE_EXPORT_",
        extra="ignore"
    )

    directory: Path = Field(
        default_factory=Path.cwd,
        description="Default directory for backup and CSV exports"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="MILEAGE_MATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON (False gives console output)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def export(self) -> ExportSettings:
        return ExportSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    '<name>_error' entries for the sections that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "export", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
