"""
Configuration Management for Ledgerly

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Behaviors that differed between engine revisions (initial transaction
status, reuse of the amount digits as the GST rate) are explicit settings
instead of hardcoded constants.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledgerly.models.transaction import TransactionStatus


class EngineSettings(BaseSettings):
    """Text-to-posting engine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGERLY_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_status: TransactionStatus = Field(
        default=TransactionStatus.DRAFT,
        description="Status given to newly posted transactions"
    )
    default_gst_rate: int = Field(
        default=18,
        ge=0,
        le=100,
        description="GST rate (%) used when GST is mentioned without a rate"
    )
    gst_rate_reuses_amount_digits: bool = Field(
        default=True,
        description=(
            "When GST is mentioned and the only digits are the amount, "
            "read the amount as the rate (legacy behavior)"
        )
    )
    id_strategy: Literal["timestamp", "uuid"] = Field(
        default="timestamp",
        description="Default transaction id source"
    )
    chart_of_accounts_path: Optional[Path] = Field(
        default=None,
        description="Optional JSON file overriding the default chart of accounts"
    )

    @field_validator('chart_of_accounts_path')
    @classmethod
    def validate_chart_path(cls, v: Optional[Path]) -> Optional[Path]:
        """Fail at startup rather than on the first smart entry."""
        if v is not None and not v.exists():
            raise ValueError(f"Chart of accounts file not found at {v}")
        return v


class ValidationSettings(BaseSettings):
    """Thresholds for the post-posting sanity checks."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGERLY_VALIDATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    max_transaction_amount_inr: int = Field(
        default=10_000_000,
        ge=1,
        description="Largest amount accepted without a warning"
    )
    standard_gst_rates: str = Field(
        default="0,5,12,18,28",
        description="Comma-separated list of standard GST slabs (%)"
    )

    @property
    def standard_gst_rates_list(self) -> list[int]:
        """Get standard GST slabs as a list."""
        return [int(rate.strip()) for rate in self.standard_gst_rates.split(",") if rate.strip()]


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (console renderer otherwise)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
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
    def engine(self) -> EngineSettings:
        return EngineSettings()

    @property
    def validation(self) -> ValidationSettings:
        return ValidationSettings()

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
    {setting_name}_error entries for the ones that failed.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("engine", "validation", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
