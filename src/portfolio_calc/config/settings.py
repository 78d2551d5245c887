"""Engine settings and configuration."""

from decimal import Decimal
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PORTFOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Portfolio Calculation Engine"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Single-currency portfolio (no FX conversion)
    base_currency: str = "PLN"
    market_timezone: str = "Europe/Warsaw"

    # XIRR solver
    xirr_tolerance: float = 1e-6
    xirr_max_iterations: int = 100
    xirr_initial_guess: float = 0.1

    # Reconciliation defaults, overridable per run
    reconciliation_quantity_tolerance: Decimal = Decimal("0")
    reconciliation_value_tolerance_percent: Decimal = Decimal("1.0")

    @field_validator("base_currency")
    @classmethod
    def _check_currency(cls, value: str) -> str:
        value = value.strip().upper()
        if len(value) != 3 or not value.isalpha():
            raise ValueError("base_currency must be a 3-letter code")
        return value

    @field_validator("xirr_tolerance")
    @classmethod
    def _check_tolerance(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("xirr_tolerance must be positive")
        return value

    @field_validator("xirr_max_iterations")
    @classmethod
    def _check_iterations(cls, value: int) -> int:
        if value < 1:
            raise ValueError("xirr_max_iterations must be at least 1")
        return value

    @field_validator("xirr_initial_guess")
    @classmethod
    def _check_guess(cls, value: float) -> float:
        if value <= -1:
            raise ValueError("xirr_initial_guess must be greater than -1")
        return value

    @field_validator(
        "reconciliation_quantity_tolerance",
        "reconciliation_value_tolerance_percent",
    )
    @classmethod
    def _check_non_negative(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("reconciliation tolerances cannot be negative")
        return value


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by embedding hosts and tests)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
