"""
Configuration Management for Budget Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The ledger engine itself takes no settings; only the input and
presentation boundaries and the app assembly read them.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from LEDGER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Log at DEBUG level instead of INFO"
    )

    # Input limits
    max_entry_value: Decimal = Field(
        default=Decimal("10000000"),
        gt=0,
        description="Amounts must be strictly below this magnitude"
    )

    # Display
    currency_symbol: str = Field(
        default="$",
        max_length=5,
        description="Symbol prefixed to formatted amounts"
    )
    percentage_placeholder: str = Field(
        default="---",
        description="Shown instead of a percentage when it is undefined"
    )

    # Audit trail
    audit_enabled: bool = Field(
        default=True,
        description="Keep an in-memory audit trail of ledger changes"
    )
    audit_max_events: int = Field(
        default=10_000,
        ge=1,
        description="Maximum number of events kept in the in-memory audit trail"
    )
    audit_history_size: int = Field(
        default=20,
        ge=1,
        description="Number of recent audit events shown in the UI"
    )

    @field_validator('currency_symbol')
    @classmethod
    def strip_currency_symbol(cls, v: str) -> str:
        """Currency symbols are glued to the amount, so no padding allowed."""
        v = v.strip()
        if not v:
            raise ValueError("Currency symbol cannot be empty")
        return v


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
