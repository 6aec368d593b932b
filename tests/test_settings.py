"""
Tests for configuration loading.
"""

import pytest
from decimal import Decimal

from pydantic import ValidationError

from budget_ledger.config import LedgerSettings, get_settings


_ENV_NAMES = (
    "LEDGER_DEBUG_MODE",
    "LEDGER_CURRENCY_SYMBOL",
    "LEDGER_MAX_ENTRY_VALUE",
    "LEDGER_AUDIT_ENABLED",
    "LEDGER_AUDIT_MAX_EVENTS",
    "LEDGER_AUDIT_HISTORY_SIZE",
)


class TestLedgerSettings:
    """Tests for LedgerSettings."""

    def test_defaults(self, monkeypatch):
        """Test the defaults when nothing is configured."""
        for name in _ENV_NAMES:
            monkeypatch.delenv(name, raising=False)
        settings = LedgerSettings()
        assert settings.debug_mode is False
        assert settings.currency_symbol == "$"
        assert settings.max_entry_value == Decimal("10000000")
        assert settings.percentage_placeholder == "---"
        assert settings.audit_enabled is True
        assert settings.audit_max_events == 10_000
        assert settings.audit_history_size == 20

    def test_environment_overrides(self, monkeypatch):
        """Test LEDGER_* variables override the defaults."""
        monkeypatch.setenv("LEDGER_DEBUG_MODE", "true")
        monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "€")
        monkeypatch.setenv("LEDGER_MAX_ENTRY_VALUE", "5000")
        monkeypatch.setenv("LEDGER_AUDIT_ENABLED", "false")
        monkeypatch.setenv("LEDGER_AUDIT_MAX_EVENTS", "500")
        monkeypatch.setenv("LEDGER_AUDIT_HISTORY_SIZE", "5")
        settings = LedgerSettings()
        assert settings.debug_mode is True
        assert settings.currency_symbol == "€"
        assert settings.max_entry_value == Decimal("5000")
        assert settings.audit_enabled is False
        assert settings.audit_max_events == 500
        assert settings.audit_history_size == 5

    def test_rejects_non_positive_limit(self):
        """Test the amount limit must be positive."""
        with pytest.raises(ValidationError):
            LedgerSettings(max_entry_value=Decimal("0"))

    def test_rejects_blank_currency(self):
        """Test a blank currency symbol is refused."""
        with pytest.raises(ValidationError):
            LedgerSettings(currency_symbol="  ")

    @pytest.mark.parametrize("field", ["audit_max_events", "audit_history_size"])
    def test_rejects_empty_audit_sizes(self, field):
        """Test audit sizes must be at least one."""
        with pytest.raises(ValidationError):
            LedgerSettings(**{field: 0})

    def test_get_settings_is_cached(self):
        """Test settings are loaded once."""
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
