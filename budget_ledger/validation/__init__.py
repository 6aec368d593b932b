"""Input validation package."""

from budget_ledger.validation.validator import EntryInputValidator

__all__ = ["EntryInputValidator"]
