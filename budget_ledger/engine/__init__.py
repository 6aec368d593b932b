"""Ledger engine package."""

from budget_ledger.engine.ledger import InvalidEntryError, LedgerEngine, LedgerError

__all__ = ["InvalidEntryError", "LedgerEngine", "LedgerError"]
