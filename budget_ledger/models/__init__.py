"""
Data Models Package

This package contains all Pydantic models used in the Budget Ledger.
Everything the engine and its boundaries exchange conforms to these schemas.
"""

from budget_ledger.models.entry import (
    BudgetSnapshot,
    Entry,
    EntryKind,
    RawEntryInput,
    ValidatedEntry,
    ValidationIssue,
    ValidationResult,
    percentage_of,
)
from budget_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "BudgetSnapshot",
    "Entry",
    "EntryKind",
    "RawEntryInput",
    "ValidatedEntry",
    "ValidationIssue",
    "ValidationResult",
    "percentage_of",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
