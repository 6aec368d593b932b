"""Audit logging package."""

from budget_ledger.audit.logger import AuditLogger, configure_log_level, create_correlation_id
from budget_ledger.audit.sink import AuditSinkInterface, InMemoryAuditSink

__all__ = [
    "AuditLogger",
    "AuditSinkInterface",
    "InMemoryAuditSink",
    "configure_log_level",
    "create_correlation_id",
]
