"""
Audit Models for Budget Ledger

Every change to the ledger is recorded as an audit event.
This provides:
1. Traceability of what was added and removed, and when
2. Debugging information when totals look wrong
3. A way to explain a kind that was flipped by a negative amount

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Each step of the mutate -> recompute protocol has its own event type.
    """
    # Ledger mutations
    ENTRY_ADDED = "entry_added"
    ENTRY_REMOVED = "entry_removed"
    ENTRY_NOT_FOUND = "entry_not_found"

    # Derived state
    BUDGET_RECOMPUTED = "budget_recomputed"

    # Input boundary
    INPUT_REJECTED = "input_rejected"
    KIND_FLIPPED = "kind_flipped"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every ledger mutation creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - which entry is this about?
    entry_kind: Optional[str] = Field(
        default=None,
        description="Kind of the entry (income or expense)"
    )
    entry_id: Optional[int] = Field(
        default=None,
        description="Id of the entry within its kind"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., add + recompute of one submission)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entry_kind": self.entry_kind,
            "entry_id": self.entry_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entry_added(entry, correlation_id)
        event = AuditEventBuilder.entry_removed("expense", 3, correlation_id)
    """

    @staticmethod
    def entry_added(
        kind: str,
        entry_id: int,
        description: str,
        value: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_ADDED,
            entry_kind=kind,
            entry_id=entry_id,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} added: {description} ({value})",
            details={
                "description": description,
                "value": value,
            },
            is_user_action=True,
        )

    @staticmethod
    def entry_removed(
        kind: str,
        entry_id: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REMOVED,
            entry_kind=kind,
            entry_id=entry_id,
            correlation_id=correlation_id,
            description=f"{kind.capitalize()} {entry_id} removed",
            is_user_action=True,
        )

    @staticmethod
    def entry_not_found(
        kind: str,
        entry_id: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_NOT_FOUND,
            entry_kind=kind,
            entry_id=entry_id,
            correlation_id=correlation_id,
            description=f"No {kind} with id {entry_id}; nothing removed",
        )

    @staticmethod
    def budget_recomputed(
        budget: str,
        total_income: str,
        total_expense: str,
        overall_percentage: Optional[int],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_RECOMPUTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Budget recomputed: {budget}",
            details={
                "budget": budget,
                "total_income": total_income,
                "total_expense": total_expense,
                "overall_percentage": overall_percentage,
            },
        )

    @staticmethod
    def input_rejected(
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Input rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def kind_flipped(
        selected_kind: str,
        recorded_kind: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.KIND_FLIPPED,
            entry_kind=recorded_kind,
            correlation_id=correlation_id,
            description=f"Negative amount: recorded as {recorded_kind} instead of {selected_kind}",
            details={
                "selected_kind": selected_kind,
                "recorded_kind": recorded_kind,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
