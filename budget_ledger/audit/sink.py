"""
Abstract Audit Sink Interface

DESIGN DECISION: We define an abstract interface for where audit events go.
This allows us to:
1. Keep the trail in memory (the only sink shipped, nothing is persisted)
2. Swap in another backend without touching the audit logger
3. Inspect the trail in tests and show it in the UI

The interface is intentionally simple: append and read back.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Optional
from uuid import UUID

from budget_ledger.models.audit import AuditEvent, AuditEventType


class AuditSinkInterface(ABC):
    """
    Abstract interface for audit trail storage.

    Audit logs are append-only - no update or delete operations.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the trail.

        Args:
            event: The audit event to store

        Returns:
            True if stored successfully
        """
        pass

    @abstractmethod
    def get_events(
        self,
        correlation_id: Optional[UUID] = None,
        event_type: Optional[AuditEventType] = None,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Retrieve audit events, oldest first.

        Args:
            correlation_id: Filter by correlation ID
            event_type: Filter by event type
            limit: Maximum number of events

        Returns:
            List of matching audit events
        """
        pass

    @abstractmethod
    def recent_events(self, limit: int = 20) -> list[AuditEvent]:
        """
        Retrieve the most recent audit events, newest first.

        Args:
            limit: Maximum number of events

        Returns:
            List of audit events
        """
        pass


class InMemoryAuditSink(AuditSinkInterface):
    """
    Keeps audit events in memory for the lifetime of the process.

    With `max_events` set, only the newest `max_events` events are kept;
    older ones fall off the front of the trail.
    """

    def __init__(self, max_events: Optional[int] = None):
        if max_events is not None and max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def __len__(self) -> int:
        return len(self._events)

    @property
    def max_events(self) -> Optional[int]:
        return self._events.maxlen

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events(
        self,
        correlation_id: Optional[UUID] = None,
        event_type: Optional[AuditEventType] = None,
        limit: int = 100,
    ) -> list[AuditEvent]:
        matches = [
            event for event in self._events
            if (correlation_id is None or event.correlation_id == correlation_id)
            and (event_type is None or event.event_type == event_type)
        ]
        return matches[:limit]

    def recent_events(self, limit: int = 20) -> list[AuditEvent]:
        newest = list(self._events)[-limit:]
        newest.reverse()
        return newest
