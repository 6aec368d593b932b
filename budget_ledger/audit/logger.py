"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Complete traceability of adds, removals and recomputes
2. Debugging capability when a total looks wrong
3. A history the UI shows (see recent_events on the sink)

The audit logger:
- Is synchronous, like the ledger engine it sits next to
- Gracefully handles sink failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace the events of one user action
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from budget_ledger.audit.sink import AuditSinkInterface
from budget_ledger.models.audit import AuditEvent, AuditEventBuilder
from budget_ledger.models.entry import BudgetSnapshot, Entry


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

PACKAGE_LOGGER_NAME = "budget_ledger"


def configure_log_level(debug_mode: bool) -> int:
    """
    Route package logs to stderr at DEBUG (debug mode) or INFO.

    Returns the level that was set.
    """
    level = logging.DEBUG if debug_mode else logging.INFO
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)
    return level


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit sink (for the in-app history), if one is configured
    """

    def __init__(
        self,
        sink: Optional[AuditSinkInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Where events are kept.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger(__name__)

    @property
    def sink(self) -> Optional[AuditSinkInterface]:
        return self._sink

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Appends to the sink if available.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink is not None:
            try:
                return self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_entry_added(
        self,
        entry: Entry,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a new ledger entry."""
        event = AuditEventBuilder.entry_added(
            kind=entry.kind.value,
            entry_id=entry.id,
            description=entry.description,
            value=str(entry.value),
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_entry_removed(
        self,
        kind: str,
        entry_id: int,
        found: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a removal, or the fact that there was nothing to remove."""
        if found:
            event = AuditEventBuilder.entry_removed(
                kind=kind,
                entry_id=entry_id,
                correlation_id=correlation_id,
            )
        else:
            event = AuditEventBuilder.entry_not_found(
                kind=kind,
                entry_id=entry_id,
                correlation_id=correlation_id,
            )
        self.log(event)

    def log_budget_recomputed(
        self,
        snapshot: BudgetSnapshot,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.budget_recomputed(
            budget=str(snapshot.budget),
            total_income=str(snapshot.total_income),
            total_expense=str(snapshot.total_expense),
            overall_percentage=snapshot.overall_percentage,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_input_rejected(
        self,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log input that never reached the ledger."""
        event = AuditEventBuilder.input_rejected(
            issues=issues,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_kind_flipped(
        self,
        selected_kind: str,
        recorded_kind: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.kind_flipped(
            selected_kind=selected_kind,
            recorded_kind=recorded_kind,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., adding an item).
    Pass it through all subsequent operations.
    """
    return uuid4()
