"""
Budget Controller

This module ties the input boundary, the ledger engine and the
presentation layer together. It defines the two user flows:
1. Add Item    (raw input -> validate -> add -> recompute -> read back)
2. Delete Item (item id -> parse -> remove -> recompute -> read back)

DESIGN DECISION: The controller enforces the protocol the engine expects:
- Nothing reaches the engine without passing the validator
- Every mutation is immediately followed by a full recompute
- The view is always read back from the engine, never patched locally
- Every step is audited

The engine is passed in, not created globally, so several independent
ledgers (one per browser session, one per test) can coexist.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from budget_ledger.audit import (
    AuditLogger,
    InMemoryAuditSink,
    configure_log_level,
    create_correlation_id,
)
from budget_ledger.config import LedgerSettings, get_settings
from budget_ledger.engine import LedgerEngine, LedgerError
from budget_ledger.models.entry import (
    BudgetSnapshot,
    Entry,
    EntryKind,
    RawEntryInput,
    ValidationResult,
)
from budget_ledger.presentation import parse_item_id
from budget_ledger.validation import EntryInputValidator


class BudgetView(BaseModel):
    """Everything the UI needs to redraw after a change."""
    model_config = ConfigDict(frozen=True)

    snapshot: BudgetSnapshot = Field(default_factory=BudgetSnapshot)
    income: list[Entry] = Field(default_factory=list)
    expenses: list[Entry] = Field(default_factory=list)
    expense_percentages: list[Optional[int]] = Field(default_factory=list)


class AddItemOutcome(BaseModel):
    """Result of one add attempt."""

    validation: ValidationResult
    entry: Optional[Entry] = None
    view: BudgetView
    message: str

    @property
    def added(self) -> bool:
        return self.entry is not None


class BudgetController:
    """
    Orchestrates ledger changes coming from the UI.

    Flow for every change:
    1. Mutate    -> engine.add_entry() / engine.remove_entry()
    2. Recompute -> engine.recompute_budget(), engine.recompute_percentages()
    3. Read back -> snapshot + expense percentages
    """

    def __init__(
        self,
        engine: LedgerEngine,
        validator: Optional[EntryInputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._engine = engine
        self._validator = validator or EntryInputValidator()
        self._audit_logger = audit_logger

    @property
    def engine(self) -> LedgerEngine:
        return self._engine

    def add_item(
        self,
        raw: RawEntryInput,
        correlation_id: Optional[UUID] = None,
    ) -> AddItemOutcome:
        """
        Validate a form submission and, if acceptable, record it.

        Invalid input never reaches the engine; the outcome carries the
        validation issues and the unchanged view.
        """
        correlation_id = correlation_id or create_correlation_id()

        validation = self._validator.validate(raw)
        message = self._validator.get_user_friendly_summary(validation)

        if not validation.is_valid or validation.entry is None:
            if self._audit_logger:
                self._audit_logger.log_input_rejected(
                    issues=[issue.model_dump() for issue in validation.issues],
                    correlation_id=correlation_id,
                )
            return AddItemOutcome(
                validation=validation,
                view=self.current_view(),
                message=message,
            )

        validated = validation.entry
        if validated.kind_flipped and self._audit_logger:
            self._audit_logger.log_kind_flipped(
                selected_kind=validated.kind.opposite.value,
                recorded_kind=validated.kind.value,
                correlation_id=correlation_id,
            )

        try:
            entry = self._engine.add_entry(
                validated.kind,
                validated.description,
                validated.value,
            )
        except LedgerError as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={
                        "kind": validated.kind.value,
                        "description": validated.description,
                        "value": str(validated.value),
                    },
                    correlation_id=correlation_id,
                )
            raise
        if self._audit_logger:
            self._audit_logger.log_entry_added(entry, correlation_id=correlation_id)

        view = self._recompute(correlation_id)
        return AddItemOutcome(
            validation=validation,
            entry=entry,
            view=view,
            message=message,
        )

    def delete_item(
        self,
        item_id: Optional[str],
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Remove the entry behind a list-item id such as "exp-3".

        Malformed and stale ids are ignored and reported as False.
        The ledger is recomputed either way so the view stays consistent.
        """
        correlation_id = correlation_id or create_correlation_id()

        parsed = parse_item_id(item_id)
        if parsed is None:
            if self._audit_logger:
                self._audit_logger.log_input_rejected(
                    issues=[{
                        "field": "item_id",
                        "issue_type": "malformed",
                        "message": f"Unrecognised item id {item_id!r}",
                        "severity": "error",
                    }],
                    correlation_id=correlation_id,
                )
            return False

        kind, entry_id = parsed
        removed = self._engine.remove_entry(kind, entry_id)
        if self._audit_logger:
            self._audit_logger.log_entry_removed(
                kind=kind.value,
                entry_id=entry_id,
                found=removed,
                correlation_id=correlation_id,
            )

        self._recompute(correlation_id)
        return removed

    def current_view(self) -> BudgetView:
        """Read the current state back from the engine (no recompute)."""
        return BudgetView(
            snapshot=self._engine.get_budget_snapshot(),
            income=self._engine.entries(EntryKind.INCOME),
            expenses=self._engine.entries(EntryKind.EXPENSE),
            expense_percentages=self._engine.get_expense_percentages(),
        )

    @staticmethod
    def initial_view() -> BudgetView:
        """The empty view shown before anything has been entered."""
        return BudgetView()

    def _recompute(self, correlation_id: Optional[UUID]) -> BudgetView:
        self._engine.recompute_budget()
        self._engine.recompute_percentages()
        view = self.current_view()
        if self._audit_logger:
            self._audit_logger.log_budget_recomputed(
                view.snapshot,
                correlation_id=correlation_id,
            )
        return view


def create_app_components(
    settings: Optional[LedgerSettings] = None,
) -> tuple[BudgetController, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to use. Defaults to the cached app settings.

    Returns:
        (controller, audit_logger)
    """
    settings = settings or get_settings()
    configure_log_level(settings.debug_mode)

    sink = (
        InMemoryAuditSink(max_events=settings.audit_max_events)
        if settings.audit_enabled
        else None
    )
    audit_logger = AuditLogger(sink)

    controller = BudgetController(
        engine=LedgerEngine(),
        validator=EntryInputValidator(settings),
        audit_logger=audit_logger,
    )

    return controller, audit_logger
