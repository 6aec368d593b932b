"""
Tests for the budget controller flows.

These drive the full add/delete -> recompute -> read-back cycle the UI
uses, with an in-memory audit trail.
"""

import logging

import pytest
from decimal import Decimal
from uuid import uuid4

from budget_ledger.audit import AuditLogger, InMemoryAuditSink
from budget_ledger.config import LedgerSettings
from budget_ledger.controller import BudgetController, BudgetView, create_app_components
from budget_ledger.engine import InvalidEntryError, LedgerEngine
from budget_ledger.models.audit import AuditEventType
from budget_ledger.models.entry import EntryKind, RawEntryInput
from budget_ledger.validation import EntryInputValidator


class RejectingEngine(LedgerEngine):
    """An engine that refuses every new entry."""

    def add_entry(self, kind, description, value):
        raise InvalidEntryError("ledger is read-only")


@pytest.fixture
def sink():
    return InMemoryAuditSink()


@pytest.fixture
def controller(sink):
    return BudgetController(
        engine=LedgerEngine(),
        validator=EntryInputValidator(LedgerSettings()),
        audit_logger=AuditLogger(sink),
    )


def _add(controller, kind, description, value, correlation_id=None):
    return controller.add_item(
        RawEntryInput(kind=kind, description=description, value=value),
        correlation_id=correlation_id,
    )


class TestAddItemFlow:
    """Tests for BudgetController.add_item."""

    def test_add_recomputes_everything(self, controller):
        """Test an add returns a fully recomputed view."""
        _add(controller, "income", "Salary", "1000")
        outcome = _add(controller, "expense", "Rent", "250")

        assert outcome.added is True
        assert outcome.entry.id == 0
        snapshot = outcome.view.snapshot
        assert snapshot.budget == 750
        assert snapshot.overall_percentage == 25
        assert outcome.view.expense_percentages == [25]

    def test_invalid_input_never_reaches_engine(self, controller, sink):
        """Test rejected input leaves the ledger untouched and is audited."""
        outcome = _add(controller, "income", "", "abc")

        assert outcome.added is False
        assert outcome.validation.is_valid is False
        assert len(controller.engine) == 0
        assert outcome.message.startswith("❌")
        assert sink.get_events()[-1].event_type == AuditEventType.INPUT_REJECTED

    def test_negative_income_recorded_as_expense(self, controller, sink):
        """Test a negative income amount is recorded as an expense."""
        outcome = _add(controller, "income", "Refund", "-40")

        assert outcome.entry.kind is EntryKind.EXPENSE
        assert outcome.entry.value == Decimal("40")
        assert outcome.view.snapshot.total_expense == 40
        assert outcome.view.snapshot.overall_percentage is None
        flipped = sink.get_events(event_type=AuditEventType.KIND_FLIPPED)
        assert flipped[0].details == {"selected_kind": "income", "recorded_kind": "expense"}

    def test_events_share_correlation_id(self, controller, sink):
        """Test the add and its recompute are tied by one correlation id."""
        _add(controller, "income", "Salary", "1000")
        events = sink.get_events()
        assert [e.event_type for e in events] == [
            AuditEventType.ENTRY_ADDED,
            AuditEventType.BUDGET_RECOMPUTED,
        ]
        assert events[0].correlation_id == events[1].correlation_id is not None

    def test_engine_error_is_audited_and_raised(self, sink):
        """Test an engine refusal is logged as a system error and re-raised."""
        controller = BudgetController(
            engine=RejectingEngine(),
            audit_logger=AuditLogger(sink),
        )
        correlation_id = uuid4()

        with pytest.raises(InvalidEntryError):
            _add(controller, "income", "Salary", "1000", correlation_id=correlation_id)

        (event,) = sink.get_events(event_type=AuditEventType.SYSTEM_ERROR)
        assert event.correlation_id == correlation_id
        assert event.error_message == "ledger is read-only"
        assert event.description == "System error: InvalidEntryError"
        assert event.details["kind"] == "income"
        assert event.details["value"] == "1000"
        assert not sink.get_events(event_type=AuditEventType.ENTRY_ADDED)

    def test_engine_error_without_audit_logger(self):
        """Test an engine refusal still propagates when nothing is audited."""
        controller = BudgetController(engine=RejectingEngine())
        with pytest.raises(InvalidEntryError):
            _add(controller, "expense", "Rent", "250")


class TestDeleteItemFlow:
    """Tests for BudgetController.delete_item."""

    def test_delete_recomputes(self, controller):
        """Test deleting an expense recomputes totals and percentages."""
        _add(controller, "income", "Salary", "400")
        _add(controller, "expense", "Rent", "100")
        _add(controller, "expense", "Car", "300")

        assert controller.delete_item("exp-0") is True

        view = controller.current_view()
        assert [e.description for e in view.expenses] == ["Car"]
        assert view.expense_percentages == [75]
        assert view.snapshot.total_expense == 300
        assert view.snapshot.budget == 100

    def test_delete_last_income_clears_percentages(self, controller):
        """Test removing all income leaves every percentage undefined."""
        _add(controller, "income", "Salary", "400")
        _add(controller, "expense", "Rent", "100")

        controller.delete_item("inc-0")

        view = controller.current_view()
        assert view.snapshot.overall_percentage is None
        assert view.expense_percentages == [None]

    def test_stale_id(self, controller, sink):
        """Test an id with no matching entry changes nothing."""
        _add(controller, "income", "Salary", "400")
        before = controller.current_view()

        assert controller.delete_item("inc-7") is False
        assert controller.current_view() == before
        assert sink.get_events(event_type=AuditEventType.ENTRY_NOT_FOUND)

    @pytest.mark.parametrize("item_id", [None, "", "garbage", "inc-x", 5])
    def test_malformed_id(self, controller, item_id):
        """Test malformed ids are ignored."""
        _add(controller, "income", "Salary", "400")
        assert controller.delete_item(item_id) is False
        assert len(controller.engine) == 1

    def test_income_id_reused_after_emptying(self, controller):
        """Test income ids restart at 0 once the list is empty."""
        _add(controller, "income", "Salary", "400")
        controller.delete_item("inc-0")
        outcome = _add(controller, "income", "Salary", "400")
        assert outcome.entry.id == 0


class TestViews:
    """Tests for view helpers and assembly."""

    def test_initial_view(self):
        """Test the initial view is an empty ledger."""
        view = BudgetController.initial_view()
        assert isinstance(view, BudgetView)
        assert view.snapshot.budget == 0
        assert view.snapshot.overall_percentage is None
        assert view.income == []
        assert view.expenses == []

    def test_current_view_matches_initial_on_empty_ledger(self, controller):
        """Test a fresh controller shows the initial view."""
        assert controller.current_view() == BudgetController.initial_view()


class TestCreateAppComponents:
    """Tests for create_app_components."""

    def test_create_app_components(self):
        """Test the factory wires a controller to an audited sink."""
        controller, audit_logger = create_app_components(LedgerSettings())
        assert isinstance(controller, BudgetController)
        assert isinstance(audit_logger.sink, InMemoryAuditSink)

        _add(controller, "income", "Salary", "10")
        assert len(audit_logger.sink) > 0

    def test_create_app_components_without_audit(self):
        """Test disabling audit leaves the logger without a sink."""
        _, audit_logger = create_app_components(LedgerSettings(audit_enabled=False))
        assert audit_logger.sink is None

    def test_components_are_independent(self):
        """Test two assemblies never share a ledger."""
        first, _ = create_app_components(LedgerSettings())
        second, _ = create_app_components(LedgerSettings())
        _add(first, "income", "Salary", "10")
        assert len(second.engine) == 0

    def test_sink_uses_audit_max_events(self):
        """Test the sink capacity comes from settings."""
        _, audit_logger = create_app_components(LedgerSettings(audit_max_events=25))
        assert audit_logger.sink.max_events == 25

    def test_audit_trail_stays_bounded(self):
        """Test a long session keeps only the newest audit events."""
        controller, audit_logger = create_app_components(
            LedgerSettings(audit_max_events=50)
        )
        for _ in range(200):
            _add(controller, "income", "Salary", "10")
            controller.delete_item("inc-0")

        assert len(audit_logger.sink) == 50
        assert audit_logger.sink.recent_events(1)[0].event_type == (
            AuditEventType.BUDGET_RECOMPUTED
        )

    @pytest.mark.parametrize("debug_mode, level", [
        (True, logging.DEBUG),
        (False, logging.INFO),
    ])
    def test_debug_mode_sets_log_level(self, debug_mode, level):
        """Test debug_mode decides the package log level."""
        create_app_components(LedgerSettings(debug_mode=debug_mode))
        assert logging.getLogger("budget_ledger").level == level


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
