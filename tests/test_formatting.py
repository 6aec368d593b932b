"""
Tests for display formatting helpers.
"""

import pytest
from datetime import date
from decimal import Decimal

from budget_ledger.models.entry import Entry, EntryKind
from budget_ledger.presentation import (
    format_amount,
    format_budget,
    format_month_label,
    format_percentage,
    item_dom_id,
    parse_item_id,
)


class TestFormatAmount:
    """Tests for format_amount."""

    def test_income(self):
        """Test income gets a plus sign and two decimals."""
        assert format_amount(Decimal("1234.5"), EntryKind.INCOME) == "+ $1,234.50"

    def test_expense(self):
        """Test expenses get a minus sign."""
        assert format_amount(250, EntryKind.EXPENSE) == "- $250.00"

    def test_uses_magnitude(self):
        """Test the sign only ever comes from the kind."""
        assert format_amount(-250, EntryKind.INCOME) == "+ $250.00"

    def test_zero_has_no_sign(self):
        """Test zero is shown without a sign."""
        assert format_amount(0, EntryKind.EXPENSE) == " $0.00"

    def test_large_amount_grouping(self):
        """Test thousands are grouped and cents rounded."""
        assert format_amount(Decimal("9876543.219"), EntryKind.INCOME) == "+ $9,876,543.22"

    def test_currency_symbol(self):
        """Test the currency symbol can be changed."""
        assert format_amount(5, EntryKind.EXPENSE, currency_symbol="€") == "- €5.00"


class TestFormatBudget:
    """Tests for format_budget."""

    def test_positive_budget(self):
        """Test a positive budget reads as income."""
        assert format_budget(Decimal("750")) == "+ $750.00"

    def test_negative_budget(self):
        """Test a negative budget reads as an expense."""
        assert format_budget(Decimal("-5")) == "- $5.00"

    def test_zero_budget(self):
        """Test a zero budget has no sign."""
        assert format_budget(Decimal("0")) == " $0.00"


class TestFormatPercentage:
    """Tests for format_percentage."""

    def test_defined(self):
        """Test a defined percentage gets a percent sign."""
        assert format_percentage(25) == "25%"

    def test_undefined(self):
        """Test an undefined percentage shows the placeholder."""
        assert format_percentage(None) == "---"

    def test_zero_uses_placeholder(self):
        """Test zero percent shows the placeholder."""
        assert format_percentage(0) == "---"

    def test_custom_placeholder(self):
        """Test the placeholder can be changed."""
        assert format_percentage(None, placeholder="n/a") == "n/a"


class TestMonthLabel:
    """Tests for format_month_label."""

    def test_label(self):
        """Test the label is month name and year."""
        assert format_month_label(date(2026, 10, 17)) == "October 2026"

    def test_january(self):
        """Test the first month is named correctly."""
        assert format_month_label(date(2025, 1, 1)) == "January 2025"


class TestItemIds:
    """Tests for list-item id helpers."""

    def test_item_dom_id(self):
        """Test ids combine the kind prefix and entry id."""
        income = Entry(id=0, kind=EntryKind.INCOME, description="Salary", value=1)
        expense = Entry(id=3, kind=EntryKind.EXPENSE, description="Rent", value=1)
        assert item_dom_id(income) == "inc-0"
        assert item_dom_id(expense) == "exp-3"

    @pytest.mark.parametrize("item_id, expected", [
        ("inc-0", (EntryKind.INCOME, 0)),
        ("exp-12", (EntryKind.EXPENSE, 12)),
        ("EXPENSE-4", (EntryKind.EXPENSE, 4)),
    ])
    def test_parse_item_id(self, item_id, expected):
        """Test well-formed ids split into kind and id."""
        assert parse_item_id(item_id) == expected

    @pytest.mark.parametrize("item_id", [
        None, "", "inc", "inc-", "inc--1", "sav-1", "exp-1-2", "exp-x", 5, ["inc-0"],
    ])
    def test_parse_item_id_malformed(self, item_id):
        """Test malformed ids parse to None."""
        assert parse_item_id(item_id) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
