"""Presentation helpers package."""

from budget_ledger.presentation.formatting import (
    format_amount,
    format_budget,
    format_month_label,
    format_percentage,
    item_dom_id,
    parse_item_id,
)

__all__ = [
    "format_amount",
    "format_budget",
    "format_month_label",
    "format_percentage",
    "item_dom_id",
    "parse_item_id",
]
