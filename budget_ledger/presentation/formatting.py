"""
Display Formatting

Pure functions that turn ledger values into the strings the UI shows.
Nothing here reads the clock or touches the engine; the caller passes
everything in.
"""

import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from budget_ledger.models.entry import Entry, EntryKind


MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

_ITEM_ID_PATTERN = re.compile(r"^(inc|exp|income|expense)-(\d+)$", re.IGNORECASE)


def format_amount(
    value: Union[Decimal, float, int],
    kind: EntryKind,
    currency_symbol: str = "$",
) -> str:
    """
    Format an amount with sign, currency and thousands separators.

    Income gets "+", expense gets "-". The magnitude is always used, so
    the sign only ever comes from the kind. A zero amount has no sign.

    Examples:
        format_amount(1234.5, EntryKind.INCOME)   -> "+ $1,234.50"
        format_amount(250, EntryKind.EXPENSE)     -> "- $250.00"
        format_amount(0, EntryKind.EXPENSE)       -> " $0.00"
    """
    magnitude = abs(Decimal(str(value))).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{magnitude:,.2f}"

    if magnitude == 0:
        return f" {currency_symbol}{text}"
    sign = "+" if kind is EntryKind.INCOME else "-"
    return f"{sign} {currency_symbol}{text}"


def format_budget(value: Union[Decimal, float, int], currency_symbol: str = "$") -> str:
    """A positive budget reads as income, anything else as expense."""
    kind = EntryKind.INCOME if value > 0 else EntryKind.EXPENSE
    return format_amount(value, kind, currency_symbol)


def format_percentage(percentage: Optional[int], placeholder: str = "---") -> str:
    """
    Render a percentage, or the placeholder when it is undefined.

    Zero also renders as the placeholder.
    """
    if percentage is not None and percentage > 0:
        return f"{percentage}%"
    return placeholder


def format_month_label(today: date) -> str:
    """e.g. "October 2026"."""
    return f"{MONTH_NAMES[today.month - 1]} {today.year}"


def item_dom_id(entry: Entry) -> str:
    """Stable list-item id for an entry, e.g. "inc-0" or "exp-3"."""
    return f"{entry.kind.prefix}-{entry.id}"


def parse_item_id(item_id: Optional[str]) -> Optional[tuple[EntryKind, int]]:
    """
    Split a list-item id back into (kind, id).

    Returns None for anything malformed; ids coming back from the UI are
    not trusted.
    """
    if not isinstance(item_id, str) or not item_id:
        return None
    match = _ITEM_ID_PATTERN.match(item_id.strip())
    if not match:
        return None
    return EntryKind.parse(match.group(1)), int(match.group(2))
