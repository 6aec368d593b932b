"""
Ledger Engine

DESIGN DECISION: The engine owns all ledger state and nothing else.
It never formats, never validates user input beyond refusing values that
would corrupt the totals, and never emits events. Callers follow a
two-phase protocol:

    1. Mutate    -> add_entry() / remove_entry()
    2. Recompute -> recompute_budget(), then recompute_percentages()
                    (or recompute() which runs both in order)

and then read the results back with get_budget_snapshot() and
get_expense_percentages().

Totals are always recomputed from scratch, never patched incrementally.

The engine is single-threaded and non-reentrant. Callers that share one
engine between several event sources must serialize access themselves.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

import structlog

from budget_ledger.models.entry import (
    BudgetSnapshot,
    Entry,
    EntryKind,
    percentage_of,
)


logger = structlog.get_logger(__name__)


class LedgerError(Exception):
    """Base error for the ledger engine."""
    pass


class InvalidEntryError(LedgerError, ValueError):
    """
    Raised when add_entry receives input that breaks the boundary contract.

    The input boundary is supposed to reject such input first. If it
    reaches the engine anyway we fail loudly instead of corrupting totals.
    """
    pass


class LedgerEngine:
    """
    In-memory income/expense ledger with derived totals.

    State:
    - one ordered list of entries per kind (insertion order)
    - total income, total expense, budget
    - overall percentage (None while there is no income)
    """

    def __init__(self):
        self._entries: dict[EntryKind, list[Entry]] = {
            EntryKind.INCOME: [],
            EntryKind.EXPENSE: [],
        }
        self._totals: dict[EntryKind, Decimal] = {
            EntryKind.INCOME: Decimal("0"),
            EntryKind.EXPENSE: Decimal("0"),
        }
        self._budget = Decimal("0")
        self._overall_percentage: Optional[int] = None

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_entry(
        self,
        kind: Union[EntryKind, str],
        description: str,
        value: Union[Decimal, float, int, str],
    ) -> Entry:
        """
        Record a new entry and return it.

        The id is the last id of that kind + 1, or 0 if the kind is empty.
        Totals are NOT recomputed here; call recompute_budget() and
        recompute_percentages() afterwards.

        Args:
            kind: income or expense
            description: Non-empty description
            value: Finite, positive amount

        Raises:
            InvalidEntryError: If the kind is unknown, the description is
                empty, or the value is not a finite positive number.
                The ledger is left unchanged.
        """
        entry_kind = self._coerce_kind(kind)
        amount = self._coerce_value(value)

        if not isinstance(description, str) or not description.strip():
            raise InvalidEntryError("Entry description cannot be empty")

        entries = self._entries[entry_kind]
        entry = Entry(
            id=self._next_id(entry_kind),
            kind=entry_kind,
            description=description,
            value=amount,
        )
        entries.append(entry)

        logger.debug(
            "entry_added",
            kind=entry_kind.value,
            entry_id=entry.id,
            value=str(entry.value),
        )
        return entry

    def remove_entry(self, kind: Union[EntryKind, str], entry_id: int) -> bool:
        """
        Remove the entry with `entry_id` from `kind`'s list.

        A missing id or an unknown kind is not an error: stale ids can
        arrive from the UI. The remaining entries keep their relative order.

        Returns:
            True if an entry was removed, False if no entry matched
        """
        try:
            entry_kind = EntryKind.parse(kind)
        except ValueError:
            logger.debug("entry_not_found", kind=str(kind), entry_id=entry_id)
            return False
        entries = self._entries[entry_kind]

        for index, entry in enumerate(entries):
            if entry.id == entry_id:
                del entries[index]
                logger.debug("entry_removed", kind=entry_kind.value, entry_id=entry_id)
                return True

        logger.debug("entry_not_found", kind=entry_kind.value, entry_id=entry_id)
        return False

    # -------------------------------------------------------------------------
    # Recomputation
    # -------------------------------------------------------------------------

    def recompute_budget(self) -> None:
        """
        Recompute totals, budget and overall percentage from the entries.

        overall_percentage = round(total_expense / total_income * 100),
        or None if there is no income.
        """
        for kind, entries in self._entries.items():
            self._totals[kind] = sum(
                (entry.value for entry in entries),
                Decimal("0"),
            )

        total_income = self._totals[EntryKind.INCOME]
        total_expense = self._totals[EntryKind.EXPENSE]

        self._budget = total_income - total_expense
        self._overall_percentage = percentage_of(total_expense, total_income)

    def recompute_percentages(self, total_income: Optional[Decimal] = None) -> None:
        """
        Refresh each expense's percentage of income.

        Without an argument this uses the total income computed by the last
        recompute_budget() call, so call that first. Pass `total_income`
        explicitly to make the dependency visible.
        """
        if total_income is None:
            total_income = self._totals[EntryKind.INCOME]

        for entry in self._entries[EntryKind.EXPENSE]:
            entry.calc_percentage(total_income)

    def recompute(self) -> None:
        """Run recompute_budget() then recompute_percentages()."""
        self.recompute_budget()
        self.recompute_percentages(self._totals[EntryKind.INCOME])

    # -------------------------------------------------------------------------
    # Reads (no side effects)
    # -------------------------------------------------------------------------

    def get_budget_snapshot(self) -> BudgetSnapshot:
        """Return the current derived totals without recomputing anything."""
        return BudgetSnapshot(
            budget=self._budget,
            total_income=self._totals[EntryKind.INCOME],
            total_expense=self._totals[EntryKind.EXPENSE],
            overall_percentage=self._overall_percentage,
        )

    def get_expense_percentages(self) -> list[Optional[int]]:
        """Per-expense percentages, in the current expense order."""
        return [
            entry.percentage_of_income
            for entry in self._entries[EntryKind.EXPENSE]
        ]

    def entries(self, kind: Union[EntryKind, str]) -> list[Entry]:
        """Entries of one kind in insertion order (a copy of the list)."""
        return list(self._entries[self._coerce_kind(kind)])

    def get_entry(self, kind: Union[EntryKind, str], entry_id: int) -> Optional[Entry]:
        """Look up an entry by kind and id. Returns None if it does not exist."""
        for entry in self._entries[self._coerce_kind(kind)]:
            if entry.id == entry_id:
                return entry
        return None

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _next_id(self, kind: EntryKind) -> int:
        entries = self._entries[kind]
        if entries:
            return entries[-1].id + 1
        return 0

    @staticmethod
    def _coerce_kind(kind: Union[EntryKind, str]) -> EntryKind:
        try:
            return EntryKind.parse(kind)
        except ValueError as e:
            raise InvalidEntryError(str(e)) from e

    @staticmethod
    def _coerce_value(value: Union[Decimal, float, int, str]) -> Decimal:
        """Convert to Decimal, rejecting bools, non-numbers, inf/nan and values <= 0."""
        if isinstance(value, bool) or (isinstance(value, str) and "_" in value):
            raise InvalidEntryError(f"Entry value must be a number, got {value!r}")
        try:
            amount = value if isinstance(value, Decimal) else Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise InvalidEntryError(f"Entry value must be a number, got {value!r}") from e

        if not amount.is_finite():
            raise InvalidEntryError(f"Entry value must be finite, got {value!r}")
        if amount <= 0:
            raise InvalidEntryError(f"Entry value must be positive, got {value!r}")
        return amount
