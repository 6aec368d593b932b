"""
Core Data Models for Budget Ledger

These models define the shapes of everything the ledger engine hands out.
They are designed to:
1. Keep entries immutable once the engine has created them
2. Represent "ratio not meaningful" explicitly as None, never as a magic number
3. Be serializable for logging and for the presentation layer

DESIGN DECISION: Income and expense entries share one model with a `kind`
discriminant. Only expense entries ever receive a percentage of income.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntryKind(str, Enum):
    """
    Discriminant between income and expense entries.

    The short codes ("inc", "exp") are what list-item ids are built from.
    """
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def prefix(self) -> str:
        """Short code used in list-item ids."""
        return "inc" if self is EntryKind.INCOME else "exp"

    @property
    def opposite(self) -> "EntryKind":
        return EntryKind.EXPENSE if self is EntryKind.INCOME else EntryKind.INCOME

    @classmethod
    def parse(cls, value: Union[str, "EntryKind"]) -> "EntryKind":
        """
        Coerce a kind name or short code into an EntryKind.

        Accepts "income"/"expense" and "inc"/"exp" in any casing.

        Raises:
            ValueError: If the value names no known kind
        """
        if isinstance(value, cls):
            return value
        try:
            normalised = value.strip().lower()
        except AttributeError as error:
            raise ValueError(f"Unsupported entry kind: {value!r}") from error

        for kind in cls:
            if normalised in (kind.value, kind.prefix):
                return kind
        raise ValueError(f"Unsupported entry kind: {value!r}")


# =============================================================================
# LEDGER MODELS
# =============================================================================

def percentage_of(part: Decimal, whole: Decimal) -> Optional[int]:
    """
    Express `part` as a whole-number percentage of `whole`.

    Rounds half away from zero (12.5 -> 13). Returns None when `whole`
    is not positive, because the ratio is not meaningful then.
    """
    if whole <= 0:
        return None
    ratio = Decimal(part) / Decimal(whole) * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class Entry(BaseModel):
    """
    A single income or expense record.

    CRITICAL: Entries are only created by the ledger engine, which assigns
    the id. All public fields are frozen after creation.

    The percentage of income is derived state. It lives in a private
    attribute so the engine's percentage pass can refresh it while the
    entry itself stays frozen.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: int = Field(
        ...,
        ge=0,
        description="Identifier, unique within the entry's kind"
    )
    kind: EntryKind = Field(
        ...,
        description="Income or expense"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the entry is for"
    )
    value: Decimal = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Positive magnitude; the kind decides the sign in the budget"
    )

    _percentage_of_income: Optional[int] = PrivateAttr(default=None)

    @property
    def is_expense(self) -> bool:
        return self.kind is EntryKind.EXPENSE

    @property
    def percentage_of_income(self) -> Optional[int]:
        """
        Share of total income this expense represents.

        None means undefined (no income yet, or this is an income entry).
        """
        return self._percentage_of_income

    def calc_percentage(self, total_income: Decimal) -> None:
        """
        Refresh the percentage of income for an expense entry.

        Income entries never carry a percentage. Called by the ledger
        engine only; the percentage is the one mutable part of an entry.
        """
        if not self.is_expense:
            self._percentage_of_income = None
            return
        self._percentage_of_income = percentage_of(self.value, total_income)

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "entry_id": self.id,
            "kind": self.kind.value,
            "description": self.description,
            "value": str(self.value),
            "percentage_of_income": self.percentage_of_income,
        }


class BudgetSnapshot(BaseModel):
    """
    Read-only view of the ledger's derived totals.

    overall_percentage is None when there is no income to compare against.
    It is never 0 in that case.
    """
    model_config = ConfigDict(frozen=True)

    budget: Decimal = Field(
        default=Decimal("0"),
        description="total_income - total_expense (may be negative)"
    )
    total_income: Decimal = Field(
        default=Decimal("0"),
        ge=0,
    )
    total_expense: Decimal = Field(
        default=Decimal("0"),
        ge=0,
    )
    overall_percentage: Optional[int] = Field(
        default=None,
        description="Expenses as a percentage of income, None if undefined"
    )


# =============================================================================
# INPUT BOUNDARY MODELS
# =============================================================================

class RawEntryInput(BaseModel):
    """
    What the user typed, before any validation.

    The value is kept as typed (text or number) so the validator can
    report exactly why it was not acceptable.
    """

    kind: Union[EntryKind, str] = Field(
        ...,
        description="Kind selected in the form"
    )
    description: str = Field(
        default="",
        description="Description as typed"
    )
    value: Any = Field(
        default=None,
        description="Amount as typed; a leading minus flips the kind"
    )


class ValidatedEntry(BaseModel):
    """
    Input that passed validation and may be handed to the engine.

    The kind already reflects the sign-flip rule and the value is the
    positive magnitude.
    """
    model_config = ConfigDict(frozen=True)

    kind: EntryKind
    description: str = Field(..., min_length=1)
    value: Decimal = Field(..., gt=0, allow_inf_nan=False)
    kind_flipped: bool = Field(
        default=False,
        description="True when a negative amount switched the selected kind"
    )


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_a_number', 'too_large')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating one raw form submission.

    `entry` is only set when the input is valid.
    """

    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    entry: Optional[ValidatedEntry] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
