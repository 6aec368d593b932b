"""
Entry Input Validation

DESIGN DECISION: Validation lives entirely at the input boundary.
The ledger engine trusts what it is given (and fails loudly if that trust
is broken). This module decides whether a raw form submission may reach
the engine at all.

Validation happens in two stages:

STAGE 1 - DESCRIPTION:
- Must not be empty
- Must not be just a number (a common slip: amount typed in the wrong box)

STAGE 2 - AMOUNT:
- Must parse as a number
- Must be finite and non-zero
- Magnitude must stay below the configured maximum

SIGN RULE: a negative amount flips the selected kind. A negative "income"
is recorded as an expense and vice versa; only the magnitude is passed on.
This is a long-standing quirk of the form, kept as-is and reported as an
info-level issue so the UI can point it out.

IMPORTANT: Validation NEVER raises for bad input. It reports issues.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from budget_ledger.config import LedgerSettings, get_settings
from budget_ledger.models.entry import (
    EntryKind,
    RawEntryInput,
    ValidatedEntry,
    ValidationIssue,
    ValidationResult,
)


def _to_decimal(raw: Any) -> Optional[Decimal]:
    """Parse a typed amount. Returns None if it is not a number at all."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        return raw
    if isinstance(raw, (int, float)):
        return Decimal(str(raw))
    if isinstance(raw, str):
        text = raw.strip().replace(",", "")
        # Decimal() would read "1_000" as 1000
        if not text or "_" in text:
            return None
        try:
            return Decimal(text)
        except InvalidOperation:
            return None
    return None


class EntryInputValidator:
    """
    Validates raw form input before it is handed to the ledger engine.
    """

    def __init__(
        self,
        settings: Optional[LedgerSettings] = None,
    ):
        """
        Initialize validator.

        Args:
            settings: Limits to apply. Defaults to the cached app settings.
        """
        self._settings = settings or get_settings()

    def _validate_description(self, description: str) -> list[ValidationIssue]:
        """
        Stage 1: description checks.

        Returns: list_of_issues
        """
        issues = []
        text = (description or "").strip()

        if not text:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
                severity="error",
                suggested_fix="Say what the income or expense is for",
            ))
            return issues

        parsed = _to_decimal(text)
        if parsed is not None and not parsed.is_nan():
            issues.append(ValidationIssue(
                field="description",
                issue_type="numeric_description",
                message=f"Description '{text}' is just a number",
                severity="error",
                suggested_fix="Put the amount in the value field",
            ))

        return issues

    def _validate_value(self, raw_value: Any) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """
        Stage 2: amount checks.

        Returns: (parsed_value_or_None, list_of_issues)
        """
        issues = []
        value = _to_decimal(raw_value)

        if value is None:
            issues.append(ValidationIssue(
                field="value",
                issue_type="not_a_number",
                message=f"Amount {raw_value!r} is not a number",
                severity="error",
                suggested_fix="Enter an amount such as 12.50",
            ))
            return None, issues

        if not value.is_finite():
            issues.append(ValidationIssue(
                field="value",
                issue_type="not_finite",
                message="Amount must be a finite number",
                severity="error",
            ))
            return None, issues

        if value == 0:
            issues.append(ValidationIssue(
                field="value",
                issue_type="zero_value",
                message="Amount cannot be zero",
                severity="error",
            ))
            return None, issues

        max_value = self._settings.max_entry_value
        if abs(value) >= max_value:
            issues.append(ValidationIssue(
                field="value",
                issue_type="too_large",
                message=f"Amount must be below {max_value:,f}",
                severity="error",
                suggested_fix="Check for extra digits",
            ))
            return None, issues

        return value, issues

    def validate(self, raw: RawEntryInput) -> ValidationResult:
        """
        Run both validation stages and apply the sign rule.

        Args:
            raw: The form submission as typed

        Returns:
            ValidationResult; `entry` is set only when there are no errors
        """
        all_issues = []

        try:
            selected_kind = EntryKind.parse(raw.kind)
        except ValueError as e:
            selected_kind = None
            all_issues.append(ValidationIssue(
                field="kind",
                issue_type="invalid_kind",
                message=str(e),
                severity="error",
                suggested_fix="Choose income or expense",
            ))

        all_issues.extend(self._validate_description(raw.description))
        value, value_issues = self._validate_value(raw.value)
        all_issues.extend(value_issues)

        if selected_kind is None or value is None or any(
            issue.severity == "error" for issue in all_issues
        ):
            return ValidationResult(is_valid=False, issues=all_issues)

        kind = selected_kind
        flipped = value < 0
        if flipped:
            kind = selected_kind.opposite
            all_issues.append(ValidationIssue(
                field="kind",
                issue_type="kind_flipped",
                message=(
                    f"Negative amount entered under {selected_kind.value}; "
                    f"recorded as {kind.value}"
                ),
                severity="info",
            ))

        return ValidationResult(
            is_valid=True,
            issues=all_issues,
            entry=ValidatedEntry(
                kind=kind,
                description=raw.description.strip(),
                value=abs(value),
                kind_flipped=flipped,
            ),
        )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Generate a short summary of validation results for the UI.
        """
        if result.is_valid and not result.issues:
            return "✅ Added."

        lines = []

        if result.has_errors:
            lines.append("❌ This entry could not be added:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        notes = [issue.message for issue in result.issues if issue.severity != "error"]
        if notes:
            if lines:
                lines.append("")
            lines.append("ℹ️ Please note:")
            for note in notes:
                lines.append(f"   • {note}")

        return "\n".join(lines)
