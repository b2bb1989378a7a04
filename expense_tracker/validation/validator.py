"""
Manual Input Validation

Checks a draft or a full replacement record before the entity store
touches the remote store. Validation NEVER fixes input; it reports
issues and the store refuses to proceed when any issue is an error.

Reference checks (does the category exist? does the partner exist?)
are warnings only: unresolved foreign keys are displayed through the
lookup sentinels and are never an error.
"""

from decimal import Decimal
from typing import Optional, Union

from expense_tracker.models.entities import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NOTES_MAX_LENGTH,
    Category,
    CategoryDraft,
    Expense,
    ExpenseDraft,
    Partner,
    PartnerDraft,
)
from expense_tracker.models.validation import ValidationIssue, ValidationResult


class InputValidationError(ValueError):
    """Raised by the store when manual input fails validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(f"Invalid {result.entity_type}: {messages}")


def _missing(field: str, message: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="missing",
        message=message,
        severity="error",
    )


def _too_long(field: str, value: Optional[str], limit: int) -> list[ValidationIssue]:
    if value is None or len(value.strip()) <= limit:
        return []
    return [ValidationIssue(
        field=field,
        issue_type="too_long",
        message=f"{field} must be at most {limit} characters.",
        severity="error",
        suggested_fix=f"Shorten to {limit} characters",
    )]


class ExpenseValidator:
    """
    Validates expenses, partners and categories supplied by a user.

    Args:
        category_ids: Ids of the categories currently known, for the
            unknown-reference warning. ``None`` skips the check.
        partner_ids: Same, for partners.
    """

    def __init__(
        self,
        category_ids: Optional[set[str]] = None,
        partner_ids: Optional[set[str]] = None,
    ):
        self._category_ids = category_ids
        self._partner_ids = partner_ids

    def validate_expense(self, expense: Union[ExpenseDraft, Expense]) -> ValidationResult:
        """
        Check the fields a user must supply for an expense.

        Errors:
        - date, category or description missing
        - amount zero or negative
        - item count negative
        - description or notes over their length limits

        Warnings:
        - category or partner id not among the known entities
        """
        issues = []

        if expense.date is None:
            issues.append(_missing("date", "Date is required."))

        if not expense.category_id:
            issues.append(_missing("category_id", "Category is required."))
        elif (
            self._category_ids is not None
            and expense.category_id not in self._category_ids
        ):
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="unknown_reference",
                message=f"Category {expense.category_id} does not exist",
                severity="warning",
                suggested_fix="Pick one of the existing categories",
            ))

        if not expense.description or not expense.description.strip():
            issues.append(_missing("description", "Description is required."))
        issues.extend(_too_long("description", expense.description, DESCRIPTION_MAX_LENGTH))
        issues.extend(_too_long("notes", expense.notes, NOTES_MAX_LENGTH))

        if expense.amount is None or expense.amount <= Decimal("0"):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than 0.",
                severity="error",
            ))

        if expense.item_count is not None and expense.item_count < 0:
            issues.append(ValidationIssue(
                field="item_count",
                issue_type="invalid_value",
                message="Item count cannot be negative.",
                severity="error",
            ))

        if (
            expense.paid_by_partner_id
            and self._partner_ids is not None
            and expense.paid_by_partner_id not in self._partner_ids
        ):
            issues.append(ValidationIssue(
                field="paid_by_partner_id",
                issue_type="unknown_reference",
                message=f"Partner {expense.paid_by_partner_id} does not exist",
                severity="warning",
            ))

        return ValidationResult(entity_type="expense", issues=issues)

    def validate_partner(self, partner: Union[PartnerDraft, Partner]) -> ValidationResult:
        issues = []
        if not partner.name or not partner.name.strip():
            issues.append(_missing("name", "Partner name is required."))
        issues.extend(_too_long("name", partner.name, NAME_MAX_LENGTH))
        return ValidationResult(entity_type="partner", issues=issues)

    def validate_category(self, category: Union[CategoryDraft, Category]) -> ValidationResult:
        issues = []
        if not category.name or not category.name.strip():
            issues.append(_missing("name", "Category name is required."))
        issues.extend(_too_long("name", category.name, NAME_MAX_LENGTH))
        return ValidationResult(entity_type="category", issues=issues)


def raise_for_errors(result: ValidationResult) -> None:
    """Raise InputValidationError if the result carries any error."""
    if result.has_errors:
        raise InputValidationError(result)
