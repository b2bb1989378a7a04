"""
Data Models Package

This package contains all Pydantic models used in the expense tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.entities import (
    MISCELLANEOUS_CATEGORY_NAME,
    MONTH_NAMES_SHORT,
    PAYMENT_METHODS,
    UNASSIGNED_PARTNER_NAME,
    Category,
    CategoryDraft,
    Currency,
    Expense,
    ExpenseDraft,
    Partner,
    PartnerDraft,
    PaymentStatus,
    month_and_year_from_date,
    new_entity_id,
)
from expense_tracker.models.reports import (
    BreakdownEntry,
    DashboardSummary,
    FixedVariableSplit,
    MonthlyBucket,
    OneTimePurchases,
    PartnerContribution,
    PeriodTotals,
)
from expense_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Entities
    "Category",
    "CategoryDraft",
    "Currency",
    "Expense",
    "ExpenseDraft",
    "Partner",
    "PartnerDraft",
    "PaymentStatus",
    "MISCELLANEOUS_CATEGORY_NAME",
    "MONTH_NAMES_SHORT",
    "PAYMENT_METHODS",
    "UNASSIGNED_PARTNER_NAME",
    "month_and_year_from_date",
    "new_entity_id",
    # Reports
    "BreakdownEntry",
    "DashboardSummary",
    "FixedVariableSplit",
    "MonthlyBucket",
    "OneTimePurchases",
    "PartnerContribution",
    "PeriodTotals",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
