"""
Expense Filtering, Sorting and Partner Reports

Query helpers behind the expense table and the partner / one-time
purchase reports. Like the aggregations they are pure and never cache.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from pydantic import BaseModel

from expense_tracker.models.entities import Expense, Partner, PaymentStatus
from expense_tracker.models.reports import (
    BreakdownEntry,
    OneTimePurchases,
    PartnerContribution,
)

ZERO = Decimal("0")

# Sort keys compared as numbers; every other key compares as lowercase text
NUMERIC_SORT_KEYS = frozenset({"amount", "year", "item_count"})
DEFAULT_SORT_KEY = "date"


class ExpenseFilter(BaseModel):
    """
    Criteria for narrowing the expense list. Unset criteria match everything.

    ``search`` matches case-insensitively against description and provider.
    Date bounds are inclusive.
    """
    search: Optional[str] = None
    category_id: Optional[str] = None
    partner_id: Optional[str] = None
    payment_status: Optional[PaymentStatus] = None
    is_fixed_charge: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def matches(self, expense: Expense) -> bool:
        if self.search:
            term = self.search.lower()
            haystacks = (expense.description, expense.provider or "")
            if not any(term in text.lower() for text in haystacks):
                return False
        if self.category_id and expense.category_id != self.category_id:
            return False
        if self.partner_id and expense.paid_by_partner_id != self.partner_id:
            return False
        if self.payment_status and expense.payment_status != self.payment_status:
            return False
        if self.is_fixed_charge is not None and expense.is_fixed_charge != self.is_fixed_charge:
            return False
        if self.start_date and expense.date < self.start_date:
            return False
        if self.end_date and expense.date > self.end_date:
            return False
        return True

    def apply(self, expenses: Iterable[Expense]) -> list[Expense]:
        """Matching expenses, in their original order."""
        return [e for e in expenses if self.matches(e)]


def _sort_value(expense: Expense, key: str) -> tuple[int, Any]:
    # Missing values sort before present ones
    value = getattr(expense, key)
    if value is None:
        return (0, "")
    if key in NUMERIC_SORT_KEYS or key == "date":
        return (1, value)
    if hasattr(value, "value"):
        value = value.value
    return (1, str(value).lower())


def sort_expenses(
    expenses: Iterable[Expense],
    key: str = DEFAULT_SORT_KEY,
    descending: bool = True,
) -> list[Expense]:
    """
    Expenses ordered by one field. Ties keep their original order.

    Raises:
        ValueError: If ``key`` is not an expense field
    """
    if key not in Expense.model_fields and key not in Expense.model_computed_fields:
        raise ValueError(f"Cannot sort expenses by unknown field: {key}")
    return sorted(expenses, key=lambda e: _sort_value(e, key), reverse=descending)


def partner_contributions(
    expenses: Iterable[Expense],
    partners: Iterable[Partner],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category_id: Optional[str] = None,
) -> list[PartnerContribution]:
    """
    Each partner's total and contributing expenses, in partner order.

    Expenses are first narrowed by the optional inclusive date range and
    category. Expenses attributed to no partner, or to a partner not in
    ``partners``, are left out. Every partner gets an entry, even at zero.
    """
    criteria = ExpenseFilter(
        start_date=start_date,
        end_date=end_date,
        category_id=category_id,
    )
    contributions = {
        partner.id: PartnerContribution(partner_id=partner.id, name=partner.name)
        for partner in partners
    }
    for expense in criteria.apply(expenses):
        contribution = contributions.get(expense.paid_by_partner_id or "")
        if contribution is None:
            continue
        contribution.total += expense.amount
        contribution.expenses.append(expense)
    return list(contributions.values())


def contribution_chart(contributions: Iterable[PartnerContribution]) -> list[BreakdownEntry]:
    """Chart rows for partners with a positive total, largest first."""
    rows = [
        BreakdownEntry(name=c.name, total=c.total)
        for c in contributions
        if c.total > ZERO
    ]
    return sorted(rows, key=lambda row: row.total, reverse=True)


def one_time_purchases(
    expenses: Iterable[Expense],
    category_id: Optional[str] = None,
) -> OneTimePurchases:
    """Non-fixed expenses (optionally in one category), newest first, with their total."""
    criteria = ExpenseFilter(is_fixed_charge=False, category_id=category_id)
    matching = sort_expenses(criteria.apply(expenses), key="date", descending=True)
    return OneTimePurchases(
        expenses=matching,
        total=sum((e.amount for e in matching), ZERO),
    )
