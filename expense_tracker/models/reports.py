"""
Report Models

Shapes returned by the aggregation engine and the dashboard assembly.
All totals are raw Decimal sums across currencies.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from expense_tracker.models.entities import Expense


class BreakdownEntry(BaseModel):
    """One (name, total) row of a grouped breakdown."""
    name: str
    total: Decimal


class MonthlyBucket(BaseModel):
    """One (month, year) slot of the monthly time series."""
    month: str
    year: int
    total: Decimal = Decimal("0")

    @property
    def label(self) -> str:
        """Chart label, e.g. ``"Apr-2025"``."""
        return f"{self.month}-{self.year}"


class PeriodTotals(BaseModel):
    """Totals for the current calendar month and the current year."""
    this_month: Decimal = Decimal("0")
    year_to_date: Decimal = Decimal("0")


class FixedVariableSplit(BaseModel):
    """Two-bucket total partitioned by is_fixed_charge."""
    fixed: Decimal = Decimal("0")
    variable: Decimal = Decimal("0")


class PartnerContribution(BaseModel):
    """A partner's attributed total and the expenses behind it."""
    partner_id: str
    name: str
    total: Decimal = Decimal("0")
    expenses: list[Expense] = Field(default_factory=list)


class OneTimePurchases(BaseModel):
    """Variable (non-fixed) expenses, newest first, with their total."""
    expenses: list[Expense] = Field(default_factory=list)
    total: Decimal = Decimal("0")


class DashboardSummary(BaseModel):
    """Every dashboard aggregation computed for one reference day."""
    as_of: date
    total_to_date: Decimal
    period_totals: PeriodTotals
    by_category: list[BreakdownEntry] = Field(default_factory=list)
    by_partner: list[BreakdownEntry] = Field(default_factory=list)
    monthly_series: list[MonthlyBucket] = Field(default_factory=list)
    fixed_vs_variable: FixedVariableSplit
    top_providers: list[BreakdownEntry] = Field(default_factory=list)
    recent_expenses: list[Expense] = Field(default_factory=list)
