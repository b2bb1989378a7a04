"""Aggregation and reporting queries over the entity store's snapshot."""

from expense_tracker.queries.aggregations import (
    by_category,
    by_partner,
    fixed_vs_variable,
    monthly_series,
    period_totals,
    recent_expenses,
    top_providers,
    total_to_date,
)
from expense_tracker.queries.dashboard import build_dashboard_summary
from expense_tracker.queries.filters import (
    ExpenseFilter,
    contribution_chart,
    one_time_purchases,
    partner_contributions,
    sort_expenses,
)

__all__ = [
    "ExpenseFilter",
    "build_dashboard_summary",
    "by_category",
    "by_partner",
    "contribution_chart",
    "fixed_vs_variable",
    "monthly_series",
    "one_time_purchases",
    "partner_contributions",
    "period_totals",
    "recent_expenses",
    "sort_expenses",
    "top_providers",
    "total_to_date",
]
