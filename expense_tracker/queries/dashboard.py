"""
Dashboard Assembly

Collects every aggregation for one reference day into a single
DashboardSummary, reading the store's current snapshot.
"""

from datetime import date
from typing import Optional

from expense_tracker.config import AppSettings, get_settings
from expense_tracker.models.reports import DashboardSummary
from expense_tracker.queries import aggregations
from expense_tracker.store import EntityStore


def build_dashboard_summary(
    store: EntityStore,
    today: Optional[date] = None,
    settings: Optional[AppSettings] = None,
) -> DashboardSummary:
    """
    Compute the dashboard for ``today`` (defaults to the current date).

    List sizes come from the app settings.
    """
    settings = settings or get_settings().app
    today = today or date.today()

    expenses = store.expenses
    return DashboardSummary(
        as_of=today,
        total_to_date=aggregations.total_to_date(expenses),
        period_totals=aggregations.period_totals(expenses, today),
        by_category=aggregations.by_category(expenses, store.categories),
        by_partner=aggregations.by_partner(expenses, store.partners),
        monthly_series=aggregations.monthly_series(expenses, today),
        fixed_vs_variable=aggregations.fixed_vs_variable(expenses),
        top_providers=aggregations.top_providers(expenses, settings.top_providers_limit),
        recent_expenses=aggregations.recent_expenses(expenses, settings.recent_expenses_limit),
    )
