"""
Expense Aggregations

Pure functions deriving dashboard figures from entity snapshots. Nothing
here caches or mutates its input: call them again after every change.

Every function tolerates empty input and returns a zero/empty result.
Amounts are summed raw regardless of currency.

Descending sorts are stable: entries with equal totals keep the order in
which they were first produced.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from expense_tracker.models.entities import (
    MONTH_NAMES_SHORT,
    Category,
    Expense,
    Partner,
    month_and_year_from_date,
)
from expense_tracker.models.reports import (
    BreakdownEntry,
    FixedVariableSplit,
    MonthlyBucket,
    PeriodTotals,
)

ZERO = Decimal("0")

SERIES_MONTHS = 12
DEFAULT_TOP_PROVIDERS = 5
DEFAULT_RECENT_EXPENSES = 10


def _sum(expenses: Iterable[Expense]) -> Decimal:
    return sum((e.amount for e in expenses), ZERO)


def _sorted_desc(entries: list[BreakdownEntry]) -> list[BreakdownEntry]:
    return sorted(entries, key=lambda entry: entry.total, reverse=True)


def total_to_date(expenses: Iterable[Expense]) -> Decimal:
    """Sum of every expense amount."""
    return _sum(expenses)


def period_totals(expenses: Iterable[Expense], today: Optional[date] = None) -> PeriodTotals:
    """
    Totals for the calendar month and calendar year containing ``today``.

    Matching uses each expense's derived month name and year.
    """
    today = today or date.today()
    month, year = month_and_year_from_date(today)

    totals = PeriodTotals()
    for expense in expenses:
        if expense.year != year:
            continue
        totals.year_to_date += expense.amount
        if expense.month == month:
            totals.this_month += expense.amount
    return totals


def _breakdown(
    expenses: Iterable[Expense],
    entities: Iterable[Union[Category, Partner]],
    foreign_key: str,
) -> list[BreakdownEntry]:
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        key = getattr(expense, foreign_key)
        if key:
            totals[key] += expense.amount

    entries = [
        BreakdownEntry(name=entity.name, total=totals[entity.id])
        for entity in entities
        if entity.id in totals
    ]
    return _sorted_desc(entries)


def by_category(
    expenses: Iterable[Expense],
    categories: Iterable[Category],
) -> list[BreakdownEntry]:
    """
    Per-category totals, largest first.

    Categories without expenses are omitted, as are expenses whose
    category is not in ``categories``.
    """
    return _breakdown(expenses, categories, "category_id")


def by_partner(
    expenses: Iterable[Expense],
    partners: Iterable[Partner],
) -> list[BreakdownEntry]:
    """Per-partner attributed totals, largest first. Unattributed expenses are skipped."""
    return _breakdown(expenses, partners, "paid_by_partner_id")


def _month_start(month: str, year: int) -> date:
    return date(year, MONTH_NAMES_SHORT.index(month) + 1, 1)


def monthly_series(
    expenses: Iterable[Expense],
    today: Optional[date] = None,
) -> list[MonthlyBucket]:
    """
    Exactly twelve monthly buckets ending with the month of ``today``.

    Months without expenses appear with a zero total. Expenses outside the
    window are ignored. Buckets are ordered oldest first by the calendar
    date of each bucket's first day.
    """
    today = today or date.today()

    buckets: dict[tuple[str, int], MonthlyBucket] = {}
    year, month_index = today.year, today.month
    for _ in range(SERIES_MONTHS):
        month = MONTH_NAMES_SHORT[month_index - 1]
        buckets[(month, year)] = MonthlyBucket(month=month, year=year)
        month_index -= 1
        if month_index == 0:
            month_index, year = 12, year - 1

    for expense in expenses:
        bucket = buckets.get((expense.month, expense.year))
        if bucket is not None:
            bucket.total += expense.amount

    return sorted(buckets.values(), key=lambda b: _month_start(b.month, b.year))


def fixed_vs_variable(expenses: Iterable[Expense]) -> FixedVariableSplit:
    split = FixedVariableSplit()
    for expense in expenses:
        if expense.is_fixed_charge:
            split.fixed += expense.amount
        else:
            split.variable += expense.amount
    return split


def top_providers(
    expenses: Iterable[Expense],
    limit: int = DEFAULT_TOP_PROVIDERS,
) -> list[BreakdownEntry]:
    """
    Providers with the largest totals.

    Expenses without a provider are excluded. Providers are grouped by
    their exact name.
    """
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        if not expense.provider:
            continue
        totals[expense.provider] = totals.get(expense.provider, ZERO) + expense.amount

    entries = [BreakdownEntry(name=name, total=total) for name, total in totals.items()]
    return _sorted_desc(entries)[:limit]


def recent_expenses(
    expenses: Sequence[Expense],
    limit: int = DEFAULT_RECENT_EXPENSES,
) -> list[Expense]:
    """
    The ``limit`` most recently dated expenses.

    ``expenses`` is taken in display order, which decides between
    expenses sharing a date.
    """
    return sorted(expenses, key=lambda e: e.date, reverse=True)[:limit]
