"""
Expense Tracker - Source Package

Internal bookkeeping for a small business: records expenses, attributes
them to funding partners and categories, and derives the dashboard
figures (totals, breakdowns, monthly series).

DESIGN PRINCIPLES:
1. The remote store is the source of truth; memory follows it
2. Validate manual input before anything is written
3. Deleting a partner or category never orphans an expense
4. Aggregations are pure functions, recomputed on demand
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
