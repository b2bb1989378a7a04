"""
Core Entity Models for the Expense Tracker

These models define the schemas for the three persisted collections:
expenses, partners and categories. They are designed to:
1. Enforce types at runtime (dates, decimals, enumerations)
2. Round-trip exactly through the remote store (camelCase column names)
3. Keep derived fields derived: an expense's month and year are computed
   from its date and can never be set on their own

Drafts are the "entity without id" shapes accepted by the store's add
operations. They are intentionally lenient so that manual-input problems
are reported by the validator instead of surfacing as parse errors.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
)
from pydantic.alias_generators import to_camel


MONTH_NAMES_SHORT = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# Sentinel names used by the reassignment policy
UNASSIGNED_PARTNER_NAME = "Unassigned / Company"
MISCELLANEOUS_CATEGORY_NAME = "Miscellaneous"

# Text limits, shared with the manual-input validator
NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 500
NOTES_MAX_LENGTH = 1000


# Alias so the ``date`` field name does not shadow the type in class bodies
CalendarDate = date


def new_entity_id() -> str:
    """Fresh opaque identifier for a stored entity."""
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def month_and_year_from_date(value: date) -> tuple[str, int]:
    """Short month name and year for a calendar date, e.g. ("Jul", 2025)."""
    return MONTH_NAMES_SHORT[value.month - 1], value.year


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PaymentStatus(str, Enum):
    """Payment status of an expense. Values are stored verbatim."""
    PAID = "Paid"
    DUE = "Due"
    OVERDUE = "Overdue"
    SCHEDULED = "Scheduled"
    PENDING_REIMBURSEMENT = "Pending Reimbursement"


class Currency(str, Enum):
    """
    Currencies an expense can be recorded in.

    Amounts are never converted: totals across currencies are raw sums.
    """
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    MAD = "MAD"


PAYMENT_METHODS = [
    "Company Card",
    "Partner Personal",
    "Bank Transfer",
    "Cash",
    "Other",
]


class EntityModel(BaseModel):
    """Shared configuration: trimmed strings, camelCase wire names."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# PARTNERS AND CATEGORIES
# =============================================================================

class Partner(EntityModel):
    """
    A funding partner that expenses can be attributed to.

    Names are unique in practice but not enforced.
    """
    id: str = Field(default_factory=new_entity_id)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: Optional[str] = None
    role: Optional[str] = None


class Category(EntityModel):
    """An expense category."""
    id: str = Field(default_factory=new_entity_id)
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    default_is_fixed: Optional[bool] = Field(
        default=None,
        description="Pre-populates is_fixed_charge when an expense is created"
    )


class PartnerDraft(EntityModel):
    """Partner fields supplied by a caller before an id is assigned."""
    name: str = ""
    email: Optional[str] = None
    role: Optional[str] = None


class CategoryDraft(EntityModel):
    """Category fields supplied by a caller before an id is assigned."""
    name: str = ""
    default_is_fixed: Optional[bool] = None


# =============================================================================
# EXPENSES
# =============================================================================

class Expense(EntityModel):
    """
    The atomic expense record.

    ``month`` and ``year`` are computed from ``date`` on every access and
    are included when the model is dumped, so persisted rows always carry
    values consistent with the date.

    ``entry_timestamp`` is the last write time, not the creation time.
    """

    # Identity
    id: str = Field(default_factory=new_entity_id)

    # Temporal
    date: CalendarDate = Field(..., description="Calendar date of the expense")

    # Classification. An empty category_id is the "unset" marker left
    # behind when a category is deleted and no sentinel exists.
    category_id: str = Field(default="")
    is_fixed_charge: bool = Field(
        default=False,
        description="True for recurring monthly costs, False for one-time spend"
    )

    # Money
    amount: Decimal = Field(..., ge=0)
    currency: Currency = Currency.MAD

    # Attribution (None = unattributed / company-paid)
    paid_by_partner_id: Optional[str] = None

    # Descriptive
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    provider: Optional[str] = None
    item_count: Optional[int] = Field(default=None, ge=0)
    payment_method: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=NOTES_MAX_LENGTH)
    payment_status: PaymentStatus = PaymentStatus.DUE

    # Bookkeeping
    entry_timestamp: datetime = Field(default_factory=utc_now)

    @computed_field
    @property
    def month(self) -> str:
        return month_and_year_from_date(self.date)[0]

    @computed_field
    @property
    def year(self) -> int:
        return self.date.year

    def to_draft(self) -> "ExpenseDraft":
        """The editable fields of this expense, without identity or bookkeeping."""
        return ExpenseDraft(
            **self.model_dump(
                exclude={"id", "month", "year", "entry_timestamp"},
            )
        )


class ExpenseDraft(EntityModel):
    """
    Expense fields supplied by a caller before an id is assigned.

    ``is_fixed_charge``, ``currency`` and ``payment_status`` may be left
    unset; the store fills them from the category hint and the app
    defaults.
    """
    date: Optional[CalendarDate] = None
    category_id: str = ""
    is_fixed_charge: Optional[bool] = None
    amount: Decimal = Decimal("0")
    currency: Optional[Currency] = None
    paid_by_partner_id: Optional[str] = None
    description: str = ""
    provider: Optional[str] = None
    item_count: Optional[int] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    payment_status: Optional[PaymentStatus] = None
