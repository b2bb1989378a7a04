"""
Tests for Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, queries)
2. Store tests run against in-memory storage
3. No real API calls in tests
"""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.models.entities import (
    Category,
    Currency,
    Expense,
    ExpenseDraft,
    Partner,
    PaymentStatus,
    month_and_year_from_date,
)
from expense_tracker.models.reports import MonthlyBucket
from expense_tracker.models.validation import ValidationIssue, ValidationResult


class TestExpenseModel:
    """Tests for the Expense model."""

    def test_month_and_year_computed(self):
        """Test that month and year follow the date."""
        expense = Expense(
            date=date(2025, 7, 4),
            category_id="cat",
            amount=Decimal("10"),
            description="Hosting",
        )
        assert expense.month == "Jul"
        assert expense.year == 2025

    def test_month_follows_date_change(self):
        """Test that a copied expense with a new date has a new month."""
        expense = Expense(
            date=date(2025, 7, 4),
            amount=Decimal("10"),
            description="Hosting",
        )
        moved = expense.model_copy(update={"date": date(2024, 12, 1)})
        assert (moved.month, moved.year) == ("Dec", 2024)

    def test_defaults(self):
        """Test default values."""
        expense = Expense(date=date(2025, 1, 1), amount=Decimal("1"), description="x")

        assert expense.id
        assert expense.category_id == ""
        assert expense.is_fixed_charge is False
        assert expense.currency == Currency.MAD
        assert expense.payment_status == PaymentStatus.DUE
        assert expense.paid_by_partner_id is None

    def test_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            Expense(date=date(2025, 1, 1), amount=Decimal("-1"), description="x")

    def test_rejects_empty_description(self):
        """Test that an empty description is rejected."""
        with pytest.raises(ValueError):
            Expense(date=date(2025, 1, 1), amount=Decimal("1"), description="  ")

    def test_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        expense = Expense(
            date=date(2025, 1, 1),
            amount=Decimal("1"),
            description="  Fibre  ",
            provider=" Telecom ",
        )
        assert expense.description == "Fibre"
        assert expense.provider == "Telecom"

    def test_camel_case_dump(self):
        """Test that the wire names are camelCase and include month/year."""
        expense = Expense(
            date=date(2025, 4, 1),
            category_id="cat",
            amount=Decimal("4000"),
            description="Rent",
            is_fixed_charge=True,
        )
        data = expense.model_dump(by_alias=True)

        assert data["categoryId"] == "cat"
        assert data["isFixedCharge"] is True
        assert data["month"] == "Apr"
        assert data["year"] == 2025

    def test_accepts_camel_case_input(self):
        """Test parsing a stored record."""
        expense = Expense.model_validate({
            "id": "e-1",
            "date": "2025-04-01",
            "categoryId": "cat",
            "amount": "12.50",
            "currency": "EUR",
            "paidByPartnerId": "p-1",
            "description": "Lunch",
            "paymentStatus": "Pending Reimbursement",
        })
        assert expense.amount == Decimal("12.50")
        assert expense.currency == Currency.EUR
        assert expense.payment_status == PaymentStatus.PENDING_REIMBURSEMENT

    def test_to_draft(self):
        """Test that a draft carries the editable fields only."""
        expense = Expense(
            date=date(2025, 4, 1),
            category_id="cat",
            amount=Decimal("5"),
            description="Stamps",
            currency=Currency.GBP,
        )
        draft = expense.to_draft()

        assert isinstance(draft, ExpenseDraft)
        assert draft.currency == Currency.GBP
        assert draft.date == date(2025, 4, 1)


class TestEnums:
    """Tests for enumerations that must round-trip exactly."""

    def test_payment_status_values(self):
        """Test the payment status literals."""
        assert [s.value for s in PaymentStatus] == [
            "Paid", "Due", "Overdue", "Scheduled", "Pending Reimbursement",
        ]

    def test_currency_values(self):
        """Test the currency literals."""
        assert [c.value for c in Currency] == ["USD", "EUR", "GBP", "MAD"]


class TestReferenceModels:
    """Tests for Partner and Category."""

    def test_partner_requires_name(self):
        """Test that an empty partner name is rejected."""
        with pytest.raises(ValueError):
            Partner(name="")

    def test_category_hint_optional(self):
        """Test that default_is_fixed may be unset."""
        assert Category(name="Travel").default_is_fixed is None


class TestReportsAndValidation:
    """Tests for report and validation models."""

    def test_month_helper(self):
        """Test short month names."""
        assert month_and_year_from_date(date(2025, 7, 4)) == ("Jul", 2025)

    def test_bucket_label(self):
        """Test the chart label of a bucket."""
        assert MonthlyBucket(month="Apr", year=2025).label == "Apr-2025"

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            entity_type="expense",
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Amount must be greater than 0.",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            entity_type="expense",
            issues=[
                ValidationIssue(
                    field="category_id",
                    issue_type="unknown_reference",
                    message="Category missing",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.warnings == ["Category missing"]
