"""Tests for the cascade reassignment policy."""

from decimal import Decimal

from conftest import make_expense

from expense_tracker.models.entities import Category, Partner
from expense_tracker.reassignment import (
    CATEGORY_REASSIGNMENT,
    PARTNER_REASSIGNMENT,
    CascadeReassignPolicy,
    is_miscellaneous_category,
    is_unassigned_partner,
)


class TestSentinels:
    """Tests for sentinel recognition."""

    def test_unassigned_partner_exact_name(self):
        """Test that the partner sentinel needs the exact name."""
        assert is_unassigned_partner(Partner(name="Unassigned / Company"))
        assert not is_unassigned_partner(Partner(name="unassigned / company"))

    def test_miscellaneous_case_insensitive(self):
        """Test that the category sentinel ignores case."""
        assert is_miscellaneous_category(Category(name="MISCELLANEOUS"))
        assert is_miscellaneous_category(Category(name="miscellaneous"))
        assert not is_miscellaneous_category(Category(name="Misc"))


class TestPartnerPolicy:
    """Tests for PARTNER_REASSIGNMENT."""

    def test_plan_moves_expenses_to_sentinel(self, partners):
        """Test that N referencing expenses all move to the sentinel."""
        expenses = [
            make_expense(paid_by_partner_id="p-zak"),
            make_expense(paid_by_partner_id="p-zak"),
            make_expense(paid_by_partner_id="p-nao"),
        ]
        plan = PARTNER_REASSIGNMENT.plan(expenses, partners, "p-zak")

        assert len(plan) == 2
        assert all(e.paid_by_partner_id == "p-unassigned" for e in plan)

    def test_plan_keeps_other_fields(self, partners):
        """Test that only the foreign key changes."""
        original = make_expense(paid_by_partner_id="p-zak", amount=Decimal("42"))
        (moved,) = PARTNER_REASSIGNMENT.plan([original], partners, "p-zak")

        assert moved.id == original.id
        assert moved.amount == Decimal("42")
        assert moved.entry_timestamp == original.entry_timestamp
        assert original.paid_by_partner_id == "p-zak"

    def test_missing_sentinel_clears_attribution(self):
        """Test the fallback when no Unassigned partner exists."""
        partners = [Partner(id="p-zak", name="Zakaria")]
        expenses = [make_expense(paid_by_partner_id="p-zak")]

        (moved,) = PARTNER_REASSIGNMENT.plan(expenses, partners, "p-zak")
        assert moved.paid_by_partner_id is None

    def test_deleting_sentinel_uses_fallback(self, partners):
        """Test that the sentinel is never its own replacement."""
        expenses = [make_expense(paid_by_partner_id="p-unassigned")]

        (moved,) = PARTNER_REASSIGNMENT.plan(expenses, partners, "p-unassigned")
        assert moved.paid_by_partner_id is None

    def test_sentinel_gains_exactly_n(self, partners):
        """Test net attribution counts after a partner delete."""
        expenses = [
            make_expense(paid_by_partner_id="p-zak"),
            make_expense(paid_by_partner_id="p-zak"),
            make_expense(paid_by_partner_id="p-zak"),
            make_expense(paid_by_partner_id="p-unassigned"),
        ]
        moved = {e.id: e for e in PARTNER_REASSIGNMENT.plan(expenses, partners, "p-zak")}
        after = [moved.get(e.id, e) for e in expenses]

        assert sum(1 for e in after if e.paid_by_partner_id == "p-zak") == 0
        assert sum(1 for e in after if e.paid_by_partner_id == "p-unassigned") == 4

    def test_no_references_no_plan(self, partners, scenario_expenses):
        """Test that deleting an unreferenced partner rewrites nothing."""
        assert PARTNER_REASSIGNMENT.plan(scenario_expenses, partners, "p-unassigned") == []


class TestCategoryPolicy:
    """Tests for CATEGORY_REASSIGNMENT."""

    def test_plan_moves_to_miscellaneous(self, categories, scenario_expenses):
        """Test that category A's expense moves to Miscellaneous."""
        (moved,) = CATEGORY_REASSIGNMENT.plan(scenario_expenses, categories, "cat-a")

        assert moved.id == "e-1"
        assert moved.category_id == "cat-c"

    def test_missing_sentinel_uses_unset_marker(self, scenario_expenses):
        """Test the empty-string fallback when no Miscellaneous exists."""
        categories = [Category(id="cat-a", name="Rent")]

        (moved,) = CATEGORY_REASSIGNMENT.plan(scenario_expenses, categories, "cat-a")
        assert moved.category_id == ""


def test_custom_policy():
    """Test that the policy works for any foreign key and predicate."""
    policy = CascadeReassignPolicy(
        foreign_key="category_id",
        is_sentinel=lambda category: category.name == "Fallback",
        fallback="none",
    )
    categories = [Category(id="f", name="Fallback"), Category(id="a", name="A")]

    assert policy.replacement_for(categories, "a") == "f"
    assert policy.replacement_for(categories[1:], "a") == "none"
