"""Tests for id to name resolution."""

from conftest import run

from expense_tracker.lookups import NOT_AVAILABLE, UNKNOWN_PARTNER, LookupService


class TestLookupService:
    """Tests for LookupService."""

    def test_category_name_resolves(self, store):
        """Test a known category id."""
        assert LookupService(store).category_name("cat-a") == "Rent"

    def test_unknown_category_is_not_available(self, store):
        """Test that an unknown category id gives N/A."""
        lookups = LookupService(store)
        assert lookups.category_name("unknown-id") == "N/A"
        assert lookups.category_name("") == NOT_AVAILABLE

    def test_partner_outcomes_are_distinct(self, store):
        """Test absent, unresolved and resolved partner ids."""
        lookups = LookupService(store)

        assert lookups.partner_name() == "N/A"
        assert lookups.partner_name(None) == NOT_AVAILABLE
        assert lookups.partner_name("unknown-id") == "Unknown Partner"
        assert lookups.partner_name("unknown-id") == UNKNOWN_PARTNER
        assert lookups.partner_name("p-zak") == "Zakaria"

    def test_lookups_follow_store_changes(self, store):
        """Test that a deleted partner resolves to Unknown Partner."""
        lookups = LookupService(store)
        assert lookups.partner_name("p-nao") == "Naoufal"

        run(store.delete_partner("p-nao"))
        assert lookups.partner_name("p-nao") == UNKNOWN_PARTNER
