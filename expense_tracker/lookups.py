"""
Foreign Key Lookups

Resolves category and partner ids to display names. Unresolvable ids are
never an error: they map to fixed sentinel strings so that "no partner",
"partner that no longer exists" and "known partner" stay distinguishable.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from expense_tracker.store import EntityStore


NOT_AVAILABLE = "N/A"
UNKNOWN_PARTNER = "Unknown Partner"


class LookupService:
    """Name resolution against the store's current collections."""

    def __init__(self, store: "EntityStore"):
        self._store = store

    def category_name(self, category_id: Optional[str]) -> str:
        """The category's name, or ``"N/A"`` if the id does not resolve."""
        category = self._store.get_category(category_id) if category_id else None
        return category.name if category else NOT_AVAILABLE

    def partner_name(self, partner_id: Optional[str] = None) -> str:
        """
        The partner's name.

        Returns ``"N/A"`` when no partner id is given and
        ``"Unknown Partner"`` when the id matches no current partner.
        """
        if not partner_id:
            return NOT_AVAILABLE
        partner = self._store.get_partner(partner_id)
        return partner.name if partner else UNKNOWN_PARTNER
