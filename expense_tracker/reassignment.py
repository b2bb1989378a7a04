"""
Cascade Reassignment on Delete

Deleting a partner or a category never cascades to expenses. Instead every
expense pointing at the deleted entity is rewritten to point at a sentinel
entity (or to a fallback marker when no sentinel exists) BEFORE the entity
itself is removed, so no expense ever references a missing entity.

One policy type covers both cases; it is parameterized by the expense
field holding the foreign key, a predicate recognizing the sentinel, and
the fallback value.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from expense_tracker.models.entities import (
    MISCELLANEOUS_CATEGORY_NAME,
    UNASSIGNED_PARTNER_NAME,
    Category,
    Expense,
    Partner,
)

Referenced = Union[Partner, Category]


@dataclass(frozen=True)
class CascadeReassignPolicy:
    """
    How expenses referencing a deleted entity are rewritten.

    Attributes:
        foreign_key: Expense attribute holding the reference
        is_sentinel: Recognizes the entity that absorbs orphaned references
        fallback: Value written when no sentinel is available
    """
    foreign_key: str
    is_sentinel: Callable[[Referenced], bool]
    fallback: Optional[str]

    def replacement_for(
        self,
        candidates: Iterable[Referenced],
        deleted_id: str,
    ) -> Optional[str]:
        """
        The id referencing expenses should move to.

        The entity being deleted is never its own replacement, even when
        it is the sentinel; in that case the fallback is used.
        """
        for candidate in candidates:
            if candidate.id != deleted_id and self.is_sentinel(candidate):
                return candidate.id
        return self.fallback

    def referencing(self, expenses: Iterable[Expense], deleted_id: str) -> list[Expense]:
        return [e for e in expenses if getattr(e, self.foreign_key) == deleted_id]

    def reassign(self, expense: Expense, replacement: Optional[str]) -> Expense:
        """Copy of the expense with its reference rewritten."""
        return expense.model_copy(update={self.foreign_key: replacement})

    def plan(
        self,
        expenses: Iterable[Expense],
        candidates: Iterable[Referenced],
        deleted_id: str,
    ) -> list[Expense]:
        """Reassigned copies of every expense referencing ``deleted_id``."""
        replacement = self.replacement_for(candidates, deleted_id)
        return [
            self.reassign(expense, replacement)
            for expense in self.referencing(expenses, deleted_id)
        ]


def is_unassigned_partner(partner: Partner) -> bool:
    return partner.name == UNASSIGNED_PARTNER_NAME


def is_miscellaneous_category(category: Category) -> bool:
    return category.name.lower() == MISCELLANEOUS_CATEGORY_NAME.lower()


PARTNER_REASSIGNMENT = CascadeReassignPolicy(
    foreign_key="paid_by_partner_id",
    is_sentinel=is_unassigned_partner,
    fallback=None,  # no attribution
)

CATEGORY_REASSIGNMENT = CascadeReassignPolicy(
    foreign_key="category_id",
    is_sentinel=is_miscellaneous_category,
    fallback="",  # unset marker
)
