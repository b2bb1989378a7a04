"""
Entity Store

Holds the three entity collections in memory and keeps them in step with
the remote store. The store is the single writer:

- every mutation issues its remote call(s) first and applies the in-memory
  change only when the remote side succeeded
- remote failures are logged and reported as a ``None``/``False`` result,
  leaving memory in its last-known-good state (nothing is retried)
- manual-input problems raise InputValidationError before any remote call

Without a storage backend the store runs in local mode: it starts from the
built-in dataset and mutations apply to memory only.
"""

from datetime import date
from typing import Callable, Optional

from expense_tracker.config import AppSettings, get_settings
from expense_tracker.logger import get_logger
from expense_tracker.models.entities import (
    Category,
    CategoryDraft,
    Expense,
    ExpenseDraft,
    Partner,
    PartnerDraft,
    new_entity_id,
    utc_now,
)
from expense_tracker.reassignment import (
    CATEGORY_REASSIGNMENT,
    PARTNER_REASSIGNMENT,
    CascadeReassignPolicy,
)
from expense_tracker.seed import SeedDataset, build_seed_dataset
from expense_tracker.services.storage import (
    Collection,
    Entity,
    EntityStorageInterface,
    StorageError,
)
from expense_tracker.validation import ExpenseValidator, raise_for_errors

logger = get_logger(__name__)


class StoreNotLoadedError(RuntimeError):
    """Collections were read before ``EntityStore.load()`` completed."""
    pass


class EntityStore:
    """
    In-memory expenses, partners and categories backed by a remote store.

    Args:
        storage: Remote storage backend. ``None`` selects local mode.
        settings: Application settings (defaults, seeding switch).
        seed_factory: Builds the bootstrap dataset.
    """

    def __init__(
        self,
        storage: Optional[EntityStorageInterface] = None,
        settings: Optional[AppSettings] = None,
        seed_factory: Callable[[], SeedDataset] = build_seed_dataset,
    ):
        self._storage = storage
        self._settings = settings or get_settings().app
        self._seed_factory = seed_factory
        self._expenses: dict[str, Expense] = {}
        self._partners: dict[str, Partner] = {}
        self._categories: dict[str, Category] = {}
        self._loaded = False

    # ── STATE ─────────────────────────────────────────────

    @property
    def local_mode(self) -> bool:
        return self._storage is None

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise StoreNotLoadedError("Entity store not loaded. Await load() first.")

    @property
    def expenses(self) -> list[Expense]:
        """
        Expenses for display: newest date first.

        Expenses on the same date keep display order, where a newly added
        expense comes before older entries.
        """
        self._require_loaded()
        return sorted(self._expenses.values(), key=lambda e: e.date, reverse=True)

    @property
    def partners(self) -> list[Partner]:
        self._require_loaded()
        return list(self._partners.values())

    @property
    def categories(self) -> list[Category]:
        self._require_loaded()
        return list(self._categories.values())

    def get_expense(self, expense_id: str) -> Optional[Expense]:
        return self._expenses.get(expense_id)

    def get_partner(self, partner_id: str) -> Optional[Partner]:
        return self._partners.get(partner_id)

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    # ── STARTUP ───────────────────────────────────────────

    async def load(self) -> None:
        """
        Populate the collections.

        Remote mode: seed the remote store if it has no partners (and
        seeding is enabled), then read all three collections. Storage
        errors propagate; the store stays unloaded.

        Local mode: start from a fresh copy of the built-in dataset.
        """
        if self._storage is None:
            self._replace_all(self._seed_factory())
            self._loaded = True
            logger.warning(
                "local_mode_loaded",
                detail="No remote store configured; changes will not be saved.",
                expenses=len(self._expenses),
            )
            return

        if self._settings.seed_on_empty:
            await self._seed_if_empty()

        dataset = SeedDataset(
            partners=await self._storage.select_all(Collection.PARTNERS),
            categories=await self._storage.select_all(Collection.CATEGORIES),
            expenses=await self._storage.select_all(Collection.EXPENSES),
        )
        self._replace_all(dataset)
        self._loaded = True
        logger.info(
            "store_loaded",
            partners=len(self._partners),
            categories=len(self._categories),
            expenses=len(self._expenses),
        )

    async def _seed_if_empty(self) -> bool:
        """
        Insert the bootstrap dataset when the remote store has no partners.

        Partners go in first, so a seed that fails part-way leaves partners
        behind and is not attempted again. Such a store has to be cleared
        by hand before the next start.
        """
        if await self._storage.select_all(Collection.PARTNERS):
            return False

        dataset = self._seed_factory()
        logger.info("store_seeding", detail="Remote store empty, seeding initial data")
        try:
            for partner in dataset.partners:
                await self._storage.insert_one(Collection.PARTNERS, partner)
            for category in dataset.categories:
                await self._storage.insert_one(Collection.CATEGORIES, category)
            for expense in dataset.expenses:
                await self._storage.insert_one(Collection.EXPENSES, expense)
        except StorageError as e:
            logger.error(
                "store_seed_incomplete",
                detail="Remote store partially seeded; clear it manually before restarting",
                error=str(e),
            )
            raise
        logger.info(
            "store_seeded",
            partners=len(dataset.partners),
            categories=len(dataset.categories),
            expenses=len(dataset.expenses),
        )
        return True

    def _replace_all(self, dataset: SeedDataset) -> None:
        self._partners = {p.id: p for p in dataset.partners}
        self._categories = {c.id: c for c in dataset.categories}
        self._expenses = {e.id: e for e in dataset.expenses}

    # ── REMOTE CALLS ──────────────────────────────────────

    async def _remote(self, primitive: str, collection: Collection, arg) -> bool:
        """
        Run one storage primitive. Returns False (and logs) on failure.

        In local mode there is nothing to call and the write always
        succeeds.
        """
        if self._storage is None:
            return True
        try:
            await getattr(self._storage, primitive)(collection, arg)
        except StorageError as e:
            logger.error(
                "remote_write_failed",
                primitive=primitive,
                collection=collection.value,
                entity_id=arg if isinstance(arg, str) else arg.id,
                error=str(e),
            )
            return False
        return True

    def _validator(self) -> ExpenseValidator:
        return ExpenseValidator(
            category_ids=set(self._categories),
            partner_ids=set(self._partners),
        )

    # ── EXPENSES ──────────────────────────────────────────

    async def add_expense(self, draft: ExpenseDraft) -> Optional[Expense]:
        """
        Create an expense from a draft.

        Unset fields are filled in: ``is_fixed_charge`` from the category's
        ``default_is_fixed`` hint, currency and payment status from the app
        defaults. Month and year follow from the date.

        Returns:
            The stored expense, or None if the remote insert failed

        Raises:
            InputValidationError: If the draft fails validation
        """
        self._require_loaded()
        raise_for_errors(self._validator().validate_expense(draft))

        is_fixed = draft.is_fixed_charge
        if is_fixed is None:
            category = self._categories.get(draft.category_id)
            is_fixed = bool(category and category.default_is_fixed)

        fields = draft.model_dump(
            exclude={"is_fixed_charge", "currency", "payment_status"},
        )
        expense = Expense(
            id=new_entity_id(),
            is_fixed_charge=is_fixed,
            currency=draft.currency or self._settings.default_currency,
            payment_status=draft.payment_status or self._settings.default_payment_status,
            entry_timestamp=utc_now(),
            **fields,
        )

        if not await self._remote("insert_one", Collection.EXPENSES, expense):
            return None

        self._expenses = {expense.id: expense, **self._expenses}
        logger.info(
            "expense_added",
            expense_id=expense.id,
            amount=str(expense.amount),
            currency=expense.currency.value,
            month=expense.month,
            year=expense.year,
        )
        return expense

    async def update_expense(self, expense: Expense) -> Optional[Expense]:
        """
        Replace an expense by id.

        The last-write timestamp is refreshed; month and year follow the
        (possibly new) date.

        Returns:
            The stored expense, or None if the id is unknown or the
            remote update failed

        Raises:
            InputValidationError: If the record fails validation
        """
        self._require_loaded()
        if expense.id not in self._expenses:
            logger.warning("update_unknown_entity", collection="expenses", entity_id=expense.id)
            return None
        raise_for_errors(self._validator().validate_expense(expense))

        updated = expense.model_copy(update={"entry_timestamp": utc_now()})
        if not await self._remote("update_by_id", Collection.EXPENSES, updated):
            return None

        self._expenses[updated.id] = updated
        logger.info("expense_updated", expense_id=updated.id)
        return updated

    async def delete_expense(self, expense_id: str) -> bool:
        """Remove an expense. Returns False if unknown or the remote delete failed."""
        self._require_loaded()
        if expense_id not in self._expenses:
            logger.warning("delete_unknown_entity", collection="expenses", entity_id=expense_id)
            return False
        if not await self._remote("delete_by_id", Collection.EXPENSES, expense_id):
            return False

        del self._expenses[expense_id]
        logger.info("expense_deleted", expense_id=expense_id)
        return True

    async def duplicate_expense(
        self,
        expense_id: str,
        today: Optional[date] = None,
    ) -> Optional[Expense]:
        """
        Add a copy of an existing expense, dated today.

        The copy's description is prefixed with "Copy of ". Returns None
        if the source is unknown or the remote insert failed.
        """
        self._require_loaded()
        source = self._expenses.get(expense_id)
        if source is None:
            logger.warning("duplicate_unknown_entity", entity_id=expense_id)
            return None

        draft = source.to_draft().model_copy(update={
            "date": today or date.today(),
            "description": f"Copy of {source.description}",
        })
        return await self.add_expense(draft)

    # ── PARTNERS ──────────────────────────────────────────

    async def add_partner(self, draft: PartnerDraft) -> Optional[Partner]:
        self._require_loaded()
        raise_for_errors(self._validator().validate_partner(draft))

        partner = Partner(id=new_entity_id(), **draft.model_dump())
        if not await self._remote("insert_one", Collection.PARTNERS, partner):
            return None

        self._partners[partner.id] = partner
        logger.info("partner_added", partner_id=partner.id, name=partner.name)
        return partner

    async def update_partner(self, partner: Partner) -> Optional[Partner]:
        self._require_loaded()
        return await self._update_reference(Collection.PARTNERS, self._partners, partner)

    async def delete_partner(self, partner_id: str) -> bool:
        """
        Delete a partner, moving its expenses to "Unassigned / Company".

        Expenses are moved to no attribution when that partner does not
        exist.
        """
        self._require_loaded()
        return await self._delete_reference(
            Collection.PARTNERS, self._partners, partner_id, PARTNER_REASSIGNMENT,
        )

    # ── CATEGORIES ────────────────────────────────────────

    async def add_category(self, draft: CategoryDraft) -> Optional[Category]:
        self._require_loaded()
        raise_for_errors(self._validator().validate_category(draft))

        category = Category(id=new_entity_id(), **draft.model_dump())
        if not await self._remote("insert_one", Collection.CATEGORIES, category):
            return None

        self._categories[category.id] = category
        logger.info("category_added", category_id=category.id, name=category.name)
        return category

    async def update_category(self, category: Category) -> Optional[Category]:
        self._require_loaded()
        return await self._update_reference(Collection.CATEGORIES, self._categories, category)

    async def delete_category(self, category_id: str) -> bool:
        """
        Delete a category, moving its expenses to "Miscellaneous".

        Expenses get an empty category id when no such category exists.
        """
        self._require_loaded()
        return await self._delete_reference(
            Collection.CATEGORIES, self._categories, category_id, CATEGORY_REASSIGNMENT,
        )

    # ── SHARED ────────────────────────────────────────────

    async def _update_reference(
        self,
        collection: Collection,
        entities: dict[str, Entity],
        entity: Entity,
    ) -> Optional[Entity]:
        if entity.id not in entities:
            logger.warning("update_unknown_entity", collection=collection.value, entity_id=entity.id)
            return None

        validator = self._validator()
        if collection is Collection.PARTNERS:
            raise_for_errors(validator.validate_partner(entity))
        else:
            raise_for_errors(validator.validate_category(entity))

        if not await self._remote("update_by_id", collection, entity):
            return None

        entities[entity.id] = entity
        logger.info("entity_updated", collection=collection.value, entity_id=entity.id)
        return entity

    async def _delete_reference(
        self,
        collection: Collection,
        entities: dict[str, Entity],
        entity_id: str,
        policy: CascadeReassignPolicy,
    ) -> bool:
        """
        Reassign referencing expenses, then delete the entity.

        Each reassigned expense is written remotely before it changes in
        memory. If any write fails, the delete is abandoned: expenses
        already moved stay moved (they are persisted that way) and the
        entity is kept.
        """
        if entity_id not in entities:
            logger.warning("delete_unknown_entity", collection=collection.value, entity_id=entity_id)
            return False

        reassigned = policy.plan(self._expenses.values(), entities.values(), entity_id)
        for expense in reassigned:
            if not await self._remote("update_by_id", Collection.EXPENSES, expense):
                logger.error(
                    "reassignment_aborted",
                    collection=collection.value,
                    entity_id=entity_id,
                    expense_id=expense.id,
                )
                return False
            self._expenses[expense.id] = expense

        if not await self._remote("delete_by_id", collection, entity_id):
            return False

        del entities[entity_id]
        logger.info(
            "entity_deleted",
            collection=collection.value,
            entity_id=entity_id,
            reassigned_expenses=len(reassigned),
            reassigned_to=policy.replacement_for(entities.values(), entity_id),
        )
        return True
