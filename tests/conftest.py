"""
Shared fixtures for the expense tracker tests.

No test talks to Google Sheets: stores are backed by the in-memory
storage, optionally with injected failures.
"""

import asyncio
from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.config import AppSettings
from expense_tracker.models.entities import (
    Category,
    Expense,
    Partner,
)
from expense_tracker.seed import SeedDataset
from expense_tracker.services.storage import (
    Collection,
    InMemoryEntityStorage,
    StorageError,
)
from expense_tracker.store import EntityStore


def run(coro):
    """Run a coroutine to completion."""
    return asyncio.run(coro)


class FailingStorage(InMemoryEntityStorage):
    """In-memory storage whose writes can be made to fail on demand."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_on: set[str] = set()
        self.calls: list[tuple[str, Collection]] = []

    def _maybe_fail(self, primitive: str, collection: Collection) -> None:
        self.calls.append((primitive, collection))
        if primitive in self.fail_on:
            raise StorageError(f"{primitive} unavailable")

    async def select_all(self, collection):
        self._maybe_fail("select_all", collection)
        return await super().select_all(collection)

    async def insert_one(self, collection, entity):
        self._maybe_fail("insert_one", collection)
        return await super().insert_one(collection, entity)

    async def update_by_id(self, collection, entity):
        self._maybe_fail("update_by_id", collection)
        return await super().update_by_id(collection, entity)

    async def delete_by_id(self, collection, entity_id):
        self._maybe_fail("delete_by_id", collection)
        return await super().delete_by_id(collection, entity_id)


def make_expense(**overrides) -> Expense:
    fields = {
        "date": date(2025, 4, 10),
        "category_id": "cat-a",
        "amount": Decimal("100"),
        "description": "Test expense",
        "is_fixed_charge": False,
    }
    fields.update(overrides)
    return Expense(**fields)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(seed_on_empty=True)


@pytest.fixture
def partners() -> list[Partner]:
    return [
        Partner(id="p-zak", name="Zakaria"),
        Partner(id="p-nao", name="Naoufal"),
        Partner(id="p-unassigned", name="Unassigned / Company"),
    ]


@pytest.fixture
def categories() -> list[Category]:
    return [
        Category(id="cat-a", name="Rent", default_is_fixed=True),
        Category(id="cat-b", name="Office Supplies"),
        Category(id="cat-c", name="Miscellaneous"),
    ]


@pytest.fixture
def scenario_expenses() -> list[Expense]:
    """Two expenses: A fixed 100 on 2025-04-10, B variable 50 on 2025-04-20."""
    return [
        make_expense(
            id="e-1",
            date=date(2025, 4, 10),
            amount=Decimal("100"),
            category_id="cat-a",
            is_fixed_charge=True,
            paid_by_partner_id="p-zak",
            provider="Landlord",
        ),
        make_expense(
            id="e-2",
            date=date(2025, 4, 20),
            amount=Decimal("50"),
            category_id="cat-b",
            is_fixed_charge=False,
            paid_by_partner_id="p-nao",
            provider="Retail Store",
        ),
    ]


@pytest.fixture
def storage(partners, categories, scenario_expenses) -> FailingStorage:
    return FailingStorage({
        Collection.PARTNERS: partners,
        Collection.CATEGORIES: categories,
        Collection.EXPENSES: scenario_expenses,
    })


@pytest.fixture
def store(storage, settings) -> EntityStore:
    """A loaded store backed by the populated in-memory storage."""
    entity_store = EntityStore(storage=storage, settings=settings)
    run(entity_store.load())
    return entity_store


@pytest.fixture
def local_store(partners, categories, scenario_expenses, settings) -> EntityStore:
    """A loaded local-mode store holding the scenario data."""
    dataset = SeedDataset(
        partners=partners,
        categories=categories,
        expenses=scenario_expenses,
    )
    entity_store = EntityStore(settings=settings, seed_factory=lambda: dataset)
    run(entity_store.load())
    return entity_store
