"""
Abstract Storage Interface

The remote store is treated as an opaque service offering four primitives
per collection: select-all, insert-one, update-by-id and delete-by-id.
Defining them as an interface allows us to:
1. Keep the hosted backend (Google Sheets) swappable
2. Use in-memory storage for testing and local mode
3. Keep the entity store decoupled from any storage implementation

There is deliberately no bulk update, query language or transaction
support; the entity store composes these primitives itself.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Union

from expense_tracker.models.entities import Category, Expense, Partner


Entity = Union[Expense, Partner, Category]


class Collection(str, Enum):
    """The three persisted entity collections."""
    EXPENSES = "expenses"
    PARTNERS = "partners"
    CATEGORIES = "categories"

    @property
    def model(self) -> type:
        """Pydantic model stored in this collection."""
        return COLLECTION_MODELS[self]


COLLECTION_MODELS: dict[Collection, type] = {
    Collection.EXPENSES: Expense,
    Collection.PARTNERS: Partner,
    Collection.CATEGORIES: Category,
}


class EntityStorageInterface(ABC):
    """
    Abstract interface for entity storage operations.

    Any storage implementation (Google Sheets, in-memory, a SQL database)
    must implement these methods. Every call is one round trip; none of
    them retry.
    """

    @abstractmethod
    async def select_all(self, collection: Collection) -> list[Entity]:
        """
        Read every entity of a collection.

        Args:
            collection: Which collection to read

        Returns:
            All stored entities, in storage order

        Raises:
            StorageError: If the read fails
        """
        pass

    @abstractmethod
    async def insert_one(self, collection: Collection, entity: Entity) -> Entity:
        """
        Insert a new entity.

        Args:
            collection: Target collection
            entity: The entity to insert (id already assigned)

        Returns:
            The entity as stored

        Raises:
            StorageError: If the insert fails
            DuplicateError: If an entity with the same id exists
        """
        pass

    @abstractmethod
    async def update_by_id(self, collection: Collection, entity: Entity) -> Entity:
        """
        Replace the stored entity with the same id.

        Args:
            collection: Target collection
            entity: Full replacement record

        Returns:
            The entity as stored

        Raises:
            StorageError: If the update fails
            NotFoundError: If no entity has this id
        """
        pass

    @abstractmethod
    async def delete_by_id(self, collection: Collection, entity_id: str) -> bool:
        """
        Delete an entity by id.

        Args:
            collection: Target collection
            entity_id: The entity's identifier

        Returns:
            True if a stored entity was deleted, False if none matched

        Raises:
            StorageError: If the delete fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass


class CredentialsNotFoundError(ConnectionError):
    """Storage credentials are missing; retrying cannot help."""
    pass
