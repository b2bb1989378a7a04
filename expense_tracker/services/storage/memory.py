"""
In-Memory Storage Implementation

Keeps each collection in an insertion-ordered dict. Used by the test
suite and anywhere a throwaway backend is wanted; entities are copied on
the way in and out so callers never share instances with the storage.
"""

from typing import Optional

from expense_tracker.services.storage.interface import (
    Collection,
    DuplicateError,
    Entity,
    EntityStorageInterface,
    NotFoundError,
)


class InMemoryEntityStorage(EntityStorageInterface):
    """Dict-backed implementation of the storage primitives."""

    def __init__(self, initial: Optional[dict[Collection, list[Entity]]] = None):
        self._rows: dict[Collection, dict[str, Entity]] = {
            collection: {} for collection in Collection
        }
        for collection, entities in (initial or {}).items():
            for entity in entities:
                self._rows[collection][entity.id] = entity.model_copy(deep=True)

    async def select_all(self, collection: Collection) -> list[Entity]:
        return [
            entity.model_copy(deep=True)
            for entity in self._rows[collection].values()
        ]

    async def insert_one(self, collection: Collection, entity: Entity) -> Entity:
        rows = self._rows[collection]
        if entity.id in rows:
            raise DuplicateError(f"{collection.value} already contains {entity.id}")
        rows[entity.id] = entity.model_copy(deep=True)
        return entity.model_copy(deep=True)

    async def update_by_id(self, collection: Collection, entity: Entity) -> Entity:
        rows = self._rows[collection]
        if entity.id not in rows:
            raise NotFoundError(f"{collection.value} has no entity {entity.id}")
        rows[entity.id] = entity.model_copy(deep=True)
        return entity.model_copy(deep=True)

    async def delete_by_id(self, collection: Collection, entity_id: str) -> bool:
        return self._rows[collection].pop(entity_id, None) is not None

    def count(self, collection: Collection) -> int:
        """Number of stored entities in a collection."""
        return len(self._rows[collection])
