"""Services package."""

from expense_tracker.services.storage import (
    Collection,
    ConnectionError,
    CredentialsNotFoundError,
    DuplicateError,
    EntityStorageInterface,
    GoogleSheetsClient,
    GoogleSheetsEntityStorage,
    InMemoryEntityStorage,
    NotFoundError,
    StorageError,
)

__all__ = [
    "Collection",
    "ConnectionError",
    "CredentialsNotFoundError",
    "DuplicateError",
    "EntityStorageInterface",
    "GoogleSheetsClient",
    "GoogleSheetsEntityStorage",
    "InMemoryEntityStorage",
    "NotFoundError",
    "StorageError",
]
