"""
Storage Services Package

Provides the abstract storage interface and concrete implementations.
Google Sheets is the hosted backend; the in-memory backend serves tests.
"""

from expense_tracker.services.storage.interface import (
    Collection,
    ConnectionError,
    CredentialsNotFoundError,
    DuplicateError,
    Entity,
    EntityStorageInterface,
    NotFoundError,
    StorageError,
)
from expense_tracker.services.storage.memory import InMemoryEntityStorage
from expense_tracker.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsEntityStorage,
)

__all__ = [
    # Interface
    "Collection",
    "Entity",
    "EntityStorageInterface",
    # Exceptions
    "ConnectionError",
    "CredentialsNotFoundError",
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsEntityStorage",
    "InMemoryEntityStorage",
]
