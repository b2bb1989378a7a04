"""
Application Wiring for the Expense Tracker

Builds the entity store on top of the configured storage backend and hands
out the services the presentation layer reads from:

- EntityStore: collections plus add/update/delete/duplicate
- LookupService: id to name resolution
- build_dashboard_summary: aggregations for one day

When Google Sheets is not configured the store runs in local mode and
nothing is persisted.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from pydantic import ValidationError

from expense_tracker.config import AppSettings, get_settings
from expense_tracker.logger import get_logger
from expense_tracker.lookups import LookupService
from expense_tracker.models.reports import DashboardSummary
from expense_tracker.queries import build_dashboard_summary
from expense_tracker.services.storage import (
    EntityStorageInterface,
    GoogleSheetsClient,
    GoogleSheetsEntityStorage,
    StorageError,
)
from expense_tracker.store import EntityStore

logger = get_logger(__name__)


@dataclass
class AppComponents:
    """Everything a front end needs, sharing one store."""
    store: EntityStore
    lookups: LookupService
    settings: AppSettings
    sheets_client: Optional[GoogleSheetsClient] = None

    @property
    def local_mode(self) -> bool:
        return self.store.local_mode

    def dashboard(self, today: Optional[date] = None) -> DashboardSummary:
        return build_dashboard_summary(self.store, today, self.settings)


def _connect_storage() -> tuple[Optional[GoogleSheetsClient], Optional[EntityStorageInterface]]:
    try:
        sheets_client = GoogleSheetsClient()
        sheets_client.get_spreadsheet()
    except (StorageError, ValidationError) as e:
        # Storage not configured - continue in local mode
        logger.warning("storage_unavailable", error=str(e), fallback="local_mode")
        return None, None
    return sheets_client, GoogleSheetsEntityStorage(sheets_client)


def create_app_components(
    use_storage: bool = True,
    storage: Optional[EntityStorageInterface] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    The store is returned unloaded; await ``components.store.load()``
    before reading.

    Args:
        use_storage: Whether to connect to Google Sheets.
                    Set to False for local mode.
        storage: Explicit backend, bypassing Google Sheets.

    Returns:
        The wired components
    """
    settings = get_settings().app
    sheets_client = None

    if storage is None and use_storage:
        sheets_client, storage = _connect_storage()

    store = EntityStore(storage=storage, settings=settings)
    return AppComponents(
        store=store,
        lookups=LookupService(store),
        settings=settings,
        sheets_client=sheets_client,
    )
