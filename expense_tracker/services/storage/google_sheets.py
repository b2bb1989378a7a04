"""
Google Sheets Storage Implementation

Google Sheets is the hosted backend for the tracker because:
1. The partners can view and export the books directly in Sheets
2. No database setup required
3. Built-in backup (Google's infrastructure)

TRADEOFFS:
- Not suitable for high-volume data (fine for one organization)
- No transactions (the entity store orders its calls instead)
- No server-side queries (aggregation happens in Python)

Each collection lives in its own worksheet; the first row holds the
camelCase column names and every following row is one entity.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

import gspread
from google.oauth2.service_account import Credentials
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from expense_tracker.config import GoogleSheetsSettings, get_settings
from expense_tracker.logger import get_logger
from expense_tracker.services.storage.interface import (
    Collection,
    ConnectionError,
    CredentialsNotFoundError,
    Entity,
    EntityStorageInterface,
    NotFoundError,
    StorageError,
)

logger = get_logger(__name__)


# Column layout per worksheet. The id is always the first column.
EXPENSE_COLUMNS = [
    "id",
    "date",
    "month",
    "year",
    "categoryId",
    "isFixedCharge",
    "amount",
    "currency",
    "paidByPartnerId",
    "description",
    "provider",
    "itemCount",
    "paymentMethod",
    "notes",
    "paymentStatus",
    "entryTimestamp",
]

PARTNER_COLUMNS = [
    "id",
    "name",
    "email",
    "role",
]

CATEGORY_COLUMNS = [
    "id",
    "name",
    "defaultIsFixed",
]

COLUMNS: dict[Collection, list[str]] = {
    Collection.EXPENSES: EXPENSE_COLUMNS,
    Collection.PARTNERS: PARTNER_COLUMNS,
    Collection.CATEGORIES: CATEGORY_COLUMNS,
}


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and worksheet creation. Only connecting is
    retried; reads and writes are single attempts.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        retry=retry_if_not_exception_type(CredentialsNotFoundError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication. Transient
        failures are retried here, once per client; a missing credentials
        file fails immediately.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise CredentialsNotFoundError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
            except gspread.exceptions.APIError as e:
                raise ConnectionError(f"Failed to open spreadsheet: {e}")
        return self._spreadsheet

    def sheet_name(self, collection: Collection) -> str:
        return {
            Collection.EXPENSES: self._settings.expenses_sheet_name,
            Collection.PARTNERS: self._settings.partners_sheet_name,
            Collection.CATEGORIES: self._settings.categories_sheet_name,
        }[collection]

    def get_sheet(self, collection: Collection) -> gspread.Worksheet:
        """Get or create the worksheet backing a collection."""
        spreadsheet = self.get_spreadsheet()
        title = self.sheet_name(collection)
        try:
            sheet = spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            columns = COLUMNS[collection]
            sheet = spreadsheet.add_worksheet(
                title=title,
                rows=1000,
                cols=len(columns),
            )
            sheet.append_row(columns)
            logger.info("worksheet_created", title=title)
        return sheet


def _to_cell(value) -> str:
    """Render one model value as sheet text. None becomes an empty cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return str(value)


def entity_to_row(collection: Collection, entity: Entity) -> list[str]:
    """Convert an entity to a spreadsheet row in column order."""
    data = entity.model_dump(by_alias=True)
    return [_to_cell(data.get(column)) for column in COLUMNS[collection]]


def row_to_entity(collection: Collection, header: list[str], row: list[str]) -> Entity:
    """
    Convert a spreadsheet row to an entity.

    Empty cells are treated as absent so model defaults apply. Derived
    columns (month, year) are ignored and recomputed from the date.
    """
    data = {
        column: value
        for column, value in zip(header, row)
        if value != ""
    }
    return collection.model.model_validate(data)


class GoogleSheetsEntityStorage(EntityStorageInterface):
    """
    Google Sheets implementation of the storage primitives.

    Rows are located by scanning the id column; each write touches a
    single row in one API call.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _row_index(self, sheet: gspread.Worksheet, entity_id: str) -> Optional[int]:
        """1-based sheet row of an entity, or None."""
        ids = sheet.col_values(1)
        for idx, value in enumerate(ids[1:], start=2):  # Row 1 is the header
            if value == entity_id:
                return idx
        return None

    async def select_all(self, collection: Collection) -> list[Entity]:
        try:
            sheet = self._client.get_sheet(collection)
            all_rows = sheet.get_all_values()
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to read {collection.value}: {e}")

        if not all_rows:
            return []

        header, body = all_rows[0], all_rows[1:]
        entities = []
        for row in body:
            if not row or not row[0]:  # Skip empty rows
                continue
            try:
                entities.append(row_to_entity(collection, header, row))
            except ValidationError as e:
                logger.warning(
                    "malformed_row_skipped",
                    collection=collection.value,
                    entity_id=row[0],
                    error=str(e),
                )
        return entities

    async def insert_one(self, collection: Collection, entity: Entity) -> Entity:
        try:
            sheet = self._client.get_sheet(collection)
            sheet.append_row(entity_to_row(collection, entity), value_input_option="RAW")
            return entity
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to insert into {collection.value}: {e}")

    async def update_by_id(self, collection: Collection, entity: Entity) -> Entity:
        try:
            sheet = self._client.get_sheet(collection)
            idx = self._row_index(sheet, entity.id)
            if idx is None:
                raise NotFoundError(f"{collection.value} has no entity {entity.id}")
            sheet.update(
                range_name=f"A{idx}",
                values=[entity_to_row(collection, entity)],
                value_input_option="RAW",
            )
            return entity
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to update {collection.value}: {e}")

    async def delete_by_id(self, collection: Collection, entity_id: str) -> bool:
        try:
            sheet = self._client.get_sheet(collection)
            idx = self._row_index(sheet, entity_id)
            if idx is None:
                return False
            sheet.delete_rows(idx)
            return True
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to delete from {collection.value}: {e}")
