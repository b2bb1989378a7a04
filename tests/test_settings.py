"""Tests for configuration loading."""

import pytest

from expense_tracker.config import AppSettings, GoogleSheetsSettings, validate_all_settings
from expense_tracker.models.entities import Currency, PaymentStatus


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self, monkeypatch):
        """Test the documented defaults."""
        for name in ("DEFAULT_CURRENCY", "RECENT_EXPENSES_LIMIT", "SEED_ON_EMPTY"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings(_env_file=None)

        assert settings.default_currency == Currency.MAD
        assert settings.default_payment_status == PaymentStatus.DUE
        assert settings.recent_expenses_limit == 10
        assert settings.top_providers_limit == 5
        assert settings.seed_on_empty is True

    def test_env_override(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("DEFAULT_CURRENCY", "USD")
        monkeypatch.setenv("TOP_PROVIDERS_LIMIT", "3")

        settings = AppSettings(_env_file=None)
        assert settings.default_currency == Currency.USD
        assert settings.top_providers_limit == 3

    def test_invalid_log_level(self):
        """Test that an unknown log level is rejected."""
        with pytest.raises(ValueError):
            AppSettings(log_level="LOUD")


class TestGoogleSheetsSettings:
    """Tests for GoogleSheetsSettings."""

    def test_prefixed_env(self, monkeypatch, tmp_path):
        """Test loading with the GOOGLE_SHEETS_ prefix."""
        credentials = tmp_path / "credentials.json"
        credentials.write_text("{}")
        monkeypatch.setenv("GOOGLE_SHEETS_CREDENTIALS_PATH", str(credentials))
        monkeypatch.setenv("GOOGLE_SHEETS_SPREADSHEET_ID", "sheet-123")

        settings = GoogleSheetsSettings()
        assert settings.spreadsheet_id == "sheet-123"
        assert settings.expenses_sheet_name == "Expenses"

    def test_missing_sheets_config_reported(self, monkeypatch):
        """Test that validate_all_settings flags missing Sheets config."""
        monkeypatch.delenv("GOOGLE_SHEETS_CREDENTIALS_PATH", raising=False)
        monkeypatch.delenv("GOOGLE_SHEETS_SPREADSHEET_ID", raising=False)

        results = validate_all_settings()
        assert results["google_sheets"] is False
        assert "google_sheets_error" in results
        assert results["app"] is True
