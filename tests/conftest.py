"""
Shared pytest configuration and fixtures for the test suite.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from receipt_relay import dependencies
from receipt_relay.integrations.google.sheets_client import SheetsClient
from receipt_relay.main import app
from receipt_relay.settings import Settings


def build_settings(**overrides) -> Settings:
    """Build settings isolated from the process environment and ``.env``."""
    values = {
        "veryfi_api_url": None,
        "veryfi_client_id": None,
        "veryfi_authorization": None,
        "spreadsheet_id": None,
        "google_oauth_client_id": None,
        "google_oauth_client_secret": None,
        "google_oauth_redirect": None,
        "google_oauth_tokens": None,
        "google_credentials": None,
        "base_url": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def make_settings(tmp_path):
    """Factory for settings that keep tokens and uploads under ``tmp_path``."""

    def factory(**overrides) -> Settings:
        overrides.setdefault("google_token_path", tmp_path / "google_tokens.json")
        overrides.setdefault("upload_dir", tmp_path / "uploads")
        return build_settings(**overrides)

    return factory


@pytest.fixture
def settings(tmp_path):
    """Settings with a temporary token file and upload directory."""
    return build_settings(
        google_token_path=tmp_path / "google_tokens.json",
        upload_dir=tmp_path / "uploads",
        spreadsheet_id="sheet-123",
    )


@pytest.fixture
def oauth_settings(tmp_path):
    """Settings with an OAuth client configured."""
    return build_settings(
        google_token_path=tmp_path / "google_tokens.json",
        upload_dir=tmp_path / "uploads",
        spreadsheet_id="sheet-123",
        google_oauth_client_id="client-id",
        google_oauth_client_secret="client-secret",
        base_url="http://relay.test",
    )


@pytest.fixture
def mock_sheets_client():
    """Mock authorized Sheets client."""
    client = MagicMock(spec=SheetsClient)
    client.append_row = AsyncMock(
        return_value={
            "spreadsheetId": "sheet-123",
            "updatedRange": "Sheet1!A2:E2",
            "updatedRows": 1,
            "updatedColumns": 5,
            "updatedCells": 5,
        }
    )
    return client


@pytest.fixture(autouse=True)
def reset_dependencies():
    """Clear cached services and dependency overrides between tests."""
    yield
    app.dependency_overrides.clear()
    dependencies.get_credential_resolver.cache_clear()
    dependencies.get_oauth_flow.cache_clear()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "google: marks tests that interact with Google APIs"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        if "google" in str(item.fspath):
            item.add_marker(pytest.mark.google)
