"""Tests for the Google Sheets client."""

from unittest.mock import MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

from receipt_relay.exceptions import UpstreamProviderError
from receipt_relay.integrations.google.sheets_client import SheetsClient


@pytest.fixture
def mock_service():
    service = MagicMock()
    service.spreadsheets().values().append().execute.return_value = {
        "spreadsheetId": "sheet-123",
        "updates": {
            "updatedRange": "Sheet1!A2:E2",
            "updatedRows": 1,
            "updatedCells": 5,
        },
    }
    with patch(
        "receipt_relay.integrations.google.sheets_client.build",
        return_value=service,
    ) as build:
        yield build, service


@pytest.mark.asyncio
async def test_append_row_raw(mock_service):
    build, service = mock_service
    credentials = MagicMock()
    client = SheetsClient(credentials)
    row = ["2024-01-01", "Acme", "12.5", "Office", "pens"]

    updates = await client.append_row("sheet-123", "Sheet1!A:E", row)

    assert updates == {
        "updatedRange": "Sheet1!A2:E2",
        "updatedRows": 1,
        "updatedCells": 5,
    }
    build.assert_called_once_with(
        "sheets", "v4", credentials=credentials, cache_discovery=False
    )
    service.spreadsheets().values().append.assert_called_with(
        spreadsheetId="sheet-123",
        range="Sheet1!A:E",
        valueInputOption="RAW",
        body={"values": [row]},
    )


@pytest.mark.asyncio
async def test_service_is_built_once(mock_service):
    build, _ = mock_service
    client = SheetsClient(MagicMock())

    await client.append_row("s", "Sheet1!A:E", ["a"])
    await client.append_row("s", "Sheet1!A:E", ["b"])

    build.assert_called_once()


@pytest.mark.asyncio
async def test_http_error_is_upstream_error(mock_service):
    _, service = mock_service
    resp = MagicMock(status=403, reason="Forbidden")
    service.spreadsheets().values().append().execute.side_effect = HttpError(
        resp, b'{"error": {"message": "The caller does not have permission"}}'
    )
    client = SheetsClient(MagicMock())

    with pytest.raises(UpstreamProviderError, match="Sheets API error"):
        await client.append_row("s", "Sheet1!A:E", ["a"])


@pytest.mark.asyncio
async def test_unexpected_error_is_upstream_error(mock_service):
    _, service = mock_service
    service.spreadsheets().values().append().execute.side_effect = OSError("reset")
    client = SheetsClient(MagicMock())

    with pytest.raises(UpstreamProviderError, match="reset"):
        await client.append_row("s", "Sheet1!A:E", ["a"])
