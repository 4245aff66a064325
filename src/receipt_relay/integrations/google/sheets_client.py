"""
Google Sheets client used as the authorized client handle.
"""

import asyncio
import logging
from typing import Any

from google.auth.credentials import Credentials  # type: ignore[import-untyped]
from googleapiclient.discovery import build  # type: ignore[import-untyped]
from googleapiclient.errors import HttpError  # type: ignore[import-untyped]

from ...exceptions import UpstreamProviderError

logger = logging.getLogger(__name__)


class SheetsClient:
    """Thin wrapper around the Sheets v4 ``spreadsheets.values`` resource."""

    def __init__(self, credentials: Credentials, auth_kind: str = "oauth"):
        self.credentials = credentials
        self.auth_kind = auth_kind
        self._service: Any = None

    def _get_service(self) -> Any:
        if self._service is None:
            self._service = build(
                "sheets", "v4", credentials=self.credentials, cache_discovery=False
            )
        return self._service

    async def append_row(
        self, spreadsheet_id: str, sheet_range: str, row: list[str]
    ) -> dict[str, Any]:
        """
        Append a single row without formula evaluation or type coercion.

        Args:
            spreadsheet_id: Target spreadsheet
            sheet_range: A1 range the row is appended after, e.g. ``Sheet1!A:E``
            row: Cell values in column order

        Returns:
            The ``updates`` object of the append response

        Raises:
            UpstreamProviderError: If the Sheets API call fails
        """
        try:
            service = self._get_service()
            request = (
                service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=spreadsheet_id,
                    range=sheet_range,
                    valueInputOption="RAW",
                    body={"values": [row]},
                )
            )
            result = await asyncio.to_thread(request.execute)
        except HttpError as e:
            error_msg = f"Sheets API error: {e}"
            logger.error(error_msg)
            raise UpstreamProviderError(error_msg) from e
        except Exception as e:
            error_msg = f"Failed to append row: {e}"
            logger.error(error_msg)
            raise UpstreamProviderError(error_msg) from e

        updates = result.get("updates", {})
        logger.info(
            f"Appended row to {updates.get('updatedRange', sheet_range)} "
            f"({updates.get('updatedCells', 0)} cells)"
        )
        return updates
