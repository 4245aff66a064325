import logging
from typing import Any

from ..exceptions import ConfigurationError, ValidationError
from ..integrations.google.credentials import CredentialResolver
from ..models.expense import ExpenseRecord
from ..settings import Settings

logger = logging.getLogger(__name__)


class SheetAppendService:
    """Validate expense records and append them to the configured sheet."""

    def __init__(self, settings: Settings, resolver: CredentialResolver):
        self.spreadsheet_id = settings.spreadsheet_id
        self.sheet_range = settings.sheet_range
        self.resolver = resolver

    async def append(self, record: ExpenseRecord) -> dict[str, Any]:
        """Append ``record`` as one row and return the provider's update metadata."""
        if record.missing_fields:
            logger.info(f"Rejected expense, missing {record.missing_fields}")
            raise ValidationError("Missing required fields")

        if not self.spreadsheet_id:
            raise ConfigurationError("SPREADSHEET_ID is not configured")

        client = await self.resolver.get_client()
        return await client.append_row(
            self.spreadsheet_id, self.sheet_range, record.to_row()
        )
