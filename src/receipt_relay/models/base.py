"""
Base model for receipt relay data structures.

Payloads come from HTTP clients and from Google token endpoints, so models
ignore unknown fields instead of rejecting them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class BaseRelayModel(BaseModel):
    """Base model for all relay data structures."""

    model_config = ConfigDict(
        # Enable validation on assignment
        validate_assignment=True,
        # Allow extra fields from external APIs and clients
        extra="ignore",
        # Validate default values
        validate_default=True,
        populate_by_name=True,
    )

    def model_dump_json_safe(self) -> dict[str, Any]:
        """Serialize to a JSON compatible dict without ``None`` values."""
        return self.model_dump(mode="json", exclude_none=True)
