from datetime import UTC, datetime
from typing import Any

from google.oauth2.credentials import Credentials  # type: ignore[import-untyped]
from pydantic import Field, model_validator

from .base import BaseRelayModel

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class TokenSet(BaseRelayModel):
    """OAuth2 token set for the Google Sheets API."""

    access_token: str | None = Field(default=None, description="Access token")
    refresh_token: str | None = Field(default=None, description="Refresh token")
    expiry: datetime | None = Field(
        default=None, description="Access token expiration time"
    )
    scope: str | None = Field(default=None, description="Space separated scopes")
    token_type: str = Field(default="Bearer", description="Token type")

    @model_validator(mode="before")
    @classmethod
    def normalize_aliases(cls, data: Any) -> Any:
        """Accept token blobs written by the Node and google-auth clients."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "access_token" not in data and "token" in data:
            data["access_token"] = data.pop("token")
        try:
            if "expiry" not in data and data.get("expiry_date"):
                data["expiry"] = datetime.fromtimestamp(
                    int(data.pop("expiry_date")) / 1000, tz=UTC
                )
            if "scope" not in data and isinstance(data.get("scopes"), list):
                data["scope"] = " ".join(data.pop("scopes"))
        except (TypeError, OverflowError, OSError) as e:
            raise ValueError(f"malformed token blob: {e}") from e
        return data

    @model_validator(mode="after")
    def require_token(self) -> "TokenSet":
        if not self.access_token and not self.refresh_token:
            raise ValueError("token set has neither access_token nor refresh_token")
        return self

    @property
    def scopes(self) -> list[str] | None:
        return self.scope.split() if self.scope else None

    def to_credentials(
        self,
        client_id: str,
        client_secret: str,
        scopes: list[str] | None = None,
        token_uri: str = GOOGLE_TOKEN_URI,
    ) -> Credentials:
        """Build google-auth credentials from this token set."""
        expiry = self.expiry
        if expiry is not None and expiry.tzinfo is not None:
            # google-auth compares against naive UTC timestamps
            expiry = expiry.astimezone(UTC).replace(tzinfo=None)
        return Credentials(
            token=self.access_token,
            refresh_token=self.refresh_token,
            token_uri=token_uri,
            client_id=client_id,
            client_secret=client_secret,
            scopes=self.scopes or scopes,
            expiry=expiry,
        )

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> "TokenSet":
        """Create a :class:`TokenSet` from google-auth credentials."""
        expiry = credentials.expiry
        if expiry is not None and expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        scopes = credentials.scopes
        return cls(
            access_token=credentials.token,
            refresh_token=credentials.refresh_token,
            expiry=expiry,
            scope=" ".join(scopes) if scopes else None,
        )
