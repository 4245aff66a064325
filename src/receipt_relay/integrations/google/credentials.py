"""
Credential resolution for the Google Sheets API.

Chooses between a stored OAuth2 token set and a service-account key, builds
an authorized :class:`SheetsClient` and caches it for the life of the process.
First-time resolution is serialized so concurrent requests authorize once.
"""

import asyncio
import json
import logging

from google.auth import crypt  # type: ignore[import-untyped]
from google.auth.exceptions import GoogleAuthError  # type: ignore[import-untyped]
from google.auth.transport.requests import Request  # type: ignore[import-untyped]
from google.oauth2 import service_account  # type: ignore[import-untyped]
from google.oauth2.credentials import Credentials  # type: ignore[import-untyped]

from ...exceptions import AuthProviderError, ConfigurationError, Unauthenticated
from ...models.token import GOOGLE_TOKEN_URI, TokenSet
from ...settings import Settings
from .sheets_client import SheetsClient
from .token_store import TokenStore

logger = logging.getLogger(__name__)


def normalize_private_key(private_key: str) -> str:
    """Turn literal ``\\n`` sequences from env-provided keys into newlines."""
    return private_key.replace("\\n", "\n")


class CredentialResolver:
    """
    Process-wide cache of the authorized Sheets client.

    The cached client is reused for every request until the process restarts
    or a completed OAuth flow installs new credentials.
    """

    def __init__(self, settings: Settings, token_store: TokenStore | None = None):
        self.settings = settings
        self.token_store = token_store or TokenStore.from_settings(settings)
        self.scopes = settings.google_sheets_scopes

        self._client: SheetsClient | None = None
        self._lock = asyncio.Lock()

    @property
    def authenticated(self) -> bool:
        return self._client is not None

    async def get_client(self) -> SheetsClient:
        """
        Return the cached client, resolving credentials on first use.

        Raises:
            Unauthenticated: OAuth is configured but no tokens are stored
            ConfigurationError: Service-account configuration is missing or invalid
            AuthProviderError: Service-account authorization failed
        """
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is None:
                if self.settings.oauth_configured:
                    self._client = await self._resolve_oauth()
                else:
                    self._client = await self._resolve_service_account()
            return self._client

    async def install(self, credentials: Credentials) -> SheetsClient:
        """Replace the cached client with one using freshly issued credentials."""
        async with self._lock:
            self._client = SheetsClient(credentials, auth_kind="oauth")
            logger.info("Installed Google OAuth credentials")
            return self._client

    async def _resolve_oauth(self) -> SheetsClient:
        tokens = self.token_store.load()
        if tokens is None:
            raise Unauthenticated(
                f"No OAuth tokens stored (tried: {self.token_store.describe()}). "
                "Authenticate at /api/auth"
            )

        credentials = tokens.to_credentials(
            client_id=self.settings.google_oauth_client_id,
            client_secret=self.settings.google_oauth_client_secret,
            scopes=self.scopes,
        )

        if not credentials.valid and credentials.refresh_token:
            logger.info("Refreshing Google OAuth access token")
            try:
                await asyncio.to_thread(credentials.refresh, Request())
            except GoogleAuthError as e:
                # A stale token may still be accepted; the Sheets call decides
                logger.warning(f"OAuth token refresh warning: {e}")
            else:
                self.token_store.save(TokenSet.from_credentials(credentials))

        logger.info("Google Sheets client ready (OAuth)")
        return SheetsClient(credentials, auth_kind="oauth")

    async def _resolve_service_account(self) -> SheetsClient:
        raw = self.settings.google_credentials
        if not raw:
            raise ConfigurationError(
                "No OAuth client or GOOGLE_CREDENTIALS provided"
            )

        try:
            info = json.loads(raw)
        except ValueError as e:
            raise ConfigurationError(f"Invalid GOOGLE_CREDENTIALS JSON: {e}") from e

        if (
            not isinstance(info, dict)
            or not info.get("client_email")
            or not info.get("private_key")
        ):
            raise ConfigurationError(
                "GOOGLE_CREDENTIALS must include client_email & private_key"
            )

        try:
            signer = crypt.RSASigner.from_string(
                normalize_private_key(info["private_key"]),
                key_id=info.get("private_key_id"),
            )
        except (ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Invalid private_key in GOOGLE_CREDENTIALS: {e}"
            ) from e

        credentials = service_account.Credentials(
            signer,
            info["client_email"],
            info.get("token_uri") or GOOGLE_TOKEN_URI,
            scopes=self.scopes,
        )

        try:
            await asyncio.to_thread(credentials.refresh, Request())
        except GoogleAuthError as e:
            logger.error(f"Service account authorization failed: {e}")
            raise AuthProviderError(
                f"Service account authorization failed: {e}"
            ) from e

        logger.info(
            f"Google Sheets client ready (service account {info['client_email']})"
        )
        return SheetsClient(credentials, auth_kind="service_account")
