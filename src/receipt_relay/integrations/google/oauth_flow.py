"""
Google OAuth2 web flow for user-delegated Sheets access.

The flow issues the consent URL, exchanges the callback code for tokens,
persists them and hands the credentials to the :class:`CredentialResolver`.
"""

import asyncio
import logging
from enum import StrEnum

from google_auth_oauthlib.flow import Flow  # type: ignore[import-untyped]

from ...exceptions import AuthProviderError, ConfigurationError
from ...models.token import GOOGLE_TOKEN_URI, TokenSet
from ...settings import Settings
from .credentials import CredentialResolver
from .token_store import TokenStore

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"


class OAuthFlowState(StrEnum):
    NOT_STARTED = "not_started"
    AWAITING_CALLBACK = "awaiting_callback"
    AUTHORIZED = "authorized"
    FAILED = "failed"


class OAuthFlow:
    """Web-server OAuth2 flow against Google's consent screen."""

    def __init__(
        self,
        settings: Settings,
        resolver: CredentialResolver,
        token_store: TokenStore | None = None,
    ):
        self.settings = settings
        self.resolver = resolver
        self.token_store = token_store or resolver.token_store
        self.scopes = settings.google_sheets_scopes
        self.redirect_uri = settings.oauth_redirect_uri
        self.state = OAuthFlowState.NOT_STARTED

    def _build_flow(self) -> Flow:
        if not self.settings.oauth_configured:
            logger.error(
                "Missing GOOGLE_OAUTH_CLIENT_ID or GOOGLE_OAUTH_CLIENT_SECRET"
            )
            raise ConfigurationError("OAuth client not configured")

        client_config = {
            "web": {
                "client_id": self.settings.google_oauth_client_id,
                "client_secret": self.settings.google_oauth_client_secret,
                "auth_uri": GOOGLE_AUTH_URI,
                "token_uri": GOOGLE_TOKEN_URI,
                "redirect_uris": [self.redirect_uri],
            }
        }
        # No PKCE verifier: the callback may be served by a fresh Flow instance
        return Flow.from_client_config(
            client_config,
            scopes=self.scopes,
            redirect_uri=self.redirect_uri,
            autogenerate_code_verifier=False,
        )

    def authorization_url(self) -> str:
        """
        Build the consent URL requesting offline access.

        Raises:
            ConfigurationError: If the OAuth client id or secret is missing
        """
        flow = self._build_flow()
        auth_url, _ = flow.authorization_url(
            access_type="offline",
            prompt="consent",  # Force consent screen to get refresh token
        )
        self.state = OAuthFlowState.AWAITING_CALLBACK
        return auth_url

    async def exchange_code(self, code: str) -> TokenSet:
        """
        Exchange an authorization code for tokens and install them.

        Token persistence is best-effort; the credentials are installed on the
        resolver even if the token file cannot be written.

        Raises:
            ConfigurationError: If the OAuth client id or secret is missing
            AuthProviderError: If the token exchange fails
        """
        try:
            flow = self._build_flow()
            await asyncio.to_thread(flow.fetch_token, code=code)
        except ConfigurationError:
            self.state = OAuthFlowState.FAILED
            raise
        except Exception as e:
            self.state = OAuthFlowState.FAILED
            logger.error(f"Failed to exchange code: {e}")
            raise AuthProviderError(f"Failed to exchange code: {e}") from e

        credentials = flow.credentials
        logger.info(
            f"Credentials after exchange: valid={credentials.valid}, "
            f"has_refresh_token={bool(credentials.refresh_token)}"
        )

        tokens = TokenSet.from_credentials(credentials)
        self.token_store.save(tokens)
        await self.resolver.install(credentials)
        self.state = OAuthFlowState.AUTHORIZED
        return tokens

    def fail(self, reason: str) -> None:
        """Mark the flow failed, e.g. when the provider reports an error."""
        logger.error(f"OAuth flow failed: {reason}")
        self.state = OAuthFlowState.FAILED
