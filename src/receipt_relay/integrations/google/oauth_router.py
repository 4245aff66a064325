"""
FastAPI router for Google OAuth2 endpoints.
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, RedirectResponse

from ...dependencies import get_app_settings, get_credential_resolver, get_oauth_flow
from ...exceptions import RelayError
from ...settings import Settings
from .credentials import CredentialResolver
from .oauth_flow import OAuthFlow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["google"])


@router.get("/api/auth")
async def begin_google_auth(flow: OAuthFlow = Depends(get_oauth_flow)):
    """
    Start Google OAuth2 flow.

    Redirects the browser to Google's consent screen.
    """
    auth_url = flow.authorization_url()
    return RedirectResponse(url=auth_url, status_code=302)


@router.get("/oauth2callback")
async def google_oauth_callback(
    code: str | None = Query(None, description="Authorization code from Google"),
    error: str | None = Query(None, description="OAuth error from Google"),
    flow: OAuthFlow = Depends(get_oauth_flow),
    settings: Settings = Depends(get_app_settings),
):
    """
    Handle Google OAuth2 callback.

    This endpoint receives the authorization code from Google after user consent.
    """
    if error:
        flow.fail(f"OAuth error from Google: {error}")
        return PlainTextResponse("Authentication failed", status_code=500)

    if not code:
        return PlainTextResponse("Missing code", status_code=400)

    try:
        await flow.exchange_code(code)
    except Exception as e:
        logger.error(f"OAuth callback error: {e}")
        return PlainTextResponse("Authentication failed", status_code=500)

    logger.info("Successfully authenticated with Google")
    return RedirectResponse(url=settings.auth_success_url, status_code=302)


@router.get("/api/auth-status")
async def check_auth_status(
    resolver: CredentialResolver = Depends(get_credential_resolver),
):
    """Check whether an authorized Sheets client can be obtained."""
    try:
        await resolver.get_client()
    except RelayError as e:
        return {"authenticated": False, "error": str(e)}
    return {"authenticated": True}
