"""
Process-wide service instances shared by the routers.

Routers receive these through ``Depends`` so tests can swap them with
``app.dependency_overrides``.
"""

from functools import lru_cache

from .integrations.google.credentials import CredentialResolver
from .integrations.google.oauth_flow import OAuthFlow
from .integrations.veryfi.ocr_client import OcrClient
from .settings import Settings, get_settings


@lru_cache
def get_app_settings() -> Settings:
    return get_settings()


@lru_cache
def get_credential_resolver() -> CredentialResolver:
    return CredentialResolver(get_app_settings())


@lru_cache
def get_oauth_flow() -> OAuthFlow:
    return OAuthFlow(get_app_settings(), get_credential_resolver())


def get_ocr_client() -> OcrClient:
    return OcrClient.from_settings(get_app_settings())
