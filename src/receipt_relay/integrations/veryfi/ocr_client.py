import logging
from pathlib import Path
from typing import Any

import httpx

from ...exceptions import (
    ConfigurationError,
    InvalidUpstreamResponse,
    UpstreamProviderError,
)
from ...settings import Settings

logger = logging.getLogger(__name__)


def discard_upload(path: Path) -> None:
    """Delete a spooled upload; failures are logged and ignored."""
    try:
        path.unlink()
    except OSError as e:
        logger.warning(f"Failed to delete temporary upload {path}: {e}")


class OcrClient:
    """Relays receipt documents to a Veryfi-style OCR endpoint."""

    def __init__(
        self,
        api_url: str | None,
        client_id: str | None = None,
        authorization: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url
        self.client_id = client_id
        self.authorization = authorization
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "OcrClient":
        return cls(
            api_url=settings.veryfi_api_url,
            client_id=settings.veryfi_client_id,
            authorization=settings.veryfi_authorization,
            timeout=settings.ocr_timeout_seconds,
        )

    @property
    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.client_id:
            headers["CLIENT-ID"] = self.client_id
        if self.authorization:
            headers["AUTHORIZATION"] = self.authorization
        return headers

    def _client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {"transport": self._transport}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        return httpx.AsyncClient(**kwargs)

    async def _post(
        self, path: Path, filename: str, content_type: str
    ) -> httpx.Response:
        if not self.api_url:
            raise ConfigurationError("VERYFI_API_URL is not configured")
        with path.open("rb") as fh:
            async with self._client() as client:
                return await client.post(
                    self.api_url,
                    headers=self.headers,
                    files={"file": (filename, fh, content_type)},
                )

    async def relay(
        self,
        path: Path,
        filename: str = "upload",
        content_type: str = "application/octet-stream",
    ) -> Any:
        """
        Send a spooled upload to the OCR provider and return its JSON body.

        The file at ``path`` is deleted once the provider call returns or
        fails, before the response is parsed.

        Raises:
            ConfigurationError: If no provider URL is configured
            UpstreamProviderError: On transport-level failure
            InvalidUpstreamResponse: If the provider body is not JSON
        """
        try:
            response = await self._post(path, filename, content_type)
        except httpx.HTTPError as e:
            logger.error(f"OCR provider request failed: {e}")
            raise UpstreamProviderError(str(e) or type(e).__name__) from e
        finally:
            discard_upload(path)

        if response.is_error:
            logger.warning(
                f"OCR provider returned {response.status_code} for {filename}"
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid OCR provider response: {e}")
            raise InvalidUpstreamResponse("Invalid OCR provider response") from e
