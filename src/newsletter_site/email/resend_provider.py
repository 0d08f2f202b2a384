"""
Resend transactional email provider.

Uses httpx for HTTP requests. One POST per message, no retries, and the
transport's default timeout.
"""

from __future__ import annotations

import httpx

from newsletter_site.email.interface import EmailMessage, EmailProvider, EmailProviderError
from newsletter_site.shared.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ERROR_DETAIL = "Email provider error"


class ResendEmailProvider(EmailProvider):
    """Send email through the Resend HTTP API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.resend.com/emails",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._http_client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient()
        return self._http_client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    async def aclose(self) -> None:
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def send(self, message: EmailMessage) -> None:
        client = self._get_client()

        try:
            response = await client.post(
                self._api_url,
                json=message.to_payload(),
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise EmailProviderError(f"HTTP error: {e}") from e

        if not response.is_success:
            detail = response.text
            raise EmailProviderError(detail or DEFAULT_ERROR_DETAIL, status_code=response.status_code)

        logger.debug(
            "Email accepted by provider",
            extra={"status_code": response.status_code, "subject": message.subject},
        )
