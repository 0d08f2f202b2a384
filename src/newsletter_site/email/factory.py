"""
Email provider factory.

Single source of truth for provider configuration is ``Settings``; never read
raw environment variables here.
"""

from __future__ import annotations

import httpx

from newsletter_site.config import EmailProviderType, Settings
from newsletter_site.email.interface import EmailProvider
from newsletter_site.email.mock_provider import MockEmailProvider
from newsletter_site.email.resend_provider import ResendEmailProvider
from newsletter_site.shared.logging import get_logger

logger = get_logger(__name__)


def _mask(s: str | None, keep: int = 6) -> str:
    if not s:
        return ""
    if len(s) <= keep:
        return "*" * len(s)
    return f"{s[:keep]}***"


def create_email_provider(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> EmailProvider:
    """Create the email provider selected by ``settings.email_provider``."""
    logger.info(
        "Email provider config resolved",
        extra={
            "email_provider": settings.email_provider.value,
            "resend_api_key": _mask(settings.resend_api_key),
            "resend_api_url": settings.resend_api_url,
            "from_email": settings.from_email,
            "owner_email": settings.owner_email,
        },
    )

    if settings.email_provider == EmailProviderType.RESEND:
        return ResendEmailProvider(
            api_key=settings.resend_api_key or "",
            api_url=settings.resend_api_url,
            http_client=http_client,
        )

    if settings.email_provider == EmailProviderType.MOCK:
        return MockEmailProvider()

    raise ValueError(f"Unsupported email provider: {settings.email_provider}")
