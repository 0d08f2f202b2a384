"""
Newsletter signup endpoint.

Every step short-circuits with a JSON error; only a fully delivered
subscription answers ``{"ok": true}``.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from newsletter_site.config import Settings
from newsletter_site.dependencies import get_app_settings, get_email_provider
from newsletter_site.email.interface import EmailProvider
from newsletter_site.shared.exceptions import SubscriptionDeliveryError
from newsletter_site.shared.logging import get_logger
from newsletter_site.subscriptions.service import SubscriptionService
from newsletter_site.subscriptions.validation import coerce_email, is_valid_email

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["subscriptions"])

# An empty method set matches every verb, so non-POST requests get our own 405.
ANY_METHOD: list[str] = []


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _parse_body(body: bytes) -> Any:
    """Parse a JSON body; an empty body counts as ``{}``.

    Raises:
        ValueError: The body is not valid UTF-8 JSON.
        RecursionError: The body nests deeper than the decoder can follow.
    """
    if not body:
        return {}
    return json.loads(body)


@router.api_route("/subscribe", methods=ANY_METHOD, include_in_schema=False, operation_id="subscribe")
async def subscribe(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    provider: EmailProvider = Depends(get_email_provider),
) -> JSONResponse:
    if request.method != "POST":
        return _error(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed")

    if not settings.has_email_credentials:
        logger.error("Subscribe called without email provider credentials")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Missing RESEND_API_KEY")

    # Oversized bodies raise out of here (see BodyLimitMiddleware)
    body = await request.body()
    try:
        payload = _parse_body(body)
    except (ValueError, RecursionError):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid JSON")

    raw_email = payload.get("email") if isinstance(payload, dict) else None
    email = coerce_email(raw_email)
    if not is_valid_email(email):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid email")

    service = SubscriptionService(
        provider=provider,
        from_email=settings.from_email,
        owner_email=settings.owner_email,
    )
    try:
        await service.subscribe(email)
    except SubscriptionDeliveryError:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to send email")

    return JSONResponse(status_code=status.HTTP_200_OK, content={"ok": True})
