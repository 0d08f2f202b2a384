"""
Subscription delivery: welcome email first, then the owner notice.
"""

from __future__ import annotations

from newsletter_site.email.interface import EmailProvider, EmailProviderError
from newsletter_site.shared.exceptions import SubscriptionDeliveryError
from newsletter_site.shared.logging import get_logger
from newsletter_site.subscriptions.templates import build_owner_notice, build_welcome_email

logger = get_logger(__name__)


class SubscriptionService:
    """Send the two signup notifications for a validated address.

    The sends are strictly sequential and all-or-nothing from the caller's
    point of view: a failure of either raises ``SubscriptionDeliveryError``
    without saying which one failed.
    """

    def __init__(self, provider: EmailProvider, from_email: str, owner_email: str) -> None:
        self._provider = provider
        self._from_email = from_email
        self._owner_email = owner_email

    async def subscribe(self, email: str) -> None:
        messages = [
            ("welcome", build_welcome_email(self._from_email, email)),
            ("owner_notice", build_owner_notice(self._from_email, self._owner_email, email)),
        ]

        for kind, message in messages:
            try:
                await self._provider.send(message)
            except EmailProviderError as e:
                logger.warning(
                    "Email provider rejected message",
                    extra={
                        "message_kind": kind,
                        "provider_status": e.status_code,
                        "provider_detail": str(e),
                    },
                )
                raise SubscriptionDeliveryError(details={"message_kind": kind}) from e

        logger.info("Subscription notifications sent")
