"""
In-memory email provider for local development and tests.
"""

import logging

from newsletter_site.email.interface import EmailMessage, EmailProvider, EmailProviderError

logger = logging.getLogger(__name__)


class MockEmailProvider(EmailProvider):
    """Records messages instead of sending them."""

    def __init__(self) -> None:
        self._messages: list[EmailMessage] = []
        self._attempts: int = 0
        self._fail_on_attempt: int | None = None
        self._fail_error: str = "Mock failure"

    def reset(self) -> None:
        self._messages.clear()
        self._attempts = 0
        self._fail_on_attempt = None
        self._fail_error = "Mock failure"

    def configure_failure(
        self,
        on_attempt: int | None = 1,
        error_message: str = "Mock failure",
    ) -> None:
        """Fail the n-th send (1-based). ``None`` disables failures."""
        self._fail_on_attempt = on_attempt
        self._fail_error = error_message

    @property
    def messages(self) -> list[EmailMessage]:
        return self._messages.copy()

    @property
    def attempts(self) -> int:
        return self._attempts

    async def send(self, message: EmailMessage) -> None:
        self._attempts += 1
        if self._fail_on_attempt is not None and self._attempts == self._fail_on_attempt:
            raise EmailProviderError(self._fail_error, status_code=500)

        self._messages.append(message)
        logger.info(
            "Mock email recorded",
            extra={"to": list(message.to), "subject": message.subject},
        )
