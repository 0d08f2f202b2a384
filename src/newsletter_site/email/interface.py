"""
Email provider interface and data types.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EmailMessage:
    """Transactional email to be sent through a provider."""

    from_email: str
    to: tuple[str, ...]
    subject: str
    text: str
    html: str

    def to_payload(self) -> dict[str, Any]:
        """Provider wire format."""
        return {
            "from": self.from_email,
            "to": list(self.to),
            "subject": self.subject,
            "text": self.text,
            "html": self.html,
        }


class EmailProviderError(Exception):
    """Raised when the provider rejects a message or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class EmailProvider(ABC):
    """
    Abstract interface for email providers.

    Implementations send exactly one message per ``send`` call and never
    retry.
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """
        Send an email message.

        Args:
            message: The email message to send.

        Raises:
            EmailProviderError: The provider did not accept the message.
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the provider."""
        return None
