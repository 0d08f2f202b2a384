"""
Custom exception classes for the application.
"""

from typing import Any


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            message: Human-readable error message.
            code: Machine-readable error code.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class PayloadTooLargeError(AppException):
    """Raised when a request body exceeds the configured cap."""

    def __init__(self, limit: int, received: int) -> None:
        super().__init__(
            "Payload too large",
            "PAYLOAD_TOO_LARGE",
            {"limit": limit, "received": received},
        )


class ForbiddenPathError(AppException):
    """Raised when a static path resolves outside the content root."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, "FORBIDDEN_PATH")


class StaticFileNotFoundError(AppException):
    """Raised when a static path is missing or is not a regular file."""

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message, "NOT_FOUND")


class SubscriptionDeliveryError(AppException):
    """Raised when either subscription email could not be delivered."""

    def __init__(
        self,
        message: str = "Failed to send email",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "DELIVERY_FAILED", details)
