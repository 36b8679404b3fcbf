"""Custom exceptions for event normalization, configuration and delivery."""

from __future__ import annotations


class NotificationError(Exception):
    """Base exception for notification-related errors."""

    pass


class ConfigurationError(NotificationError):
    """Raised when a required credential is missing or blank."""

    def __init__(self, *keys: str) -> None:
        self.keys = keys
        super().__init__(f"{' and '.join(keys)} must be set")


class MissingRequiredField(NotificationError):
    """Raised when a required execution event field is absent or malformed."""

    def __init__(self, field: str) -> None:
        super().__init__(field)
        self.field = field

    def __str__(self) -> str:
        return f"Missing required field: {self.field}"


class DeliveryFailure(NotificationError):
    """Raised when the push transport could not deliver a message."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        errors: list[str] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []
        self.cause = cause
