"""Exceptions subpackage."""

from rundeck_pushover.exceptions.exceptions import (
    ConfigurationError,
    DeliveryFailure,
    MissingRequiredField,
    NotificationError,
)

__all__ = [
    "ConfigurationError",
    "DeliveryFailure",
    "MissingRequiredField",
    "NotificationError",
]
