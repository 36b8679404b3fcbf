"""Notification strategies."""

from rundeck_pushover.notifications.strategies.base import (
    BaseNotificationStrategy,
)
from rundeck_pushover.notifications.strategies.console import ConsoleNotifier
from rundeck_pushover.notifications.strategies.pushover import PushoverNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "PushoverNotifier",
]
