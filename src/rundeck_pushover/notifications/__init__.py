"""Notification subsystem."""

from rundeck_pushover.notifications.notification_manager import (
    PushoverNotificationPlugin,
)
from rundeck_pushover.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    PushoverNotifier,
)
from rundeck_pushover.notifications.stylers.execution_styler import ExecutionEventStyler
from rundeck_pushover.notifications.types import (
    MessagePriority,
    NotificationStyler,
    RenderedMessage,
)

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "ExecutionEventStyler",
    "MessagePriority",
    "NotificationStyler",
    "PushoverNotificationPlugin",
    "PushoverNotifier",
    "RenderedMessage",
]
