"""Rundeck execution notifications pushed through Pushover."""

from rundeck_pushover.config import get_settings
from rundeck_pushover.DI import Container
from rundeck_pushover.events import ExecutionEvent, normalize
from rundeck_pushover.notifications import (
    ExecutionEventStyler,
    MessagePriority,
    PushoverNotificationPlugin,
    PushoverNotifier,
    RenderedMessage,
)

__version__ = "0.1.0"
__all__ = [
    "Container",
    "ExecutionEvent",
    "ExecutionEventStyler",
    "MessagePriority",
    "PushoverNotificationPlugin",
    "PushoverNotifier",
    "RenderedMessage",
    "get_settings",
    "normalize",
]
