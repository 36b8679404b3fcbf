"""Notification message types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from rundeck_pushover.events.execution import ExecutionEvent


class MessagePriority(Enum):
    """Pushover message priority (values are the API integers)."""

    NORMAL = 0
    HIGH = 1


@dataclass(frozen=True)
class RenderedMessage:
    """Title, body and priority ready to hand to a transport."""

    title: str
    body: str
    priority: MessagePriority
    url: str
    url_title: Optional[str] = None


class NotificationStyler(Protocol):
    """Render an execution event into a message for delivery."""

    def render(self, trigger: Optional[str], event: ExecutionEvent) -> RenderedMessage:
        """Return the rendered message for the given trigger and event.

        Args:
            trigger: Rundeck trigger name (start, success, failure, ...).
            event: Normalized execution event.
        """
        ...
