# -*- coding: utf-8 -*-
"""Console notifier (print-based dry run)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from rundeck_pushover.exceptions import DeliveryFailure
from rundeck_pushover.notifications.types import RenderedMessage
from rundeck_pushover.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:  # pragma: no cover
    from rundeck_pushover.config.config import Settings


class ConsoleNotifier(BaseNotificationStrategy):
    """Print notifications to stdout instead of pushing them."""

    def __init__(
        self,
        settings: "Settings",
        *,
        printer: Callable[[str], None] = print,
    ) -> None:
        super().__init__(settings)
        self._print = printer

    async def send_notification(
        self,
        message: RenderedMessage,
        *,
        app_api_token: str,
        user_id_token: str,
    ) -> None:
        """Print the message; credentials are accepted but never shown."""
        if not self.settings.console.enabled:
            raise DeliveryFailure("console output disabled")
        header = f"[{message.priority.name}] {message.title}"
        self._print(f"{header}\n{message.body}\n{message.url}")
