# -*- coding: utf-8 -*-
"""Base notification strategy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from rundeck_pushover.notifications.types import RenderedMessage

if TYPE_CHECKING:  # pragma: no cover
    from rundeck_pushover.config.config import Settings


class BaseNotificationStrategy(ABC):
    """Abstract base class for push transports."""

    def __init__(self, settings: "Settings"):
        """
        Initialize the strategy.

        Args:
            settings: Global configuration (Settings).
        """
        self.settings = settings

    @abstractmethod
    async def send_notification(
        self,
        message: RenderedMessage,
        *,
        app_api_token: str,
        user_id_token: str,
    ) -> None:
        """
        Deliver a single notification. One attempt, no retries.

        Args:
            message: Rendered message to deliver.
            app_api_token: Application API token.
            user_id_token: User (or group) key the message is addressed to.

        Raises:
            DeliveryFailure: If the transport could not deliver the message.
        """
        pass
