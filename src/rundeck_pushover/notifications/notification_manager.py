"""Notification plugin entry point: normalize, render, deliver once."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from rundeck_pushover.events.normalizer import normalize
from rundeck_pushover.exceptions import ConfigurationError, DeliveryFailure
from rundeck_pushover.notifications.strategies import BaseNotificationStrategy
from rundeck_pushover.notifications.types import NotificationStyler
from rundeck_pushover.utils.validation import is_blank

APP_API_TOKEN_KEY = "appApiToken"
USER_ID_TOKEN_KEY = "userIdToken"


@dataclass
class PushoverNotificationPlugin:
    """Post a Pushover notification for a Rundeck trigger and execution.

    Credentials come from the per-call config map when present there
    (Rundeck passes plugin properties that way), otherwise from the values
    given at construction.
    """

    notifier: BaseNotificationStrategy
    styler: NotificationStyler
    app_api_token: Optional[str] = None
    user_id_token: Optional[str] = None
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("PushoverNotificationPlugin")

    def post_notification(
        self,
        trigger: Optional[str],
        execution_data: Mapping[str, Any],
        config: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Blocking variant of ``apost_notification`` for hosts without a loop.

        Raises:
            RuntimeError: If called from a thread that already runs an event
                loop; await ``apost_notification`` there instead.
        """
        return asyncio.run(self.apost_notification(trigger, execution_data, config))

    async def apost_notification(
        self,
        trigger: Optional[str],
        execution_data: Mapping[str, Any],
        config: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Render the execution event and push it.

        Args:
            trigger: Event type causing the notification.
            execution_data: Raw execution data map.
            config: Notification configuration map.

        Returns:
            True if the message was delivered, False on delivery failure.

        Raises:
            ConfigurationError: If a credential is missing or blank.
            MissingRequiredField: If the execution data lacks job.name or href.
        """
        app_api_token, user_id_token = self._credentials(config or {})
        event = normalize(execution_data)
        message = self.styler.render(trigger, event)

        with bound_contextvars(
            notification_trigger=trigger,
            notification_execution_id=event.execution_id,
        ):
            try:
                await self.notifier.send_notification(
                    message,
                    app_api_token=app_api_token,
                    user_id_token=user_id_token,
                )
            except DeliveryFailure as exc:
                self._logger.warning(
                    "notification_delivery_failed",
                    error_message=str(exc),
                    http_status_code=exc.status_code,
                    delivery_errors=exc.errors,
                )
                return False

            self._logger.info(
                "notification_sent",
                notification_priority=message.priority.name,
            )
            return True

    def _credentials(self, config: Mapping[str, Any]) -> tuple[str, str]:
        app_api_token = config.get(APP_API_TOKEN_KEY)
        if is_blank(app_api_token):
            app_api_token = self.app_api_token
        user_id_token = config.get(USER_ID_TOKEN_KEY)
        if is_blank(user_id_token):
            user_id_token = self.user_id_token

        missing = [
            key
            for key, value in ((APP_API_TOKEN_KEY, app_api_token), (USER_ID_TOKEN_KEY, user_id_token))
            if is_blank(value) or not isinstance(value, str)
        ]
        if missing:
            self._logger.error("notification_missing_credentials", missing_keys=missing)
            raise ConfigurationError(*missing)
        return str(app_api_token), str(user_id_token)
