# -*- coding: utf-8 -*-
"""Pushover notification strategy (async, aiohttp)."""

from __future__ import annotations

import asyncio
import uuid
import aiohttp
import structlog
from typing import TYPE_CHECKING, Any, Callable, Optional, cast
from structlog.contextvars import bound_contextvars

from rundeck_pushover.exceptions import DeliveryFailure
from rundeck_pushover.notifications.types import RenderedMessage
from rundeck_pushover.notifications.strategies.base import BaseNotificationStrategy
from rundeck_pushover.utils.validation import mask_token, truncate

if TYPE_CHECKING:
    from rundeck_pushover.config.config import Settings

# Field limits enforced by the Pushover messages API.
MAX_TITLE_LENGTH = 250
MAX_MESSAGE_LENGTH = 1024
MAX_URL_LENGTH = 512
MAX_URL_TITLE_LENGTH = 100


class PushoverNotifier(BaseNotificationStrategy):
    """Send notifications through the Pushover messages API.

    Injects Settings and optionally an aiohttp.ClientSession. Without a
    session, one is opened and closed around every send.
    """

    def __init__(
        self,
        settings: "Settings",
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        self._session = session
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def build_payload(
        self,
        message: RenderedMessage,
        *,
        app_api_token: str,
        user_id_token: str,
    ) -> dict[str, str]:
        """Form fields for POST /1/messages.json, trimmed to the API limits."""
        cfg = self.settings.pushover
        payload = {
            "token": app_api_token,
            "user": user_id_token,
            "title": truncate(message.title, MAX_TITLE_LENGTH),
            "message": truncate(message.body, MAX_MESSAGE_LENGTH),
            "priority": str(message.priority.value),
        }
        # An over-long URL would be rejected outright; drop it instead.
        if message.url and len(message.url) <= MAX_URL_LENGTH:
            payload["url"] = message.url
            if message.url_title:
                payload["url_title"] = truncate(message.url_title, MAX_URL_TITLE_LENGTH)
        if cfg.device:
            payload["device"] = cfg.device
        if cfg.sound:
            payload["sound"] = cfg.sound
        return payload

    async def send_notification(
        self,
        message: RenderedMessage,
        *,
        app_api_token: str,
        user_id_token: str,
    ) -> None:
        payload = self.build_payload(
            message, app_api_token=app_api_token, user_id_token=user_id_token
        )
        request_id = uuid.uuid4().hex[:12]
        with bound_contextvars(
            pushover_request_id=request_id,
            pushover_app_token=mask_token(app_api_token),
            pushover_priority=message.priority.name,
        ):
            if self._session is not None:
                await self._post(self._session, payload)
                return
            timeout = aiohttp.ClientTimeout(total=self.settings.pushover.timeout_seconds)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                await self._post(session, payload)

    async def _post(self, session: aiohttp.ClientSession, payload: dict[str, str]) -> None:
        url = self.settings.pushover.api_url
        try:
            async with session.post(url, data=payload) as response:
                status_code = response.status
                body = await self._read_json(response)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            self._logger.error(
                "pushover_request_failed",
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            raise DeliveryFailure("Pushover request failed", cause=exc) from exc

        errors = [str(e) for e in cast(list[Any], body.get("errors") or [])]
        if status_code >= 400 or body.get("status") != 1:
            self._logger.error(
                "pushover_rejected",
                http_status_code=status_code,
                pushover_errors=errors,
            )
            raise DeliveryFailure(
                f"Pushover rejected the message (HTTP {status_code})",
                status_code=status_code,
                errors=errors,
            )

        self._logger.info(
            "pushover_sent",
            http_status_code=status_code,
            pushover_request=body.get("request"),
        )

    @staticmethod
    async def _read_json(response: aiohttp.ClientResponse) -> dict[str, Any]:
        """Return the JSON body, or an empty dict when the body is not JSON."""
        try:
            data = await response.json(content_type=None)
        except ValueError:
            return {}
        if not isinstance(data, dict):
            return {}
        return cast(dict[str, Any], data)
