# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest

from rundeck_pushover.config import Settings
from rundeck_pushover.notifications.strategies.base import BaseNotificationStrategy
from rundeck_pushover.notifications.types import RenderedMessage

APP_TOKEN = "azGDORePK8gMaC0QOYAMyEEuzJnyUi"
USER_TOKEN = "uQiRzpo4DXghDmr9QzzfQu27cmVRsG"


class RecordingNotifier(BaseNotificationStrategy):
    """Transport fake that records what it was asked to send."""

    def __init__(self, settings: Settings, *, error: Exception | None = None) -> None:
        super().__init__(settings)
        self.error = error
        self.sent: list[tuple[RenderedMessage, str, str]] = []

    async def send_notification(
        self,
        message: RenderedMessage,
        *,
        app_api_token: str,
        user_id_token: str,
    ) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((message, app_api_token, user_id_token))


@pytest.fixture
def settings() -> Settings:
    """Settings with credentials and a fake API URL."""
    return Settings(
        pushover={
            "app_api_token": APP_TOKEN,
            "user_id_token": USER_TOKEN,
            "api_url": "https://pushover.test/1/messages.json",
        },
    )


@pytest.fixture
def base_event() -> dict[str, Any]:
    """Execution data shaped like what Rundeck hands to notification plugins."""
    return {
        "id": 1234,
        "href": "https://rundeck.example.com/project/ops/execution/show/1234",
        "status": "succeeded",
        "user": "alice",
        "dateStarted": "2026-02-13T12:00:00Z",
        "dateEnded": "2026-02-13T12:05:00Z",
        "job": {
            "name": "Nightly Backup",
            "group": "storage/backups",
            "project": "ops",
            "description": "Snapshot all volumes",
        },
        "context": {
            "option": {"env": "prod", "key": "secret1"},
            "secureOption": {"key": "secret1"},
        },
        "nodestatus": {"failed": 1, "succeeded": 4, "total": 5},
        "failedNodeListString": "node-3",
        "succeededNodeListString": "node-1,node-2,node-4,node-5",
    }


@pytest.fixture
def event_factory(base_event: dict[str, Any]) -> Callable[..., dict[str, Any]]:
    """Build execution data from base_event; ``drop`` removes top-level keys."""

    def _build(*, drop: tuple[str, ...] = (), **overrides: Any) -> dict[str, Any]:
        event = copy.deepcopy(base_event)
        for key in drop:
            event.pop(key, None)
        event.update(overrides)
        return event

    return _build


@pytest.fixture
def minimal_event() -> dict[str, Any]:
    """Only the required fields."""
    return {"href": "https://rundeck.example.com/execution/1", "job": {"name": "Deploy"}}


@pytest.fixture
def notifier_factory(settings: Settings) -> Callable[..., RecordingNotifier]:
    """Build a RecordingNotifier; pass ``error`` to make every send raise it."""

    def _build(error: Exception | None = None) -> RecordingNotifier:
        return RecordingNotifier(settings, error=error)

    return _build
