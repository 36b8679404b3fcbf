# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from rundeck_pushover.config import Settings, get_settings
from rundeck_pushover.notifications.notification_manager import PushoverNotificationPlugin
from rundeck_pushover.notifications.strategies.base import BaseNotificationStrategy
from rundeck_pushover.notifications.strategies.console import ConsoleNotifier
from rundeck_pushover.notifications.strategies.pushover import PushoverNotifier
from rundeck_pushover.notifications.stylers.execution_styler import ExecutionEventStyler


def _build_notifier(settings: Settings, dry_run: bool) -> BaseNotificationStrategy:
    """Console printer for dry runs, Pushover otherwise."""
    if dry_run:
        return ConsoleNotifier(settings=settings)
    return PushoverNotifier(settings=settings)


def _app_api_token(settings: Settings) -> str | None:
    return settings.pushover.app_api_token


def _user_id_token(settings: Settings) -> str | None:
    return settings.pushover.user_id_token


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, styler, transport and plugin."""

    config = providers.Callable(get_settings)

    dry_run = providers.Object(False)

    notification_styler = providers.Singleton(ExecutionEventStyler)

    notifier = providers.Factory(_build_notifier, config, dry_run)

    notification_plugin = providers.Factory(
        PushoverNotificationPlugin,
        notifier=notifier,
        styler=notification_styler,
        app_api_token=providers.Callable(_app_api_token, config),
        user_id_token=providers.Callable(_user_id_token, config),
    )
