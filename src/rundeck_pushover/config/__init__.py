"""Configuration subpackage."""

from rundeck_pushover.config.config import (
    AppSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    PushoverSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "ConsoleNotificationSettings",
    "LoggingSettings",
    "PushoverSettings",
    "Settings",
    "get_settings",
]
