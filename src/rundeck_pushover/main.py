# -*- coding: utf-8 -*-
"""
Command-line entry point: push one Rundeck execution event.

Reads the execution data as JSON (file path or "-" for stdin), renders it for the
given trigger and sends it through Pushover. Credentials come from the
environment (PUSHOVER__APP_API_TOKEN, PUSHOVER__USER_ID_TOKEN) or .env.

Run with: python -m rundeck_pushover.main failure execution.json
Exit codes: 0 sent, 1 delivery failed, 2 bad configuration or event.
"""
from __future__ import annotations

import argparse
import json
import sys
import structlog
from dependency_injector import providers
from typing import Any, Optional, Sequence

from rundeck_pushover.DI import Container
from rundeck_pushover.exceptions import ConfigurationError, MissingRequiredField
from rundeck_pushover.logging.config import configure_logging

EXIT_SENT = 0
EXIT_NOT_SENT = 1
EXIT_INVALID = 2


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rundeck-pushover",
        description="Send a Rundeck execution notification to Pushover.",
    )
    parser.add_argument("trigger", help="start, success, failure, retryablefailure, onavgduration, ...")
    parser.add_argument("event", help="Path to the execution data JSON, or - for stdin.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the rendered notification instead of pushing it.",
    )
    return parser.parse_args(argv)


def _load_event(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, encoding="utf-8") as fh:
        return json.load(fh)


def run(argv: Optional[Sequence[str]] = None, *, container: Optional[Container] = None) -> int:
    args = _parse_args(argv)
    configure_logging()
    logger = structlog.get_logger("main")

    try:
        execution_data = _load_event(args.event)
    except (OSError, ValueError) as exc:
        logger.error("main_event_unreadable", source=args.event, error_message=str(exc))
        return EXIT_INVALID

    container = container or Container()
    container.dry_run.override(providers.Object(args.dry_run))
    plugin = container.notification_plugin()

    try:
        sent = plugin.post_notification(args.trigger, execution_data, {})
    except (ConfigurationError, MissingRequiredField) as exc:
        logger.error("main_notification_rejected", error_type=type(exc).__name__, error_message=str(exc))
        return EXIT_INVALID
    finally:
        container.dry_run.reset_override()

    return EXIT_SENT if sent else EXIT_NOT_SENT


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
