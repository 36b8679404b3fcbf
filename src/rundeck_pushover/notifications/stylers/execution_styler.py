# -*- coding: utf-8 -*-
"""Plain-text renderer for Rundeck execution notifications."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from rundeck_pushover.events.execution import ExecutionEvent, Timestamp
from rundeck_pushover.notifications.types import (
    MessagePriority,
    NotificationStyler,
    RenderedMessage,
)

# Title templates keyed by trigger; {job} is the job name.
_TITLES: dict[str, str] = {
    "start": "Job '{job}' has started.",
    "success": "Job '{job}' has finished successfully!",
    "failure": "Job '{job}' has failed!",
    "retryablefailure": "Job '{job}' has failed, but will retry.",
    "onavgduration": "Job '{job}' exceeded avg duration",
}
_FALLBACK_TITLE = "Job '{job}' triggered by: {trigger}"

_HIGH_PRIORITY_TRIGGERS = frozenset({"failure"})

# Triggers fired while the execution is still running: show the start time.
_IN_PROGRESS_TRIGGERS = frozenset({"start", "running", "onavgduration"})

REDACTED = "*****"


class ExecutionEventStyler(NotificationStyler):
    """Render an execution event into title, body and priority."""

    def render(self, trigger: Optional[str], event: ExecutionEvent) -> RenderedMessage:
        trigger = trigger or ""
        return RenderedMessage(
            title=self.title(trigger, event),
            body="\n".join(self._body_lines(trigger, event)),
            priority=self.priority(trigger),
            url=event.href,
            url_title=f"Execution #{event.execution_id}" if event.execution_id else None,
        )

    @staticmethod
    def title(trigger: str, event: ExecutionEvent) -> str:
        """Return the title for a trigger, falling back to a generic one."""
        template = _TITLES.get(trigger, _FALLBACK_TITLE)
        return template.format(job=event.job.name, trigger=trigger)

    @staticmethod
    def priority(trigger: Optional[str]) -> MessagePriority:
        """HIGH only when the job really failed; never depends on status."""
        if trigger and trigger.lower() in _HIGH_PRIORITY_TRIGGERS:
            return MessagePriority.HIGH
        return MessagePriority.NORMAL

    def _body_lines(self, trigger: str, event: ExecutionEvent) -> list[str]:
        lines = [f"Job [{trigger.upper()}] #{event.execution_id} {event.status}".rstrip()]

        if event.user is not None:
            lines.append(f"started by {event.user}")
        if event.is_aborted and event.aborted_by is not None:
            lines.append(f"aborted by {event.aborted_by}")

        date = event.date_started if trigger.lower() in _IN_PROGRESS_TRIGGERS else event.date_ended
        if date is not None:
            lines.append(f"at {self._format_timestamp(date)}")

        secrets = sorted(event.secure_values, key=len, reverse=True)

        if event.job.description and event.job.description.strip():
            description = self._scrub(event.job.description, secrets)
            if description is not None:
                lines.append(f"Description: {description}")

        lines.append(self._breadcrumb(event))

        option_lines: list[str] = []
        for key, value in event.visible_options.items():
            scrubbed = self._scrub(value, secrets)
            if scrubbed is not None:
                option_lines.append(f"- {key}: {scrubbed}")
        if option_lines:
            lines.append("User Options")
            lines.extend(option_lines)

        if event.node_status is not None:
            ns = event.node_status
            lines.append(
                f"Nodes status [ failed={ns.failed} succeeded={ns.succeeded} total={ns.total} ]"
            )
        if event.failed_nodes is not None:
            lines.append(f"Nodes failed: {event.failed_nodes}")
        if event.succeeded_nodes is not None:
            lines.append(f"Nodes succeeded: {event.succeeded_nodes}")
        return lines

    @staticmethod
    def _scrub(text: str, secrets: list[str]) -> Optional[str]:
        """Mask secure values repeated in free text.

        Returns None when a secret occurs that the mask itself would contain;
        the caller then leaves the line out.
        """
        for secret in secrets:
            if secret not in text:
                continue
            if secret in REDACTED:
                return None
            text = text.replace(secret, REDACTED)
        return text

    @staticmethod
    def _breadcrumb(event: ExecutionEvent) -> str:
        """Project is always shown; group and name only when set."""
        crumb = f"Breadcrumb: {event.job.project or ''}"
        for segment in (event.job.group, event.job.name):
            if segment and segment.strip():
                crumb += f" > {segment}"
        return crumb

    @staticmethod
    def _format_timestamp(value: Timestamp) -> str:
        """Format datetimes and epoch millis as ISO-8601; strings pass through."""
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, (int, float)):
            try:
                return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()
            except (OSError, OverflowError, ValueError):
                return str(value)
        return str(value)
