# -*- coding: utf-8 -*-
"""Unit tests for ExecutionEventStyler (titles, priority, body sections)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Optional

import pytest

from rundeck_pushover.events import normalize
from rundeck_pushover.notifications.stylers.execution_styler import ExecutionEventStyler
from rundeck_pushover.notifications.types import MessagePriority


@pytest.fixture
def styler() -> ExecutionEventStyler:
    return ExecutionEventStyler()


@pytest.mark.parametrize(
    ("trigger", "expected"),
    [
        ("start", "Job 'Nightly Backup' has started."),
        ("success", "Job 'Nightly Backup' has finished successfully!"),
        ("failure", "Job 'Nightly Backup' has failed!"),
        ("retryablefailure", "Job 'Nightly Backup' has failed, but will retry."),
        ("onavgduration", "Job 'Nightly Backup' exceeded avg duration"),
    ],
)
def test_render_title_for_known_triggers(
    styler: ExecutionEventStyler, base_event: dict[str, Any], trigger: str, expected: str
) -> None:
    message = styler.render(trigger, normalize(base_event))

    assert message.title == expected


def test_render_unknown_trigger_falls_back_to_generic_title(
    styler: ExecutionEventStyler, minimal_event: dict[str, Any]
) -> None:
    message = styler.render("custom_event", normalize(minimal_event))

    assert message.title == "Job 'Deploy' triggered by: custom_event"
    assert message.priority is MessagePriority.NORMAL


def test_render_title_match_is_exact(styler: ExecutionEventStyler, minimal_event: dict[str, Any]) -> None:
    message = styler.render("Start", normalize(minimal_event))

    assert message.title == "Job 'Deploy' triggered by: Start"


def test_render_failure_is_high_priority(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    message = styler.render("failure", normalize(event_factory(job={"name": "ETL"})))

    assert message.title == "Job 'ETL' has failed!"
    assert message.priority is MessagePriority.HIGH


@pytest.mark.parametrize("trigger", ["failure", "FAILURE", "Failure"])
def test_priority_high_for_failure_any_case(trigger: str) -> None:
    assert ExecutionEventStyler.priority(trigger) is MessagePriority.HIGH


@pytest.mark.parametrize(
    "trigger", [None, "", "start", "success", "retryablefailure", "onavgduration", "failed", "custom"]
)
def test_priority_normal_for_everything_else(trigger: Optional[str]) -> None:
    assert ExecutionEventStyler.priority(trigger) is MessagePriority.NORMAL


def test_priority_ignores_status(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    message = styler.render("success", normalize(event_factory(status="failed")))

    assert message.priority is MessagePriority.NORMAL


def test_render_none_trigger_does_not_raise(
    styler: ExecutionEventStyler, minimal_event: dict[str, Any]
) -> None:
    message = styler.render(None, normalize(minimal_event))

    assert message.title.startswith("Job 'Deploy' triggered by:")
    assert message.body
    assert message.priority is MessagePriority.NORMAL


def test_render_full_body(styler: ExecutionEventStyler, base_event: dict[str, Any]) -> None:
    message = styler.render("success", normalize(base_event))

    assert message.body.split("\n") == [
        "Job [SUCCESS] #1234 succeeded",
        "started by alice",
        "at 2026-02-13T12:05:00Z",
        "Description: Snapshot all volumes",
        "Breadcrumb: ops > storage/backups > Nightly Backup",
        "User Options",
        "- env: prod",
        "Nodes status [ failed=1 succeeded=4 total=5 ]",
        "Nodes failed: node-3",
        "Nodes succeeded: node-1,node-2,node-4,node-5",
    ]
    assert message.url == base_event["href"]
    assert message.url_title == "Execution #1234"


def test_render_minimal_body_omits_optional_sections(
    styler: ExecutionEventStyler, minimal_event: dict[str, Any]
) -> None:
    message = styler.render("start", normalize(minimal_event))

    assert message.body.split("\n") == ["Job [START] #", "Breadcrumb:  > Deploy"]
    assert message.url_title is None


@pytest.mark.parametrize(
    ("drop", "absent"),
    [
        ("user", "started by"),
        ("dateEnded", "at "),
        ("context", "User Options"),
        ("nodestatus", "Nodes status"),
        ("failedNodeListString", "Nodes failed"),
        ("succeededNodeListString", "Nodes succeeded"),
    ],
)
def test_render_omits_line_for_absent_field(
    styler: ExecutionEventStyler,
    event_factory: Callable[..., dict[str, Any]],
    drop: str,
    absent: str,
) -> None:
    message = styler.render("success", normalize(event_factory(drop=(drop,))))

    assert not any(line.startswith(absent) for line in message.body.split("\n"))


def test_render_omits_blank_description(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(job={"name": "Nightly Backup", "project": "ops", "description": "  "})

    message = styler.render("success", normalize(event))

    assert "Description:" not in message.body


def test_render_breadcrumb_skips_blank_group(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(job={"name": "ETL", "project": "data", "group": ""})

    message = styler.render("success", normalize(event))

    assert "Breadcrumb: data > ETL" in message.body.split("\n")


def test_render_start_uses_date_started(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    message = styler.render("start", normalize(event_factory(status="running")))

    assert "at 2026-02-13T12:00:00Z" in message.body.split("\n")


def test_render_in_progress_trigger_without_start_date_omits_line(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    message = styler.render("onavgduration", normalize(event_factory(drop=("dateStarted",))))

    assert not any(line.startswith("at ") for line in message.body.split("\n"))


def test_render_formats_datetime_and_epoch_millis(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    started = datetime(2026, 2, 13, 12, 0, tzinfo=timezone.utc)
    as_datetime = styler.render("start", normalize(event_factory(dateStarted=started)))
    as_millis = styler.render("failure", normalize(event_factory(dateEnded=1770984000000)))

    assert "at 2026-02-13T12:00:00+00:00" in as_datetime.body.split("\n")
    assert "at 2026-02-13T12:00:00+00:00" in as_millis.body.split("\n")


def test_render_aborted_by_when_status_aborted(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    message = styler.render("failure", normalize(event_factory(status="aborted", abortedby="bob")))

    lines = message.body.split("\n")
    assert lines[0] == "Job [FAILURE] #1234 aborted"
    assert lines[1:3] == ["started by alice", "aborted by bob"]


def test_render_no_aborted_by_when_status_not_aborted(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    message = styler.render("failure", normalize(event_factory(status="failed", abortedBy="bob")))

    assert "aborted by" not in message.body


def test_render_redacts_secure_options(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(context={"option": {"env": "prod", "key": "secret1"}, "secureOption": ["key"]})

    message = styler.render("success", normalize(event))

    assert "- env: prod" in message.body
    assert "secret1" not in message.body
    assert "- key:" not in message.body


def test_render_omits_options_section_when_all_options_secure(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(context={"option": {"password": "hunter2"}, "secureOption": {"password": "hunter2"}})

    message = styler.render("success", normalize(event))

    assert "User Options" not in message.body
    assert "hunter2" not in message.body


def test_render_secure_key_match_is_exact(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(context={"option": {"Token": "visible", "token": "abc123xyz"}, "secureOption": ["token"]})

    message = styler.render("success", normalize(event))

    assert "- Token: visible" in message.body
    assert "abc123xyz" not in message.body


def test_render_scrubs_secure_value_leaking_through_other_fields(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(
        job={"name": "Rotate", "project": "ops", "description": "uses s3cr3t-value"},
        context={"option": {"copy": "s3cr3t-value", "pw": "s3cr3t-value"}, "secureOption": {"pw": ""}},
    )

    message = styler.render("success", normalize(event))

    assert "s3cr3t-value" not in message.body
    assert "Description: uses *****" in message.body
    assert "- copy: *****" in message.body


def test_render_options_follow_insertion_order(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(context={"option": {"zeta": "1", "alpha": "2"}})

    message = styler.render("success", normalize(event))

    lines = message.body.split("\n")
    start = lines.index("User Options")
    assert lines[start + 1 : start + 3] == ["- zeta: 1", "- alpha: 2"]


def test_render_secure_values_leave_title_and_structured_lines_alone(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(
        job={"name": "prod-deploy", "project": "ops"},
        context={"option": {"target": "prod", "pin": "1"}, "secureOption": ["target", "pin"]},
    )

    message = styler.render("start", normalize(event))

    assert message.title == "Job 'prod-deploy' has started."
    lines = message.body.split("\n")
    assert lines[0] == "Job [START] #1234 succeeded"
    assert "Breadcrumb: ops > prod-deploy" in lines
    assert "Nodes status [ failed=1 succeeded=4 total=5 ]" in lines
    assert "User Options" not in lines


def test_render_scrubs_short_secret_only_in_free_text(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(
        job={"name": "ETL", "project": "data", "description": "pin is 7"},
        context={"option": {"pin": "7", "note": "use 7"}, "secureOption": ["pin"]},
        id=77,
    )

    message = styler.render("success", normalize(event))

    lines = message.body.split("\n")
    assert lines[0] == "Job [SUCCESS] #77 succeeded"
    assert "Description: pin is *****" in lines
    assert "- note: use *****" in lines


def test_render_drops_free_text_line_when_secret_is_part_of_mask(
    styler: ExecutionEventStyler, event_factory: Callable[..., dict[str, Any]]
) -> None:
    event = event_factory(
        job={"name": "ETL", "project": "data", "description": "stars ** here"},
        context={"option": {"pw": "**", "copy": "a**b", "env": "prod"}, "secureOption": ["pw"]},
    )

    message = styler.render("success", normalize(event))

    assert "**" not in message.body
    assert "- env: prod" in message.body
    assert "Description:" not in message.body
