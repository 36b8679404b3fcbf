# -*- coding: utf-8 -*-
"""Build a typed ExecutionEvent from the raw Rundeck execution data map.

All "field may be absent or mistyped" handling lives here so the renderer only
has to check for presence. Reference for the raw shape:
https://docs.rundeck.com/docs/developer/notification-plugin.html#execution-data
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, cast

import structlog

from rundeck_pushover.events.execution import ExecutionEvent, JobInfo, NodeStatus, Timestamp
from rundeck_pushover.exceptions import MissingRequiredField

_logger = structlog.get_logger(__name__)


def normalize(raw: Any) -> ExecutionEvent:
    """Extract typed fields from a raw execution data map.

    Args:
        raw: Execution data as handed over by the scheduler.

    Returns:
        The normalized ExecutionEvent.

    Raises:
        MissingRequiredField: If ``job.name`` or ``href`` is missing or malformed.
    """
    if not isinstance(raw, Mapping):
        raise MissingRequiredField("executionData")
    data = cast(Mapping[str, Any], raw)

    job = _job(data.get("job"))
    href = _href(data.get("href"))

    context = _mapping(data.get("context"), "context")
    options = _options(context.get("option"))
    secure_options, secure_values = _secure(context.get("secureOption"), options)

    return ExecutionEvent(
        href=href,
        job=job,
        execution_id=_text(data.get("id")) or "",
        status=_text(data.get("status")) or "",
        user=_text(data.get("user")),
        aborted_by=_text(_first(data, "abortedBy", "abortedby")),
        date_started=_timestamp(data.get("dateStarted")),
        date_ended=_timestamp(data.get("dateEnded")),
        options=options,
        secure_options=secure_options,
        secure_values=secure_values,
        node_status=_node_status(_first(data, "nodeStatus", "nodestatus")),
        failed_nodes=_text(data.get("failedNodeListString")),
        succeeded_nodes=_text(data.get("succeededNodeListString")),
    )


def _job(value: Any) -> JobInfo:
    if not isinstance(value, Mapping):
        raise MissingRequiredField("job.name")
    job = cast(Mapping[str, Any], value)
    name = job.get("name")
    if not isinstance(name, str):
        raise MissingRequiredField("job.name")
    return JobInfo(
        name=name,
        group=_text(job.get("group")),
        project=_text(job.get("project")),
        description=_text(job.get("description")),
    )


def _href(value: Any) -> str:
    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        raise MissingRequiredField("href")
    href = str(value).strip()
    if not href:
        raise MissingRequiredField("href")
    return href


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    """Return the first non-None value among alternative spellings of a key."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _mapping(value: Any, name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        _logger.debug("normalize_ignored_field", field=name, value_type=type(value).__name__)
        return {}
    return cast(Mapping[str, Any], value)


def _option_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in cast(list[Any], value))
    return str(value)


def _options(value: Any) -> dict[str, str]:
    option = _mapping(value, "context.option")
    return {str(k): _option_value(v) for k, v in option.items()}


def _secure(value: Any, options: Mapping[str, str]) -> tuple[frozenset[str], tuple[str, ...]]:
    """Return secure option names and every known value that must be hidden."""
    if value is None:
        return frozenset(), ()

    extra_values: list[str] = []
    if isinstance(value, Mapping):
        secure = cast(Mapping[Any, Any], value)
        names = frozenset(str(k) for k in secure)
        extra_values = [_option_value(v) for v in secure.values()]
    elif isinstance(value, (list, tuple, set, frozenset)):
        names = frozenset(str(k) for k in cast(list[Any], value))
    elif isinstance(value, str):
        names = frozenset({value})
    else:
        _logger.debug(
            "normalize_ignored_field",
            field="context.secureOption",
            value_type=type(value).__name__,
        )
        return frozenset(), ()

    values: list[str] = []
    for candidate in [options[k] for k in names if k in options] + extra_values:
        if candidate and candidate not in values:
            values.append(candidate)
    return names, tuple(values)


def _timestamp(value: Any) -> Optional[Timestamp]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return cast(Timestamp, value)


def _count(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        _logger.debug("normalize_bad_node_count", value=repr(value))
        return 0


def _node_status(value: Any) -> Optional[NodeStatus]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        _logger.debug("normalize_ignored_field", field="nodeStatus", value_type=type(value).__name__)
        return None
    counts = cast(Mapping[str, Any], value)
    return NodeStatus(
        failed=_count(counts.get("failed")),
        succeeded=_count(counts.get("succeeded")),
        total=_count(counts.get("total")),
    )
