# -*- coding: utf-8 -*-
"""Normalized execution event records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

# Rundeck hands over java.util.Date, epoch millis or a pre-formatted string
# depending on how the event reached us.
Timestamp = Union[datetime, int, float, str]


@dataclass(frozen=True)
class JobInfo:
    """Job reference attached to an execution."""

    name: str
    group: Optional[str] = None
    project: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class NodeStatus:
    """Per-node outcome counts of an execution."""

    failed: int = 0
    succeeded: int = 0
    total: int = 0


@dataclass(frozen=True)
class ExecutionEvent:
    """Typed view over a raw Rundeck execution data map.

    Built once by ``normalize``; every optional field is ``None`` (or empty)
    when the raw record did not carry it.
    """

    href: str
    job: JobInfo
    execution_id: str = ""
    status: str = ""
    user: Optional[str] = None
    aborted_by: Optional[str] = None
    date_started: Optional[Timestamp] = None
    date_ended: Optional[Timestamp] = None
    options: dict[str, str] = field(default_factory=dict)
    secure_options: frozenset[str] = frozenset()
    secure_values: tuple[str, ...] = ()
    node_status: Optional[NodeStatus] = None
    failed_nodes: Optional[str] = None
    succeeded_nodes: Optional[str] = None

    @property
    def is_aborted(self) -> bool:
        return self.status.lower() == "aborted"

    @property
    def visible_options(self) -> dict[str, str]:
        """Options that may be shown to the user (secure ones removed)."""
        return {k: v for k, v in self.options.items() if k not in self.secure_options}
