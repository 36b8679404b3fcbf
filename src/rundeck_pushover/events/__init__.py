"""Execution events: typed records and the normalizer that builds them."""

from rundeck_pushover.events.execution import ExecutionEvent, JobInfo, NodeStatus
from rundeck_pushover.events.normalizer import normalize

__all__ = ["ExecutionEvent", "JobInfo", "NodeStatus", "normalize"]
