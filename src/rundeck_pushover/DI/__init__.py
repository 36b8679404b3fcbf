"""Dependency injection."""

from rundeck_pushover.DI.container import Container

__all__ = ["Container"]
