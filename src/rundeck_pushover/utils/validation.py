"""Validation helpers for credentials and loosely typed event values."""

from __future__ import annotations

from typing import Any


def is_blank(value: Any) -> bool:
    """Return True if value is None or a string with no visible characters."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def mask_token(token: str | None) -> str:
    """Return a masked API token for logging (e.g. azGD...3kf1)."""
    if not token or len(token) < 10:
        return "***"
    return f"{token[:4]}...{token[-4:]}"


def truncate(text: str, limit: int) -> str:
    """Cut text to at most limit characters, marking the cut with an ellipsis."""
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"
