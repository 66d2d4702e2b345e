"""Shared model helpers."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp for server-assigned columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
