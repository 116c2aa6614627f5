"""Wire formatting for timestamps.

The collector expects ISO-8601 UTC with millisecond precision and a ``Z``
suffix, e.g. ``2025-01-01T12:00:00.000Z``.
"""

from __future__ import annotations

from datetime import UTC, datetime


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    return ensure_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis(value: datetime) -> int:
    return int(ensure_utc(value).timestamp() * 1000)


__all__ = ["ensure_utc", "epoch_millis", "format_timestamp"]
