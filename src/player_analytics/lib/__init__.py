"""Shared library code for player_analytics."""

from __future__ import annotations

from player_analytics.lib.errors import (
    ConfigurationError,
    EnumErrorCode,
    PersistenceError,
    PlayerAnalyticsError,
    TransportError,
)
from player_analytics.lib.timestamps import format_timestamp

__all__ = [
    "ConfigurationError",
    "EnumErrorCode",
    "PersistenceError",
    "PlayerAnalyticsError",
    "TransportError",
    "format_timestamp",
]
