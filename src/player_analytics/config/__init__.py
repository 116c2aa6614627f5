"""Configuration for player_analytics.

Usage:
    >>> from player_analytics.config import PlayerAnalyticsSettings
    >>> settings = PlayerAnalyticsSettings()
    >>> settings.ping_interval_seconds
    10.0
"""

from __future__ import annotations

from player_analytics.config.settings import (
    DEFAULT_COLLECTOR_BASE_URL,
    DEFAULT_PING_INTERVAL_SECONDS,
    DEFAULT_SESSION_STORAGE_KEY_PREFIX,
    PlayerAnalyticsSettings,
)

__all__ = [
    "DEFAULT_COLLECTOR_BASE_URL",
    "DEFAULT_PING_INTERVAL_SECONDS",
    "DEFAULT_SESSION_STORAGE_KEY_PREFIX",
    "PlayerAnalyticsSettings",
]
