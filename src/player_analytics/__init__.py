"""Player analytics - playback telemetry pings for video players.

Observes playback lifecycle events and reports them to a collector,
correlating pings into one session through a server-issued session id.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from player_analytics.analytics import PlayerAnalytics
from player_analytics.enums import EnumPingEventType, EnumPlaybackState, EnumVideoType
from player_analytics.lib.errors import (
    ConfigurationError,
    PersistenceError,
    PlayerAnalyticsError,
    TransportError,
)
from player_analytics.options import (
    ModelExplicitOptions,
    ModelMediaUrlOptions,
    ModelSequence,
)

try:
    __version__ = version("player-analytics")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "ConfigurationError",
    "EnumPingEventType",
    "EnumPlaybackState",
    "EnumVideoType",
    "ModelExplicitOptions",
    "ModelMediaUrlOptions",
    "ModelSequence",
    "PersistenceError",
    "PlayerAnalytics",
    "PlayerAnalyticsError",
    "TransportError",
    "__version__",
]
