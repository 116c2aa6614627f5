"""Runtime collaborators: clock and timers."""

from __future__ import annotations

from player_analytics.runtime.clock import (
    AsyncioClock,
    AsyncioTimerHandle,
    ProtocolClock,
    ProtocolTimerHandle,
)

__all__ = [
    "AsyncioClock",
    "AsyncioTimerHandle",
    "ProtocolClock",
    "ProtocolTimerHandle",
]
