"""Ping building, sending and scheduling.

Imports are explicit: ``from player_analytics.ping.transport import PingTransport``.
"""

from __future__ import annotations

from player_analytics.ping.payload import ModelPingPayload, ModelPingSession
from player_analytics.ping.scheduler import PingScheduler
from player_analytics.ping.sender import HttpxPingSender, PingSender
from player_analytics.ping.transport import PingTransport, with_cache_buster

__all__ = [
    "HttpxPingSender",
    "ModelPingPayload",
    "ModelPingSession",
    "PingScheduler",
    "PingSender",
    "PingTransport",
    "with_cache_buster",
]
