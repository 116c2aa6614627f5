"""Playback event model and the append-only event accumulator."""

from __future__ import annotations

from player_analytics.events.accumulator import EventAccumulator
from player_analytics.events.models import ModelPingEvent

__all__ = ["EventAccumulator", "ModelPingEvent"]
