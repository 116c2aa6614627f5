# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Enums shared across the player analytics engine."""

from __future__ import annotations

from enum import StrEnum


class EnumVideoType(StrEnum):
    """Classification of the media being played.

    Selects which identifier field appears in the session snapshot:
    ``video_id`` for VOD, ``live_stream_id`` for live streams.
    """

    LIVE = "live"
    VOD = "vod"


class EnumPingEventType(StrEnum):
    """Event types reported to the collector.

    Example:
        >>> EnumPingEventType.SEEK_FORWARD.value
        'seek.forward'
        >>> EnumPingEventType("pause") == "pause"
        True
    """

    PLAY = "play"
    RESUME = "resume"
    READY = "ready"
    PAUSE = "pause"
    END = "end"
    SEEK_FORWARD = "seek.forward"
    SEEK_BACKWARD = "seek.backward"


class EnumPlaybackState(StrEnum):
    """Gate for the periodic ping timer.

    State Transitions:
        PAUSED -> ACTIVE:  play() or resume()
        ACTIVE -> PAUSED:  pause(), end() or destroy()

    Timer ticks only flush while ACTIVE. PAUSED is the initial state.
    """

    PAUSED = "paused"
    ACTIVE = "active"


__all__ = [
    "EnumPingEventType",
    "EnumPlaybackState",
    "EnumVideoType",
]
