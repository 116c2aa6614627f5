# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Normalized playback target.

Whatever shape the options arrive in, they are resolved once into a
``PlaybackTarget``. Nothing downstream of construction looks at the raw
options again.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from player_analytics.enums import EnumVideoType


class PlaybackTarget(BaseModel):
    """What is being played and where pings for it go."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    video_type: EnumVideoType
    video_id: str = Field(..., min_length=1)
    ping_url: str = Field(..., min_length=1)


__all__ = ["PlaybackTarget"]
