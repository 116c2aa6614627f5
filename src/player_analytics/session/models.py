# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Static session attributes.

Everything about a session except its server-issued id is fixed when the
engine is constructed. The id lives in ``SessionIdentityManager`` because it
is the one field that changes (once) over the session's lifetime.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from player_analytics.enums import EnumVideoType
from player_analytics.lib.timestamps import ensure_utc


class ModelNavigator(BaseModel):
    """Client environment reported alongside the session."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_agent: str
    connection: Any = Field(default=None)
    timing: Any = Field(default=None)


class ModelSessionInfo(BaseModel):
    """Immutable part of the session snapshot sent with every ping.

    Attributes:
        loaded_at: When the engine was constructed.
        video_type: live or vod.
        video_id: Video or live-stream identifier.
        referrer: Page or app that embedded the player.
        metadata: Ordered ``{name: value}`` pairs supplied by the host.
        navigator: Optional client environment.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    loaded_at: datetime
    video_type: EnumVideoType
    video_id: str = Field(..., min_length=1)
    referrer: str = Field(default="")
    metadata: tuple[dict[str, str], ...] = Field(default=())
    navigator: ModelNavigator | None = Field(default=None)

    @field_validator("loaded_at", mode="after")
    @classmethod
    def ensure_utc_aware(cls, v: datetime) -> datetime:
        return ensure_utc(v)


__all__ = ["ModelNavigator", "ModelSessionInfo"]
