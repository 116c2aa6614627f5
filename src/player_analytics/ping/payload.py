# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Wire models for the ping request body.

Shape:
    {
      "emitted_at": "...Z",
      "session": {
        "loaded_at": "...Z",
        "video_id" | "live_stream_id": "...",
        "referrer": "...",
        "metadata": [{"name": "value"}, ...],
        "session_id": "...",        # only once assigned
        "navigator": {...}          # only when configured
      },
      "events": [{"emitted_at": "...Z", "type": "play", "at": 0.0}, ...]
    }
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

from player_analytics.enums import EnumVideoType
from player_analytics.events.models import ModelPingEvent
from player_analytics.lib.timestamps import format_timestamp
from player_analytics.session.models import ModelNavigator, ModelSessionInfo


class ModelPingSession(BaseModel):
    """Session snapshot as sent on the wire.

    Exactly one of ``video_id`` / ``live_stream_id`` is set.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    loaded_at: datetime
    video_id: str | None = Field(default=None)
    live_stream_id: str | None = Field(default=None)
    referrer: str = Field(default="")
    metadata: list[dict[str, str]] | None = Field(default=None)
    session_id: str | None = Field(default=None)
    navigator: ModelNavigator | None = Field(default=None)

    @model_validator(mode="after")
    def validate_single_identifier(self) -> ModelPingSession:
        if (self.video_id is None) == (self.live_stream_id is None):
            raise ValueError("Exactly one of video_id and live_stream_id must be set")
        return self

    @field_serializer("loaded_at")
    def serialize_loaded_at(self, v: datetime) -> str:
        return format_timestamp(v)

    @classmethod
    def from_session(
        cls, info: ModelSessionInfo, session_id: str | None
    ) -> ModelPingSession:
        identifier_field = (
            "live_stream_id" if info.video_type == EnumVideoType.LIVE else "video_id"
        )
        return cls(
            loaded_at=info.loaded_at,
            referrer=info.referrer,
            metadata=[dict(item) for item in info.metadata],
            session_id=session_id or None,
            navigator=info.navigator,
            **{identifier_field: info.video_id},
        )


class ModelPingPayload(BaseModel):
    """Complete ping request body."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    emitted_at: datetime
    session: ModelPingSession
    events: list[ModelPingEvent] = Field(default_factory=list)

    @field_serializer("emitted_at")
    def serialize_emitted_at(self, v: datetime) -> str:
        return format_timestamp(v)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON-ready body, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["ModelPingPayload", "ModelPingSession"]
