# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Playback event model.

IMPORTANT: ``emitted_at`` has NO default_factory. Producers inject the
timestamp from their clock so tests can run against a fixed time.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from player_analytics.enums import EnumPingEventType
from player_analytics.lib.timestamps import ensure_utc, format_timestamp


class ModelPingEvent(BaseModel):
    """A single playback event as reported to the collector.

    ``from`` is a Python keyword, so the field is ``from_`` with a ``from``
    alias. Both spellings are accepted on input; the wire form uses ``from``.

    Example:
        >>> event = ModelPingEvent(
        ...     type="seek.forward", emitted_at=datetime(2025, 1, 1), from_=5, to=10
        ... )
        >>> event.to_wire()["from"]
        5.0
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    type: EnumPingEventType
    emitted_at: datetime
    at: float | None = Field(default=None)
    from_: float | None = Field(default=None, alias="from")
    to: float | None = Field(default=None)

    @field_validator("emitted_at", mode="after")
    @classmethod
    def ensure_utc_aware(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @field_serializer("emitted_at")
    def serialize_emitted_at(self, v: datetime) -> str:
        return format_timestamp(v)

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the ping body, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["ModelPingEvent"]
