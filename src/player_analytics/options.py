# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Construction options for PlayerAnalytics.

Options are a tagged variant discriminated by ``kind``:

    - ``ModelMediaUrlOptions`` (kind="media_url"): a media URL from which the
      video type, id and ping URL are derived.
    - ``ModelExplicitOptions`` (kind="explicit"): the triple given directly.

Both carry the common options (metadata, sequence, referrer, navigator).
Plain mappings are accepted too, with snake_case or camelCase keys. A mapping
without ``kind`` is classified once, here: a non-empty media URL wins over
explicit fields, exactly as if the explicit fields were absent.

A mapping may also carry the session id callback as ``on_session_id_received``
or ``onSessionIdReceived``. It is not part of the validated options; read it
with ``session_callback_from()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from player_analytics.config.settings import DEFAULT_COLLECTOR_BASE_URL
from player_analytics.enums import EnumVideoType
from player_analytics.lib.errors import ConfigurationError
from player_analytics.media_url import parse_media_url
from player_analytics.session.identity import SessionIdCallback
from player_analytics.session.models import ModelNavigator
from player_analytics.target import PlaybackTarget

_EXPLICIT_KEYS = frozenset(
    {"video_type", "videoType", "video_id", "videoId", "ping_url", "pingUrl"}
)
_CALLBACK_KEYS = ("on_session_id_received", "onSessionIdReceived")


class ModelSequence(BaseModel):
    """Playback sub-range in seconds. ``end`` is open when omitted."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start: float = Field(..., ge=0.0)
    end: float | None = Field(default=None)

    @model_validator(mode="after")
    def validate_range(self) -> ModelSequence:
        if self.end is not None and self.end <= self.start:
            raise ValueError(
                f"Sequence end ({self.end}) must be greater than start ({self.start})"
            )
        return self


class _ModelCommonOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    metadata: list[dict[str, str]] = Field(
        default_factory=list, alias="userMetadata"
    )
    sequence: ModelSequence | None = Field(default=None)
    referrer: str = Field(default="")
    navigator: ModelNavigator | None = Field(default=None)


class ModelExplicitOptions(_ModelCommonOptions):
    """Options naming the video type, id and ping URL directly."""

    kind: Literal["explicit"] = Field(default="explicit")
    video_type: EnumVideoType = Field(..., alias="videoType")
    video_id: str = Field(..., min_length=1, alias="videoId")
    ping_url: str = Field(..., min_length=1, alias="pingUrl")


class ModelMediaUrlOptions(_ModelCommonOptions):
    """Options deriving the playback target from a media URL."""

    kind: Literal["media_url"] = Field(default="media_url")
    media_url: str = Field(..., min_length=1, alias="mediaUrl")


PlayerAnalyticsOptions = Annotated[
    ModelExplicitOptions | ModelMediaUrlOptions,
    Field(discriminator="kind"),
]

_options_adapter: TypeAdapter[ModelExplicitOptions | ModelMediaUrlOptions] = (
    TypeAdapter(PlayerAnalyticsOptions)
)


def _classify_mapping(options: Mapping[str, Any]) -> dict[str, Any]:
    data = {k: v for k, v in options.items() if k not in _CALLBACK_KEYS}
    if "kind" in data:
        return data
    if data.get("media_url") or data.get("mediaUrl"):
        data = {k: v for k, v in data.items() if k not in _EXPLICIT_KEYS}
        data["kind"] = "media_url"
    else:
        data.pop("media_url", None)
        data.pop("mediaUrl", None)
        data["kind"] = "explicit"
    return data


def parse_options(
    options: ModelExplicitOptions | ModelMediaUrlOptions | Mapping[str, Any],
) -> ModelExplicitOptions | ModelMediaUrlOptions:
    """Validate raw options into one of the two option models.

    Raises:
        ConfigurationError: If neither a media URL nor a complete explicit
            triple is supplied, or a field is invalid.
    """
    if isinstance(options, ModelExplicitOptions | ModelMediaUrlOptions):
        return options
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            f"Options must be a mapping or an options model, got {type(options).__name__}"
        )
    try:
        return _options_adapter.validate_python(_classify_mapping(options))
    except ValidationError as e:
        raise ConfigurationError(
            "Options must contain media_url, or ping_url, video_id and video_type",
            details={"errors": e.errors(include_url=False)},
        ) from e


def session_callback_from(
    options: ModelExplicitOptions | ModelMediaUrlOptions | Mapping[str, Any],
) -> SessionIdCallback | None:
    """Return the session id callback carried in an options mapping, if any.

    Raises:
        ConfigurationError: If the callback value is not callable.
    """
    if not isinstance(options, Mapping):
        return None
    for key in _CALLBACK_KEYS:
        callback = options.get(key)
        if callback is None:
            continue
        if not callable(callback):
            raise ConfigurationError(
                f"{key} must be callable, got {type(callback).__name__}",
                details={"key": key},
            )
        return callback
    return None


def resolve_target(
    options: ModelExplicitOptions | ModelMediaUrlOptions,
    collector_base_url: str = DEFAULT_COLLECTOR_BASE_URL,
) -> PlaybackTarget:
    """Resolve validated options into the normalized playback target."""
    if isinstance(options, ModelMediaUrlOptions):
        return parse_media_url(options.media_url, collector_base_url)
    return PlaybackTarget(
        video_type=options.video_type,
        video_id=options.video_id,
        ping_url=options.ping_url,
    )


__all__ = [
    "ModelExplicitOptions",
    "ModelMediaUrlOptions",
    "ModelSequence",
    "PlayerAnalyticsOptions",
    "parse_options",
    "resolve_target",
    "session_callback_from",
]
