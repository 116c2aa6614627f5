# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Media URL classification.

Maps a player media URL to the video type, the video id and the collector
ping URL. Recognized shapes include::

    https://cdn.api.video/vod/<id>/hls/manifest.m3u8
    https://live.api.video/<id>.m3u8
"""

from __future__ import annotations

import re

from player_analytics.config.settings import DEFAULT_COLLECTOR_BASE_URL
from player_analytics.enums import EnumVideoType
from player_analytics.lib.errors import ConfigurationError
from player_analytics.target import PlaybackTarget

# group 1: vod|live, group 3: video id
MEDIA_URL_PATTERN = re.compile(r"https:/.*[/](vod|live)([/]|[/.][^/]*[/])([^/^.]*)[/.].*")


def build_ping_url(
    video_type: EnumVideoType, collector_base_url: str = DEFAULT_COLLECTOR_BASE_URL
) -> str:
    return f"{collector_base_url.rstrip('/')}/{video_type.value}"


def parse_media_url(
    media_url: str, collector_base_url: str = DEFAULT_COLLECTOR_BASE_URL
) -> PlaybackTarget:
    """Resolve ``media_url`` into a playback target.

    Raises:
        ConfigurationError: If the URL has no recognizable vod/live segment
            followed by an id.
    """
    match = MEDIA_URL_PATTERN.search(media_url or "")
    if match is None or not match.group(1) or not match.group(3):
        raise ConfigurationError(
            "The media url doesn't look like a supported media URL",
            details={"media_url": media_url},
        )

    try:
        video_type = EnumVideoType(match.group(1))
    except ValueError as e:
        raise ConfigurationError(
            "Can't determine if media URL is vod or live",
            details={"media_url": media_url},
        ) from e

    return PlaybackTarget(
        video_type=video_type,
        video_id=match.group(3),
        ping_url=build_ping_url(video_type, collector_base_url),
    )


__all__ = ["MEDIA_URL_PATTERN", "build_ping_url", "parse_media_url"]
