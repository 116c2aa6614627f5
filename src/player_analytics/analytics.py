# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""PlayerAnalytics: the public entry point.

Construction resolves options into a playback target, restores any
persisted session id, and starts the ping timer. Every lifecycle method is
awaitable; the ones that flush (``ready``, ``pause``, ``end``, ``destroy``)
raise ``TransportError`` when the ping cannot be delivered, and the instance
stays usable afterwards.

Architecture:
    PlayerAnalytics -> PingScheduler -> EventAccumulator
                                     -> PingTransport -> sender (httpx)
                                                      -> SessionIdentityManager -> store

Example:
    >>> async def main() -> None:
    ...     async with PlayerAnalytics(
    ...         {"media_url": "https://cdn.api.video/vod/vi123/hls/manifest.m3u8"}
    ...     ) as analytics:
    ...         await analytics.play()
    ...         await analytics.update_time(12.5)
    ...         await analytics.pause()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from player_analytics.config.settings import PlayerAnalyticsSettings
from player_analytics.enums import EnumPlaybackState, EnumVideoType
from player_analytics.events.accumulator import EventAccumulator
from player_analytics.events.models import ModelPingEvent
from player_analytics.options import (
    ModelExplicitOptions,
    ModelMediaUrlOptions,
    ModelSequence,
    parse_options,
    resolve_target,
    session_callback_from,
)
from player_analytics.ping.scheduler import PingScheduler
from player_analytics.ping.sender import HttpxPingSender, PingSender
from player_analytics.ping.transport import PingTransport
from player_analytics.runtime.clock import AsyncioClock, ProtocolClock
from player_analytics.session.identity import SessionIdCallback, SessionIdentityManager
from player_analytics.session.models import ModelSessionInfo
from player_analytics.storage.kv_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    ProtocolKeyValueStore,
)
from player_analytics.target import PlaybackTarget

logger = logging.getLogger(__name__)


class PlayerAnalytics:
    """Playback telemetry for one video in one player.

    Args:
        options: Media URL options or explicit (type, id, ping URL) options,
            as a model or a mapping.
        on_session_id_received: Called once with the session id when first set.
            Takes precedence over a callback carried in an options mapping.
        sender: Awaitable ``(url, body) -> response`` used to deliver pings.
            Defaults to an ``HttpxPingSender`` owned by this instance.
        store: Key-value store for the session id. Defaults to a JSON file
            store when ``settings.session_store_path`` is set, else in-memory.
        clock: Time source and timer. Defaults to ``AsyncioClock``, which
            requires a running event loop at construction.
        settings: Runtime settings. Defaults to environment-loaded settings.

    Raises:
        ConfigurationError: If the options do not resolve to a playback target.
    """

    def __init__(
        self,
        options: ModelExplicitOptions | ModelMediaUrlOptions | Mapping[str, Any],
        *,
        on_session_id_received: SessionIdCallback | None = None,
        sender: PingSender | None = None,
        store: ProtocolKeyValueStore | None = None,
        clock: ProtocolClock | None = None,
        settings: PlayerAnalyticsSettings | None = None,
    ) -> None:
        if on_session_id_received is None:
            on_session_id_received = session_callback_from(options)
        self._settings = settings or PlayerAnalyticsSettings()
        self._options = parse_options(options)
        self._target: PlaybackTarget = resolve_target(
            self._options, self._settings.collector_base_url
        )
        self._clock: ProtocolClock = clock or AsyncioClock()

        self._owned_sender: HttpxPingSender | None = None
        if sender is None:
            self._owned_sender = HttpxPingSender(
                timeout=self._settings.http_timeout_seconds
            )
            sender = self._owned_sender

        self._session_info = ModelSessionInfo(
            loaded_at=self._clock.now(),
            video_type=self._target.video_type,
            video_id=self._target.video_id,
            referrer=self._options.referrer,
            metadata=tuple(self._options.metadata),
            navigator=self._options.navigator,
        )

        self._identity = SessionIdentityManager(
            store=store if store is not None else self._default_store(),
            on_session_id_received=on_session_id_received,
            key_prefix=self._settings.session_storage_key_prefix,
        )
        self._identity.initialize(self._target.video_id)

        self._accumulator = EventAccumulator()
        self._transport = PingTransport(
            ping_url=self._target.ping_url,
            sender=sender,
            accumulator=self._accumulator,
            identity=self._identity,
            session_info=self._session_info,
            clock=self._clock,
        )
        self._scheduler = PingScheduler(
            accumulator=self._accumulator,
            transport=self._transport,
            clock=self._clock,
            interval_seconds=self._settings.ping_interval_seconds,
        )

        logger.debug(
            "PlayerAnalytics initialized",
            extra={
                "video_type": str(self._target.video_type),
                "video_id": self._target.video_id,
                "ping_url": self._target.ping_url,
                "session_id": self._identity.session_id,
            },
        )

    def _default_store(self) -> ProtocolKeyValueStore:
        if self._settings.session_store_path is not None:
            return JsonFileKeyValueStore(self._settings.session_store_path)
        return InMemoryKeyValueStore()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def target(self) -> PlaybackTarget:
        return self._target

    @property
    def video_type(self) -> EnumVideoType:
        return self._target.video_type

    @property
    def video_id(self) -> str:
        return self._target.video_id

    @property
    def ping_url(self) -> str:
        return self._target.ping_url

    @property
    def session_id(self) -> str | None:
        return self._identity.session_id

    @property
    def loaded_at(self) -> datetime:
        return self._session_info.loaded_at

    @property
    def sequence(self) -> ModelSequence | None:
        return self._options.sequence

    @property
    def state(self) -> EnumPlaybackState:
        return self._scheduler.state

    @property
    def pending_events(self) -> list[ModelPingEvent]:
        return self._accumulator.pending_slice()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def play(self) -> None:
        await self._scheduler.play()

    async def resume(self) -> None:
        await self._scheduler.resume()

    async def ready(self) -> None:
        await self._scheduler.ready()

    async def pause(self) -> None:
        await self._scheduler.pause()

    async def end(self) -> None:
        await self._scheduler.end()

    async def seek(self, from_: float, to: float) -> None:
        await self._scheduler.seek(from_, to)

    async def update_time(self, time: float) -> None:
        await self._scheduler.update_time(time)

    async def push_event(self, event: ModelPingEvent | Mapping[str, Any]) -> None:
        await self._scheduler.push_event(event)

    async def destroy(self) -> None:
        await self._scheduler.destroy()

    async def drain(self) -> None:
        """Wait for in-flight timer-triggered pings."""
        await self._scheduler.drain()

    async def aclose(self) -> None:
        """Destroy, then close the default HTTP sender if this instance owns it."""
        try:
            if not self._scheduler.is_destroyed:
                await self.destroy()
            await self.drain()
        finally:
            if self._owned_sender is not None:
                await self._owned_sender.aclose()

    async def __aenter__(self) -> PlayerAnalytics:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()


__all__ = ["PlayerAnalytics"]
