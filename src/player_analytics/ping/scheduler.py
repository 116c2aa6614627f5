# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Ping scheduler: playback state machine plus the periodic ping timer.

State Machine:
    PAUSED ---(play / resume)---> ACTIVE
    ACTIVE ---(pause / end)-----> PAUSED   (flushes immediately)

    ready() flushes immediately without changing state.
    seek(), update_time() and push_event() never flush.

Timer:
    Created at construction with a fixed period. A tick flushes only while
    ACTIVE. Only ``destroy()`` cancels it; destroy then performs a final
    flush equivalent to ``pause()``.

Timer-triggered flushes have no caller to report to, so their failures are
logged and dropped. Lifecycle-triggered flushes raise TransportError to the
caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from player_analytics.enums import EnumPingEventType, EnumPlaybackState
from player_analytics.events.accumulator import EventAccumulator
from player_analytics.events.models import ModelPingEvent
from player_analytics.lib.errors import ConfigurationError, TransportError
from player_analytics.ping.transport import PingTransport
from player_analytics.runtime.clock import ProtocolClock, ProtocolTimerHandle

logger = logging.getLogger(__name__)


class PingScheduler:
    """Drives event accumulation and flushing from player lifecycle calls."""

    def __init__(
        self,
        accumulator: EventAccumulator,
        transport: PingTransport,
        clock: ProtocolClock,
        interval_seconds: float,
    ) -> None:
        self._accumulator = accumulator
        self._transport = transport
        self._clock = clock
        self._interval_seconds = interval_seconds
        self._state = EnumPlaybackState.PAUSED
        self._current_time: float = 0.0
        self._destroyed = False
        self._tick_tasks: set[asyncio.Task[None]] = set()
        self._timer: ProtocolTimerHandle = clock.call_every(
            interval_seconds, self._on_tick
        )

    @property
    def state(self) -> EnumPlaybackState:
        return self._state

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def play(self) -> None:
        self._state = EnumPlaybackState.ACTIVE
        self._push_regular_event(EnumPingEventType.PLAY)

    async def resume(self) -> None:
        self._state = EnumPlaybackState.ACTIVE
        self._push_regular_event(EnumPingEventType.RESUME)

    async def ready(self) -> None:
        self._push_regular_event(EnumPingEventType.READY)
        await self._flush()

    async def pause(self) -> None:
        self._state = EnumPlaybackState.PAUSED
        self._push_regular_event(EnumPingEventType.PAUSE)
        await self._flush()

    async def end(self) -> None:
        self._state = EnumPlaybackState.PAUSED
        self._push_regular_event(EnumPingEventType.END)
        await self._flush()

    async def seek(self, from_: float, to: float) -> None:
        event_type = (
            EnumPingEventType.SEEK_FORWARD
            if from_ < to
            else EnumPingEventType.SEEK_BACKWARD
        )
        self._accumulator.append(
            ModelPingEvent(
                type=event_type, emitted_at=self._clock.now(), from_=from_, to=to
            )
        )

    async def update_time(self, time: float) -> None:
        self._current_time = time

    async def push_event(self, event: ModelPingEvent | Mapping[str, Any]) -> None:
        """Append a caller-built event without flushing.

        Raises:
            ConfigurationError: If a mapping does not validate as an event.
        """
        if not isinstance(event, ModelPingEvent):
            try:
                event = ModelPingEvent.model_validate(dict(event))
            except ValidationError as e:
                raise ConfigurationError(
                    "Invalid playback event",
                    details={"errors": e.errors(include_url=False)},
                ) from e
        self._accumulator.append(event)

    async def destroy(self) -> None:
        """Stop the timer and send a final ping as ``pause()`` would."""
        if not self._destroyed:
            self._timer.cancel()
            self._destroyed = True
            logger.info(
                "PingScheduler destroyed",
                extra={"pending_events": self._accumulator.pending_count()},
            )
        await self.pause()

    async def drain(self) -> None:
        """Wait for outstanding timer-triggered flushes to finish."""
        while self._tick_tasks:
            await asyncio.gather(*list(self._tick_tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _push_regular_event(self, event_type: EnumPingEventType) -> None:
        self._accumulator.append(
            ModelPingEvent(
                type=event_type,
                emitted_at=self._clock.now(),
                at=self._current_time,
            )
        )

    async def _flush(self) -> None:
        await self._transport.send()

    def _on_tick(self) -> None:
        if self._destroyed or self._state != EnumPlaybackState.ACTIVE:
            return
        task = asyncio.get_running_loop().create_task(self._tick_flush())
        self._tick_tasks.add(task)
        task.add_done_callback(self._tick_tasks.discard)

    async def _tick_flush(self) -> None:
        try:
            await self._flush()
        except TransportError as e:
            logger.warning(f"Periodic ping failed: {e}", extra=e.details)


__all__ = ["PingScheduler"]
