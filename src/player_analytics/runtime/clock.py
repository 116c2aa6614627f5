# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Clock and periodic-timer abstraction.

The engine never reads the wall clock or touches the event loop's timers
directly. It asks a ``ProtocolClock`` for the current time and for a
periodic callback, which lets tests drive time by hand.

``AsyncioClock`` is the production implementation. ``call_every`` must be
invoked from inside a running event loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ProtocolTimerHandle(Protocol):
    """Handle to a periodic callback."""

    def cancel(self) -> None:
        """Stop future invocations. Calling twice is a no-op."""
        ...

    @property
    def cancelled(self) -> bool: ...


@runtime_checkable
class ProtocolClock(Protocol):
    """Source of time and periodic callbacks."""

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        ...

    def call_every(
        self, interval_seconds: float, callback: Callable[[], None]
    ) -> ProtocolTimerHandle:
        """Invoke ``callback`` every ``interval_seconds`` until cancelled."""
        ...


class AsyncioTimerHandle:
    """Periodic callback rescheduled with ``loop.call_later``.

    The next tick is scheduled before the callback runs so the period stays
    fixed even when a callback raises.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval_seconds: float,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._interval = interval_seconds
        self._callback = callback
        self._cancelled = False
        self._handle: asyncio.TimerHandle | None = loop.call_later(
            interval_seconds, self._fire
        )

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._handle = self._loop.call_later(self._interval, self._fire)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioClock:
    """Wall clock plus event-loop timers."""

    def now(self) -> datetime:
        return datetime.now(UTC)

    def call_every(
        self, interval_seconds: float, callback: Callable[[], None]
    ) -> AsyncioTimerHandle:
        loop = asyncio.get_running_loop()
        logger.debug(f"Scheduling periodic callback every {interval_seconds}s")
        return AsyncioTimerHandle(loop, interval_seconds, callback)


__all__ = [
    "AsyncioClock",
    "AsyncioTimerHandle",
    "ProtocolClock",
    "ProtocolTimerHandle",
]
