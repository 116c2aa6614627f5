# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Append-only event log with a flushed-through cursor.

Invariants:
    - Events are kept in append order and never mutated or removed.
    - ``0 <= cursor <= len(log)`` and the cursor only moves forward.

Delivery Semantics:
    ``mark_flushed()`` is called while a payload is being built, before the
    network call is awaited. Events in a dispatched payload count as
    delivered: if the request then fails they are lost, not retried
    (at-most-once). A flush that starts while another is in flight sees only
    events appended after the first one's cursor advance, so nothing is
    sent twice.

Concurrency: no lock. Every method is synchronous, so under asyncio no
other coroutine can interleave with an append or a cursor advance.
"""

from __future__ import annotations

import logging

from player_analytics.events.models import ModelPingEvent

logger = logging.getLogger(__name__)


class EventAccumulator:
    """Ordered event log plus the count of events already flushed."""

    def __init__(self) -> None:
        self._events: list[ModelPingEvent] = []
        self._cursor = 0

    def append(self, event: ModelPingEvent) -> None:
        self._events.append(event)
        logger.debug(
            f"Appended {event.type} event "
            f"(log: {len(self._events)}, pending: {len(self._events) - self._cursor})"
        )

    def pending_slice(self) -> list[ModelPingEvent]:
        """Return events from the cursor to the end, in order. Does not mutate."""
        return self._events[self._cursor :]

    def mark_flushed(self) -> int:
        """Advance the cursor to the current end of the log and return it."""
        self._cursor = len(self._events)
        return self._cursor

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def events(self) -> tuple[ModelPingEvent, ...]:
        return tuple(self._events)

    def pending_count(self) -> int:
        return len(self._events) - self._cursor

    def __len__(self) -> int:
        return len(self._events)


__all__ = ["EventAccumulator"]
