# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Ping transport: builds, dispatches and processes one ping.

Ordering (must not change):
    1. Take the pending slice.
    2. Advance the accumulator cursor.
    3. Build the payload.
    4. Await the sender.

Steps 1-3 run without an ``await`` in between. Any flush that starts while
this one is in flight therefore sees only newer events and never resends
these. If the sender fails, the events are gone: delivery is at-most-once
and nothing is retried here.

Response handling:
    A JSON object carrying a non-empty string ``session`` is forwarded to the
    identity manager when no session id is set yet. Late responses arriving
    after teardown are processed the same way.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from player_analytics.events.accumulator import EventAccumulator
from player_analytics.lib.errors import TransportError
from player_analytics.lib.timestamps import epoch_millis
from player_analytics.ping.payload import ModelPingPayload, ModelPingSession
from player_analytics.ping.sender import PingSender
from player_analytics.runtime.clock import ProtocolClock
from player_analytics.session.identity import SessionIdentityManager
from player_analytics.session.models import ModelSessionInfo

logger = logging.getLogger(__name__)


def with_cache_buster(url: str, millis: int) -> str:
    """Append ``t=<millis>`` to ``url``, keeping any existing query string."""
    separator = "&" if urlsplit(url).query else "?"
    return f"{url}{separator}t={millis}"


class PingTransport:
    """Sends pending events to the collector and adopts returned session ids."""

    def __init__(
        self,
        ping_url: str | None,
        sender: PingSender,
        accumulator: EventAccumulator,
        identity: SessionIdentityManager,
        session_info: ModelSessionInfo,
        clock: ProtocolClock,
    ) -> None:
        self._ping_url = ping_url
        self._sender = sender
        self._accumulator = accumulator
        self._identity = identity
        self._session_info = session_info
        self._clock = clock
        self._pings_sent = 0

    @property
    def ping_url(self) -> str | None:
        return self._ping_url

    @property
    def pings_sent(self) -> int:
        return self._pings_sent

    def build_payload(self) -> ModelPingPayload:
        """Snapshot pending events and advance the cursor past them."""
        events = self._accumulator.pending_slice()
        self._accumulator.mark_flushed()
        return ModelPingPayload(
            emitted_at=self._clock.now(),
            session=ModelPingSession.from_session(
                self._session_info, self._identity.session_id
            ),
            events=events,
        )

    async def send(self) -> Any:
        """Flush pending events to the collector.

        Returns:
            The parsed response, or None when no ping URL is configured.

        Raises:
            TransportError: If the sender fails or the response is not JSON.
        """
        if not self._ping_url:
            return None

        payload = self.build_payload()
        url = with_cache_buster(self._ping_url, epoch_millis(self._clock.now()))
        self._pings_sent += 1

        logger.debug(
            f"Sending ping with {len(payload.events)} events",
            extra={
                "ping_url": self._ping_url,
                "cursor": self._accumulator.cursor,
                "session_id": self._identity.session_id,
            },
        )

        try:
            data = await self._sender(url, payload.to_wire())
        except TransportError:
            raise
        except Exception as e:
            raise TransportError(
                f"Ping to {self._ping_url} failed: {e}",
                details={
                    "ping_url": self._ping_url,
                    "events_lost": len(payload.events),
                    "error_type": type(e).__name__,
                },
            ) from e

        self._adopt_session(data)
        return data

    def _adopt_session(self, data: Any) -> None:
        if not isinstance(data, Mapping):
            return
        session = data.get("session")
        if isinstance(session, str) and session and self._identity.session_id is None:
            self._identity.assign(session)


__all__ = ["PingTransport", "with_cache_buster"]
