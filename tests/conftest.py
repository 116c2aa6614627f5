"""Shared pytest fixtures for player_analytics tests.

Provides:
- ManualClock: deterministic time source whose timers fire on advance()
- RecordingSender: fake ping sender that records requests
- BlockingSender: fake sender whose requests stay in flight until released
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from player_analytics.config import PlayerAnalyticsSettings
from player_analytics.storage import InMemoryKeyValueStore

FIXED_NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)

VOD_MEDIA_URL = "https://cdn.api.video/vod/abc123/hls/manifest.m3u8"
LIVE_MEDIA_URL = "https://live.api.video/li456.m3u8"


class ManualTimer:
    def __init__(
        self, interval: float, callback: Callable[[], None], next_fire: datetime
    ) -> None:
        self.interval = interval
        self.callback = callback
        self.next_fire = next_fire
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualClock:
    """Clock that only moves when advance() is called."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self._now = start
        self.timers: list[ManualTimer] = []

    def now(self) -> datetime:
        return self._now

    def call_every(
        self, interval_seconds: float, callback: Callable[[], None]
    ) -> ManualTimer:
        timer = ManualTimer(
            interval_seconds,
            callback,
            self._now + timedelta(seconds=interval_seconds),
        )
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> int:
        """Move time forward, firing due timers in order. Returns the fire count."""
        target = self._now + timedelta(seconds=seconds)
        fired = 0
        while True:
            due = [
                t for t in self.timers if not t.cancelled and t.next_fire <= target
            ]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_fire)
            self._now = timer.next_fire
            timer.next_fire += timedelta(seconds=timer.interval)
            timer.callback()
            fired += 1
        self._now = target
        return fired


class RecordingSender:
    """Ping sender that records (url, body) and replies from a script."""

    def __init__(self, responses: list[Any] | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.responses = list(responses or [])
        self.error: Exception | None = None

    async def __call__(self, url: str, body: dict[str, Any]) -> Any:
        self.calls.append((url, body))
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return {}

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [body for _, body in self.calls]

    def event_types(self, index: int = -1) -> list[str]:
        return [event["type"] for event in self.bodies[index]["events"]]


class BlockingSender(RecordingSender):
    """Sender whose requests wait until release() is called."""

    def __init__(self, responses: list[Any] | None = None) -> None:
        super().__init__(responses)
        self.release_event = asyncio.Event()

    async def __call__(self, url: str, body: dict[str, Any]) -> Any:
        self.calls.append((url, body))
        await self.release_event.wait()
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return {}

    def release(self) -> None:
        self.release_event.set()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> PlayerAnalyticsSettings:
    """Settings isolated from the developer's environment and .env file."""
    for name in (
        "PLAYER_ANALYTICS_PING_INTERVAL_SECONDS",
        "PLAYER_ANALYTICS_COLLECTOR_BASE_URL",
        "PLAYER_ANALYTICS_SESSION_STORAGE_KEY_PREFIX",
        "PLAYER_ANALYTICS_SESSION_STORE_PATH",
        "PLAYER_ANALYTICS_HTTP_TIMEOUT_SECONDS",
        "PLAYER_ANALYTICS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return PlayerAnalyticsSettings()


@pytest.fixture
def blocking_sender() -> BlockingSender:
    return BlockingSender()
