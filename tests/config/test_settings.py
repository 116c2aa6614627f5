"""Tests for player_analytics.config.settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from player_analytics.config import PlayerAnalyticsSettings


pytestmark = pytest.mark.unit


class TestPlayerAnalyticsSettings:
    def test_defaults(self, settings: PlayerAnalyticsSettings) -> None:
        assert settings.ping_interval_seconds == 10.0
        assert settings.collector_base_url == "https://collector.api.video"
        assert settings.session_storage_key_prefix == "apivideo_session_id_"
        assert settings.session_store_path is None
        assert settings.http_timeout_seconds is None
        assert settings.log_level == "WARNING"

    def test_env_override(
        self, settings: PlayerAnalyticsSettings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PLAYER_ANALYTICS_PING_INTERVAL_SECONDS", "2.5")
        monkeypatch.setenv("PLAYER_ANALYTICS_SESSION_STORE_PATH", "/tmp/sessions.json")
        config = PlayerAnalyticsSettings()
        assert config.ping_interval_seconds == 2.5
        assert config.session_store_path == Path("/tmp/sessions.json")

    def test_collector_url_trailing_slash_stripped(
        self, settings: PlayerAnalyticsSettings
    ) -> None:
        config = PlayerAnalyticsSettings(collector_base_url="https://example.com/ping/")
        assert config.collector_base_url == "https://example.com/ping"

    def test_collector_url_must_be_http(self, settings: PlayerAnalyticsSettings) -> None:
        with pytest.raises(ValidationError):
            PlayerAnalyticsSettings(collector_base_url="ftp://example.com")

    def test_interval_bounds(self, settings: PlayerAnalyticsSettings) -> None:
        with pytest.raises(ValidationError):
            PlayerAnalyticsSettings(ping_interval_seconds=0)

    def test_log_level_normalized(self, settings: PlayerAnalyticsSettings) -> None:
        assert PlayerAnalyticsSettings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            PlayerAnalyticsSettings(log_level="verbose")

    def test_frozen(self, settings: PlayerAnalyticsSettings) -> None:
        with pytest.raises(ValidationError):
            settings.ping_interval_seconds = 1.0  # type: ignore[misc]
