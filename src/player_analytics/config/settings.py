# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Player analytics settings.

Uses pydantic-settings for automatic environment variable loading.
Environment variables use the PLAYER_ANALYTICS_ prefix.
Example: PLAYER_ANALYTICS_PING_INTERVAL_SECONDS=5
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COLLECTOR_BASE_URL = "https://collector.api.video"
DEFAULT_SESSION_STORAGE_KEY_PREFIX = "apivideo_session_id_"
DEFAULT_PING_INTERVAL_SECONDS = 10.0


class PlayerAnalyticsSettings(BaseSettings):
    """Runtime configuration for the player analytics engine."""

    model_config = SettingsConfigDict(
        env_prefix="PLAYER_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    ping_interval_seconds: float = Field(
        default=DEFAULT_PING_INTERVAL_SECONDS,
        ge=0.01,
        le=3600.0,
        description="Period of the ping timer while playback is active",
    )
    collector_base_url: str = Field(
        default=DEFAULT_COLLECTOR_BASE_URL,
        min_length=1,
        description="Collector base URL; media URLs resolve to {base}/{vod|live}",
    )
    session_storage_key_prefix: str = Field(
        default=DEFAULT_SESSION_STORAGE_KEY_PREFIX,
        min_length=1,
        description="Prefix of the key under which session tokens are persisted",
    )
    session_store_path: Path | None = Field(
        default=None,
        description="JSON file used to persist session tokens; in-memory when unset",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0.0,
        le=300.0,
        description="Timeout for the default HTTP sender; None disables it",
    )
    log_level: str = Field(
        default="WARNING",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Log level applied by the CLI",
    )

    @field_validator("collector_base_url", mode="after")
    @classmethod
    def validate_collector_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"Invalid collector base URL '{v}'. Expected an http(s) URL"
            )
        return v.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v


__all__: list[str] = [
    "DEFAULT_COLLECTOR_BASE_URL",
    "DEFAULT_PING_INTERVAL_SECONDS",
    "DEFAULT_SESSION_STORAGE_KEY_PREFIX",
    "PlayerAnalyticsSettings",
]
