# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error codes and exception classes for player analytics.

This module is the single source of truth for error handling across all
player_analytics modules. Every exception carries a code from
``EnumErrorCode``, a human-readable message, and optional details for
logging.

Error Categories:
    - ConfigurationError: fatal, raised synchronously at construction
    - TransportError: recoverable, raised to the caller that triggered a flush
    - PersistenceError: recovered locally by the session identity manager
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class EnumErrorCode(StrEnum):
    """Error codes for player analytics operations."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class PlayerAnalyticsError(Exception):
    """Base exception class for player analytics.

    Attributes:
        code: Error code from EnumErrorCode
        message: Human-readable error message
        details: Additional error context
    """

    default_code: EnumErrorCode = EnumErrorCode.CONFIGURATION_ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: EnumErrorCode | None = None,
    ) -> None:
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code}, message={self.message}, "
            f"details={self.details})"
        )


class ConfigurationError(PlayerAnalyticsError):
    """Options do not resolve to a usable playback target."""

    default_code = EnumErrorCode.CONFIGURATION_ERROR


class TransportError(PlayerAnalyticsError):
    """A ping could not be delivered or its response could not be parsed."""

    default_code = EnumErrorCode.TRANSPORT_ERROR


class PersistenceError(PlayerAnalyticsError):
    """The key-value store failed to read or write a value."""

    default_code = EnumErrorCode.PERSISTENCE_ERROR


__all__ = [
    "ConfigurationError",
    "EnumErrorCode",
    "PersistenceError",
    "PlayerAnalyticsError",
    "TransportError",
]
