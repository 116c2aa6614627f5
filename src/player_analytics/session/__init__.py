"""Session identity and static session attributes."""

from __future__ import annotations

from player_analytics.session.identity import (
    SessionIdentityManager,
    build_storage_key,
)
from player_analytics.session.models import ModelNavigator, ModelSessionInfo

__all__ = [
    "ModelNavigator",
    "ModelSessionInfo",
    "SessionIdentityManager",
    "build_storage_key",
]
