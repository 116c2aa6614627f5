"""Storage adapters for persisted session tokens.

This module provides key-value stores the session identity manager uses to
remember the server-issued session token per video.
"""

from __future__ import annotations

from .kv_store import InMemoryKeyValueStore, JsonFileKeyValueStore, ProtocolKeyValueStore

__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore", "ProtocolKeyValueStore"]
