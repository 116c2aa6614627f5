# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Session identity manager.

Owns the server-issued session token for one playback.

Key Semantics:
    - First-Write-Wins: the token moves from absent to present at most once.
      Later tokens (e.g. from later ping responses) are dropped silently.
    - One Code Path: a token restored from the store goes through
      ``assign()`` exactly like one received from the collector, so the
      host callback fires and the value is re-persisted in both cases.
    - Best-Effort Persistence: store reads and writes that fail are logged
      and swallowed. The session simply has no durable id.

Storage Key:
    ``{prefix}{md5(video_id).hexdigest()[:16]}``, e.g.
    ``apivideo_session_id_0123456789abcdef``.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable

from player_analytics.config.settings import DEFAULT_SESSION_STORAGE_KEY_PREFIX
from player_analytics.storage.kv_store import ProtocolKeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY_HASH_LENGTH = 16

SessionIdCallback = Callable[[str], None]


def build_storage_key(
    video_id: str, prefix: str = DEFAULT_SESSION_STORAGE_KEY_PREFIX
) -> str:
    """Return the store key under which the session token for ``video_id`` lives."""
    digest = hashlib.md5(video_id.encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"{prefix}{digest[:STORAGE_KEY_HASH_LENGTH]}"


class SessionIdentityManager:
    """Holds the session token and persists it on first assignment.

    Args:
        store: Key-value store for the token.
        on_session_id_received: Called once with the token when it is first set.
        key_prefix: Prefix of the storage key.
    """

    def __init__(
        self,
        store: ProtocolKeyValueStore,
        on_session_id_received: SessionIdCallback | None = None,
        key_prefix: str = DEFAULT_SESSION_STORAGE_KEY_PREFIX,
    ) -> None:
        self._store = store
        self._on_session_id_received = on_session_id_received
        self._key_prefix = key_prefix
        self._storage_key: str | None = None
        self._session_id: str | None = None

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def storage_key(self) -> str | None:
        return self._storage_key

    def initialize(self, video_id: str) -> str | None:
        """Derive the storage key and adopt any previously persisted token.

        Returns:
            The session id after initialization, or None.
        """
        self._storage_key = build_storage_key(video_id, self._key_prefix)

        try:
            persisted = self._store.get(self._storage_key)
        except Exception as e:
            logger.warning(
                f"Failed to read persisted session id: {e}",
                extra={"storage_key": self._storage_key},
            )
            persisted = None

        if persisted:
            logger.debug(f"Restoring persisted session id for key {self._storage_key}")
            self.assign(persisted)
        return self._session_id

    def assign(self, session_id: str | None) -> bool:
        """Set the session id unless it is empty or one is already set.

        Returns:
            True if this call assigned the id, False if it was ignored.
        """
        if not session_id:
            return False
        if self._session_id is not None:
            if session_id != self._session_id:
                logger.debug(
                    "Ignoring session id: one is already assigned",
                    extra={"current": self._session_id, "ignored": session_id},
                )
            return False

        self._session_id = session_id
        logger.info(
            "Session id assigned",
            extra={"session_id": session_id, "storage_key": self._storage_key},
        )

        if self._on_session_id_received is not None:
            try:
                self._on_session_id_received(session_id)
            except Exception:
                logger.exception("on_session_id_received callback failed")

        self._persist(session_id)
        return True

    def _persist(self, session_id: str) -> None:
        if self._storage_key is None:
            return
        try:
            self._store.set(self._storage_key, session_id)
        except Exception as e:
            logger.warning(
                f"Failed to persist session id: {e}",
                extra={"storage_key": self._storage_key},
            )


__all__ = [
    "STORAGE_KEY_HASH_LENGTH",
    "SessionIdCallback",
    "SessionIdentityManager",
    "build_storage_key",
]
