"""Tests for SessionIdentityManager.

Validates:
- Storage key derivation (prefix + first 16 hex chars of md5)
- First-write-wins assignment
- Persisted ids adopted through the same path as received ids
- Store and callback failures never surface
"""

from __future__ import annotations

import hashlib

import pytest

from player_analytics.lib.errors import PersistenceError
from player_analytics.session import SessionIdentityManager, build_storage_key
from player_analytics.storage import InMemoryKeyValueStore


pytestmark = pytest.mark.unit


class FailingStore:
    def __init__(self) -> None:
        self.set_calls = 0

    def get(self, key: str) -> str | None:
        raise PersistenceError("store unavailable")

    def set(self, key: str, value: str) -> None:
        self.set_calls += 1
        raise OSError("quota exceeded")


class TestBuildStorageKey:
    def test_prefix_and_truncated_md5(self) -> None:
        expected = hashlib.md5(b"vi123").hexdigest()[:16]
        assert build_storage_key("vi123") == f"apivideo_session_id_{expected}"

    def test_custom_prefix(self) -> None:
        assert build_storage_key("vi123", prefix="sid_").startswith("sid_")

    def test_distinct_videos_get_distinct_keys(self) -> None:
        assert build_storage_key("a") != build_storage_key("b")


class TestSessionIdentityManager:
    def test_no_session_before_assignment(self, store: InMemoryKeyValueStore) -> None:
        identity = SessionIdentityManager(store)
        assert identity.initialize("vi123") is None
        assert identity.session_id is None
        assert identity.storage_key == build_storage_key("vi123")

    def test_assign_sets_persists_and_notifies_once(
        self, store: InMemoryKeyValueStore
    ) -> None:
        received: list[str] = []
        identity = SessionIdentityManager(store, on_session_id_received=received.append)
        identity.initialize("vi123")

        assert identity.assign("sess-1") is True
        assert identity.session_id == "sess-1"
        assert store.get(build_storage_key("vi123")) == "sess-1"
        assert received == ["sess-1"]

    def test_first_assignment_wins(self, store: InMemoryKeyValueStore) -> None:
        received: list[str] = []
        identity = SessionIdentityManager(store, on_session_id_received=received.append)
        identity.initialize("vi123")

        identity.assign("sess-1")
        assert identity.assign("sess-2") is False
        assert identity.session_id == "sess-1"
        assert received == ["sess-1"]
        assert store.get(build_storage_key("vi123")) == "sess-1"

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_assignment_ignored(
        self, store: InMemoryKeyValueStore, value: str | None
    ) -> None:
        identity = SessionIdentityManager(store)
        identity.initialize("vi123")
        assert identity.assign(value) is False
        assert identity.session_id is None
        assert len(store) == 0

    def test_initialize_adopts_persisted_id(self) -> None:
        store = InMemoryKeyValueStore({build_storage_key("vi123"): "persisted"})
        received: list[str] = []
        identity = SessionIdentityManager(store, on_session_id_received=received.append)

        assert identity.initialize("vi123") == "persisted"
        assert received == ["persisted"]

    def test_persisted_id_blocks_later_assignment(self) -> None:
        store = InMemoryKeyValueStore({build_storage_key("vi123"): "persisted"})
        identity = SessionIdentityManager(store)
        identity.initialize("vi123")
        assert identity.assign("from-network") is False
        assert identity.session_id == "persisted"

    def test_persisted_id_for_other_video_ignored(self) -> None:
        store = InMemoryKeyValueStore({build_storage_key("other"): "persisted"})
        identity = SessionIdentityManager(store)
        assert identity.initialize("vi123") is None

    def test_store_failures_are_swallowed(self) -> None:
        store = FailingStore()
        identity = SessionIdentityManager(store)

        assert identity.initialize("vi123") is None
        assert identity.assign("sess-1") is True
        assert identity.session_id == "sess-1"
        assert store.set_calls == 1

    def test_callback_failure_does_not_block_assignment(
        self, store: InMemoryKeyValueStore
    ) -> None:
        def explode(session_id: str) -> None:
            raise RuntimeError("host callback bug")

        identity = SessionIdentityManager(store, on_session_id_received=explode)
        identity.initialize("vi123")
        assert identity.assign("sess-1") is True
        assert store.get(build_storage_key("vi123")) == "sess-1"
