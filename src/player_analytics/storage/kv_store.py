# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Key-value stores for persisting session tokens.

The session identity manager only needs ``get`` and ``set`` on string keys
and values. Stores may raise on failure; the caller treats every read and
write as best-effort.

Implementations:
    - InMemoryKeyValueStore: process-local dict, the default
    - JsonFileKeyValueStore: single JSON object on disk, survives restarts
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

from player_analytics.lib.errors import PersistenceError

logger = logging.getLogger(__name__)


@runtime_checkable
class ProtocolKeyValueStore(Protocol):
    """Contract for the persisted session-token store."""

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None when absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...


class InMemoryKeyValueStore:
    """Dict-backed store. Values live as long as the instance."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class JsonFileKeyValueStore:
    """Store backed by a single JSON object file.

    Writes go to a temp file in the same directory and are then renamed over
    the target, so a crash mid-write never leaves a truncated file behind.

    Raises:
        PersistenceError: On IO failures or when the file does not contain
            a JSON object of strings.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
            data = json.loads(raw) if raw.strip() else {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceError(
                f"Failed to read session store {self._path}",
                details={"path": str(self._path), "error": str(e)},
            ) from e
        if not isinstance(data, dict):
            raise PersistenceError(
                f"Session store {self._path} does not contain a JSON object",
                details={"path": str(self._path)},
            )
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenceError(
                f"Failed to write session store {self._path}",
                details={"path": str(self._path), "key": key, "error": str(e)},
            ) from e
        logger.debug(f"Persisted key {key} to {self._path}")


__all__ = ["InMemoryKeyValueStore", "JsonFileKeyValueStore", "ProtocolKeyValueStore"]
