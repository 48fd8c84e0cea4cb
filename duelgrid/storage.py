"""Match action log storage.

Only the audit trail of what happened in each room is kept here; live
match state stays in the lobby and is never persisted.
"""

from __future__ import annotations

from collections import deque
from typing import Protocol

import redis

from . import config


class LogStore(Protocol):
    def append(self, room_id: str, entry_json: str) -> None: ...
    def list(self, room_id: str, limit: int) -> list[str]: ...
    def delete(self, room_id: str) -> None: ...


class MemoryLogStore:
    """In-process store; each room keeps its most recent entries."""

    def __init__(self, max_entries: int = config.LOG_MAX_ENTRIES) -> None:
        self._max = max_entries
        self._data: dict[str, deque[str]] = {}

    def append(self, room_id: str, entry_json: str) -> None:
        self._data.setdefault(room_id, deque(maxlen=self._max)).append(entry_json)

    def list(self, room_id: str, limit: int) -> list[str]:
        entries = self._data.get(room_id)
        if not entries:
            return []
        return list(entries)[-limit:]

    def delete(self, room_id: str) -> None:
        self._data.pop(room_id, None)


class RedisLogStore:
    """Redis list per room: <prefix>:<room_id>, trimmed to the newest entries."""

    def __init__(
        self,
        client: redis.Redis,
        key_prefix: str = "duelgrid:log",
        max_entries: int = config.LOG_MAX_ENTRIES,
        ttl_seconds: int | None = config.LOG_TTL_SECONDS,
    ) -> None:
        self.client = client
        self.key_prefix = key_prefix.rstrip(":")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds

    def _key(self, room_id: str) -> str:
        return f"{self.key_prefix}:{room_id}"

    def append(self, room_id: str, entry_json: str) -> None:
        k = self._key(room_id)
        pipe = self.client.pipeline()
        pipe.rpush(k, entry_json)
        pipe.ltrim(k, -self.max_entries, -1)
        if self.ttl_seconds:
            pipe.expire(k, self.ttl_seconds)
        pipe.execute()

    def list(self, room_id: str, limit: int) -> list[str]:
        return self.client.lrange(self._key(room_id), -limit, -1)

    def delete(self, room_id: str) -> None:
        self.client.delete(self._key(room_id))


def make_log_store(url: str | None = config.REDIS_URL) -> LogStore:
    if url:
        return RedisLogStore(redis.Redis.from_url(url, decode_responses=True))
    return MemoryLogStore()
