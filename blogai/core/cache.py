"""Process-local response cache shared by the HTTP routes."""

from __future__ import annotations

import threading
import time
from typing import Any


class MemoryCache:
    def __init__(self) -> None:
        self._items: dict[str, tuple[float | None, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._items.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at is not None and expires_at <= time.monotonic():
                del self._items[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_s: float | None = None) -> None:
        expires_at = time.monotonic() + ttl_s if ttl_s and ttl_s > 0 else None
        with self._lock:
            self._items[key] = (expires_at, value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> int:
        with self._lock:
            removed = len(self._items)
            self._items.clear()
        return removed


cache = MemoryCache()


def get_cache() -> MemoryCache:
    return cache
