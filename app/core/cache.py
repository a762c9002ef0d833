"""
Response cache.

Views are memoized per user and endpoint (`home_{email}`,
`progress_{email}`, ...) and dropped explicitly when an action is
recorded. The cache is injected; the composition root owns the instance.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class ResponseCache(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...


class InMemoryResponseCache:
    """Thread-safe TTL cache; expired keys are purged lazily on read."""

    def __init__(self, default_ttl: float = 3600, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl
        self._clock = clock
        self._items: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            expires_at, value = item
            if expires_at <= self._clock():
                del self._items[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        expires_at = self._clock() + (self.default_ttl if ttl is None else ttl)
        with self._lock:
            self._items[key] = (expires_at, value)

    def delete(self, key: str) -> None:
        with self._lock:
            removed = self._items.pop(key, None)
        if removed is not None:
            logger.debug("Invalidated cache key %s", key)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


# --- key builders ---

def login_key(email: str) -> str:
    return f"login_{email}"


def home_key(email: str) -> str:
    return f"home_{email}"


def progress_key(email: str) -> str:
    return f"progress_{email}"


def active_history_key(store_id: str) -> str:
    return f"active_history_{store_id}"


def cached(cache: ResponseCache, key: str, compute: Callable[[], Any], force: bool = False) -> Any:
    """Return the cached value for `key`, computing and storing it on a miss.

    `force` skips the lookup but still refreshes the entry.
    """
    if not force:
        hit = cache.get(key)
        if hit is not None:
            return hit
    value = compute()
    cache.set(key, value)
    return value
