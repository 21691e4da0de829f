"""Edge cache capability used by the status endpoint.

The handler only needs ``get`` and ``put``; anything exposing those two
methods (a shared Redis/KV client wrapper, a CDN cache API) can be passed
in. ``TTLCache`` is the in-process default, also used by the tests.
"""

import threading
import time
from typing import Protocol

DEFAULT_TTL = 60  # seconds


class EdgeCache(Protocol):
    def get(self, key: str) -> str | None: ...

    def put(self, key: str, value: str, ttl: float = DEFAULT_TTL) -> None: ...


class TTLCache:
    def __init__(self):
        self._lock = threading.Lock()
        self._store: dict[str, tuple[float, str]] = {}  # key -> (expires_at, value)

    def get(self, key: str) -> str | None:
        """Return the cached value if still fresh, else None (expired entries are dropped)."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if time.monotonic() >= expires_at:
                del self._store[key]
                return None
            return value

    def put(self, key: str, value: str, ttl: float = DEFAULT_TTL) -> None:
        with self._lock:
            self._store[key] = (time.monotonic() + ttl, value)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
