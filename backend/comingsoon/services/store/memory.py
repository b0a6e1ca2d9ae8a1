"""In-process store for dev and tests. Expired entries are dropped on read and swept on write."""
import heapq
import json
import time
from collections.abc import Callable

from comingsoon.services.store.base import KeyValueStore


class MemoryStore(KeyValueStore):
    """Dict-backed store. Values are kept as JSON text so callers never share mutable objects."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._data: dict[str, tuple[str, float | None]] = {}
        # (expires_at, key); entries go stale when a key is rewritten, checked on pop
        self._expiry_heap: list[tuple[float, str]] = []

    def __len__(self) -> int:
        return len(self._data)

    async def get_json(self, key: str) -> dict | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        raw, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            self._data.pop(key, None)
            return None
        return json.loads(raw)

    async def put_json(self, key: str, value: dict, ttl_seconds: int | None = None) -> None:
        now = self._clock()
        self._sweep(now)
        expires_at = now + ttl_seconds if ttl_seconds else None
        self._data[key] = (json.dumps(value), expires_at)
        if expires_at is not None:
            heapq.heappush(self._expiry_heap, (expires_at, key))

    def _sweep(self, now: float) -> None:
        heap = self._expiry_heap
        while heap and heap[0][0] <= now:
            expires_at, key = heapq.heappop(heap)
            entry = self._data.get(key)
            if entry is not None and entry[1] == expires_at:
                del self._data[key]

    def keys(self) -> list[str]:
        """Live keys (expired entries excluded)."""
        now = self._clock()
        return [k for k, (_, exp) in self._data.items() if exp is None or now < exp]
