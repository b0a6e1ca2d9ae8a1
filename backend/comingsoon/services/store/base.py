"""Key-value store interface: JSON values by string key, optional TTL. Implementations: memory (dev) or DynamoDB."""
from abc import ABC, abstractmethod


class StoreError(Exception):
    """Store unavailable or request failed. Callers downgrade this to 'proceed without the side effect'."""


class KeyValueStore(ABC):
    """Flat namespace of string keys to JSON objects, with optional expiry.

    Methods are coroutines; backends with blocking SDKs must not run them on the event loop.
    """

    @abstractmethod
    async def get_json(self, key: str) -> dict | None:
        """Return the stored object, or None if missing or expired. Raise StoreError on backend failure."""
        ...

    @abstractmethod
    async def put_json(self, key: str, value: dict, ttl_seconds: int | None = None) -> None:
        """Store value under key (last write wins). ttl_seconds=None means no expiry. Raise StoreError on backend failure."""
        ...
