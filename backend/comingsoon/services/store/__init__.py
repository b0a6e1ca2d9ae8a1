"""Store factory: memory (dev) or DynamoDB. The DynamoDB backend is loaded only when STORE_BACKEND=dynamodb (no boto3 in local)."""
import threading

from comingsoon.core.config import get_settings
from comingsoon.services.store.base import KeyValueStore, StoreError
from comingsoon.services.store.memory import MemoryStore

__all__ = ["KeyValueStore", "MemoryStore", "StoreError", "get_store", "reset_store"]

_store: KeyValueStore | None = None
_store_lock = threading.Lock()


def _build_store() -> KeyValueStore:
    settings = get_settings()
    if settings.store_backend == "dynamodb":
        from comingsoon.services.store.dynamodb import DynamoDBStore
        return DynamoDBStore()
    return MemoryStore()


def get_store() -> KeyValueStore:
    """Return the configured store, one per process so the memory backend keeps state across requests.

    Sync dependencies run in the threadpool, so first use is guarded against concurrent builds.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = _build_store()
    return _store


def reset_store() -> None:
    """Drop the process store (tests, settings changes)."""
    global _store
    with _store_lock:
        _store = None
