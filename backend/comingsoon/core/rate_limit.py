"""Fixed-window signup rate limit per client IP, counted in the key-value store.

Boundary imprecision is accepted: a client can spend a full quota just before a window
resets and another just after. Read-then-write is not atomic, so concurrent first requests
from one identity may both be admitted; no locking is attempted.
"""
import logging
import math
from collections.abc import Mapping

from pydantic import BaseModel

from comingsoon.core.config import Settings
from comingsoon.core.metrics import record_store_error
from comingsoon.services.store import KeyValueStore, StoreError

logger = logging.getLogger(__name__)

UNKNOWN_IDENTITY = "unknown"


class RateDecision(BaseModel):
    admitted: bool
    count: int
    window_start: int  # epoch ms


def client_identity(headers: Mapping[str, str]) -> str:
    """Proxy-supplied client IP, else X-Forwarded-For, else a shared 'unknown' bucket."""
    return (
        headers.get("cf-connecting-ip")
        or headers.get("x-forwarded-for")
        or UNKNOWN_IDENTITY
    )


def _as_int(value) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return 0


class RateLimiter:
    """check_and_increment admits at most max_per_window requests per identity per window."""

    def __init__(
        self,
        store: KeyValueStore,
        window_seconds: int = 3600,
        max_per_window: int = 10,
        bucket_ttl_seconds: int = 7200,
    ) -> None:
        self.store = store
        self.window_ms = window_seconds * 1000
        self.max_per_window = max_per_window
        self.bucket_ttl_seconds = bucket_ttl_seconds

    @classmethod
    def from_settings(cls, store: KeyValueStore, settings: Settings) -> "RateLimiter":
        return cls(
            store,
            window_seconds=settings.signup_rate_window_seconds,
            max_per_window=settings.signup_rate_max_per_window,
            bucket_ttl_seconds=settings.signup_rate_bucket_ttl_seconds,
        )

    @staticmethod
    def bucket_key(identity: str) -> str:
        return f"rate:{identity}"

    async def check_and_increment(self, identity: str, now_ms: int) -> RateDecision:
        key = self.bucket_key(identity)
        try:
            bucket = await self.store.get_json(key)
        except StoreError:
            # Fail open: a store outage must not block signups
            logger.warning("Rate bucket read failed; treating as empty", exc_info=True)
            record_store_error("get")
            bucket = None
        if isinstance(bucket, dict) and bucket:
            window_start = _as_int(bucket.get("ts"))
            count = _as_int(bucket.get("count"))
        else:
            window_start, count = now_ms, 0
        if now_ms - window_start > self.window_ms:
            window_start, count = now_ms, 0

        if count >= self.max_per_window:
            return RateDecision(admitted=False, count=count, window_start=window_start)

        count += 1
        try:
            await self.store.put_json(key, {"ts": window_start, "count": count}, ttl_seconds=self.bucket_ttl_seconds)
        except StoreError:
            logger.warning("Rate bucket write failed; admitting anyway", exc_info=True)
            record_store_error("put")
        return RateDecision(admitted=True, count=count, window_start=window_start)
