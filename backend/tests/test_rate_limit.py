"""Fixed-window signup rate limit: quota, window reset, fail-open, identity."""
import pytest
from starlette.datastructures import Headers

from comingsoon.core.rate_limit import RateLimiter, client_identity
from comingsoon.services.store import MemoryStore

from conftest import BrokenStore, START_MS

HOUR_MS = 60 * 60 * 1000


def _limiter(store, **kwargs) -> RateLimiter:
    return RateLimiter(store, **kwargs)


@pytest.mark.asyncio
async def test_admits_exactly_max_then_rejects(store):
    limiter = _limiter(store)
    decisions = [await limiter.check_and_increment("1.2.3.4", START_MS + i) for i in range(11)]
    assert all(d.admitted for d in decisions[:10])
    assert decisions[10].admitted is False
    assert decisions[9].count == 10


@pytest.mark.asyncio
async def test_rejection_is_not_persisted(store):
    limiter = _limiter(store, max_per_window=2)
    await limiter.check_and_increment("ip", START_MS)
    await limiter.check_and_increment("ip", START_MS)
    before = await store.get_json("rate:ip")
    assert (await limiter.check_and_increment("ip", START_MS + 5)).admitted is False
    assert await store.get_json("rate:ip") == before == {"ts": START_MS, "count": 2}


@pytest.mark.asyncio
async def test_window_reset_after_elapsed(store):
    limiter = _limiter(store, max_per_window=3)
    for _ in range(3):
        assert (await limiter.check_and_increment("ip", START_MS)).admitted
    # boundary is inclusive
    assert not (await limiter.check_and_increment("ip", START_MS + HOUR_MS)).admitted
    d = await limiter.check_and_increment("ip", START_MS + HOUR_MS + 1)
    assert d.admitted
    assert d.window_start == START_MS + HOUR_MS + 1
    assert d.count == 1


@pytest.mark.asyncio
async def test_fixed_window_allows_burst_across_boundary(store):
    """Accepted policy: up to 2x max within a short span straddling a window reset."""
    limiter = _limiter(store, max_per_window=10)
    await limiter.check_and_increment("ip", START_MS)  # opens the window
    late = START_MS + HOUR_MS - 1000
    admitted = 0
    for _ in range(9):
        admitted += (await limiter.check_and_increment("ip", late)).admitted
    after = START_MS + HOUR_MS + 1
    for _ in range(10):
        admitted += (await limiter.check_and_increment("ip", after)).admitted
    assert admitted == 19


@pytest.mark.asyncio
async def test_identities_are_independent(store):
    limiter = _limiter(store, max_per_window=1)
    assert (await limiter.check_and_increment("a", START_MS)).admitted
    assert not (await limiter.check_and_increment("a", START_MS)).admitted
    assert (await limiter.check_and_increment("b", START_MS)).admitted


@pytest.mark.asyncio
async def test_bucket_written_with_ttl(clock):
    store = MemoryStore(clock=clock.seconds)
    limiter = _limiter(store, window_seconds=3600, bucket_ttl_seconds=7200)
    await limiter.check_and_increment("ip", clock())
    clock.advance(7200 * 1000 - 1)
    assert await store.get_json("rate:ip") is not None
    clock.advance(1)
    assert await store.get_json("rate:ip") is None


@pytest.mark.asyncio
async def test_store_failure_fails_open():
    limiter = _limiter(BrokenStore(), max_per_window=1)
    for i in range(5):
        assert (await limiter.check_and_increment("ip", START_MS + i)).admitted


@pytest.mark.asyncio
async def test_malformed_bucket_treated_as_fresh(store):
    await store.put_json("rate:ip", {"ts": "yesterday", "count": "many"})
    d = await _limiter(store).check_and_increment("ip", START_MS)
    assert d.admitted
    assert d.count == 1
    assert d.window_start == START_MS


@pytest.mark.asyncio
async def test_non_finite_bucket_values_treated_as_fresh(store):
    # json round-trips NaN and Infinity, so a bad writer can leave them in the store
    await store.put_json("rate:ip", {"ts": float("nan"), "count": float("inf")})
    d = await _limiter(store).check_and_increment("ip", START_MS)
    assert d.admitted
    assert d.count == 1
    assert d.window_start == START_MS
    assert await store.get_json("rate:ip") == {"ts": START_MS, "count": 1}


@pytest.mark.asyncio
async def test_float_bucket_values_are_truncated(store):
    await store.put_json("rate:ip", {"ts": float(START_MS), "count": 2.0})
    d = await _limiter(store).check_and_increment("ip", START_MS + 1)
    assert d.count == 3
    assert d.window_start == START_MS


def test_client_identity_prefers_proxy_header():
    h = Headers({"cf-connecting-ip": "9.9.9.9", "x-forwarded-for": "1.1.1.1"})
    assert client_identity(h) == "9.9.9.9"


def test_client_identity_falls_back_to_forwarded_for():
    assert client_identity(Headers({"x-forwarded-for": "1.1.1.1, 10.0.0.1"})) == "1.1.1.1, 10.0.0.1"


def test_client_identity_unknown_sentinel():
    assert client_identity(Headers({})) == "unknown"
