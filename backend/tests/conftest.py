"""Pytest fixtures: in-memory store, fake notifier, controllable clock, test client."""
import pytest
from httpx import ASGITransport, AsyncClient

from comingsoon.main import app
from comingsoon.core.deps import get_clock, get_notifier
from comingsoon.services.notifier import Notifier
from comingsoon.services.store import KeyValueStore, MemoryStore, StoreError, get_store

START_MS = 1_760_000_000_000  # fixed epoch ms for deterministic windows


class FakeClock:
    """Epoch-ms clock that only moves when told to."""

    def __init__(self, now_ms: int = START_MS) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def seconds(self) -> float:
        return self.now_ms / 1000

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class RecordingNotifier(Notifier):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[str, int]] = []

    async def notify(self, email: str, timestamp_ms: int) -> bool:
        self.calls.append((email, timestamp_ms))
        if self.fail:
            raise RuntimeError("webhook down")
        return True


class BrokenStore(KeyValueStore):
    """Every operation fails, like a store outage."""

    async def get_json(self, key):
        raise StoreError("unavailable")

    async def put_json(self, key, value, ttl_seconds=None):
        raise StoreError("unavailable")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return MemoryStore(clock=clock.seconds)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def client(store, notifier, clock):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_clock] = lambda: clock
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
