import pytest
from fastapi.testclient import TestClient

from pollchat.infrastructure.store.memory_store import MemoryMessageStore
from pollchat.main import app
from pollchat.wiring.dependencies import get_message_store


class StepClock:
    """Deterministic millisecond clock; each call advances by step."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def clock():
    return StepClock(step=5)


@pytest.fixture
def store(clock):
    return MemoryMessageStore(clock=clock)


@pytest.fixture
def api_client(store):
    """TestClient wired to a fresh store for each test."""
    app.dependency_overrides[get_message_store] = lambda: store
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
