"""Pytest configuration and shared fixtures."""
from datetime import datetime, timedelta

import pytest

from amimitra.channel import LoopbackChannel
from amimitra.conversation import ConversationStore


class FakeClock:
    """Deterministic clock advancing by a fixed step per call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(0)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


class FakeSocketIOClient:
    """Stand-in for socketio.AsyncClient recording calls."""

    def __init__(self, fail_connect: Exception | None = None):
        self.handlers: dict[str, object] = {}
        self.connected = False
        self.sid = "fake-sid"
        self.emitted: list[tuple[str, object]] = []
        self.connect_calls: list[dict] = []
        self._fail_connect = fail_connect

    def on(self, event, handler=None):
        self.handlers[event] = handler

    async def connect(self, url, **kwargs):
        self.connect_calls.append({"url": url, **kwargs})
        if self._fail_connect is not None:
            raise self._fail_connect
        self.connected = True
        if "connect" in self.handlers:
            await self.handlers["connect"]()

    async def emit(self, event, data=None):
        self.emitted.append((event, data))

    async def disconnect(self):
        self.connected = False
        if "disconnect" in self.handlers:
            await self.handlers["disconnect"]()

    async def trigger(self, event, *args):
        """Simulate the server pushing an event."""
        await self.handlers[event](*args)


@pytest.fixture
def clock():
    """Clock starting at a fixed afternoon time."""
    return FakeClock(datetime(2024, 5, 1, 15, 7, 30), step=timedelta(seconds=1))


@pytest.fixture
def store(clock):
    """Conversation store driven by the fake clock."""
    return ConversationStore(clock=clock)


@pytest.fixture
def loopback():
    """Loopback channel without a responder."""
    return LoopbackChannel()


@pytest.fixture
def fake_client():
    """Fake Socket.IO client."""
    return FakeSocketIOClient()


@pytest.fixture
def debug_log():
    """Collects (level, component, message) tuples from debug callbacks."""
    entries: list[tuple[str, str, str]] = []

    def _callback(level: str, component: str, message: str) -> None:
        entries.append((level, component, message))

    _callback.entries = entries
    return _callback
