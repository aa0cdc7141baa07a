"""In-process loopback channel.

No network involved: sent payloads are recorded, and inbound events are
injected by the caller or produced by an optional responder. Suitable
for tests and offline demos.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from .base import ChannelAdapter
from .models import INBOUND_EVENT, InboundEvent

Responder = Callable[[str], Any]


class LoopbackChannel(ChannelAdapter):
    """Channel that loops sends back through an optional responder.

    If a responder is given, each sent payload is passed to it and its
    return value is delivered as an inbound event on the next loop
    iteration, mimicking a server push.
    """

    def __init__(
        self,
        responder: Responder | None = None,
        inbound_event: str = INBOUND_EVENT,
    ) -> None:
        super().__init__()
        self._responder = responder
        self._inbound_event = inbound_event
        self._connected = False
        self.sent: list[str] = []

    @property
    def inbound_event(self) -> str:
        return self._inbound_event

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def backend_type(self) -> str:
        return "loopback"

    async def connect(self) -> None:
        """Mark the channel connected (no-op otherwise)."""
        self._connected = True
        self._debug("info", "Loopback channel connected")
        self._notify_status(True)

    async def disconnect(self) -> None:
        """Mark the channel disconnected."""
        self._connected = False
        self._debug("info", "Loopback channel disconnected")
        self._notify_status(False)

    def send(self, payload: str) -> None:
        """Record the payload and schedule the responder's reply."""
        if not self._connected:
            self._debug("warning", "Not connected, dropping payload")
            return
        self.sent.append(payload)
        if self._responder is not None:
            reply = self._responder(payload)
            asyncio.get_running_loop().call_soon(self.deliver, reply)

    def deliver(self, payload: Any, name: str | None = None) -> None:
        """Push an inbound event to subscribers immediately."""
        self._dispatch(InboundEvent(name=name or self._inbound_event, payload=payload))
