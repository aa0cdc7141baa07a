"""Socket.IO channel backend.

Talks to the chat server through python-socketio's asyncio client.
Reconnection after a dropped connection is left to the client library;
the session above never sees it.
"""

import asyncio
from typing import Any

import socketio
from socketio.exceptions import ConnectionError as SocketIOConnectionError

from .base import ChannelAdapter
from .models import INBOUND_EVENT, OUTBOUND_EVENT, ChannelConnectionError, InboundEvent


class SocketIOChannel(ChannelAdapter):
    """Channel backed by a single Socket.IO connection."""

    def __init__(
        self,
        url: str,
        outbound_event: str = OUTBOUND_EVENT,
        inbound_event: str = INBOUND_EVENT,
        transports: list[str] | None = None,
        wait_timeout: float = 10.0,
        client: Any | None = None,
    ) -> None:
        super().__init__()
        self._url = url
        self._outbound_event = outbound_event
        self._inbound_event = inbound_event
        self._transports = transports or ["websocket", "polling"]
        self._wait_timeout = wait_timeout
        self._client = client if client is not None else socketio.AsyncClient(reconnection=True)
        self._pending_sends: set[asyncio.Task] = set()

        self._client.on("connect", self._on_connect)
        self._client.on("disconnect", self._on_disconnect)
        self._client.on(self._inbound_event, self._on_inbound)

    @property
    def url(self) -> str:
        return self._url

    @property
    def inbound_event(self) -> str:
        return self._inbound_event

    @property
    def is_connected(self) -> bool:
        return bool(self._client.connected)

    @property
    def backend_type(self) -> str:
        return "socketio"

    async def connect(self) -> None:
        """Open the Socket.IO connection."""
        if self.is_connected:
            return
        self._debug("info", f"Connecting to {self._url} ({', '.join(self._transports)})")
        try:
            await self._client.connect(
                self._url,
                transports=self._transports,
                wait_timeout=self._wait_timeout,
            )
        except SocketIOConnectionError as e:
            self._debug("error", f"Connection failed: {e}")
            raise ChannelConnectionError(f"Could not connect to {self._url}: {e}") from e

    async def disconnect(self) -> None:
        """Close the connection and wait for in-flight emits."""
        if self._pending_sends:
            await asyncio.gather(*self._pending_sends, return_exceptions=True)
        if self.is_connected:
            await self._client.disconnect()

    def send(self, payload: str) -> None:
        """Schedule an emit of the outbound event.

        Dropped with a warning if the connection is not up yet.
        """
        if not self.is_connected:
            self._debug("warning", f"Not connected, dropping '{self._outbound_event}' payload")
            return

        task = asyncio.ensure_future(self._client.emit(self._outbound_event, payload))
        self._pending_sends.add(task)
        task.add_done_callback(self._on_send_done)
        self._debug("debug", f"Emitted '{self._outbound_event}' ({len(payload)} chars)")

    def _on_send_done(self, task: asyncio.Task) -> None:
        self._pending_sends.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._debug("error", f"Emit failed: {exc}")

    async def _on_connect(self) -> None:
        self._debug("info", f"Connected (sid={self._client.sid})")
        self._notify_status(True)

    async def _on_disconnect(self, *args: Any) -> None:
        self._debug("warning", "Disconnected")
        self._notify_status(False)

    async def _on_inbound(self, *args: Any) -> None:
        # Socket.IO may pass zero, one or several positional values
        if not args:
            payload = None
        elif len(args) == 1:
            payload = args[0]
        else:
            payload = list(args)
        self._debug("debug", f"Received '{self._inbound_event}'")
        self._dispatch(InboundEvent(name=self._inbound_event, payload=payload))
