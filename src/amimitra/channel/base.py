"""Abstract base class for push/subscribe channels.

This module defines the interface the session uses to talk to the
remote service. The abstraction hides:
- Transport and wire framing (Socket.IO, in-process loopback, ...)
- Connection establishment and reconnection
- How inbound events are scheduled onto the event loop
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .models import InboundEvent

EventHandler = Callable[[InboundEvent], None]
StatusCallback = Callable[[bool], None]


class Subscription:
    """Handle for a registered inbound event handler.

    Closing the subscription unregisters the handler. Can be used as a
    context manager:
        with channel.subscribe(handler):
            ...
    """

    def __init__(self, channel: "ChannelAdapter", handler: EventHandler) -> None:
        self._channel = channel
        self._handler = handler
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Unregister the handler. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._channel._unsubscribe(self._handler)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class ChannelAdapter(ABC):
    """Abstract persistent connection to the remote service.

    Sends are fire-and-forget and inbound events are pushed to
    subscribers as they arrive. Nothing is buffered: events delivered
    while nobody is subscribed are lost, and sends attempted before the
    connection is up are dropped.

    Supports async context manager protocol:
        async with channel:
            channel.send("hello")
    """

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []
        self._debug_callback: Any | None = None
        self._status_callback: StatusCallback | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Channel", message)

    def set_status_callback(self, callback: StatusCallback | None) -> None:
        """Set a callback invoked with True/False as the connection goes up or down.

        Fires for drops and reconnects the transport handles on its own,
        not only for explicit connect()/disconnect() calls.
        """
        self._status_callback = callback

    def _notify_status(self, connected: bool) -> None:
        if self._status_callback:
            self._status_callback(connected)

    def subscribe(self, handler: EventHandler) -> Subscription:
        """Register a handler for inbound events.

        Args:
            handler: Called once per inbound event, on the event loop

        Returns:
            Subscription whose close() unregisters the handler
        """
        self._handlers.append(handler)
        return Subscription(self, handler)

    def _unsubscribe(self, handler: EventHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def _dispatch(self, event: InboundEvent) -> None:
        """Hand an inbound event to every current subscriber."""
        if not self._handlers:
            self._debug("warning", f"No subscriber for '{event.name}', event dropped")
            return
        for handler in list(self._handlers):
            handler(event)

    @abstractmethod
    async def connect(self) -> None:
        """Establish the connection.

        Raises:
            ChannelConnectionError: If the endpoint cannot be reached
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection gracefully."""

    @abstractmethod
    def send(self, payload: str) -> None:
        """Emit the outbound event without waiting for delivery."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether sends will currently reach the transport."""

    @property
    @abstractmethod
    def inbound_event(self) -> str:
        """Name of the event delivered to subscribers."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "ChannelAdapter":
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.disconnect()
