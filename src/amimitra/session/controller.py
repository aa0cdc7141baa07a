"""Session controller.

Binds a channel to a conversation store. Stateless glue apart from the
channel subscription and the optional typing timer.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from ..channel import ChannelAdapter, InboundEvent, Subscription
from ..conversation import ConversationState, ConversationStore, Message, StateListener


class SessionController:
    """One chat session over one channel.

    Usage:
        session = SessionController(channel)
        await session.start()
        session.submit("Hello")
        ...
        await session.close()

    Also an async context manager.
    """

    def __init__(
        self,
        channel: ChannelAdapter,
        store: ConversationStore | None = None,
        inbound_event: str | None = None,
        typing_timeout: float | None = None,
    ) -> None:
        self._channel = channel
        self._store = store if store is not None else ConversationStore()
        self._inbound_event = inbound_event or channel.inbound_event
        self._typing_timeout = typing_timeout
        self._subscription: Subscription | None = None
        self._typing_timer: asyncio.TimerHandle | None = None
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for session logging.

        Propagated to the channel and the store.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback
        self._channel.set_debug_callback(callback)
        self._store.set_debug_callback(callback)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Session", message)

    @property
    def channel(self) -> ChannelAdapter:
        return self._channel

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def inbound_event(self) -> str:
        return self._inbound_event

    @property
    def is_started(self) -> bool:
        return self._subscription is not None

    async def start(self) -> None:
        """Subscribe to inbound events, then connect the channel.

        Subscribing first means no event pushed right after the
        handshake is missed.

        Raises:
            ChannelConnectionError: If the channel cannot connect
        """
        if self._subscription is None:
            self._subscription = self._channel.subscribe(self._on_event)
        try:
            await self._channel.connect()
        except BaseException:
            self._subscription.close()
            self._subscription = None
            raise
        self._debug("info", f"Session started on {self._channel.backend_type} channel")

    async def close(self) -> None:
        """Drop the subscription and disconnect the channel."""
        self._cancel_typing_timer()
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
        await self._channel.disconnect()
        self._debug("info", "Session closed")

    def submit(self, text: str) -> Message | None:
        """Record the user's message, then send it.

        The store is updated before the send so the message shows up
        immediately regardless of network latency.

        Returns:
            The appended message, or None for blank input (nothing sent)
        """
        message = self._store.append_user_message(text)
        if message is None:
            return None
        self._channel.send(text)
        self._arm_typing_timer()
        return message

    def receive(self, payload: Any) -> Message:
        """Record a bot reply from a raw payload."""
        self._cancel_typing_timer()
        return self._store.append_bot_message(payload)

    def snapshot(self) -> ConversationState:
        """Get the current conversation state."""
        return self._store.snapshot()

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener on the store. Returns a remover."""
        return self._store.add_listener(listener)

    def _on_event(self, event: InboundEvent) -> None:
        if event.name != self._inbound_event:
            self._debug("warning", f"Ignoring event '{event.name}' (expecting '{self._inbound_event}')")
            return
        message = self.receive(event.payload)
        self._debug("info", f"Reply received ({len(message.text)} chars)")

    def _arm_typing_timer(self) -> None:
        if self._typing_timeout is None:
            return
        self._cancel_typing_timer()
        loop = asyncio.get_running_loop()
        self._typing_timer = loop.call_later(self._typing_timeout, self._on_typing_timeout)

    def _cancel_typing_timer(self) -> None:
        if self._typing_timer is not None:
            self._typing_timer.cancel()
            self._typing_timer = None

    def _on_typing_timeout(self) -> None:
        self._typing_timer = None
        self._debug("warning", f"No reply after {self._typing_timeout:g}s, clearing typing state")
        self._store.clear_typing()

    async def __aenter__(self) -> "SessionController":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
