"""Conversation store.

Owns the ordered message log and the typing flag. All transitions go
through the two append operations; the presentation layer only ever
sees immutable snapshots.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from .models import ConversationState, Message, Sender
from .payload import parse_payload

# en-US two-digit 12-hour clock, e.g. "03:07 PM"
DEFAULT_TIMESTAMP_FORMAT = "%I:%M %p"

StateListener = Callable[[ConversationState], None]


class ConversationStore:
    """Append-only message log with a typing flag.

    The store never drops or reorders appends: the log reflects call
    order exactly.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> None:
        self._clock = clock
        self._timestamp_format = timestamp_format
        self._log: list[Message] = []
        self._typing = False
        self._last_id = 0
        self._listeners: list[StateListener] = []
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Store", message)

    @property
    def typing(self) -> bool:
        return self._typing

    def __len__(self) -> int:
        return len(self._log)

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register a callback invoked with a fresh snapshot after each change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def append_user_message(self, text: str) -> Message | None:
        """Append a user message and mark a reply as outstanding.

        Args:
            text: Literal text typed by the user

        Returns:
            The new message, or None if text was blank (nothing changes)
        """
        if not text.strip():
            self._debug("debug", "Ignoring blank user message")
            return None
        message = self._append(text, Sender.USER)
        self._typing = True
        self._notify()
        return message

    def append_bot_message(self, raw_payload: Any) -> Message:
        """Append a bot message built from a raw inbound payload.

        The payload is canonicalized to a string here, once. Clears the
        typing flag.
        """
        payload = parse_payload(raw_payload)
        if payload.kind == "opaque":
            self._debug("warning", f"Unexpected payload shape {type(payload.value).__name__}, coercing to text")
        message = self._append(payload.canonical_text(), Sender.BOT)
        self._typing = False
        self._notify()
        return message

    def clear_typing(self) -> None:
        """Drop the typing flag without appending anything."""
        if self._typing:
            self._typing = False
            self._notify()

    def snapshot(self) -> ConversationState:
        """Get a read-only view of the current state."""
        return ConversationState(log=tuple(self._log), typing=self._typing)

    def _append(self, text: str, sender: Sender) -> Message:
        now = self._clock()
        message = Message(
            id=self._next_id(now),
            text=text,
            sender=sender,
            timestamp=now.strftime(self._timestamp_format),
        )
        self._log.append(message)
        self._debug("debug", f"Appended {sender.value} message #{len(self._log)} ({len(text)} chars)")
        return message

    def _next_id(self, now: datetime) -> int:
        # Millisecond timestamps collide for fast appends; bump to stay unique
        candidate = int(now.timestamp() * 1000)
        self._last_id = max(candidate, self._last_id + 1)
        return self._last_id

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            listener(state)
