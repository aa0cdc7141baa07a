"""Data models for the conversation log.

These models define the messages exchanged in a session and the
read-only state snapshot handed to the presentation layer.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sender(str, Enum):
    """Who authored a message."""

    USER = "user"
    BOT = "bot"


class Message(BaseModel):
    """A single transcript entry. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Creation time in epoch ms, unique and increasing within a session")
    text: str = Field(description="Canonical message text")
    sender: Sender = Field(description="Author of the message")
    timestamp: str = Field(description="Time of day the message was created, display formatted")

    @property
    def is_user(self) -> bool:
        return self.sender is Sender.USER


class ConversationState(BaseModel):
    """Snapshot of the conversation at a point in time."""

    model_config = ConfigDict(frozen=True)

    log: tuple[Message, ...] = Field(default_factory=tuple)
    typing: bool = Field(default=False, description="True while a reply is outstanding")

    @property
    def is_empty(self) -> bool:
        return not self.log

    def last_bot_message(self) -> Message | None:
        """Get the most recent bot message, if any."""
        for msg in reversed(self.log):
            if msg.sender is Sender.BOT:
                return msg
        return None
