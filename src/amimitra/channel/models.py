"""Data models for the channel module.

These models describe what travels over a channel, independent of the
transport that carries it.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Default event names on the wire
OUTBOUND_EVENT = "user-message"
INBOUND_EVENT = "ai-response"


class InboundEvent(BaseModel):
    """An event pushed by the remote service."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Event name as emitted by the server")
    payload: Any = Field(default=None, description="Raw event payload, shape not guaranteed")
    received_at: datetime = Field(default_factory=datetime.now)


class ChannelError(Exception):
    """Base error for channel failures."""


class ChannelConnectionError(ChannelError):
    """Raised when the initial connection cannot be established."""
