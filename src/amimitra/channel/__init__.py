"""Channel module for amimitra.

Wraps the persistent push/subscribe connection to the chat service.
"""

from .base import ChannelAdapter, EventHandler, StatusCallback, Subscription
from .factory import create_channel
from .loopback import LoopbackChannel
from .models import (
    INBOUND_EVENT,
    OUTBOUND_EVENT,
    ChannelConnectionError,
    ChannelError,
    InboundEvent,
)
from .socketio_channel import SocketIOChannel

__all__ = [
    "INBOUND_EVENT",
    "OUTBOUND_EVENT",
    "ChannelAdapter",
    "ChannelConnectionError",
    "ChannelError",
    "EventHandler",
    "InboundEvent",
    "LoopbackChannel",
    "SocketIOChannel",
    "StatusCallback",
    "Subscription",
    "create_channel",
]
