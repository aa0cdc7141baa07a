"""
Amimitra: a realtime chat client for a remote conversational-AI service.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision:
- channel: how messages travel to and from the server
- conversation: how the transcript and typing state are held
- rendering: how message text becomes display blocks
- session: how the above are wired together
"""

__version__ = "0.1.0"

from .channel import ChannelAdapter, InboundEvent, LoopbackChannel, SocketIOChannel, create_channel
from .conversation import ConversationState, ConversationStore, Message, Sender
from .rendering import BulletItem, Emphasis, Paragraph, PlainText, format_text
from .session import SessionController

__all__ = [
    "BulletItem",
    "ChannelAdapter",
    "ConversationState",
    "ConversationStore",
    "Emphasis",
    "InboundEvent",
    "LoopbackChannel",
    "Message",
    "Paragraph",
    "PlainText",
    "Sender",
    "SessionController",
    "SocketIOChannel",
    "create_channel",
    "format_text",
]
