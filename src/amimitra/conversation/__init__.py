"""Conversation module for amimitra.

Holds the ordered message log and typing state for one session.
"""

from .models import ConversationState, Message, Sender
from .payload import (
    OpaquePayload,
    ResponsePayload,
    StructuredPayload,
    TextPayload,
    canonicalize,
    parse_payload,
)
from .store import DEFAULT_TIMESTAMP_FORMAT, ConversationStore, StateListener

__all__ = [
    "DEFAULT_TIMESTAMP_FORMAT",
    "ConversationState",
    "ConversationStore",
    "Message",
    "OpaquePayload",
    "ResponsePayload",
    "Sender",
    "StateListener",
    "StructuredPayload",
    "TextPayload",
    "canonicalize",
    "parse_payload",
]
