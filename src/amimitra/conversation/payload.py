"""Inbound payload normalization.

The server may push a plain string, a mapping with a ``response`` field,
or anything else. Payloads are parsed into a tagged union at the
boundary and reduced to one canonical string before they reach the
conversation store.
"""

import json
from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


def _to_text(value: Any) -> str:
    """Coerce an arbitrary value to its textual form."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


class TextPayload(BaseModel):
    """A plain string payload."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str

    def canonical_text(self) -> str:
        return self.text


class StructuredPayload(BaseModel):
    """A structured payload carrying a ``response`` field."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    response: Any = None

    def canonical_text(self) -> str:
        return _to_text(self.response)


class OpaquePayload(BaseModel):
    """Any other shape; shown as its serialized form."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["opaque"] = "opaque"
    value: Any = None

    def canonical_text(self) -> str:
        return _to_text(self.value)


ResponsePayload = Annotated[
    TextPayload | StructuredPayload | OpaquePayload,
    Field(discriminator="kind"),
]


def parse_payload(raw: Any) -> ResponsePayload:
    """Classify a raw inbound value.

    Never raises: unknown shapes become OpaquePayload.
    """
    if isinstance(raw, (TextPayload, StructuredPayload, OpaquePayload)):
        return raw
    if isinstance(raw, str):
        return TextPayload(text=raw)
    if isinstance(raw, (bytes, bytearray)):
        return TextPayload(text=_to_text(raw))
    if isinstance(raw, Mapping) and "response" in raw:
        return StructuredPayload(response=raw["response"])
    if not isinstance(raw, Mapping) and hasattr(raw, "response"):
        return StructuredPayload(response=getattr(raw, "response"))
    return OpaquePayload(value=raw)


def canonicalize(raw: Any) -> str:
    """Reduce any inbound value to the string stored on a bot message."""
    return parse_payload(raw).canonical_text()
