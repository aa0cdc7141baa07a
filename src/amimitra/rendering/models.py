"""Display block models.

Blocks are derived from a message's text every time it is rendered and
are never stored.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class PlainText(BaseModel):
    """Unstyled run of text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    text: str


class Emphasis(BaseModel):
    """Bold run of text (delimiters already removed)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["emphasis"] = "emphasis"
    text: str


Span = Annotated[PlainText | Emphasis, Field(discriminator="kind")]


class Paragraph(BaseModel):
    """A line of body text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph"] = "paragraph"
    spans: tuple[Span, ...] = ()

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


class BulletItem(BaseModel):
    """A bulleted list entry."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bullet"] = "bullet"
    spans: tuple[Span, ...] = ()

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


DisplayBlock = Annotated[Paragraph | BulletItem, Field(discriminator="kind")]
