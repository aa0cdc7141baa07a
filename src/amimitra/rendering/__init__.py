"""Rendering module for amimitra.

Converts raw message text into structured display blocks (paragraphs,
bullet items, bold spans) and renders them for the terminal.
"""

from .formatter import format_inline, format_text
from .models import BulletItem, DisplayBlock, Emphasis, Paragraph, PlainText, Span
from .terminal import plain_text, to_rich_text

__all__ = [
    "BulletItem",
    "DisplayBlock",
    "Emphasis",
    "Paragraph",
    "PlainText",
    "Span",
    "format_inline",
    "format_text",
    "plain_text",
    "to_rich_text",
]
