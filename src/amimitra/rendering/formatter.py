"""Text formatter.

Turns raw message text into display blocks. Pure and deterministic:
malformed markers never raise; unpaired delimiters are rendered literally.

Rules:
- Each newline-separated line is a candidate block; blank lines are dropped
- A line starting with a single ``*`` is a bullet item
- ``**...**`` inside a line is bold
"""

import re

from .models import BulletItem, DisplayBlock, Emphasis, Paragraph, PlainText, Span

# Capturing group keeps the matched delimiters in re.split output
_EMPHASIS_PATTERN = re.compile(r"(\*\*.*?\*\*)")

BULLET_MARKER = "*"
EMPHASIS_MARKER = "**"


def format_inline(text: str) -> tuple[Span, ...]:
    """Split a line into plain and bold spans.

    Args:
        text: A single line of text

    Returns:
        Spans in reading order, with empty segments removed
    """
    spans: list[Span] = []
    for index, part in enumerate(_EMPHASIS_PATTERN.split(text)):
        if not part:
            continue
        # Odd indexes are the captured **...** matches
        if index % 2 == 1:
            inner = part[len(EMPHASIS_MARKER):-len(EMPHASIS_MARKER)]
            # Empty emphasis renders as nothing
            if inner:
                spans.append(Emphasis(text=inner))
            continue
        spans.append(PlainText(text=part))
    return tuple(spans)


def format_text(raw: str) -> list[DisplayBlock]:
    """Convert raw text into a sequence of display blocks.

    Args:
        raw: Message text, possibly multi-line

    Returns:
        Paragraph and BulletItem blocks in order; empty for blank input
    """
    blocks: list[DisplayBlock] = []
    for line in raw.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue

        if trimmed.startswith(BULLET_MARKER) and not trimmed.startswith(EMPHASIS_MARKER):
            item = trimmed[len(BULLET_MARKER):].strip()
            blocks.append(BulletItem(spans=format_inline(item)))
        else:
            blocks.append(Paragraph(spans=format_inline(line)))
    return blocks
