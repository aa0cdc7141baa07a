"""Terminal rendering of display blocks.

Hides how blocks map onto Rich styles.
"""

from collections.abc import Sequence

from rich.text import Text

from .models import BulletItem, DisplayBlock, Emphasis, Span

BULLET_PREFIX = "  • "
EMPHASIS_STYLE = "bold"


def _append_spans(result: Text, spans: Sequence[Span], emphasis_style: str) -> None:
    for span in spans:
        if isinstance(span, Emphasis):
            result.append(span.text, style=emphasis_style)
        else:
            result.append(span.text)


def to_rich_text(
    blocks: Sequence[DisplayBlock],
    emphasis_style: str = EMPHASIS_STYLE,
    bullet_style: str = "",
) -> Text:
    """Render blocks as a single Rich Text, one block per line.

    Args:
        blocks: Output of format_text
        emphasis_style: Rich style applied to bold spans
        bullet_style: Rich style applied to the bullet marker

    Returns:
        Text with no markup parsing applied to message content
    """
    result = Text(overflow="fold")
    for i, block in enumerate(blocks):
        if i:
            result.append("\n")
        if isinstance(block, BulletItem):
            result.append(BULLET_PREFIX, style=bullet_style)
        _append_spans(result, block.spans, emphasis_style)
    return result


def plain_text(blocks: Sequence[DisplayBlock]) -> str:
    """Render blocks without styling (delimiters removed)."""
    lines = []
    for block in blocks:
        prefix = BULLET_PREFIX if isinstance(block, BulletItem) else ""
        lines.append(prefix + block.text)
    return "\n".join(lines)
