"""Terminal UI module for amimitra.

Provides a Textual-based TUI for a realtime chat session.

Module structure (Parnas principle - each module hides a design decision):
- config.py: Constants and display strings
- widgets.py: Custom widgets (transcript, input history, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatTextualApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, MessageBubble

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ChatTextualApp",
    "DebugPanel",
    "LogLevel",
    "MessageBubble",
    "run_textual_tui",
]
