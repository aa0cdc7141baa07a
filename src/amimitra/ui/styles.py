"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout:
- Transcript fills the screen, debug log docks under it when shown
- Input bar pinned to the bottom
- User bubbles lean right in primary, bot bubbles lean left in secondary
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

#empty-state {
    width: 100%;
    height: auto;
    margin: 2 4;
    padding: 1 2;
    text-align: center;
    color: $text-muted;
    border: round $border;
}

/* ============================================
   Message Bubbles
   ============================================ */
.message {
    width: 85%;
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
    background: $surface;
}

.user-message {
    margin-left: 15%;
    border-right: tall $primary;
}

.bot-message {
    border-left: tall $secondary;

    &:hover {
        background: $boost;
    }
}

.message-header {
    height: 1;
    text-style: bold;
    color: $text-muted;
}

.user-message .message-header {
    text-align: right;
    color: $primary;
}

.bot-message .message-header {
    color: $secondary;
}

.message-content {
    height: auto;
    color: $foreground;
}

#typing-indicator {
    width: auto;
    height: 1;
    margin: 1 0 0 0;
    padding: 0 2;
    color: $secondary;
    background: $surface;
    border-left: tall $secondary;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    overflow-y: scroll;
    overflow-x: auto;
}

/* ============================================
   Chat Input Bar
   ============================================ */
ChatInputBar {
    height: 3;
    margin: 0 0 0 0;
    background: $panel;
}

#chat-input {
    width: 1fr;
    border: round $primary 60%;

    &:focus {
        border: round $primary;
    }
}

#send-btn {
    width: 10;
    min-width: 10;
    margin-left: 1;
}
"""
