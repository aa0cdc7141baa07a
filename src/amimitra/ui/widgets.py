"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Message bubble rendering from display blocks
- Typing indicator and empty state
- Log rendering and level filtering
"""

from datetime import datetime

from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, RichLog, Static

from ..conversation import ConversationState, Message, Sender
from ..rendering import format_text, plain_text, to_rich_text
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    SENDER_LABELS,
    WELCOME_BODY,
    WELCOME_HEADLINE,
    LogLevel,
)

# Rich style for bullet markers (Rich cannot resolve Textual CSS variables)
BULLET_STYLE = "bold #f9e2af"


def copy_text(widget: Static | Vertical, text: str, label: str = "Copied") -> None:
    """Copy text to the system clipboard, falling back to OSC 52."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(label, timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{label} (terminal)", timeout=2)


class MessageBubble(Vertical):
    """A rendered transcript entry.

    The message text is formatted into blocks at render time. Clicking
    a bot message copies its text as displayed, without delimiters.
    """

    def __init__(self, message: Message, *args, **kwargs) -> None:
        classes = f"message {message.sender.value}-message"
        super().__init__(*args, classes=classes, **kwargs)
        self._message = message

    @property
    def message(self) -> Message:
        return self._message

    def compose(self):
        msg = self._message
        label = SENDER_LABELS.get(msg.sender.value, msg.sender.value)
        header = f"{label}  [dim]{msg.timestamp}[/]"
        if msg.sender is Sender.BOT:
            header += "  [dim](click to copy)[/]"
        yield Static(header, classes="message-header")
        yield Static(
            to_rich_text(format_text(msg.text), bullet_style=BULLET_STYLE),
            classes="message-content",
        )

    def on_click(self, event: Click) -> None:
        """Copy bot message content when clicked."""
        event.stop()
        if self._message.sender is Sender.BOT:
            copy_text(self, plain_text(format_text(self._message.text)), "Message copied")


class TypingIndicator(Static):
    """Placeholder bubble shown while a reply is outstanding."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__("[bold]•  •  •[/]", *args, **kwargs)

    def on_mount(self) -> None:
        self.display = False


class EmptyState(Static):
    """Welcome panel shown until the first message arrives."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(
            f"[bold]{WELCOME_HEADLINE}[/]\n\n{WELCOME_BODY}",
            *args,
            **kwargs,
        )


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript kept in sync with conversation snapshots."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._rendered: list[Message] = []

    def compose(self):
        yield EmptyState(id="empty-state")
        yield TypingIndicator(id="typing-indicator")

    @property
    def message_count(self) -> int:
        return len(self._rendered)

    def sync(self, state: ConversationState) -> None:
        """Render any messages not yet shown and update the typing row.

        The log is append-only, so only the tail past what has already
        been rendered needs mounting.
        """
        new_messages = state.log[len(self._rendered):]
        indicator = self.query_one("#typing-indicator", TypingIndicator)

        if new_messages:
            self.query_one("#empty-state", EmptyState).display = False
            for msg in new_messages:
                self.mount(MessageBubble(msg), before=indicator)
                self._rendered.append(msg)
            self.border_subtitle = f"{len(self._rendered)} messages"

        indicator.display = state.typing
        if new_messages or state.typing:
            self.scroll_end(animate=False)


class HistoryInput(Input):
    """Input widget with command history support.

    Use Up/Down arrow keys to navigate through history.
    Multi-line pastes are converted to single line (newlines become spaces).
    """

    BINDINGS = [
        Binding("up", "history_prev", "Previous", show=False),
        Binding("down", "history_next", "Next", show=False),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_paste(self, event) -> None:
        """Handle paste events - convert newlines to spaces for single-line input."""
        from textual.events import Paste

        if isinstance(event, Paste) and event.text:
            clean_text = " ".join(event.text.split())
            self.insert_text_at_cursor(clean_text)
            event.prevent_default()
            event.stop()

    def action_history_prev(self) -> None:
        """Step back through history."""
        if not self._history:
            return
        if self._history_index == -1:
            self._current_input = self.value
            self._history_index = len(self._history) - 1
        elif self._history_index > 0:
            self._history_index -= 1
        self.value = self._history[self._history_index]
        self.cursor_position = len(self.value)

    def action_history_next(self) -> None:
        """Step forward through history, back to the draft at the end."""
        if self._history_index == -1:
            return
        if self._history_index < len(self._history) - 1:
            self._history_index += 1
            self.value = self._history[self._history_index]
        else:
            self._history_index = -1
            self.value = self._current_input
        self.cursor_position = len(self.value)

    def add_to_history(self, entry: str) -> None:
        """Add an entry to history, dropping the oldest past the cap."""
        if entry and (not self._history or self._history[-1] != entry):
            self._history.append(entry)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self._current_input = ""


class ChatInputBar(Horizontal):
    """Single-line chat input with a Send button.

    Enter or the Send button submits. Blank input is ignored here too,
    but the text is forwarded as typed (no trimming).
    """

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Enter)"
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def _submit(self) -> None:
        text_input = self.query_one("#chat-input", HistoryInput)
        value = text_input.value
        if not value.strip():
            return
        text_input.add_to_history(value)
        text_input.value = ""
        self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class DebugPanel(RichLog):
    """Log panel for real-time session tracing with level filtering.

    Shows timestamped log messages from the channel, session and store.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    _level_colors = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    _component_colors = {
        "TUI": "cyan",
        "Channel": "magenta",
        "Session": "green",
        "Store": "bright_blue",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Channel, Session, Store)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        from rich.markup import escape

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self._level_colors.get(level, "white")
        comp_color = self._component_colors.get(component, "white")

        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def record(self, level: str, component: str, message: str) -> None:
        """Debug-callback entry point: Callable(level, component, message)."""
        self.log(component, message, LogLevel.from_string(level))

    def debug(self, component: str, message: str) -> None:
        """Log a DEBUG level message."""
        self.log(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        """Log an INFO level message."""
        self.log(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        """Log a WARNING level message."""
        self.log(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        """Log an ERROR level message."""
        self.log(component, message, LogLevel.ERROR)

    def show(self) -> None:
        """Show the log panel."""
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        """Hide the log panel."""
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
