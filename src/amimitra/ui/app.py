"""Main Textual TUI application.

Orchestrates the UI components and forwards user input to the session.
"""

import asyncio
import contextlib

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..channel import ChannelError
from ..conversation import ConversationState
from ..rendering import format_text, plain_text
from ..session import SessionController
from .config import (
    APP_TITLE,
    STATUS_CONNECTING,
    STATUS_OFFLINE,
    STATUS_READY,
    STATUS_TYPING,
    LogLevel,
)
from .styles import APP_CSS
from .themes import MITRA_MOCHA
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class ChatTextualApp(App):
    """Textual TUI for a realtime chat session."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("slash", "focus_input", "Focus input", show=False),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        session: SessionController,
        log_level: str | None = None,
        endpoint_label: str = "",
    ) -> None:
        super().__init__()
        self._session = session
        self._log_level = log_level
        self._endpoint_label = endpoint_label
        self._connected = False
        self._remove_listener = None

    @property
    def session(self) -> SessionController:
        return self._session

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(MITRA_MOCHA)
        self.theme = "mitra-mocha"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._session.set_debug_callback(log_panel.record)
        self._session.channel.set_status_callback(self._on_connection_change)
        self._remove_listener = self._session.add_listener(self._on_state_change)
        self._update_status(self._session.snapshot())

        self.query_one("#chat-input-bar", ChatInputBar).focus_input()
        self._connect()

    def on_unmount(self) -> None:
        self._session.channel.set_status_callback(None)
        if self._remove_listener is not None:
            self._remove_listener()
            self._remove_listener = None

    @work(exclusive=True, group="connect")
    async def _connect(self) -> None:
        """Start the session without blocking the UI."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        try:
            await self._session.start()
        except ChannelError as e:
            log_panel.error("TUI", str(e))
            self._connected = False
            self._update_status(self._session.snapshot())
            self.notify(f"Connection failed: {str(e)[:60]}", severity="error", timeout=5)
            return

        self._connected = self._session.channel.is_connected
        self._update_status(self._session.snapshot())
        log_panel.info("TUI", "Connected")

    def _on_connection_change(self, connected: bool) -> None:
        """Track drops and reconnects reported by the channel."""
        if connected == self._connected:
            return
        self._connected = connected
        self._update_status(self._session.snapshot())
        if not connected and self._session.is_started:
            self.notify("Connection lost, reconnecting...", severity="warning", timeout=3)

    def _on_state_change(self, state: ConversationState) -> None:
        self.query_one("#chat-history", ChatHistoryWidget).sync(state)
        self._update_status(state)

    def _update_status(self, state: ConversationState) -> None:
        if state.typing:
            status = STATUS_TYPING
        elif self._connected:
            status = STATUS_READY
        elif self._session.is_started:
            status = STATUS_OFFLINE
        else:
            status = STATUS_CONNECTING
        parts = [status]
        if self._endpoint_label:
            parts.append(self._endpoint_label)
        self.sub_title = " | ".join(parts)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if not self._session.channel.is_connected:
            self.notify("Not connected - message will not be delivered", severity="warning", timeout=3)
        self._session.submit(event.value)

    def action_focus_input(self) -> None:
        """Focus the chat input."""
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last bot response to clipboard."""
        message = self._session.snapshot().last_bot_message()
        if message is not None:
            self.copy_to_clipboard(plain_text(format_text(message.text)))
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    session: SessionController,
    log_level: str | None = None,
    endpoint_label: str = "",
) -> None:
    """Run the Textual TUI.

    Args:
        session: Session to drive (started by the app, closed on exit)
        log_level: Log level for panel (debug/info/warning/error), None to hide
        endpoint_label: Shown in the header subtitle
    """
    app = ChatTextualApp(
        session=session,
        log_level=log_level,
        endpoint_label=endpoint_label,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(ChannelError):
            await session.close()
