"""Provider factory functions for CLI.

Centralizes creation of the channel and session from environment variables.
Hides configuration details from command implementations.
"""

import os

import typer
from rich.console import Console

from ..channel import INBOUND_EVENT, OUTBOUND_EVENT, ChannelAdapter, create_channel
from ..session import SessionController

DEFAULT_SERVER_URL = "https://mini-chatbot-backend-x6x6.onrender.com"

# Default console for output
_console = Console()


def _echo_responder(text: str) -> dict[str, str]:
    """Offline reply used by the loopback channel."""
    return {"response": f"You said: **{text}**"}


def get_channel(
    console: Console | None = None,
    url: str | None = None,
    backend: str | None = None,
) -> ChannelAdapter:
    """Create the chat channel from environment variables.

    Args:
        console: Optional Rich console for output
        url: Overrides AMIMITRA_SERVER_URL
        backend: Overrides AMIMITRA_CHANNEL

    Returns:
        Channel instance (not yet connected)

    Raises:
        typer.Exit: If the configuration is invalid

    Environment variables:
        AMIMITRA_CHANNEL: Channel backend (socketio, loopback; default: socketio)
        AMIMITRA_SERVER_URL: Chat server URL (default: the hosted Ami Mitra backend)
        AMIMITRA_OUTBOUND_EVENT: Event emitted with user text (default: user-message)
        AMIMITRA_INBOUND_EVENT: Event carrying replies (default: ai-response)
        AMIMITRA_TRANSPORTS: Comma-separated transports (default: websocket,polling)
        AMIMITRA_CONNECT_TIMEOUT: Seconds to wait for the handshake (default: 10)
    """
    con = console or _console
    channel_backend = (backend or os.getenv("AMIMITRA_CHANNEL", "socketio")).lower()
    inbound_event = os.getenv("AMIMITRA_INBOUND_EVENT", INBOUND_EVENT)

    if channel_backend == "loopback":
        return create_channel("loopback", responder=_echo_responder, inbound_event=inbound_event)

    if channel_backend != "socketio":
        con.print(f"[red]Error: Unknown channel backend: {channel_backend}[/red]")
        raise typer.Exit(code=1)

    transports = [
        t.strip()
        for t in os.getenv("AMIMITRA_TRANSPORTS", "websocket,polling").split(",")
        if t.strip()
    ]
    return create_channel(
        "socketio",
        url=url or os.getenv("AMIMITRA_SERVER_URL", DEFAULT_SERVER_URL),
        outbound_event=os.getenv("AMIMITRA_OUTBOUND_EVENT", OUTBOUND_EVENT),
        inbound_event=inbound_event,
        transports=transports,
        wait_timeout=_read_seconds("AMIMITRA_CONNECT_TIMEOUT", con, default=10.0),
    )


def get_typing_timeout(console: Console | None = None) -> float | None:
    """Read the typing timeout (seconds) from AMIMITRA_TYPING_TIMEOUT.

    Returns:
        Timeout in seconds, or None when unset (typing never expires)
    """
    return _read_seconds("AMIMITRA_TYPING_TIMEOUT", console or _console, default=None)


def get_session(
    console: Console | None = None,
    url: str | None = None,
    backend: str | None = None,
) -> SessionController:
    """Create a session over a channel built from the environment."""
    con = console or _console
    channel = get_channel(con, url=url, backend=backend)
    return SessionController(channel, typing_timeout=get_typing_timeout(con))


def _read_seconds(name: str, console: Console, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        console.print(f"[red]Error: {name} must be a number of seconds, got {raw!r}[/red]")
        raise typer.Exit(code=1) from None
    if value <= 0:
        console.print(f"[red]Error: {name} must be positive, got {raw!r}[/red]")
        raise typer.Exit(code=1)
    return value
