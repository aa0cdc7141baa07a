"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from ..channel import ChannelError
from ..conversation import ConversationState, Sender
from ..rendering import format_text, to_rich_text
from ..ui.config import APP_TITLE, STATUS_TYPING, WELCOME_BODY, LogLevel
from .providers import get_session

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="amimitra",
    help="Realtime chat client for the Ami Mitra assistant",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

_LEVEL_COLORS = {
    "debug": "dim",
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
}


def _console_debug_callback(threshold: int):
    """Build a debug callback that prints entries at or above threshold."""
    def _callback(level: str, component: str, message: str) -> None:
        if LogLevel.from_string(level) < threshold:
            return
        color = _LEVEL_COLORS.get(level, "white")
        console.print(f"[{color}]{level.upper():<5}[/] [dim]\\[{component}][/] {escape(message)}")
    return _callback


@app.command(name="tui")
def tui_command(
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Chat server URL (overrides AMIMITRA_SERVER_URL)"
    ),
    channel: str | None = typer.Option(
        None,
        "--channel",
        "-c",
        help="Channel backend: 'socketio' or 'loopback' (offline echo)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        session = get_session(console, url=url, backend=channel)
        label = getattr(session.channel, "url", session.channel.backend_type)
        await run_textual_tui(session, log_level=log_level, endpoint_label=label)
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def chat(
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Chat server URL (overrides AMIMITRA_SERVER_URL)"
    ),
    channel: str | None = typer.Option(
        None,
        "--channel",
        "-c",
        help="Channel backend: 'socketio' or 'loopback' (offline echo)"
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Console log level: debug, info, warning, or error"
    ),
):
    """Line-mode chat: type a message, wait for the reply."""
    async def _chat():
        session = get_session(console, url=url, backend=channel)
        session.set_debug_callback(_console_debug_callback(LogLevel.from_string(log_level)))

        reply_ready = asyncio.Event()

        def _on_change(state: ConversationState) -> None:
            if not state.typing:
                reply_ready.set()

        session.add_listener(_on_change)

        try:
            with console.status("[dim]Connecting...[/dim]"):
                await session.start()
        except ChannelError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)

        console.print(f"[bold cyan]{APP_TITLE}[/bold cyan]")
        console.print(f"[dim]{WELCOME_BODY}[/dim]")
        console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

        try:
            while True:
                try:
                    user_input = await asyncio.to_thread(
                        console.input, "[bold yellow]You:[/bold yellow] "
                    )
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if user_input.strip().lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                reply_ready.clear()
                if session.submit(user_input) is None:
                    continue
                if not session.channel.is_connected:
                    console.print("[yellow]Not connected, message was not delivered.[/yellow]\n")
                    continue

                with console.status(f"[dim]{STATUS_TYPING}[/dim]"):
                    await reply_ready.wait()

                last = session.snapshot().log[-1]
                if last.sender is Sender.BOT:
                    console.print(f"[bold green]Bot:[/bold green] [dim]{last.timestamp}[/dim]")
                    console.print(to_rich_text(format_text(last.text)))
                    console.print()
                else:
                    console.print("[yellow]No reply received.[/yellow]\n")
        finally:
            await session.close()

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
