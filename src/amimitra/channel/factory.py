"""Factory for creating channel backends."""

from typing import Any

from .base import ChannelAdapter


def create_channel(backend: str = "socketio", **kwargs: Any) -> ChannelAdapter:
    """Create a channel backend.

    Args:
        backend: Backend type ("socketio" or "loopback")
        **kwargs: Backend-specific configuration
            For socketio:
                - url: str (required)
                - outbound_event: str (default: 'user-message')
                - inbound_event: str (default: 'ai-response')
                - transports: list[str] | None
                - wait_timeout: float (default: 10.0)
            For loopback:
                - responder: Callable[[str], Any] | None
                - inbound_event: str (default: 'ai-response')

    Returns:
        ChannelAdapter instance

    Raises:
        ValueError: If backend type is not supported
        TypeError: If required configuration is missing
    """
    backend_lower = backend.lower()

    if backend_lower == "socketio":
        if "url" not in kwargs:
            raise TypeError("Socket.IO channel requires 'url' in config")
        from .socketio_channel import SocketIOChannel
        return SocketIOChannel(**kwargs)

    if backend_lower == "loopback":
        from .loopback import LoopbackChannel
        return LoopbackChannel(**kwargs)

    raise ValueError(
        f"Unsupported channel backend: {backend}. "
        f"Supported backends: socketio, loopback"
    )
