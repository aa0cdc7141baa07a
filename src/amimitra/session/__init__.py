"""Session module for amimitra.

Wires channel events to conversation store transitions.
"""

from .controller import SessionController

__all__ = ["SessionController"]
