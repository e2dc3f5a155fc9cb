"""countup TUI widgets -- Textual components."""

from .counter import AnimatedCounter

__all__ = [
    "AnimatedCounter",
]
