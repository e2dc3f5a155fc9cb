"""Terminal (Rich) rendering for counters."""

from .live import format_value, render_counter, run_counter

__all__ = [
    "format_value",
    "render_counter",
    "run_counter",
]
