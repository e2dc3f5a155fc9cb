"""countup color system.

All hex values live here. Widgets never hardcode colors.
"""

from dataclasses import dataclass
from typing import Dict

from rich.console import Console


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Palette:
    """Surface / text / functional color palette."""

    # Surfaces
    bg: str = "#0d1117"
    surface: str = "#121218"
    border: str = "#30363d"

    # Text hierarchy
    text_bright: str = "#e8e8f0"
    text_primary: str = "#c9d1d9"
    text_dim: str = "#6e7681"

    # Counter states
    animating: str = "#00d4e5"
    settled: str = "#34d399"
    idle: str = "#e8e8f0"
    error: str = "#e55a6e"


PALETTE = Palette()


# ---------------------------------------------------------------------------
# Counter state styles (keyed by CounterState.value)
# ---------------------------------------------------------------------------

STATE_STYLES: Dict[str, str] = {
    "idle": PALETTE.idle,
    "animating": PALETTE.animating,
    "settled": PALETTE.settled,
}


def get_state_style(state: str) -> str:
    """Bold style for a counter value in the given state."""
    return f"bold {STATE_STYLES.get(state, PALETTE.text_primary)}"


console = Console()
