"""Run a counter in the terminal with a Rich Live display.

The controller is re-evaluated once per frame until it settles. A counter
that already settled earlier in the session prints its end value at once.
"""

import time
from typing import Callable, Optional, Union

from rich.console import Console
from rich.live import Live
from rich.text import Text

from ..config import DEFAULT_FPS, CounterConfig
from ..controller import CounterController, CounterState
from ..engine import Clock, decimal_places
from ..registry import SessionRegistry
from ..theme import PALETTE, get_state_style

Number = Union[int, float]


def format_value(value: Number, decimals: Optional[int] = None) -> str:
    """Format with thousands separators, keeping the value's precision."""
    if decimals is None:
        decimals = decimal_places(value)
    if decimals == 0:
        return f"{int(round(value)):,}"
    return f"{value:,.{decimals}f}"


def render_counter(config: CounterConfig, value: Number, state: CounterState) -> Text:
    """Render one counter line: caption then value."""
    decimals = max(decimal_places(config.start), decimal_places(config.end))
    t = Text()
    t.append(f"  {config.caption}: ", style=f"dim {PALETTE.text_dim}")
    t.append(format_value(value, decimals), style=get_state_style(state.value))
    return t


def run_counter(
    config: CounterConfig,
    console: Optional[Console] = None,
    registry: Optional[SessionRegistry] = None,
    fps: int = DEFAULT_FPS,
    clock: Optional[Clock] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Number:
    """Animate config in the terminal and return the value it settled at."""
    from ..theme import console as default_console

    con = console or default_console
    controller = CounterController(config, registry=registry, clock=clock)

    with controller:
        value = controller.evaluate()
        if controller.is_settled:
            con.print(render_counter(config, value, controller.state))
            return value

        with Live(
            render_counter(config, value, controller.state),
            console=con,
            refresh_per_second=fps,
        ) as live:
            while not controller.is_settled:
                sleep(1 / fps)
                value = controller.evaluate()
                live.update(render_counter(config, value, controller.state))

    return value
