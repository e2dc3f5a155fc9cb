"""Animated numeric counter widget.

Counts from start to end once per session. A counter whose name already
settled earlier in the session renders its end value on mount. Clicking
the counter skips to the end value.
"""

from typing import Optional

from rich.text import Text
from textual.message import Message
from textual.widgets import Static

from ..config import DEFAULT_FPS, CounterConfig
from ..controller import CounterController
from ..engine import decimal_places
from ..registry import SessionRegistry
from ..theme import PALETTE, get_state_style
from ..ui.live import format_value


class AnimatedCounter(Static):
    """A labelled number that counts up (or down) to its end value."""

    DEFAULT_CSS = """
    AnimatedCounter {
        height: 1;
        width: 100%;
        padding: 0 2;
    }
    """

    class Settled(Message):
        """The counter reached its end value during this mount."""

        def __init__(self, counter: "AnimatedCounter", value) -> None:
            super().__init__()
            self.counter = counter
            self.value = value

    def __init__(
        self,
        config: CounterConfig,
        registry: Optional[SessionRegistry] = None,
        fps: int = DEFAULT_FPS,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.config = config
        self.controller = CounterController(config, registry=registry)
        self._fps = fps
        self._decimals = max(decimal_places(config.start), decimal_places(config.end))
        self._value = config.start
        self._timer = None

    @property
    def value(self):
        return self._value

    @property
    def counting(self) -> bool:
        return not self.controller.is_settled

    def on_mount(self) -> None:
        self.controller.mount()
        self._value = self.controller.evaluate()
        if self.counting:
            self._timer = self.set_interval(1 / self._fps, self._step)

    def on_unmount(self) -> None:
        self._stop_timer()
        self.controller.unmount()

    def on_click(self) -> None:
        self.skip_animation()

    def _step(self) -> None:
        self._value = self.controller.evaluate()
        if not self.counting:
            self._stop_timer()
            self.post_message(self.Settled(self, self._value))
        self.refresh()

    def _stop_timer(self) -> None:
        if self._timer:
            self._timer.stop()
            self._timer = None

    def skip_animation(self) -> None:
        """Jump to final value immediately."""
        if self._timer is None:
            return
        self._value = self.controller.skip()
        self._stop_timer()
        self.post_message(self.Settled(self, self._value))
        self.refresh()

    def render(self) -> Text:
        t = Text()
        t.append(f"{self.config.caption:<16}", style=f"dim {PALETTE.text_dim}")
        t.append(
            format_value(self._value, self._decimals),
            style=get_state_style(self.controller.state.value),
        )
        return t
