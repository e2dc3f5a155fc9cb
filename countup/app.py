"""Textual dashboard showing the configured counters.

Each counter animates the first time it is mounted. Press ``r`` to tear the
counters down and mount fresh copies: names that already settled render
their end value straight away.
"""

from typing import List, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Static

from .config import DEFAULT_FPS, CounterConfig
from .registry import SessionRegistry, get_session_registry
from .theme import PALETTE
from .widgets import AnimatedCounter


class _DashboardStatusBar(Static):
    """Bottom line: settled counter count and key hints."""

    DEFAULT_CSS = f"""
    _DashboardStatusBar {{
        dock: bottom;
        height: 1;
        width: 100%;
        background: {PALETTE.surface};
        padding: 0 2;
    }}
    """

    def __init__(self, registry: SessionRegistry, **kwargs) -> None:
        super().__init__(**kwargs)
        self._registry = registry

    def render(self) -> Text:
        t = Text()
        t.append(f" {len(self._registry)} settled", style=f"dim {PALETTE.settled}")
        t.append("  .  r remount  .  s skip  .  q quit", style=f"dim {PALETTE.text_dim}")
        return t


class CounterDashboard(App):
    """Fullscreen dashboard of animated counters."""

    TITLE = "countup"

    DEFAULT_CSS = f"""
    CounterDashboard {{
        background: {PALETTE.bg};
    }}
    #counters {{
        height: auto;
        border: round {PALETTE.border};
        background: {PALETTE.surface};
        padding: 1 2;
        margin: 1 2;
    }}
    """

    BINDINGS = [
        Binding("r", "remount", "Remount"),
        Binding("s", "skip", "Skip"),
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        counters: List[CounterConfig],
        registry: Optional[SessionRegistry] = None,
        fps: int = DEFAULT_FPS,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.counters = list(counters)
        self.registry = registry if registry is not None else get_session_registry()
        self.fps = fps
        self.mount_count = 0

    def _build_counters(self) -> List[AnimatedCounter]:
        self.mount_count += 1
        return [
            AnimatedCounter(config, registry=self.registry, fps=self.fps)
            for config in self.counters
        ]

    def compose(self) -> ComposeResult:
        with Vertical(id="counters"):
            yield from self._build_counters()
        yield _DashboardStatusBar(self.registry)

    async def action_remount(self) -> None:
        """Replace every counter with a freshly mounted instance."""
        container = self.query_one("#counters", Vertical)
        await container.remove_children()
        await container.mount_all(self._build_counters())
        self.query_one(_DashboardStatusBar).refresh()

    def action_skip(self) -> None:
        for counter in self.query(AnimatedCounter):
            counter.skip_animation()

    def on_animated_counter_settled(self, event: AnimatedCounter.Settled) -> None:
        self.query_one(_DashboardStatusBar).refresh()
