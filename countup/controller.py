"""Per-instance decision logic for session-scoped counters.

A CounterController decides, on every render, what number a counter shows.
The first instance of a named counter animates from its start value to its
end value and records the end value in the session registry. Any later
instance with the same name (a remount, a duplicate, a re-opened screen)
finds that record and shows the end value straight away.
"""

import enum
import logging
from typing import Callable, Optional, Union

from .config import CounterConfig
from .easing import DEFAULT_EASING
from .engine import Clock, CountUp
from .registry import SessionRegistry, get_session_registry

Number = Union[int, float]
EngineFactory = Callable[..., CountUp]

_log = logging.getLogger(__name__)


class CounterState(enum.Enum):
    IDLE_AT_START = "idle"
    ANIMATING = "animating"
    SETTLED = "settled"


class CounterController:
    """Drive one counter instance.

    Args:
        config: The counter definition.
        registry: Session registry to read and commit terminal values.
            Defaults to the process-wide registry.
        engine_factory: Builds the interpolation engine. Called with
            ``is_counting``, ``start``, ``end``, ``duration`` and ``easing``.
        clock: Monotonic clock handed to the default engine.
    """

    def __init__(
        self,
        config: CounterConfig,
        registry: Optional[SessionRegistry] = None,
        engine_factory: Optional[EngineFactory] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config
        self.registry = registry if registry is not None else get_session_registry()
        self._engine_factory = engine_factory or CountUp
        self._clock = clock
        self._engine: Optional[CountUp] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._state = CounterState.IDLE_AT_START
        self._committed = False
        self._mounted = False

    # -- Lifecycle ---------------------------------------------------------

    def mount(self) -> None:
        """Build the engine and subscribe to its value changes. Idempotent."""
        if self._mounted:
            return
        self._mounted = True

        start = self.effective_start()
        end = self.config.end
        kwargs = dict(
            is_counting=start != end,
            start=start,
            end=end,
            duration=self.config.duration,
            easing=DEFAULT_EASING,
        )
        if self._clock is not None:
            kwargs["clock"] = self._clock
        self._engine = self._engine_factory(**kwargs)
        self._unsubscribe = self._engine.subscribe(self._on_value_change)
        _log.debug("mounted counter %r: %s -> %s", self.config.name, start, end)

    def unmount(self) -> None:
        """Release the engine subscription. Registry state is left as is."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._engine is not None:
            self._engine.stop()
        self._mounted = False

    def __enter__(self) -> "CounterController":
        self.mount()
        return self

    def __exit__(self, *exc_info) -> None:
        self.unmount()

    # -- Decisions ---------------------------------------------------------

    def prior_value(self) -> Optional[Number]:
        """Terminal value recorded for this counter, when persisting."""
        if not self.config.persist:
            return None
        # A recorded 0 is a real settled value, only None means no record.
        return self.registry.get(self.config.name)

    def effective_start(self) -> Number:
        prior = self.prior_value()
        return prior if prior is not None else self.config.start

    def evaluate(self, now: Optional[float] = None) -> Number:
        """Return the value to display right now.

        Mounts the controller first when it is not mounted, so evaluating
        after unmount() starts a fresh instance rather than a frozen one.
        """
        if not self._mounted:
            self.mount()

        end = self.config.end
        prior = self.prior_value()
        start = prior if prior is not None else self.config.start

        if start == end:
            self._state = CounterState.SETTLED if prior is not None else CounterState.IDLE_AT_START
            return end

        if prior is not None and prior == end:
            self._state = CounterState.SETTLED
            return end

        value = self._engine.tick(now)
        if value == end:
            self._state = CounterState.SETTLED
        else:
            self._state = CounterState.ANIMATING
        return value

    def skip(self) -> Number:
        """Finish the animation now. Commits like a natural finish."""
        value = self.evaluate()
        if self._state is not CounterState.ANIMATING:
            return value
        self._engine.finish()
        return self.evaluate()

    def _on_value_change(self, value: Number) -> None:
        if value != self.config.end:
            return
        self._state = CounterState.SETTLED
        if not self.config.persist or self._committed:
            return
        self._committed = True
        self.registry.set(self.config.name, self.config.end)

    # -- Introspection -----------------------------------------------------

    @property
    def state(self) -> CounterState:
        return self._state

    @property
    def is_settled(self) -> bool:
        return self._state is not CounterState.ANIMATING

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def engine(self) -> Optional[CountUp]:
        return self._engine
