"""Time-driven interpolation engine for counters.

CountUp produces the value of a counter at a point in time, moving from
start to end over duration seconds along an easing curve. It does not own a
timer: the host (a Textual interval or a Rich Live loop) calls tick() on
every frame, and subscribers hear about each distinct value change.
"""

import time
from decimal import Decimal
from typing import Callable, List, Optional, Union

from .easing import DEFAULT_EASING, EasingFunction, get_easing

Number = Union[int, float]
Clock = Callable[[], float]
Subscriber = Callable[[Number], None]


def decimal_places(value: Number) -> int:
    """Number of digits after the decimal point, ignoring trailing zeros."""
    if isinstance(value, int):
        return 0
    exponent = Decimal(str(value)).normalize().as_tuple().exponent
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


class CountUp:
    """Animate a number from start to end.

    Args:
        start: Value shown before and at the beginning of the animation.
        end: Value the animation settles at.
        duration: Animation length in seconds. Non-positive durations settle
            on the first tick.
        easing: Curve name from countup.easing or a callable.
        is_counting: When False the value stays at start and tick() is a no-op.
        decimals: Rounding precision. Defaults to the larger precision of
            start and end.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        start: Number = 0,
        end: Number = 0,
        duration: float = 2.0,
        easing: Union[str, EasingFunction] = DEFAULT_EASING,
        is_counting: bool = True,
        decimals: Optional[int] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.start_value = start
        self.end_value = end
        self.duration = duration
        self.is_counting = is_counting
        self._ease = get_easing(easing) if isinstance(easing, str) else easing
        if decimals is None:
            decimals = max(decimal_places(start), decimal_places(end))
        self._decimals = decimals
        self._clock = clock or time.monotonic
        self._started_at: Optional[float] = None
        self._value: Number = start
        self._done = False
        self._stopped = False
        self._subscribers: List[Subscriber] = []

    @property
    def value(self) -> Number:
        return self._value

    @property
    def is_complete(self) -> bool:
        return self._done

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    def value_at(self, elapsed: float) -> Number:
        """Value after elapsed seconds of animation."""
        if self.duration <= 0 or elapsed >= self.duration:
            return self.end_value
        progress = max(elapsed, 0.0) / self.duration
        raw = self.start_value + (self.end_value - self.start_value) * self._ease(progress)
        if self._decimals == 0:
            return int(round(raw))
        return round(raw, self._decimals)

    def tick(self, now: Optional[float] = None) -> Number:
        """Advance to now and return the current value."""
        if not self.is_counting or self._stopped or self._done:
            return self._value
        if now is None:
            now = self._clock()
        if self._started_at is None:
            self._started_at = now
        elapsed = now - self._started_at
        if self.duration <= 0 or elapsed >= self.duration:
            self._done = True
        self._set_value(self.value_at(elapsed))
        return self._value

    def finish(self) -> Number:
        """Jump straight to the end value."""
        if not self.is_counting or self._stopped or self._done:
            return self._value
        self._done = True
        self._set_value(self.end_value)
        return self._value

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call callback with each new value. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def stop(self) -> None:
        """Freeze at the current value and drop all subscribers."""
        self._stopped = True
        self._subscribers.clear()

    def _set_value(self, value: Number) -> None:
        if value == self._value:
            return
        self._value = value
        for callback in list(self._subscribers):
            callback(value)

    def __repr__(self) -> str:
        return (
            f"CountUp(start={self.start_value!r}, end={self.end_value!r}, "
            f"duration={self.duration!r}, value={self._value!r})"
        )
