"""Easing curves for counter animations.

Each curve maps progress in [0, 1] to eased progress in [0, 1], with
f(0) == 0 and f(1) == 1.
"""

from typing import Callable, Dict

EasingFunction = Callable[[float], float]


def linear(t: float) -> float:
    return t


def in_cubic(t: float) -> float:
    return t * t * t


def out_cubic(t: float) -> float:
    """Fast start, gentle landing. Used by every counter."""
    return 1 - (1 - t) ** 3


def in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def out_expo(t: float) -> float:
    if t >= 1:
        return 1.0
    return 1 - 2 ** (-10 * t)


EASING: Dict[str, EasingFunction] = {
    "linear": linear,
    "in_cubic": in_cubic,
    "out_cubic": out_cubic,
    "in_out_cubic": in_out_cubic,
    "out_expo": out_expo,
}

DEFAULT_EASING = "out_cubic"


def get_easing(name: str) -> EasingFunction:
    """Look up an easing curve by name."""
    try:
        return EASING[name]
    except KeyError:
        known = ", ".join(sorted(EASING))
        raise KeyError(f"unknown easing {name!r} (known: {known})") from None
