"""Shared fixtures: every test starts with an empty session."""

import pytest

from countup.registry import reset_session_registry


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def fresh_session():
    reset_session_registry()
    yield
    reset_session_registry()


@pytest.fixture
def clock():
    return FakeClock()
