"""countup - animated numeric counters that settle once per session."""

__version__ = "0.1.0"

from .config import ConfigManager, CounterConfig, CounterConfigError
from .controller import CounterController, CounterState
from .engine import CountUp
from .registry import SessionRegistry, get_session_registry, reset_session_registry

__all__ = [
    "ConfigManager",
    "CounterConfig",
    "CounterConfigError",
    "CounterController",
    "CounterState",
    "CountUp",
    "SessionRegistry",
    "get_session_registry",
    "reset_session_registry",
]
