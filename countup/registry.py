"""Session-wide registry of settled counter values.

Maps a counter name to the terminal value it last settled at. The registry
lives for the life of the process: it is built lazily on first access via
get_session_registry() and is never persisted. Records are only ever
overwritten, never deleted.
"""

import logging
import threading
from typing import Dict, Optional, Union

Number = Union[int, float]

_log = logging.getLogger(__name__)


class SessionRegistry:
    """Keyed store of terminal values, one record per counter name."""

    def __init__(self) -> None:
        self._values: Dict[str, Number] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Number]:
        """Return the last terminal value recorded for key, or None."""
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: Number) -> None:
        """Record value as the terminal value for key. Last write wins."""
        with self._lock:
            previous = self._values.get(key)
            self._values[key] = value
        if previous is None:
            _log.debug("counter %r settled at %s", key, value)
        elif previous != value:
            _log.debug("counter %r terminal value %s -> %s", key, previous, value)

    def snapshot(self) -> Dict[str, Number]:
        """Return a copy of all records (name -> value)."""
        with self._lock:
            return dict(self._values)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)


_SESSION: Optional[SessionRegistry] = None
_SESSION_LOCK = threading.Lock()


def get_session_registry() -> SessionRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _SESSION
    with _SESSION_LOCK:
        if _SESSION is None:
            _SESSION = SessionRegistry()
        return _SESSION


def reset_session_registry() -> None:
    """Drop the process-wide registry. Primarily for testing."""
    global _SESSION
    with _SESSION_LOCK:
        _SESSION = None
