"""
Time-based cache with an injectable clock.
Shared by collaborators that fetch job data; safe under concurrent access.
"""

from dataclasses import dataclass
import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional


@dataclass
class _Entry:
    value: Any
    stored_at: float


class TTLCache:
    """Key/value cache whose entries expire ttl_seconds after being stored."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        """
        Initialize cache.

        Args:
            ttl_seconds: Lifetime of an entry
            clock: Returns the current time in seconds (monotonic by default)
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the value if present and fresh, else None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at >= self.ttl_seconds:
                return None
            return entry.value

    def get_stale(self, key: Hashable) -> Optional[Any]:
        """Return the value regardless of age, else None."""
        with self._lock:
            entry = self._entries.get(key)
            return entry.value if entry else None

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._entries[key] = _Entry(value=value, stored_at=self._clock())

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
