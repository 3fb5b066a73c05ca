"""
In-Process Cache for Netflex Lookups.

Remote lookups (variables, static content) are memoized here so that a
request does not hit the Netflex API once per helper call. Entries expire
after their TTL; entries stored with remember_forever never expire. There
is no size-based eviction.
"""
import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)


class Cache:
    """Key/value cache with per-entry expiry.

    Each entry is stored as (expires_at, value) where expires_at is a
    time.monotonic() deadline, or None for entries that never expire.

    Example:
        >>> cache = Cache()
        >>> cache.remember("variables", 60, lambda: api.get("foundation/variables"))
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._entries: "OrderedDict[str, Tuple[Optional[float], Any]]" = OrderedDict()
        self._lock = threading.Lock()
        self._clock = clock

    def has(self, key: str) -> bool:
        with self._lock:
            return self._lookup(key)[0]

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value for key, or default if absent or expired."""
        with self._lock:
            found, value = self._lookup(key)
        return value if found else default

    def put(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store value under key for ttl seconds (forever when ttl is None)."""
        expires_at = None if ttl is None else self._clock() + ttl
        with self._lock:
            self._entries[key] = (expires_at, value)
            self._entries.move_to_end(key)

    def remember(self, key: str, ttl: Optional[float], producer: Callable[[], Any]) -> Any:
        """Return the cached value for key, computing and storing it on a miss.

        The producer runs outside the lock; exceptions it raises propagate
        and nothing is stored.
        """
        with self._lock:
            found, value = self._lookup(key)
        if found:
            return value

        logger.debug(f"Cache miss for '{key}'")
        value = producer()
        self.put(key, value, ttl)
        return value

    def remember_forever(self, key: str, producer: Callable[[], Any]) -> Any:
        return self.remember(key, None, producer)

    def forget(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def flush(self) -> None:
        with self._lock:
            self._entries.clear()

    def _lookup(self, key: str) -> Tuple[bool, Any]:
        # Caller must hold the lock
        entry = self._entries.get(key)
        if entry is None:
            return False, None

        expires_at, value = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._entries[key]
            return False, None
        return True, value


_default_cache: Optional[Cache] = None
_default_cache_lock = threading.Lock()


def get_cache() -> Cache:
    """Return the process-wide cache, creating it on first use."""
    global _default_cache
    with _default_cache_lock:
        if _default_cache is None:
            _default_cache = Cache()
        return _default_cache


def set_cache(cache: Optional[Cache]) -> None:
    """Replace the process-wide cache (None resets to a fresh one on next use)."""
    global _default_cache
    with _default_cache_lock:
        _default_cache = cache
