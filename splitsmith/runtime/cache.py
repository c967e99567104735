"""Short-TTL caching for scoring results."""

import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable, Optional, Tuple


class Cache(ABC):
    """Abstract cache interface."""

    @abstractmethod
    def get(self, key: Hashable) -> Optional[Any]:
        """Get value from cache."""
        pass

    @abstractmethod
    def set(self, key: Hashable, value: Any, ttl: Optional[float] = None) -> None:
        """Set value in cache."""
        pass

    @abstractmethod
    def delete(self, key: Hashable) -> None:
        """Delete key from cache."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all cache entries."""
        pass


class MemoryCache(Cache):
    """
    In-memory TTL cache storing ``(value, insertion time)`` per key.

    ``get_or_compute`` serializes computation per key: concurrent misses for
    the same key wait on one computation instead of all hitting the store.
    Misses for different keys do not block each other.
    """

    def __init__(self, default_ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl
        self._time = clock
        self._cache: Dict[Hashable, Tuple[Any, float, Optional[float]]] = {}
        self._lock = threading.Lock()
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self.stats = {"hits": 0, "misses": 0}

    def _fresh(self, key: Hashable) -> Tuple[bool, Any]:
        entry = self._cache.get(key)
        if entry is None:
            return False, None
        value, inserted_at, ttl = entry
        if ttl is not None and self._time() - inserted_at >= ttl:
            del self._cache[key]
            return False, None
        return True, value

    def get(self, key: Hashable) -> Optional[Any]:
        """Get value from cache."""
        with self._lock:
            _, value = self._fresh(key)
            return value

    def set(self, key: Hashable, value: Any, ttl: Optional[float] = None) -> None:
        """Set value in cache."""
        with self._lock:
            self._cache[key] = (value, self._time(), ttl if ttl is not None else self.default_ttl)

    def delete(self, key: Hashable) -> None:
        """Delete key from cache."""
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._cache.clear()
            self._key_locks.clear()

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any], ttl: Optional[float] = None) -> Any:
        """Return the cached value for ``key``, computing and storing it on a miss."""
        with self._lock:
            hit, value = self._fresh(key)
            if hit:
                self.stats["hits"] += 1
                return value
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            # Another thread may have filled the entry while we waited
            with self._lock:
                hit, value = self._fresh(key)
                if hit:
                    self.stats["hits"] += 1
                    return value
                self.stats["misses"] += 1

            value = compute()
            self.set(key, value, ttl=ttl)
            return value
