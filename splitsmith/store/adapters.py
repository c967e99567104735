"""Store adapters (Redis, InMemory) and the process-wide store pool."""

import threading
import time
from typing import Any, Callable, Dict, Optional, Set, Union

import redis

from splitsmith.dx.errors import StoreUnavailable
from splitsmith.io.ser import ConnectionSpec
from splitsmith.store.base import KeyValueStore
from splitsmith.utils.logging import get_logger, log_error

logger = get_logger("store")

_GLOB_SPECIAL = "\\*?[]"


def _escape_glob(text: str) -> str:
    for char in _GLOB_SPECIAL:
        text = text.replace(char, "\\" + char)
    return text


class RedisStore(KeyValueStore):
    """Redis-backed store. Connection and timeout failures raise StoreUnavailable."""

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        timeout_ms: int = 1000,
        client: Optional[Any] = None,
    ):
        """
        Initialize Redis store.

        Args:
            redis_url: Redis connection URL
            timeout_ms: Socket connect/read timeout applied to every command
            client: Optional pre-built client (used as-is)
        """
        self.redis_url = redis_url
        self.timeout_ms = timeout_ms
        self._redis = client
        self._lock = threading.Lock()

    def _get_redis(self):
        """Lazy load Redis connection."""
        if self._redis is None:
            with self._lock:
                if self._redis is None:
                    timeout = self.timeout_ms / 1000.0
                    self._redis = redis.from_url(
                        self.redis_url,
                        decode_responses=True,
                        socket_timeout=timeout,
                        socket_connect_timeout=timeout,
                    )
        return self._redis

    def _call(self, operation: str, func: Callable[..., Any], *args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            log_error(logger, "Redis command failed", e, {"operation": operation, "url": self.redis_url})
            raise StoreUnavailable(operation, f"Redis unavailable during '{operation}': {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._call("get", self._get_redis().get, key)

    def set(self, key: str, value: str, ttl_ms: Optional[int] = None) -> None:
        self._call("set", self._get_redis().set, key, value, px=ttl_ms)

    def expire(self, key: str, ttl_ms: int) -> bool:
        return bool(self._call("pexpire", self._get_redis().pexpire, key, ttl_ms))

    def exists(self, key: str) -> bool:
        return bool(self._call("exists", self._get_redis().exists, key))

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return int(self._call("delete", self._get_redis().delete, *keys))

    def hget(self, key: str, field: str) -> Optional[str]:
        return self._call("hget", self._get_redis().hget, key, field)

    def hgetall(self, key: str) -> Dict[str, str]:
        return self._call("hgetall", self._get_redis().hgetall, key) or {}

    def hincrby(self, key: str, field: str, amount: int = 1) -> int:
        return int(self._call("hincrby", self._get_redis().hincrby, key, field, amount))

    def hincrbyfloat(self, key: str, field: str, amount: float) -> float:
        return float(self._call("hincrbyfloat", self._get_redis().hincrbyfloat, key, field, amount))

    def keys(self, prefix: str) -> Set[str]:
        pattern = _escape_glob(prefix) + "*"
        client = self._get_redis()
        return self._call("scan", lambda: set(client.scan_iter(match=pattern, count=500)))

    def renamenx(self, src: str, dst: str) -> bool:
        try:
            return bool(self._call("renamenx", self._get_redis().renamenx, src, dst))
        except redis.exceptions.ResponseError as e:
            if "no such key" in str(e).lower():
                raise KeyError(src) from e
            raise


class InMemoryStore(KeyValueStore):
    """In-process store with TTL support (for testing and local development)."""

    def __init__(self, clock: Callable[[], float] = time.time):
        """
        Initialize in-memory store.

        Args:
            clock: Time source in seconds; inject a fake to test expiry
        """
        self._clock = clock
        self._data: Dict[str, Union[str, Dict[str, str]]] = {}
        self._expiry: Dict[str, float] = {}
        self._lock = threading.RLock()

    def _live(self, key: str) -> bool:
        expiry = self._expiry.get(key)
        if expiry is not None and self._clock() >= expiry:
            self._data.pop(key, None)
            del self._expiry[key]
        return key in self._data

    def _hash(self, key: str, create: bool = False) -> Dict[str, str]:
        if self._live(key):
            value = self._data[key]
            if not isinstance(value, dict):
                raise TypeError(f"Key '{key}' does not hold a hash")
            return value
        if create:
            self._data[key] = {}
            return self._data[key]
        return {}

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            if not self._live(key):
                return None
            value = self._data[key]
            if isinstance(value, dict):
                raise TypeError(f"Key '{key}' holds a hash")
            return value

    def set(self, key: str, value: str, ttl_ms: Optional[int] = None) -> None:
        with self._lock:
            self._data[key] = str(value)
            if ttl_ms is not None:
                self._expiry[key] = self._clock() + ttl_ms / 1000.0
            else:
                self._expiry.pop(key, None)

    def expire(self, key: str, ttl_ms: int) -> bool:
        with self._lock:
            if not self._live(key):
                return False
            self._expiry[key] = self._clock() + ttl_ms / 1000.0
            return True

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._live(key)

    def delete(self, *keys: str) -> int:
        with self._lock:
            removed = 0
            for key in keys:
                if self._live(key):
                    del self._data[key]
                    removed += 1
                self._expiry.pop(key, None)
            return removed

    def hget(self, key: str, field: str) -> Optional[str]:
        with self._lock:
            return self._hash(key).get(field)

    def hgetall(self, key: str) -> Dict[str, str]:
        with self._lock:
            return dict(self._hash(key))

    def hincrby(self, key: str, field: str, amount: int = 1) -> int:
        with self._lock:
            fields = self._hash(key, create=True)
            value = int(fields.get(field, "0")) + amount
            fields[field] = str(value)
            return value

    def hincrbyfloat(self, key: str, field: str, amount: float) -> float:
        with self._lock:
            fields = self._hash(key, create=True)
            value = float(fields.get(field, "0")) + amount
            fields[field] = repr(value)
            return value

    def keys(self, prefix: str) -> Set[str]:
        with self._lock:
            return {key for key in list(self._data) if key.startswith(prefix) and self._live(key)}

    def renamenx(self, src: str, dst: str) -> bool:
        with self._lock:
            if not self._live(src):
                raise KeyError(f"No such key: {src}")
            if self._live(dst):
                return False
            self._data[dst] = self._data.pop(src)
            if src in self._expiry:
                self._expiry[dst] = self._expiry.pop(src)
            return True


_pool: Dict[ConnectionSpec, KeyValueStore] = {}
_pool_lock = threading.Lock()


def store_for(spec: ConnectionSpec) -> KeyValueStore:
    """Return the shared store for a connection spec, creating it on first use."""
    with _pool_lock:
        store = _pool.get(spec)
        if store is None:
            if spec.backend == "memory":
                store = InMemoryStore()
            else:
                store = RedisStore(redis_url=spec.url, timeout_ms=spec.timeout_ms)
            logger.info(f"Created {spec.backend} store for {spec.url} (prefix '{spec.key_prefix}')")
            _pool[spec] = store
        return store


def register_store(spec: ConnectionSpec, store: KeyValueStore) -> None:
    """Bind an existing store instance to a connection spec."""
    with _pool_lock:
        _pool[spec] = store


def reset_store_pool() -> None:
    """Drop all pooled stores."""
    with _pool_lock:
        _pool.clear()
