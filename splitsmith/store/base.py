"""Key-value store interface consumed by the allocation engine."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Set


class KeyValueStore(ABC):
    """
    Abstract interface for the networked key-value store.

    Values are strings (hash fields included), mirroring a Redis client with
    ``decode_responses=True``. Every method may raise ``StoreUnavailable``.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get a string value, None if absent or expired."""
        pass

    @abstractmethod
    def set(self, key: str, value: str, ttl_ms: Optional[int] = None) -> None:
        """Set a string value, optionally expiring after ``ttl_ms``."""
        pass

    @abstractmethod
    def expire(self, key: str, ttl_ms: int) -> bool:
        """Reset a key's TTL. Returns False if the key does not exist."""
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    def delete(self, *keys: str) -> int:
        """Delete keys, returning how many existed."""
        pass

    @abstractmethod
    def hget(self, key: str, field: str) -> Optional[str]:
        pass

    @abstractmethod
    def hgetall(self, key: str) -> Dict[str, str]:
        pass

    @abstractmethod
    def hincrby(self, key: str, field: str, amount: int = 1) -> int:
        """Atomically increment an integer hash field."""
        pass

    @abstractmethod
    def hincrbyfloat(self, key: str, field: str, amount: float) -> float:
        """Atomically increment a float hash field."""
        pass

    @abstractmethod
    def keys(self, prefix: str) -> Set[str]:
        """Enumerate all keys starting with ``prefix``."""
        pass

    @abstractmethod
    def renamenx(self, src: str, dst: str) -> bool:
        """Rename ``src`` to ``dst`` unless ``dst`` exists. Returns success.

        Raises KeyError if ``src`` does not exist.
        """
        pass
