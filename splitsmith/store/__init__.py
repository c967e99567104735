"""Key-value store interface and adapters."""

from splitsmith.store.adapters import (
    InMemoryStore,
    RedisStore,
    register_store,
    reset_store_pool,
    store_for,
)
from splitsmith.store.base import KeyValueStore

__all__ = [
    "KeyValueStore",
    "RedisStore",
    "InMemoryStore",
    "store_for",
    "register_store",
    "reset_store_pool",
]
