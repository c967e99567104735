"""Runtime modules for configuration and caching."""

from splitsmith.runtime.cache import Cache, MemoryCache
from splitsmith.runtime.config import ConfigResolver

__all__ = [
    "Cache",
    "MemoryCache",
    "ConfigResolver",
]
