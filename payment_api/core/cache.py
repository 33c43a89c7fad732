"""Process-local response cache with named regions.

Values are stored per region under string keys. Entries live until they
are replaced or their whole region is evicted; there is no expiry and no
cross-process invalidation.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from payment_api.core.config import CacheConfig
from payment_api.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def render_key(key: Any) -> str:
    """Render a key-like value as a deterministic string."""
    return str(key)


class Cache(ABC):
    """Keyed store with named regions."""

    @abstractmethod
    def get(self, region: str, key: Any) -> Any | None:
        """Return the cached value, or None on a miss."""

    @abstractmethod
    def put(self, region: str, key: Any, value: Any) -> None:
        """Store or replace the value under key."""

    @abstractmethod
    def evict_region(self, region: str) -> None:
        """Drop every entry of a region."""

    def put_and_return(self, region: str, key: Any, value: T) -> T:
        """Store value under key and hand it back to the caller."""
        self.put(region, key, value)
        return value


class InMemoryCache(Cache):
    """Thread-safe dictionary-backed cache."""

    def __init__(self) -> None:
        self._regions: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, region: str, key: Any) -> Any | None:
        with self._lock:
            value = self._regions.get(region, {}).get(render_key(key))
        logger.debug("cache_lookup", region=region, key=render_key(key), hit=value is not None)
        return value

    def put(self, region: str, key: Any, value: Any) -> None:
        with self._lock:
            self._regions.setdefault(region, {})[render_key(key)] = value

    def evict_region(self, region: str) -> None:
        with self._lock:
            evicted = len(self._regions.pop(region, {}))
        logger.debug("cache_region_evicted", region=region, entries=evicted)

    def size(self, region: str) -> int:
        """Number of entries currently held in a region."""
        with self._lock:
            return len(self._regions.get(region, {}))


class NoOpCache(Cache):
    """Cache that never holds anything; every read misses."""

    def get(self, region: str, key: Any) -> Any | None:
        return None

    def put(self, region: str, key: Any, value: Any) -> None:
        return None

    def evict_region(self, region: str) -> None:
        return None


def create_cache(config: CacheConfig) -> Cache:
    """Build the cache configured for this process."""
    if config.enabled:
        return InMemoryCache()
    logger.info("cache_disabled")
    return NoOpCache()
