"""In-memory page cache using cachetools.TTLCache.

Fast, but lives only as long as the process.  Useful for tests and one-off
``parse`` runs; crawls that should survive restarts use the disk cache.
"""

from __future__ import annotations

import structlog
from cachetools import TTLCache

from pilkiscraper.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Time-to-live in seconds for every entry.
    """

    def __init__(self, max_size: int = 1000, ttl: int = 3600) -> None:
        self._cache: TTLCache[str, str] = TTLCache(maxsize=max_size, ttl=ttl)

    async def get(self, key: str) -> str | None:
        value = self._cache.get(key)
        if value is not None:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_miss", key=key)
        return value

    async def set(self, key: str, value: str) -> None:
        self._cache[key] = value
        logger.debug("cache_set", key=key)

    def get_provider_name(self) -> str:
        return "memory"
