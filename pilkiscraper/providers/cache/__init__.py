"""Page cache providers.

DiskCacheProvider keeps one file per URL so repeated crawls never fetch
the same page twice.  MemoryCacheProvider is a per-process TTL cache for
tests and single-page runs.  Both implement ICacheProvider, so the fetcher
does not care which one it is given.
"""

from pilkiscraper.providers.cache.disk_cache import DiskCacheProvider
from pilkiscraper.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["DiskCacheProvider", "MemoryCacheProvider"]
