"""Public interface definitions for the crawler's external collaborators.

The extraction core never talks to the network or the filesystem
directly.  Page fetching, caching and episode storage are reached through
the abstract base classes defined here; concrete adapters live in
``pilkiscraper/providers/`` and are wired together by the CLI.

CONCRETE PROVIDER MAP:
    Interface         →  Concrete implementations (in pilkiscraper/providers/)
    ─────────────────────────────────────────────────────────────────────
    IPageFetcher      →  HttpxPageFetcher
    ICacheProvider    →  DiskCacheProvider, MemoryCacheProvider
    IEpisodeStore     →  JsonFileEpisodeStore

Re-exports
----------
IPageFetcher
    "HTML for this URL" contract.
ICacheProvider
    URL-keyed page cache contract.
IEpisodeStore
    One-document-per-episode persistence contract.
"""

from pilkiscraper.interfaces.cache_provider import ICacheProvider
from pilkiscraper.interfaces.episode_store import IEpisodeStore
from pilkiscraper.interfaces.page_fetcher import IPageFetcher

__all__ = [
    "ICacheProvider",
    "IEpisodeStore",
    "IPageFetcher",
]
