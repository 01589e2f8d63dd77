"""On-disk page cache: one file per URL under a cache directory.

Entries are named by the SHA-1 of the key and sharded by its first two hex
characters, so the directory stays browsable for thousands of pages.  The
cache never expires entries; delete the directory to force a re-crawl.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

import structlog

from pilkiscraper.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)

_ENTRY_SUFFIX = ".html"


class DiskCacheProvider(ICacheProvider):
    """Persistent page cache rooted at *cache_dir*.

    Writes go to a temporary file first and are renamed into place, so a
    crawl interrupted mid-write never leaves a truncated page behind.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self._cache_dir = Path(cache_dir)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def _path_for(self, key: str) -> Path:
        digest = hashlib.sha1(key.encode("utf-8")).hexdigest()
        return self._cache_dir / digest[:2] / f"{digest}{_ENTRY_SUFFIX}"

    async def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            value = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("cache_miss", key=key)
            return None
        except (OSError, UnicodeDecodeError) as exc:
            # Unreadable entries count as misses; the next set() replaces them.
            logger.warning("cache_read_failed", key=key, path=str(path), error=str(exc))
            return None
        logger.debug("cache_hit", key=key)
        return value

    async def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_path = path.with_suffix(f"{_ENTRY_SUFFIX}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            # Best effort: the page itself was fetched.
            logger.warning("cache_write_failed", key=key, path=str(path), error=str(exc))
            return
        logger.debug("cache_set", key=key)

    def get_provider_name(self) -> str:
        return "disk"

    def entry_count(self) -> int:
        """Return the number of cached pages on disk."""
        if not self._cache_dir.is_dir():
            return 0
        return sum(1 for _ in self._cache_dir.glob(f"*/*{_ENTRY_SUFFIX}"))
