"""Page fetcher backed by httpx with a URL-keyed cache and politeness delay.

Every page is looked up in the cache first; only misses go to the network.
Network requests are spaced at least ``request_delay`` seconds apart across
all concurrent callers, since the archive is a shared public service.
"""

from __future__ import annotations

import asyncio
import time

import httpx
import structlog

from pilkiscraper.interfaces.cache_provider import ICacheProvider
from pilkiscraper.interfaces.page_fetcher import IPageFetcher
from pilkiscraper.utils.errors import FetchError

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_REQUEST_DELAY = 1.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; pilkiscraper/0.1; transcript archiver)"


def make_http_client(
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient with reasonable defaults for archive scraping.

    Follows redirects: Wayback snapshot URLs routinely redirect to the
    nearest capture timestamp.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers={
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
        follow_redirects=True,
    )


class HttpxPageFetcher(IPageFetcher):
    """Fetches HTML pages through a cache.

    Parameters
    ----------
    http_client:
        Shared ``httpx.AsyncClient``.  Injected so tests can pass a mock.
    cache:
        Cache consulted before and populated after every network fetch.
    request_delay:
        Minimum seconds between two network requests.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        cache: ICacheProvider,
        request_delay: float = DEFAULT_REQUEST_DELAY,
    ) -> None:
        self._client = http_client
        self._cache = cache
        self._request_delay = request_delay
        self._last_request_time: float = 0.0
        self._throttle_lock = asyncio.Lock()

    async def _throttle(self) -> None:
        """Enforce the minimum delay between network requests."""
        async with self._throttle_lock:
            elapsed = time.monotonic() - self._last_request_time
            if self._last_request_time > 0 and elapsed < self._request_delay:
                await asyncio.sleep(self._request_delay - elapsed)
            self._last_request_time = time.monotonic()

    async def fetch(self, url: str) -> str:
        cached = await self._cache.get(url)
        if cached is not None:
            logger.debug("page_cache_hit", url=url, cache=self._cache.get_provider_name())
            return cached

        await self._throttle()
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise FetchError(message=f"Timeout: {exc}", source_url=url) from exc
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                message=f"HTTP {exc.response.status_code}", source_url=url
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(message=f"HTTP error: {exc}", source_url=url) from exc

        html = response.text
        await self._cache.set(url, html)
        logger.info("page_fetched", url=url, status=response.status_code, length=len(html))
        return html
