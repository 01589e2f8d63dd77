"""Abstract base class for page fetchers.

The crawl orchestrator only needs "give me the HTML at this URL".  How the
page is retrieved, cached and rate limited is the implementation's concern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IPageFetcher(ABC):
    """Contract for services that return the HTML body of a URL."""

    @abstractmethod
    async def fetch(self, url: str) -> str:
        """Return the HTML body of *url*.

        Parameters
        ----------
        url:
            Absolute URL of a listing or detail page.

        Raises
        ------
        pilkiscraper.utils.errors.FetchError
            If the page cannot be retrieved from the network or the cache.
        """
