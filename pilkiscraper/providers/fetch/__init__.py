"""Page fetchers: httpx over a URL-keyed cache."""

from pilkiscraper.providers.fetch.httpx_fetcher import HttpxPageFetcher, make_http_client

__all__ = ["HttpxPageFetcher", "make_http_client"]
