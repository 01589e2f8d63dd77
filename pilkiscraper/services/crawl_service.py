# =============================================================================
# pilkiscraper/services/crawl_service.py - Transcript Crawl Orchestrator
# =============================================================================
#
# Drives one crawl of the archived Pilkipedia transcripts category:
#   1. Listing      - fetch the seed (category) page; failure is fatal
#   2. Discovery    - every `li > a` whose text ends with "/Transcript",
#                     resolved against the listing URL, de-duplicated
#   3. Storage prep - create the output directory once; failure is fatal
#   4. Per page     - fetch → assemble → log parse issues → write JSON
#
# Detail pages run concurrently, bounded by a semaphore.  A page that fails
# for any reason is logged and recorded in the report; the crawl goes on.
# =============================================================================

from __future__ import annotations

import asyncio
from pathlib import Path
from urllib.parse import urljoin, urlparse

import structlog
from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, Field

from pilkiscraper.interfaces.episode_store import IEpisodeStore
from pilkiscraper.interfaces.page_fetcher import IPageFetcher
from pilkiscraper.services.episode_assembler import EpisodeAssembler
from pilkiscraper.utils.concurrency import DEFAULT_MAX_WORKERS, throttled_gather
from pilkiscraper.utils.errors import FetchError, WriteError

logger = structlog.get_logger(logger_name=__name__)

TRANSCRIPT_LINK_SUFFIX = "/Transcript"
LINK_SELECTOR = "li > a"


def _domain_allowed(url: str, allowed_domains: list[str] | tuple[str, ...]) -> bool:
    if not allowed_domains:
        return True
    host = (urlparse(url).hostname or "").lower()
    return any(host == d or host.endswith(f".{d}") for d in allowed_domains)


def discover_transcript_links(
    html: str,
    base_url: str,
    allowed_domains: list[str] | tuple[str, ...] = (),
) -> list[str]:
    """Return absolute detail-page URLs linked from a listing page.

    Parameters
    ----------
    html:
        Listing page HTML.
    base_url:
        URL the listing was fetched from; relative hrefs resolve against it.
    allowed_domains:
        Hosts links may point at (subdomains included).  Empty means any.

    Returns
    -------
    list[str]
        Unique URLs in document order.
    """
    soup = BeautifulSoup(html, "html.parser")
    urls: list[str] = []
    seen: set[str] = set()

    for anchor in soup.select(LINK_SELECTOR):
        if not anchor.get_text().strip().endswith(TRANSCRIPT_LINK_SUFFIX):
            continue
        href = anchor.get("href")
        if not href:
            continue
        try:
            url = urljoin(base_url, str(href))
            allowed = _domain_allowed(url, allowed_domains)
        except ValueError as exc:
            logger.warning("malformed_transcript_link", href=str(href), error=str(exc))
            continue
        if url in seen:
            continue
        seen.add(url)
        if not allowed:
            logger.debug("link_outside_allowed_domains", url=url)
            continue
        urls.append(url)

    return urls


class CrawlReport(BaseModel):
    """Outcome of one crawl."""

    model_config = ConfigDict(frozen=True)

    seed_url: str
    discovered: int = 0
    written: tuple[Path, ...] = Field(default_factory=tuple)
    failed: tuple[str, ...] = Field(default_factory=tuple)


class CrawlService:
    """Fetches, assembles and stores every transcript linked from a listing.

    Parameters
    ----------
    fetcher:
        Source of page HTML; owns caching and the politeness delay.
    assembler:
        Builds an episode from one detail page.
    store:
        Destination for assembled episodes.
    max_workers:
        Maximum number of detail pages processed at once.
    allowed_domains:
        Hosts detail links may point at.  Empty means any.
    """

    def __init__(
        self,
        fetcher: IPageFetcher,
        assembler: EpisodeAssembler,
        store: IEpisodeStore,
        max_workers: int = DEFAULT_MAX_WORKERS,
        allowed_domains: list[str] | tuple[str, ...] = (),
    ) -> None:
        self._fetcher = fetcher
        self._assembler = assembler
        self._store = store
        self._max_workers = max(1, max_workers)
        self._allowed_domains = tuple(allowed_domains)

    async def crawl(self, seed_url: str) -> CrawlReport:
        """Run a full crawl starting from *seed_url*.

        Raises
        ------
        FetchError
            The listing page could not be fetched.
        WriteError
            The store could not be prepared.
        """
        logger.info("crawl_started", seed_url=seed_url, max_workers=self._max_workers)

        listing_html = await self._fetcher.fetch(seed_url)
        urls = discover_transcript_links(listing_html, seed_url, self._allowed_domains)
        logger.info("transcript_links_discovered", seed_url=seed_url, count=len(urls))

        self._store.prepare()

        semaphore = asyncio.Semaphore(self._max_workers)
        results = await throttled_gather(
            [self.process_page(url) for url in urls],
            semaphore=semaphore,
            return_exceptions=False,
        )

        written: list[Path] = []
        failed: list[str] = []
        for url, result in zip(urls, results):
            if result is None:
                failed.append(url)
            else:
                written.append(result)

        report = CrawlReport(
            seed_url=seed_url,
            discovered=len(urls),
            written=tuple(written),
            failed=tuple(failed),
        )
        logger.info(
            "crawl_complete",
            seed_url=seed_url,
            discovered=report.discovered,
            written=len(report.written),
            failed=len(report.failed),
        )
        return report

    async def process_page(self, url: str) -> Path | None:
        """Fetch, assemble and write one detail page.

        Returns the written path, or ``None`` when the page was skipped.
        Any failure on a detail page is logged and skips that page only.
        """
        try:
            return await self._process_page(url)
        except Exception as exc:
            logger.error("page_processing_failed", url=url, error=str(exc), exc_info=True)
            return None

    async def _process_page(self, url: str) -> Path | None:
        try:
            html = await self._fetcher.fetch(url)
        except FetchError as exc:
            logger.warning("page_fetch_failed", url=url, error=exc.message)
            return None

        assembled = self._assembler.assemble(html, url)
        for issue in assembled.issues:
            logger.warning(
                "episode_parse_issue",
                url=issue.source,
                stage=issue.stage,
                error=issue.message,
                block=issue.snippet,
            )

        try:
            path = self._store.write(assembled.episode)
        except WriteError as exc:
            logger.error("episode_write_failed", url=url, error=exc.message)
            return None

        logger.info(
            "episode_saved",
            url=url,
            path=str(path),
            dialogue_count=len(assembled.episode.transcript),
            issue_count=len(assembled.issues),
        )
        return path
