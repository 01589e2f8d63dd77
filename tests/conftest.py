"""Shared pytest fixtures for the pilkiscraper test suite."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog

from pilkiscraper.interfaces.page_fetcher import IPageFetcher
from pilkiscraper.utils.errors import FetchError

SEED_URL = (
    "https://web.archive.org/web/20200704135748/"
    "http://www.pilkipedia.co.uk/wiki/index.php?title=Category:Transcripts"
)
LINKED_URL = (
    "https://web.archive.org/web/20200704135748/"
    "http://www.pilkipedia.co.uk/wiki/index.php?title=15_November_2003/Transcript"
)
SENTENCE_URL = (
    "https://web.archive.org/web/20200704135748/"
    "http://www.pilkipedia.co.uk/wiki/index.php?title=22_March_2002/Transcript"
)


class FakePageFetcher(IPageFetcher):
    """In-memory fetcher: serves *pages* by URL, FetchError for anything else."""

    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages
        self.calls: list[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(message="HTTP 404", source_url=url)
        return self.pages[url]


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def quiet_structlog():
    """Discard log output; tests inspect events with structlog.testing.capture_logs()."""
    structlog.reset_defaults()
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    yield
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# HTML fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def pages_dir(project_root: Path) -> Path:
    """Return the directory holding saved Pilkipedia pages."""
    return project_root / "tests" / "fixtures" / "pages"


@pytest.fixture
def load_page(pages_dir: Path):
    """Return a loader for saved pages by file name."""

    def _load(name: str) -> str:
        return (pages_dir / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def listing_html(load_page) -> str:
    return load_page("listing.html")


@pytest.fixture
def linked_html(load_page) -> str:
    """Newer skin: date and series are links in the intro paragraph."""
    return load_page("detail_linked.html")


@pytest.fixture
def sentence_html(load_page) -> str:
    """Older skin: plain intro sentence, no links."""
    return load_page("detail_sentence.html")


@pytest.fixture
def no_meta_html(load_page) -> str:
    """No heading and an intro without any date or publication."""
    return load_page("detail_no_meta.html")


@pytest.fixture
def heading_only_html(load_page) -> str:
    """Date only in the page heading."""
    return load_page("detail_heading_only.html")


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def seed_url() -> str:
    return SEED_URL


@pytest.fixture
def linked_url() -> str:
    return LINKED_URL


@pytest.fixture
def sentence_url() -> str:
    return SENTENCE_URL


@pytest.fixture
def site_pages(listing_html: str, linked_html: str, sentence_html: str) -> dict[str, str]:
    """The seed listing plus both detail pages it links to."""
    return {
        SEED_URL: listing_html,
        LINKED_URL: linked_html,
        SENTENCE_URL: sentence_html,
    }


@pytest.fixture
def fake_fetcher(site_pages: dict[str, str]) -> FakePageFetcher:
    return FakePageFetcher(site_pages)


@pytest.fixture
def make_fetcher():
    """Return the FakePageFetcher class for tests that need their own pages."""
    return FakePageFetcher
