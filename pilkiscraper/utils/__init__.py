"""Utility modules for pilkiscraper.

- **errors** -- Exception hierarchy rooted at ScraperError; each pipeline
  stage raises its own subclass so the orchestrator can tell recoverable
  page failures from fatal ones.
- **concurrency** -- semaphore-throttled gather used to bound how many
  detail pages are processed at once.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output for interactive runs, structured JSON in production.
"""

from pilkiscraper.utils.concurrency import throttled_gather
from pilkiscraper.utils.errors import (
    ConfigurationError,
    DialogueParseError,
    FetchError,
    MetaParseError,
    ScraperError,
    WriteError,
)
from pilkiscraper.utils.logging import configure_logging

__all__ = [
    "ConfigurationError",
    "DialogueParseError",
    "FetchError",
    "MetaParseError",
    "ScraperError",
    "WriteError",
    "configure_logging",
    "throttled_gather",
]
