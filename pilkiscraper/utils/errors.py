"""Custom exception hierarchy for pilkiscraper.

All application exceptions inherit from :class:`ScraperError`, which
carries an optional ``source_url`` so log handlers can identify which
page (listing or detail) triggered the failure.

The hierarchy is organized by pipeline stage:

    ScraperError  (base -- catch-all for any pilkiscraper error)
    +-- MetaParseError       (no date/publication signal on a page)
    +-- DialogueParseError   (a dialogue block could not be read)
    +-- FetchError           (network or cache failure)
    +-- WriteError           (output path uncreatable or unwritable)
    +-- ConfigurationError   (startup / invalid config)

Parse errors are recoverable: the assembler records them and carries on.
``FetchError`` is recoverable for detail pages and fatal for the seed
listing page.  ``WriteError`` aborts a single episode, except when raised
while preparing the output directory.
"""


class ScraperError(Exception):
    """Base exception for all pilkiscraper errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``source_url``.  The ``__str__`` method prefixes the URL in brackets
    for log output, e.g. ``[https://...] HTTP 404``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        source_url: str | None = None,
    ) -> None:
        self._message = message
        self._source_url = source_url
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def source_url(self) -> str | None:
        return self._source_url

    def __str__(self) -> str:
        if self._source_url:
            return f"[{self._source_url}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Extraction errors
# ---------------------------------------------------------------------------

class MetaParseError(ScraperError):
    """Raised when neither the intro paragraph nor the heading yields metadata."""

    def __init__(
        self,
        message: str = "Could not parse episode metadata",
        source_url: str | None = None,
    ) -> None:
        super().__init__(message=message, source_url=source_url)


class DialogueParseError(ScraperError):
    """Raised when a dialogue block is not an HTML element."""

    def __init__(
        self,
        message: str = "Could not parse dialogue block",
        source_url: str | None = None,
    ) -> None:
        super().__init__(message=message, source_url=source_url)


# ---------------------------------------------------------------------------
# I/O errors
# ---------------------------------------------------------------------------

class FetchError(ScraperError):
    """Raised when a page cannot be fetched from the network or the cache.

    The crawl orchestrator skips the page when this is raised for a detail
    page and aborts when it is raised for the seed listing page.
    """

    def __init__(
        self,
        message: str = "Page fetch failed",
        source_url: str | None = None,
    ) -> None:
        super().__init__(message=message, source_url=source_url)


class WriteError(ScraperError):
    """Raised when an episode document cannot be written to storage."""

    def __init__(
        self,
        message: str = "Could not write episode",
        source_url: str | None = None,
    ) -> None:
        super().__init__(message=message, source_url=source_url)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(ScraperError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        source_url: str | None = None,
    ) -> None:
        super().__init__(message=message, source_url=source_url)
