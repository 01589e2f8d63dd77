"""Episode metadata extraction from a transcript page's heading and intro.

Transcript pages open with a sentence such as::

    This is a transcription of the 15 November 2003 episode, from Xfm Series 3

Newer pages link the date and the series (two ``<a>`` elements); older ones
only have the plain sentence; some have neither and carry the date in the
page heading (``15 November 2003/Transcript``).  Raw extraction is an
ordered chain of strategies so that a new page template only needs a new
strategy, not changes to normalization.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timezone

from bs4 import Tag

from pilkiscraper.models.episode import Metadata, MetadataKind
from pilkiscraper.utils.errors import MetaParseError

_TITLE_SUFFIX = "/Transcript"

# Relaxed "DD Month YYYY ... from PUBLICATION".
_META_SENTENCE_RE = re.compile(r"([0-9]{2}.+\w.+[0-9]{4}).+from(.+)")

# Exactly two-digit day, full month name, four-digit year.
_RAW_DATE_RE = re.compile(r"^[0-9]{2} [A-Za-z]+ [0-9]{4}$")
_RAW_DATE_FORMAT = "%d %B %Y"
_RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_SERIES_TOKEN = "series"

RawMeta = tuple[str, str]


def _from_links(paragraph: Tag) -> RawMeta:
    texts = [a.get_text().strip() for a in paragraph.find_all("a")]
    if len(texts) == 2:
        return texts[0], texts[1]
    return "", ""


def _from_sentence(paragraph: Tag) -> RawMeta:
    match = _META_SENTENCE_RE.search(paragraph.get_text())
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return "", ""


RAW_META_STRATEGIES: tuple[Callable[[Tag], RawMeta], ...] = (
    _from_links,
    _from_sentence,
)


def extract_raw_meta(paragraph: Tag | None) -> RawMeta:
    """Return ``(raw_date, raw_publication)`` from the intro paragraph.

    Strategies run in order and the first one that yields anything wins.
    Both strings are empty when no strategy matches or *paragraph* is None.
    """
    if paragraph is None:
        return "", ""
    for strategy in RAW_META_STRATEGIES:
        raw_date, raw_publication = strategy(paragraph)
        if raw_date or raw_publication:
            return raw_date, raw_publication
    return "", ""


def normalize_date(raw_date: str) -> str:
    """Convert ``"15 November 2003"`` to ``"2003-11-15T00:00:00Z"``.

    Returns ``""`` when *raw_date* does not follow the two-digit-day,
    full-month-name, four-digit-year layout.
    """
    if not _RAW_DATE_RE.match(raw_date):
        return ""
    try:
        parsed = datetime.strptime(raw_date, _RAW_DATE_FORMAT)
    except ValueError:
        return ""
    return parsed.replace(tzinfo=timezone.utc).strftime(_RFC3339_FORMAT)


def split_publication(raw_publication: str) -> tuple[str, str]:
    """Split ``"Xfm Series 3"`` into ``("xfm", "3")``.

    Returns two empty strings unless the lower-cased text contains the
    ``series`` token exactly once.
    """
    parts = raw_publication.lower().split(_SERIES_TOKEN)
    if len(parts) != 2:
        return "", ""
    return parts[0].strip(), parts[1].strip()


def parse_metadata(heading: str | None, paragraph: Tag | None) -> list[Metadata]:
    """Derive date, publication and series metadata for one page.

    Parameters
    ----------
    heading:
        Text of the page heading, or None when the page has none.
    paragraph:
        The first paragraph of the page body, or None.

    Returns
    -------
    list[Metadata]
        At most one entry per kind, in the order date, publication, series.
        Empty when both inputs are absent.  A date entry is always present
        otherwise, with an empty value when the raw date was unparseable.

    Raises
    ------
    MetaParseError
        When neither a raw date nor a raw publication could be derived.
    """
    if heading is None and paragraph is None:
        return []

    raw_date, raw_publication = extract_raw_meta(paragraph)
    if not raw_date and heading is not None:
        raw_date = heading.strip().removesuffix(_TITLE_SUFFIX).strip()
    if not raw_date and not raw_publication:
        line = paragraph.get_text().strip() if paragraph is not None else heading
        raise MetaParseError(f"Couldn't parse meta from line: {line!r}")

    meta = [Metadata(kind=MetadataKind.DATE, value=normalize_date(raw_date))]

    publication, series = split_publication(raw_publication)
    if publication:
        meta.append(Metadata(kind=MetadataKind.PUBLICATION, value=publication))
    if series:
        meta.append(Metadata(kind=MetadataKind.SERIES, value=series))

    return meta
