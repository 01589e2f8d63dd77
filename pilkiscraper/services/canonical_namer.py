"""Stable output names for assembled episodes.

The name combines publication, series and broadcast date with a short
fingerprint of the source URL::

    xfm-3-Nov-15-2003-4f1c2a

Pages without metadata all resolve to ``na-na-na``; the fingerprint keeps
their output files apart.  Two different URLs share a fingerprint with
probability ~2^-24, which is accepted.
"""

from __future__ import annotations

import hashlib
from datetime import datetime

from pilkiscraper.models.episode import NA, Episode, MetadataKind

FINGERPRINT_LENGTH = 6
OUTPUT_PREFIX = "transcript-"
OUTPUT_SUFFIX = ".json"

_RFC3339_FORMATS = ("%Y-%m-%dT%H:%M:%S%z", "%Y-%m-%dT%H:%M:%S.%f%z")
_NAME_DATE_FORMAT = "%b-%d-%Y"


def fingerprint(source: str) -> str:
    """Return the first 6 hex characters of SHA-256 over *source*."""
    return hashlib.sha256(source.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def format_name_date(value: str) -> str:
    """Reformat an RFC3339 date value as ``Mon-DD-YYYY``, or ``"na"``."""
    if not value or value == NA:
        return NA
    for fmt in _RFC3339_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.strftime(_NAME_DATE_FORMAT)
    return NA


def _path_safe(component: str) -> str:
    return component.replace("/", "_").replace("\\", "_")


def canonical_name(episode: Episode) -> str:
    """Return ``"{publication}-{series}-{date}-{fingerprint}"`` for *episode*.

    Path separators inside metadata values are replaced with ``_``.
    """
    return "-".join(
        (
            _path_safe(episode.meta_value(MetadataKind.PUBLICATION)),
            _path_safe(episode.meta_value(MetadataKind.SERIES)),
            format_name_date(episode.meta_value(MetadataKind.DATE)),
            fingerprint(episode.source),
        )
    )


def output_filename(episode: Episode) -> str:
    """Return the storage file name, ``transcript-{canonical_name}.json``."""
    return f"{OUTPUT_PREFIX}{canonical_name(episode)}{OUTPUT_SUFFIX}"
