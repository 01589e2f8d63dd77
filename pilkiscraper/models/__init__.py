"""pilkiscraper domain models, re-exported from their submodule.

Modules inside the package import from ``pilkiscraper.models.episode``;
this package re-exports the same names for external callers.

    - episode.py  - Metadata and Dialogue records, the Episode document,
      and the per-page parse report (ParseIssue, AssembledEpisode)

If you add a new model class, remember to add it to ``__all__`` too.
"""

from __future__ import annotations

from pilkiscraper.models.episode import (
    NA,
    AssembledEpisode,
    Dialogue,
    DialogueKind,
    Episode,
    Metadata,
    MetadataKind,
    ParseIssue,
)

__all__ = [
    "NA",
    "AssembledEpisode",
    "Dialogue",
    "DialogueKind",
    "Episode",
    "Metadata",
    "MetadataKind",
    "ParseIssue",
]
