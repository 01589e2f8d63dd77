"""Episode domain models for the transcript extraction pipeline.

Defines enums and Pydantic v2 models for episode metadata, dialogue lines
and the assembled episode record.  All models use frozen config to enforce
immutability: a record is built once per detail page and then serialized.

The JSON field names are part of the output contract: ``kind`` is written
as ``type`` for both Metadata and Dialogue, so dumps must pass
``by_alias=True``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# Placeholder used wherever a metadata value is missing from an episode.
NA = "na"


class MetadataKind(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """Kinds of episode metadata derived from the page heading and intro."""

    DATE = "date"                # Broadcast date, RFC3339 at midnight UTC
    PUBLICATION = "publication"  # Station or outlet, e.g. "xfm"
    SERIES = "series"            # Series number, e.g. "3"


class DialogueKind(str, Enum):  # noqa: UP042 - StrEnum requires Python 3.11+
    """Kinds of transcript lines."""

    CHAT = "chat"
    SONG = "song"
    UNKNOWN = "unknown"


class Metadata(BaseModel):
    """A single piece of episode metadata.

    For ``MetadataKind.DATE`` the value is either an RFC3339 instant at
    midnight (``2003-11-15T00:00:00Z``) or ``""`` when a raw date was found
    but could not be parsed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: MetadataKind = Field(alias="type")
    value: str = ""


class Dialogue(BaseModel):
    """One line of transcript: who said it, what kind of line, and the text."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: DialogueKind = Field(alias="type")
    # Lower-cased speaker name; empty when the block has no speaker label.
    actor: str = ""
    # Trimmed body text with newlines removed.
    content: str = ""


class Episode(BaseModel):
    """One transcript page, fully extracted.

    ``metadata`` holds at most one entry per kind.  ``transcript`` is in
    document order.
    """

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="Absolute URL of the detail page.")
    metadata: tuple[Metadata, ...] = ()
    transcript: tuple[Dialogue, ...] = ()

    def meta_value(self, kind: MetadataKind) -> str:
        """Return the value of the first metadata entry of *kind*, or ``"na"``."""
        for meta in self.metadata:
            if meta.kind == kind:
                return meta.value
        return NA

    def to_document(self) -> dict:
        """Return the JSON-ready dict with the published field names."""
        return self.model_dump(mode="json", by_alias=True)


class ParseIssue(BaseModel):
    """A recoverable problem met while assembling an episode.

    The assembler collects these instead of logging so that parsing stays
    side-effect free; the crawl orchestrator logs them.
    """

    model_config = ConfigDict(frozen=True)

    stage: str = Field(description='"metadata" or "dialogue".')
    source: str
    message: str
    # Text of the failing element, truncated for log output.
    snippet: str = ""


class AssembledEpisode(BaseModel):
    """An episode together with the issues collected while building it."""

    model_config = ConfigDict(frozen=True)

    episode: Episode
    issues: tuple[ParseIssue, ...] = ()
