"""Builds one Episode record from a transcript detail page.

The wiki was authored across two MediaWiki skins, so every field is located
through an ordered chain of CSS selectors and the first non-empty match is
used.  Metadata and dialogue are extracted independently: a page whose
intro cannot be parsed still yields its transcript.

The assembler has no side effects.  Recoverable problems come back as
:class:`ParseIssue` records on the result and the caller decides how to
report them.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from pilkiscraper.models.episode import (
    AssembledEpisode,
    Dialogue,
    Episode,
    Metadata,
    ParseIssue,
)
from pilkiscraper.services.dialogue_parser import parse_dialogue
from pilkiscraper.services.metadata_parser import parse_metadata
from pilkiscraper.utils.errors import DialogueParseError, MetaParseError

CONTENT_SELECTOR = "div#content"
HEADING_SELECTORS: tuple[str, ...] = ("h1#firstHeading",)
PARAGRAPH_SELECTORS: tuple[str, ...] = (
    ".mw-parser-output > p:nth-child(1)",
    "#mw-content-text > p:nth-child(1)",
)
DIALOGUE_SELECTORS: tuple[str, ...] = (
    "#mw-content-text > div[style]",
    ".mw-parser-output > div[style]",
)

_SNIPPET_LENGTH = 200


def _first_match(root: Tag, selectors: tuple[str, ...]) -> Tag | None:
    for selector in selectors:
        found = root.select_one(selector)
        if found is not None:
            return found
    return None


def _all_matches(root: Tag, selectors: tuple[str, ...]) -> list[Tag]:
    for selector in selectors:
        found = root.select(selector)
        if found:
            return list(found)
    return []


def _snippet(element: object) -> str:
    text = element.get_text() if isinstance(element, Tag) else str(element)
    return " ".join(text.split())[:_SNIPPET_LENGTH]


class EpisodeAssembler:
    """Turns detail-page HTML into an :class:`AssembledEpisode`.

    Selector chains are constructor parameters so a third page template can
    be supported without subclassing.
    """

    def __init__(
        self,
        heading_selectors: tuple[str, ...] = HEADING_SELECTORS,
        paragraph_selectors: tuple[str, ...] = PARAGRAPH_SELECTORS,
        dialogue_selectors: tuple[str, ...] = DIALOGUE_SELECTORS,
    ) -> None:
        self._heading_selectors = heading_selectors
        self._paragraph_selectors = paragraph_selectors
        self._dialogue_selectors = dialogue_selectors

    def assemble(self, html: str, source_url: str) -> AssembledEpisode:
        """Extract metadata and transcript from *html* fetched from *source_url*."""
        soup = BeautifulSoup(html, "html.parser")
        root = soup.select_one(CONTENT_SELECTOR)
        if root is None:
            root = soup

        issues: list[ParseIssue] = []
        metadata = self._extract_metadata(root, source_url, issues)
        transcript = self._extract_transcript(root, source_url, issues)

        episode = Episode(
            source=source_url,
            metadata=tuple(metadata),
            transcript=tuple(transcript),
        )
        return AssembledEpisode(episode=episode, issues=tuple(issues))

    def _extract_metadata(
        self, root: Tag, source_url: str, issues: list[ParseIssue]
    ) -> list[Metadata]:
        heading_el = _first_match(root, self._heading_selectors)
        paragraph = _first_match(root, self._paragraph_selectors)
        heading = heading_el.get_text().strip() if heading_el is not None else None

        try:
            return parse_metadata(heading, paragraph)
        except MetaParseError as exc:
            issues.append(
                ParseIssue(
                    stage="metadata",
                    source=source_url,
                    message=exc.message,
                    snippet=_snippet(paragraph) if paragraph is not None else heading or "",
                )
            )
            return []

    def _extract_transcript(
        self, root: Tag, source_url: str, issues: list[ParseIssue]
    ) -> list[Dialogue]:
        transcript: list[Dialogue] = []
        for block in _all_matches(root, self._dialogue_selectors):
            try:
                transcript.append(parse_dialogue(block))
            except DialogueParseError as exc:
                issues.append(
                    ParseIssue(
                        stage="dialogue",
                        source=source_url,
                        message=exc.message,
                        snippet=_snippet(block),
                    )
                )
        return transcript
