"""Dialogue line extraction from a single transcript block.

A transcript block is a styled ``<div>`` whose speaker, when known, sits in
a nested ``<span>``::

    <div style="..."><span style="...">Ricky:</span> Hello there</div>

Song interludes use the literal prefix ``Song:`` with no speaker label.
"""

from __future__ import annotations

from bs4 import Tag

from pilkiscraper.models.episode import Dialogue, DialogueKind
from pilkiscraper.utils.errors import DialogueParseError

_SPEAKER_LABEL = "span"
_SONG_PREFIX = "song"


def _actor_name(block: Tag) -> str:
    label = block.find(_SPEAKER_LABEL)
    if label is None:
        return ""
    return label.get_text().strip().removesuffix(":").lower()


def split_line(text: str) -> tuple[str, str]:
    """Split block text into ``(content, prefix)`` on the first colon.

    Newlines are removed first.  Without a colon the whole text is the
    content and the prefix is empty.
    """
    raw = text.strip().replace("\n", "")
    head, sep, rest = raw.partition(":")
    if not sep:
        return raw, ""
    return rest.strip(), head.strip().lower()


def parse_dialogue(block: Tag) -> Dialogue:
    """Convert one transcript block into a :class:`Dialogue`.

    Raises
    ------
    DialogueParseError
        If *block* is not an HTML element.
    """
    if not isinstance(block, Tag):
        raise DialogueParseError(f"Expected an HTML element, got {type(block).__name__}")

    actor = _actor_name(block)
    content, prefix = split_line(block.get_text())

    if prefix == _SONG_PREFIX:
        kind = DialogueKind.SONG
    elif actor:
        kind = DialogueKind.CHAT
    else:
        kind = DialogueKind.UNKNOWN

    return Dialogue(kind=kind, actor=actor, content=content)
