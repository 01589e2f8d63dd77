"""Unit tests for pilkiscraper.services.dialogue_parser."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup, Tag

from pilkiscraper.models.episode import Dialogue, DialogueKind
from pilkiscraper.services.dialogue_parser import parse_dialogue, split_line
from pilkiscraper.utils.errors import DialogueParseError


def _block(html: str) -> Tag:
    return BeautifulSoup(html, "html.parser").div


class TestSplitLine:
    def test_splits_on_first_colon(self) -> None:
        assert split_line("Ricky: Time: it flies") == ("Time: it flies", "ricky")

    def test_no_colon(self) -> None:
        assert split_line("  just narration, no colon ") == ("just narration, no colon", "")

    def test_newlines_removed(self) -> None:
        assert split_line("Karl: what\nare you on about\n") == ("whatare you on about", "karl")


class TestParseDialogue:
    def test_chat_with_speaker_label(self) -> None:
        block = _block('<div style="x"><span>Ricky:</span> Hello there</div>')
        assert parse_dialogue(block) == Dialogue(
            kind=DialogueKind.CHAT, actor="ricky", content="Hello there"
        )

    def test_song_without_speaker_label(self) -> None:
        block = _block('<div style="x">Song: some lyrics</div>')
        assert parse_dialogue(block) == Dialogue(
            kind=DialogueKind.SONG, actor="", content="some lyrics"
        )

    def test_unknown_without_colon(self) -> None:
        block = _block('<div style="x">just narration, no colon</div>')
        assert parse_dialogue(block) == Dialogue(
            kind=DialogueKind.UNKNOWN, actor="", content="just narration, no colon"
        )

    def test_song_prefix_wins_over_actor(self) -> None:
        block = _block('<div style="x"><span>SONG:</span> la la la</div>')
        result = parse_dialogue(block)
        assert result.kind == DialogueKind.SONG
        assert result.actor == "song"

    def test_actor_label_trimmed_and_lowercased(self) -> None:
        block = _block('<div style="x"><span> Steve Merchant: </span>No.</div>')
        assert parse_dialogue(block).actor == "steve merchant"

    def test_colon_text_without_label_is_unknown(self) -> None:
        block = _block('<div style="x">Note: recording starts late</div>')
        result = parse_dialogue(block)
        assert result.kind == DialogueKind.UNKNOWN
        assert result.content == "recording starts late"

    def test_nested_markup_flattened(self) -> None:
        block = _block('<div style="x"><span>Karl:</span> a <b>big</b> monkey</div>')
        assert parse_dialogue(block).content == "a big monkey"

    @pytest.mark.parametrize("block", [None, "Ricky: hello"])
    def test_non_element_raises(self, block) -> None:
        with pytest.raises(DialogueParseError):
            parse_dialogue(block)
