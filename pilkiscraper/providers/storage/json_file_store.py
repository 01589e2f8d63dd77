"""Writes each episode as a pretty-printed JSON file.

Output layout::

    {output_dir}/transcript-{canonical_name}.json

The document uses 2-space indentation, keeps non-ASCII text as UTF-8 and
escapes ``<``, ``>`` and ``&`` as ``\\u003c``, ``\\u003e`` and ``\\u0026`` so
the files can be embedded in HTML without further escaping.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from pilkiscraper.interfaces.episode_store import IEpisodeStore
from pilkiscraper.models.episode import Episode
from pilkiscraper.services.canonical_namer import OUTPUT_PREFIX, OUTPUT_SUFFIX, output_filename
from pilkiscraper.utils.errors import WriteError

logger = structlog.get_logger(logger_name=__name__)

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
}


def serialize_episode(episode: Episode) -> str:
    """Return the JSON document for *episode*, newline-terminated."""
    text = json.dumps(episode.to_document(), indent=2, ensure_ascii=False)
    # The three characters can only occur inside JSON strings.
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text + "\n"


class JsonFileEpisodeStore(IEpisodeStore):
    """Episode store writing one JSON file per episode into *output_dir*."""

    def __init__(self, output_dir: str | Path) -> None:
        self._output_dir = Path(output_dir)

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def prepare(self) -> None:
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(
                message=f"Cannot create output directory {self._output_dir}: {exc}"
            ) from exc

    def write(self, episode: Episode) -> Path:
        path = self._output_dir / output_filename(episode)
        try:
            path.write_text(serialize_episode(episode), encoding="utf-8")
        except OSError as exc:
            raise WriteError(
                message=f"Cannot write {path}: {exc}", source_url=episode.source
            ) from exc

        logger.debug("episode_written", path=str(path), source=episode.source)
        return path

    def list_written(self) -> list[Path]:
        if not self._output_dir.is_dir():
            return []
        return sorted(self._output_dir.glob(f"{OUTPUT_PREFIX}*{OUTPUT_SUFFIX}"))
