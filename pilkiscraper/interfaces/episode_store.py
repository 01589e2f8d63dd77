"""Abstract base class for episode storage.

An episode store persists one document per assembled episode, keyed by the
episode's canonical name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pilkiscraper.models.episode import Episode


class IEpisodeStore(ABC):
    """Contract for services that persist assembled episodes."""

    @abstractmethod
    def prepare(self) -> None:
        """Create whatever the store needs before the first write.

        Raises
        ------
        pilkiscraper.utils.errors.WriteError
            If the store cannot be initialised.  Callers treat this as fatal.
        """

    @abstractmethod
    def write(self, episode: Episode) -> Path:
        """Persist *episode* and return the location it was written to.

        Raises
        ------
        pilkiscraper.utils.errors.WriteError
            If the document cannot be written.  Only this episode is affected.
        """

    @abstractmethod
    def list_written(self) -> list[Path]:
        """Return the locations of all episode documents already in the store."""
