"""Episode stores."""

from pilkiscraper.providers.storage.json_file_store import JsonFileEpisodeStore, serialize_episode

__all__ = ["JsonFileEpisodeStore", "serialize_episode"]
