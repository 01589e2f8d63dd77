"""Configuration module - exports Settings and load_settings."""

from pilkiscraper.config.loader import load_settings
from pilkiscraper.config.settings import Settings

__all__ = ["Settings", "load_settings"]
