"""Crawler settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from TWO sources (in priority order):
#
#   1. **Environment variables** - e.g., OUTPUT_DIR=/srv/transcripts
#   2. **.env file** - key=value lines in the project root .env file
#
# Field `max_workers` maps to env var `MAX_WORKERS`; list fields such as
# `allowed_domains` are given as JSON (ALLOWED_DOMAINS='["web.archive.org"]').
#
# Defaults below are used when neither source sets a field.  The YAML
# file in config/ is layered underneath by loader.load_settings().
# ──────────────────────────────────────────────────────────────────────
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_URL = (
    "https://web.archive.org/web/20200704135748/"
    "http://www.pilkipedia.co.uk/wiki/index.php?title=Category:Transcripts"
)


class Settings(BaseSettings):
    """pilkiscraper settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # === Crawl ===
    seed_url: str = DEFAULT_SEED_URL
    # Links outside these hosts are never followed.
    allowed_domains: list[str] = Field(default_factory=lambda: ["web.archive.org"])
    max_workers: int = Field(default=4, ge=1)
    request_delay: float = Field(default=1.0, ge=0.0)
    request_timeout: float = Field(default=30.0, gt=0.0)
    user_agent: str = "Mozilla/5.0 (compatible; pilkiscraper/0.1; transcript archiver)"

    # === Cache ===
    cache_backend: Literal["disk", "memory"] = "disk"
    cache_dir: str = "./cache"

    # === Output ===
    output_dir: str = "./transcripts"

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"
