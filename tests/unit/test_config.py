"""Unit tests for pilkiscraper.config (Settings and load_settings)."""

from __future__ import annotations

from pathlib import Path

import pytest

from pilkiscraper.config.loader import load_settings
from pilkiscraper.config.settings import DEFAULT_SEED_URL, Settings
from pilkiscraper.utils.errors import ConfigurationError

_ENV_VARS = (
    "SEED_URL", "ALLOWED_DOMAINS", "MAX_WORKERS", "REQUEST_DELAY", "REQUEST_TIMEOUT",
    "USER_AGENT", "CACHE_BACKEND", "CACHE_DIR", "OUTPUT_DIR", "APP_ENV", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate from the developer's environment and any .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def _write_yaml(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


# ======================================================================
# Settings
# ======================================================================


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.seed_url == DEFAULT_SEED_URL
        assert settings.allowed_domains == ["web.archive.org"]
        assert settings.cache_backend == "disk"
        assert settings.max_workers == 4

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_WORKERS", "9")
        monkeypatch.setenv("ALLOWED_DOMAINS", '["a.example", "b.example"]')
        settings = Settings()
        assert settings.max_workers == 9
        assert settings.allowed_domains == ["a.example", "b.example"]

    def test_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("OUTPUT_DIR=/srv/out\n", encoding="utf-8")
        assert Settings().output_dir == "/srv/out"


# ======================================================================
# load_settings
# ======================================================================


class TestLoadSettings:
    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "nope.yaml")
        assert settings == Settings()

    def test_yaml_sections_flattened(self, tmp_path: Path) -> None:
        path = _write_yaml(
            tmp_path / "config.yaml",
            "crawl:\n"
            "  max_workers: 2\n"
            "  cache_backend: memory\n"
            "  output_dir: out\n"
            "logging:\n"
            "  level: DEBUG\n",
        )
        settings = load_settings(path)
        assert settings.max_workers == 2
        assert settings.cache_backend == "memory"
        assert settings.output_dir == "out"
        assert settings.log_level == "DEBUG"

    def test_environment_beats_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_yaml(tmp_path / "config.yaml", "crawl:\n  max_workers: 2\n  request_delay: 3\n")
        monkeypatch.setenv("MAX_WORKERS", "7")
        settings = load_settings(path)
        assert settings.max_workers == 7
        assert settings.request_delay == 3.0

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "config.yaml", "crawl:\n  max_workers: 0\n")
        with pytest.raises(ConfigurationError, match="max_workers"):
            load_settings(path)

    def test_invalid_cache_backend(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "config.yaml", "crawl:\n  cache_backend: redis\n")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "config.yaml", "crawl: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_section_must_be_mapping(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "config.yaml", "crawl: 5\n")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_checked_in_config_is_valid(self, project_root: Path) -> None:
        settings = load_settings(project_root / "config" / "config.yaml")
        assert settings.seed_url == DEFAULT_SEED_URL
        assert settings.allowed_domains == ["web.archive.org"]
