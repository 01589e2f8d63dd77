"""Unit tests for MemoryCacheProvider and DiskCacheProvider."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from structlog.testing import capture_logs

from pilkiscraper.providers.cache.disk_cache import DiskCacheProvider
from pilkiscraper.providers.cache.memory_cache import MemoryCacheProvider

URL = "https://web.archive.org/web/1/http://www.pilkipedia.co.uk/wiki/index.php?title=A/Transcript"


# ======================================================================
# MemoryCacheProvider
# ======================================================================


class TestMemoryCacheProvider:
    @pytest.fixture()
    def cache(self) -> MemoryCacheProvider:
        return MemoryCacheProvider(max_size=100, ttl=3600)

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: MemoryCacheProvider) -> None:
        await cache.set(URL, "<html></html>")
        assert await cache.get(URL) == "<html></html>"

    @pytest.mark.asyncio
    async def test_set_overwrites_existing(self, cache: MemoryCacheProvider) -> None:
        await cache.set(URL, "old")
        await cache.set(URL, "new")
        assert await cache.get(URL) == "new"

    def test_get_provider_name(self, cache: MemoryCacheProvider) -> None:
        assert cache.get_provider_name() == "memory"


# ======================================================================
# DiskCacheProvider
# ======================================================================


class TestDiskCacheProvider:
    @pytest.fixture()
    def cache(self, tmp_path: Path) -> DiskCacheProvider:
        return DiskCacheProvider(tmp_path / "cache")

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: DiskCacheProvider) -> None:
        assert await cache.get(URL) is None

    @pytest.mark.asyncio
    async def test_set_and_get_unicode(self, cache: DiskCacheProvider) -> None:
        await cache.set(URL, "<p>Karl’s café</p>")
        assert await cache.get(URL) == "<p>Karl’s café</p>"

    @pytest.mark.asyncio
    async def test_survives_new_instance(self, tmp_path: Path) -> None:
        await DiskCacheProvider(tmp_path).set(URL, "persisted")
        assert await DiskCacheProvider(tmp_path).get(URL) == "persisted"

    @pytest.mark.asyncio
    async def test_entries_are_sharded_files(self, cache: DiskCacheProvider) -> None:
        await cache.set(URL, "x")
        await cache.set(URL + "2", "y")
        files = list(cache.cache_dir.glob("*/*.html"))
        assert len(files) == 2
        assert all(len(f.parent.name) == 2 for f in files)
        assert cache.entry_count() == 2
        assert not list(cache.cache_dir.glob("*/*.tmp"))

    @pytest.mark.asyncio
    async def test_undecodable_entry_is_a_miss(self, cache: DiskCacheProvider) -> None:
        await cache.set(URL, "x")
        entry = next(cache.cache_dir.glob("*/*.html"))
        entry.write_bytes(b"\xff\xfe not utf-8")

        with capture_logs() as logs:
            assert await cache.get(URL) is None
        assert [e["event"] for e in logs] == ["cache_read_failed"]

        await cache.set(URL, "fresh")
        assert await cache.get(URL) == "fresh"

    @pytest.mark.asyncio
    async def test_write_failure_is_not_raised(self, cache: DiskCacheProvider) -> None:
        with patch.object(Path, "write_text", side_effect=OSError("disk full")):
            await cache.set(URL, "x")
        assert await cache.get(URL) is None

    def test_entry_count_without_directory(self, tmp_path: Path) -> None:
        assert DiskCacheProvider(tmp_path / "absent").entry_count() == 0

    def test_get_provider_name(self, cache: DiskCacheProvider) -> None:
        assert cache.get_provider_name() == "disk"
