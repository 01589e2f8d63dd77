"""Abstract base class for page cache providers.

Defines the key-value contract the page fetcher uses to avoid downloading
the same URL twice.  Implementations may keep entries in memory for one
process or on disk so that repeated crawls are idempotent and cheap.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ICacheProvider(ABC):
    """Contract for page caches keyed by URL.

    All operations are async so a network-backed store can be plugged in
    without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the page body stored under *key*, or ``None`` when absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store the page body *value* under *key*, replacing any previous entry."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for log output, e.g. ``"disk"``."""
