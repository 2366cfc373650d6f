"""In-process cache."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from .base import CacheEntry, CacheMethod


class MemoryCacheMethod(CacheMethod):
    """Dictionary-backed cache that drops expired entries lazily.

    Args:
        max_entries: Optional cap; the oldest inserted entry is evicted first
        clock: Source of "now", injectable for tests
    """

    def __init__(
        self,
        max_entries: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._entries: dict[str, CacheEntry] = {}
        self._max_entries = max_entries
        self._clock = clock or (lambda: datetime.now(UTC))

    async def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            return None
        return entry

    async def set(self, key: str, entry: CacheEntry) -> None:
        self._entries.pop(key, None)
        self._entries[key] = entry
        if self._max_entries is not None:
            while len(self._entries) > self._max_entries:
                oldest = next(iter(self._entries))
                del self._entries[oldest]

    async def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
