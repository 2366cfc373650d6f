"""Persistent cache on top of :mod:`diskcache`.

Entries survive process restarts. diskcache is synchronous, so every call
is pushed to a worker thread to keep the event loop free. Entries are also
given a diskcache ``expire`` so the store prunes itself.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import diskcache

from .base import CacheEntry, CacheMethod


class DiskCacheMethod(CacheMethod):
    """Disk-backed cache for response bodies.

    Args:
        directory: Root directory; a ``responses/`` subdirectory is used
        clock: Source of "now", used to compute the diskcache expiry
    """

    def __init__(
        self,
        directory: str | Path,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._directory = Path(directory) / "responses"
        self._cache = diskcache.Cache(str(self._directory))
        self._clock = clock or (lambda: datetime.now(UTC))

    async def get(self, key: str) -> CacheEntry | None:
        raw = await asyncio.to_thread(self._cache.get, key)
        if raw is None:
            return None
        body, expires_ts, page_total, result_total = raw
        return CacheEntry(
            body=body,
            expires_at=datetime.fromtimestamp(expires_ts, tz=UTC),
            page_total=page_total,
            result_total=result_total,
        )

    async def set(self, key: str, entry: CacheEntry) -> None:
        ttl = (entry.expires_at - self._clock()).total_seconds()
        if ttl <= 0:
            return
        value = (entry.body, entry.expires_at.timestamp(), entry.page_total, entry.result_total)
        await asyncio.to_thread(self._cache.set, key, value, expire=ttl)

    async def clear(self) -> None:
        await asyncio.to_thread(self._cache.clear)

    async def close(self) -> None:
        await asyncio.to_thread(self._cache.close)

    @property
    def directory(self) -> Path:
        return self._directory
