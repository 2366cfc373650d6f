"""Cache contract and the no-op implementation.

The request runner stores raw response bodies keyed by request
fingerprint. It only reads and writes through :class:`CacheMethod`; how an
implementation stores entries, and whether it keeps them at all, is its
own business. Expiry is decided by the runner via
:meth:`CacheEntry.is_expired`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CacheEntry:
    """Cached response body with its absolute expiry (aware UTC).

    Paginated responses also keep their page counters so a pass served
    from the cache still knows where the last page is.
    """

    body: bytes
    expires_at: datetime
    page_total: int | None = None
    result_total: int | None = None

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class CacheMethod(ABC):
    """Asynchronous key/value store for response bodies."""

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key`` or ``None`` on a miss."""

    @abstractmethod
    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store ``entry`` under ``key``, replacing any previous entry."""

    async def clear(self) -> None:
        """Drop all entries. Optional for implementations."""

    async def close(self) -> None:
        """Release resources. Optional for implementations."""


class NullCacheMethod(CacheMethod):
    """Cache that never stores anything."""

    async def get(self, key: str) -> CacheEntry | None:
        return None

    async def set(self, key: str, entry: CacheEntry) -> None:
        return None
