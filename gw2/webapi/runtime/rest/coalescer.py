"""In-flight request de-duplication.

Concurrent callers asking for the same fingerprint share one task instead
of each hitting the network. Every caller awaits the shared task through
:func:`asyncio.shield`, so cancelling one caller leaves the others alone;
the shared task itself is cancelled only once no caller is left waiting.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _InFlight(Generic[T]):
    task: asyncio.Future[T]
    waiters: int = 0


class RequestCoalescer:
    """Shares one running task per key among concurrent callers."""

    def __init__(self) -> None:
        self._inflight: dict[str, _InFlight[Any]] = {}

    def __len__(self) -> int:
        return len(self._inflight)

    def is_inflight(self, key: str) -> bool:
        return key in self._inflight

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        """Run ``factory()`` for ``key`` or join the call already in flight."""
        entry = self._inflight.get(key)
        if entry is None:
            entry = _InFlight(task=asyncio.ensure_future(factory()))
            self._inflight[key] = entry
            entry.task.add_done_callback(lambda _t, k=key, e=entry: self._discard(k, e))
        else:
            logger.debug("request_coalesced", extra={"fingerprint": key})

        entry.waiters += 1
        try:
            return await asyncio.shield(entry.task)
        finally:
            entry.waiters -= 1
            if entry.waiters == 0 and not entry.task.done():
                entry.task.cancel()
                self._discard(key, entry, retrieve=False)

    def _discard(self, key: str, entry: _InFlight[Any], retrieve: bool = True) -> None:
        if self._inflight.get(key) is entry:
            del self._inflight[key]
        # Mark the outcome retrieved; callers that needed it got it through shield
        if retrieve and not entry.task.cancelled():
            entry.task.exception()
