"""Lazy, restartable page sequences for paginated endpoints.

A :class:`PagedSequence` issues ``page``/``page_size`` requests one at a
time, only when the consumer asks for the next page. Each ``async for``
starts over at page 0, so the same sequence can be iterated repeatedly.

Iteration stops after a page that is shorter than requested (or empty), or
once the ``X-Page-Total`` / ``X-Result-Total`` announced by the server has
been reached, so no request is made past the last page.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..models.response import ApiV2Response, PageTotals

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageFetcher = Callable[[int, int], Awaitable[ApiV2Response[list[T]]]]


@dataclass
class PageState:
    """Progress of one pass over a paginated endpoint."""

    page: int
    page_size: int
    total_known: bool = False
    fetched: int = 0
    page_total: int | None = None
    result_total: int | None = None

    def record(self, response: ApiV2Response[Any]) -> None:
        """Account for a received page and any totals it announces."""
        self.fetched += len(response.content or [])
        stored = response.stored_totals or PageTotals()
        page_total = response.page_total if response.page_total is not None else stored.page_total
        result_total = response.result_total if response.result_total is not None else stored.result_total
        if page_total is not None:
            self.page_total = page_total
        if result_total is not None:
            self.result_total = result_total
        self.total_known = self.page_total is not None or self.result_total is not None

    def is_last(self, received: int) -> bool:
        """Whether the page just received (at ``self.page``) ends the sequence."""
        if received < self.page_size:
            return True
        if self.page_total is not None and self.page + 1 >= self.page_total:
            return True
        if self.result_total is not None and self.fetched >= self.result_total:
            return True
        return False


class PagedSequence(Generic[T]):
    """Async iterable over the pages of a paginated endpoint.

    Args:
        fetch_page: Coroutine function ``(page, page_size) -> envelope``
        page_size: Requested items per page
        endpoint_id: Endpoint name, for logs

    Example::

        async for page in client.pages(page_size=100):
            print(len(page.content))

        async for item in client.pages().items():
            print(item)
    """

    def __init__(self, fetch_page: PageFetcher[T], page_size: int, endpoint_id: str = "unknown") -> None:
        self._fetch_page = fetch_page
        self._page_size = page_size
        self._endpoint_id = endpoint_id

    @property
    def page_size(self) -> int:
        return self._page_size

    def __aiter__(self) -> AsyncIterator[ApiV2Response[list[T]]]:
        return self._iter_pages()

    async def _iter_pages(self) -> AsyncIterator[ApiV2Response[list[T]]]:
        state = PageState(page=0, page_size=self._page_size)
        while True:
            response = await self._fetch_page(state.page, state.page_size)
            received = len(response.content or [])
            if received == 0:
                return
            state.record(response)
            yield response
            if state.is_last(received):
                logger.debug(
                    "pagination_complete",
                    extra={
                        "endpoint_id": self._endpoint_id,
                        "pages": state.page + 1,
                        "items": state.fetched,
                    },
                )
                return
            state.page += 1

    async def items(self) -> AsyncIterator[T]:
        """Flatten pages into a single lazy sequence of items."""
        async for page in self:
            for item in page.content:
                yield item

    async def to_list(self) -> list[T]:
        """Fetch every page and return all items."""
        return [item async for item in self.items()]
