"""Results of multi-request operations (by-ids, all)."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ..core.exceptions import PartialResultError
from .response import ApiV2Response

T = TypeVar("T")


@dataclass(frozen=True)
class PartialResult:
    """Ids that were requested but not returned by the API.

    The API silently omits unknown ids, so this is a recoverable outcome
    rather than an error. Call :meth:`BulkResult.raise_for_partial` to treat
    it as fatal.
    """

    missing_ids: tuple[Any, ...]

    def __bool__(self) -> bool:
        return bool(self.missing_ids)


@dataclass(frozen=True)
class BulkResult(Generic[T]):
    """Merged items of one or more by-ids requests.

    Attributes:
        items: Items in the caller's requested id order
        partial: Missing ids, or None when every id was returned
        responses: One envelope per chunk request, in chunk order
    """

    items: list[T]
    partial: PartialResult | None = None
    responses: Sequence[ApiV2Response[Any]] = field(default_factory=tuple)

    @property
    def content(self) -> list[T]:
        return self.items

    @property
    def cached(self) -> bool:
        """True when every underlying response came from the cache."""
        return bool(self.responses) and all(r.cached for r in self.responses)

    def raise_for_partial(self) -> list[T]:
        """Return items, raising PartialResultError if any id was missing."""
        if self.partial:
            raise PartialResultError(self.partial.missing_ids)
        return self.items

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
