"""Web API v2 response envelope.

An :class:`ApiV2Response` wraps decoded content together with metadata the
API sends in response headers: caching hints, rate limit and result
counters, page information and RFC 5988 style ``Link`` relations.

Header parsing is tolerant by contract. Each header is parsed on its own
and a value that cannot be parsed leaves only that field unset; a response
is never rejected because of a malformed header.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..core.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from ..runtime.rest.transport import TransportResponse

T = TypeVar("T")
R = TypeVar("R")
U = TypeVar("U")

LINK_REL_PATTERN = re.compile(r'rel="?(previous|next|self|first|last)"?', re.IGNORECASE)
LINK_URI_PATTERN = re.compile(r"<(.+)>")
MAX_AGE_PATTERN = re.compile(r'(?:^|[,\s])max-age\s*=\s*"?(\d+)"?', re.IGNORECASE)

# Only value-shaped failures degrade to "field absent"; anything else is a bug.
_HEADER_PARSE_ERRORS = (ValueError, TypeError, OverflowError, IndexError)

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class PageTotals:
    """Page counters remembered alongside a cached page body."""

    page_total: int | None = None
    result_total: int | None = None

    def __bool__(self) -> bool:
        return self.page_total is not None or self.result_total is not None


def parse_cache_control(value: str) -> timedelta | None:
    """Extract ``max-age`` from a Cache-Control header value."""
    match = MAX_AGE_PATTERN.search(value)
    if match is None:
        return None
    return timedelta(seconds=int(match.group(1)))


def parse_expires(value: str) -> datetime:
    """Parse an Expires header (HTTP-date, ISO-8601 accepted as fallback)."""
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_int(value: str) -> int:
    return int(value.strip())


def parse_links(value: str) -> dict[str, str]:
    """Parse a Link header into ``{relation: uri}``.

    Segments lacking either a known relation or a ``<uri>`` are dropped.
    Relations are lower-cased.
    """
    links: dict[str, str] = {}
    for segment in value.split(","):
        rel = LINK_REL_PATTERN.search(segment)
        if rel is None:
            continue
        uri = LINK_URI_PATTERN.search(segment)
        if uri is None:
            continue
        links[rel.group(1).lower()] = uri.group(1).strip()
    return links


def _parse_header(headers: Mapping[str, str], key: str, parser: Callable[[str], R]) -> R | None:
    value = headers.get(key.lower())
    if value is None:
        return None
    try:
        return parser(value)
    except _HEADER_PARSE_ERRORS:
        return None


@dataclass(frozen=True)
class ApiV2Response(Generic[T]):
    """Decoded content plus header-derived metadata.

    Built once per request/response cycle and never mutated. Use
    :meth:`from_cache` for content served from the cache (all metadata
    unset) and :meth:`from_http` for live responses.
    """

    content: T
    cached: bool
    status_code: int | None = None
    headers: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    cache_max_age: timedelta | None = None
    expires: datetime | None = None
    rate_limit_limit: int | None = None
    result_count: int | None = None
    result_total: int | None = None
    links: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    page_size: int | None = None
    page_total: int | None = None
    stored_totals: PageTotals | None = field(default=None, repr=False)

    @classmethod
    def from_cache(cls, content: T, stored_totals: PageTotals | None = None) -> ApiV2Response[T]:
        """Wrap content served from the cache.

        Header metadata stays unset. ``stored_totals`` carries the page
        counters recorded when the body was cached, for the pager only.

        Raises:
            InvalidArgumentError: If content is None
        """
        if content is None:
            raise InvalidArgumentError("content must not be None")
        return cls(content=content, cached=True, stored_totals=stored_totals or None)

    @classmethod
    def from_http(cls, response: TransportResponse, content: T) -> ApiV2Response[T]:
        """Wrap content decoded from a live response, parsing its headers."""
        headers = response.headers
        links = _parse_header(headers, "Link", parse_links) or {}
        return cls(
            content=content,
            cached=False,
            status_code=response.status_code,
            headers=MappingProxyType(dict(headers)),
            cache_max_age=_parse_header(headers, "Cache-Control", parse_cache_control),
            expires=_parse_header(headers, "Expires", parse_expires),
            rate_limit_limit=_parse_header(headers, "X-Rate-Limit-Limit", parse_int),
            result_count=_parse_header(headers, "X-Result-Count", parse_int),
            result_total=_parse_header(headers, "X-Result-Total", parse_int),
            links=MappingProxyType(links),
            page_size=_parse_header(headers, "X-Page-Size", parse_int),
            page_total=_parse_header(headers, "X-Page-Total", parse_int),
        )

    def with_content(self, content: U) -> ApiV2Response[U]:
        """Return a copy carrying different content and the same metadata."""
        return replace(self, content=content)  # type: ignore[return-value]

    def link(self, relation: str) -> str | None:
        return self.links.get(relation.lower())

    def expiry(self, now: datetime) -> datetime | None:
        """Earliest of ``now + max-age`` and ``Expires``, if either is present."""
        candidates: list[datetime] = []
        if self.cache_max_age is not None:
            try:
                candidates.append(now + self.cache_max_age)
            except OverflowError:
                pass
        if self.expires is not None:
            candidates.append(self.expires)
        return min(candidates) if candidates else None

    def __repr__(self) -> str:
        return (
            f"ApiV2Response(cached={self.cached}, status_code={self.status_code}, "
            f"result_count={self.result_count}, links={dict(self.links)!r})"
        )


def envelope_meta(response: ApiV2Response[Any]) -> dict[str, Any]:
    """Flatten envelope metadata for structured logging."""
    return {
        "cached": response.cached,
        "status_code": response.status_code,
        "result_count": response.result_count,
        "result_total": response.result_total,
        "page_size": response.page_size,
        "page_total": response.page_total,
    }
