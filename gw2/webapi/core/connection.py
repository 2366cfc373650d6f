"""Connection settings shared by every endpoint client.

A :class:`Connection` is immutable configuration plus the collaborators
requests go through (transport, cache). All clients created from one
connection share its cache and its in-flight request de-duplication.
"""

from __future__ import annotations

import hashlib
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import Any

from ..config import (
    BASE_URL,
    DEFAULT_CACHE_DURATION,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TIMEOUT,
    ENV_ACCESS_TOKEN,
    ENV_BASE_URL,
    ENV_LOCALE,
    USER_AGENT,
)
from ..runtime.cache.base import CacheMethod, NullCacheMethod
from ..runtime.rest.coalescer import RequestCoalescer
from ..runtime.rest.http_client import AiohttpTransport
from ..runtime.rest.transport import Transport
from .enums import Locale
from .exceptions import InvalidArgumentError


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Connection:
    """Immutable connection configuration.

    Args:
        access_token: API key; required by authenticated endpoints only
        locale: Language for localized endpoints (a Locale or its code)
        base_url: API root, without the version segment
        cache: Response cache (defaults to a cache that stores nothing)
        transport: HTTP transport (defaults to an aiohttp transport)
        timeout: Request timeout in seconds for the default transport
        user_agent: Sent as the User-Agent header
        default_cache_duration: Cache lifetime when a response carries no
            Cache-Control max-age or Expires header
        max_concurrency: Upper bound on concurrently dispatched id chunks
        clock: Source of "now" for cache expiry, injectable for tests
    """

    access_token: str | None = None
    locale: Locale = Locale.ENGLISH
    base_url: str = BASE_URL
    cache: CacheMethod = field(default_factory=NullCacheMethod)
    transport: Transport | None = None
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT
    default_cache_duration: timedelta = DEFAULT_CACHE_DURATION
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    clock: Callable[[], datetime] = field(default=utcnow, repr=False, compare=False)
    coalescer: RequestCoalescer = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        token = self.access_token.strip() if self.access_token else None
        object.__setattr__(self, "access_token", token or None)

        if not isinstance(self.locale, Locale):
            object.__setattr__(self, "locale", Locale.from_string(str(self.locale)))
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

        if self.transport is None:
            object.__setattr__(self, "transport", AiohttpTransport(timeout=self.timeout))
        if self.max_concurrency < 1:
            raise InvalidArgumentError("max_concurrency must be at least 1")
        if self.default_cache_duration < timedelta(0):
            raise InvalidArgumentError("default_cache_duration must not be negative")

        object.__setattr__(self, "coalescer", RequestCoalescer())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> Connection:
        """Build a connection from ``GW2_*`` environment variables.

        Keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        settings: dict[str, Any] = {}
        if env.get(ENV_ACCESS_TOKEN):
            settings["access_token"] = env[ENV_ACCESS_TOKEN]
        if env.get(ENV_LOCALE):
            settings["locale"] = Locale.from_string(env[ENV_LOCALE])
        if env.get(ENV_BASE_URL):
            settings["base_url"] = env[ENV_BASE_URL]
        settings.update(overrides)
        return cls(**settings)

    @property
    def authenticated(self) -> bool:
        return self.access_token is not None

    @property
    def auth_scope(self) -> str | None:
        """Stable digest identifying the token in cache keys (never the token)."""
        if self.access_token is None:
            return None
        return hashlib.sha256(self.access_token.encode()).hexdigest()[:32]

    def now(self) -> datetime:
        return self.clock()

    def with_options(self, **changes: Any) -> Connection:
        """Copy with changes applied. The copy gets its own de-duplication scope."""
        return replace(self, **changes)

    async def close(self) -> None:
        """Close the transport and the cache."""
        if self.transport is not None:
            await self.transport.close()
        await self.cache.close()

    async def __aenter__(self) -> Connection:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
