"""Shared fixtures for unit tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from gw2.webapi.core.connection import Connection
from gw2.webapi.runtime.cache import MemoryCacheMethod
from gw2.webapi.runtime.rest.transport import TransportResponse

Responder = TransportResponse | Callable[[str], TransportResponse]


class FakeTransport:
    """Transport answering from registered routes and recording every call.

    Routes match when their fragment occurs in the request URL; the most
    recently added matching route wins. Set ``gate`` to an ``asyncio.Event``
    to hold every request until the event is set.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, str]]] = []
        self.routes: list[tuple[str, Responder]] = []
        self.gate: asyncio.Event | None = None
        self.cancelled = False
        self.closed = False

    def add(
        self,
        fragment: str,
        body: Any = None,
        *,
        status: int = 200,
        headers: dict[str, str] | None = None,
        raw: bytes | None = None,
        reason: str | None = None,
    ) -> None:
        payload = raw if raw is not None else json.dumps(body).encode()
        self.routes.append(
            (fragment, TransportResponse(status, headers or {}, payload, reason=reason))
        )

    def add_callback(self, fragment: str, responder: Callable[[str], TransportResponse]) -> None:
        self.routes.append((fragment, responder))

    def urls(self) -> list[str]:
        return [url for _, url, _ in self.calls]

    async def send(self, method: str, url: str, headers: dict[str, str]) -> TransportResponse:
        self.calls.append((method, url, dict(headers)))
        if self.gate is not None:
            try:
                await self.gate.wait()
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        for fragment, responder in reversed(self.routes):
            if fragment in url:
                return responder(url) if callable(responder) else responder
        return TransportResponse(404, {}, b'{"text": "no such id"}', reason="Not Found")

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Settable clock returning aware UTC datetimes."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def cache(clock) -> MemoryCacheMethod:
    return MemoryCacheMethod(clock=clock)


@pytest.fixture
def connection(transport, clock, cache) -> Connection:
    """Anonymous connection over the fake transport with an in-memory cache."""
    return Connection(transport=transport, clock=clock, cache=cache)


@pytest.fixture
def auth_connection(transport, clock, cache) -> Connection:
    """Same as ``connection`` but carrying an access token."""
    return Connection(access_token="test-token", transport=transport, clock=clock, cache=cache)
