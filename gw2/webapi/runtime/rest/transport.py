"""Transport contract used by the request runner.

The runner only ever talks to a :class:`Transport`: it hands over a method,
an absolute URL and headers, and gets back status, headers and raw body.
Anything below that line (sessions, TLS, socket retries) belongs to the
transport implementation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class TransportResponse:
    """Raw HTTP exchange result.

    Header names are lower-cased on construction so lookups are
    case-insensitive.
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    reason: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "headers", {str(k).lower(): str(v) for k, v in self.headers.items()}
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Asynchronous HTTP sender.

    Implementations raise :class:`~gw2.webapi.core.exceptions.TransportError`
    (or a subclass) for network failures and return non-2xx responses
    normally.
    """

    async def send(
        self, method: str, url: str, headers: Mapping[str, str]
    ) -> TransportResponse: ...

    async def close(self) -> None: ...
