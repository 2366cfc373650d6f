"""Default aiohttp-backed transport."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import aiohttp

from ...core.exceptions import ConnectionFailedError, RequestTimeoutError, TransportError
from .transport import TransportResponse

logger = logging.getLogger(__name__)


class AiohttpTransport:
    """Transport sending each request through one shared aiohttp session.

    The session is opened on first use and reopened if something closed it.
    Non-2xx statuses are returned as they are; mapping them to errors is
    the runner's job.

    Args:
        timeout: Total seconds allowed per request
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def closed(self) -> bool:
        return self._session is None or self._session.closed

    @property
    def session(self) -> aiohttp.ClientSession:
        if self.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, raise_for_status=False)
        return self._session

    async def send(self, method: str, url: str, headers: Mapping[str, str]) -> TransportResponse:
        """Send a request and return the raw exchange.

        Raises:
            RequestTimeoutError: The request exceeded the configured timeout
            ConnectionFailedError: The server could not be reached
            TransportError: Any other aiohttp client failure
        """
        try:
            async with self.session.request(method, url, headers=dict(headers)) as response:
                body = await response.read()
                return TransportResponse(
                    status_code=response.status,
                    headers=dict(response.headers),
                    body=body,
                    reason=response.reason,
                )
        except asyncio.TimeoutError as e:
            logger.warning("transport_timeout", extra={"url": url, "method": method})
            raise RequestTimeoutError(f"{method} {url} timed out") from e
        except aiohttp.ClientConnectionError as e:
            raise ConnectionFailedError(f"{method} {url} failed to connect: {e}") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

    async def close(self) -> None:
        """Close the shared session; later sends open a new one."""
        session, self._session = self._session, None
        if session is not None and not session.closed:
            await session.close()

    async def __aenter__(self) -> AiohttpTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
