"""REST request runner: one request, cache policy, one envelope.

The runner executes a :class:`~gw2.webapi.core.request.PreparedRequest`
against the connection's cache and transport:

1. Join an identical request already in flight, if any.
2. Serve an unexpired cache entry without touching the network.
3. Otherwise call the transport, map non-2xx statuses to ``ApiError``,
   decode the body through a :class:`ResponseAdapter` and store the raw body
   with an expiry derived from ``Cache-Control``/``Expires``.

Error responses and transport failures are never cached.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from time import perf_counter
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from ...core.exceptions import Gw2Error, ResponseDecodeError, api_error_for_status
from ...models.response import ApiV2Response, PageTotals, envelope_meta
from ..cache.base import CacheEntry
from .transport import TransportResponse

if TYPE_CHECKING:
    from ...core.connection import Connection
    from ...core.request import PreparedRequest

logger = logging.getLogger(__name__)


class ResponseAdapter:
    """Turns decoded JSON into the content handed to callers."""

    def parse(self, data: Any) -> Any:
        return data


class ModelAdapter(ResponseAdapter):
    """Validates decoded JSON into a pydantic-compatible type."""

    def __init__(self, type_: Any) -> None:
        self.type_ = type_
        self._adapter: TypeAdapter[Any] = TypeAdapter(type_)

    def parse(self, data: Any) -> Any:
        return self._adapter.validate_python(data)


def decode_body(body: bytes) -> Any:
    """Decode a JSON response body (empty body decodes to None)."""
    if not body or not body.strip():
        return None
    return json.loads(body)


def error_message(response: TransportResponse) -> str:
    """Message for an error response: body ``text``/``error``/``message`` or the status line."""
    try:
        detail = decode_body(response.body)
    except ValueError:
        detail = None
    if isinstance(detail, dict):
        for key in ("text", "error", "message"):
            value = detail.get(key)
            if isinstance(value, str) and value:
                return value
    reason = f" {response.reason}" if response.reason else ""
    return f"HTTP {response.status_code}{reason}"


def _retry_after(response: TransportResponse) -> int | None:
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


class RestRunner:
    """Executes prepared requests for one connection."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    @property
    def connection(self) -> Connection:
        return self._connection

    async def run(
        self, request: PreparedRequest, adapter: ResponseAdapter | None = None
    ) -> ApiV2Response[Any]:
        """Execute ``request`` and return its envelope.

        Raises:
            TransportError: Network failure (propagated from the transport)
            ApiError: Non-2xx response
            ResponseDecodeError: 2xx body that cannot be decoded or validated
        """
        adapter = adapter or ResponseAdapter()
        return await self._connection.coalescer.run(
            request.fingerprint, lambda: self._execute(request, adapter)
        )

    async def _execute(self, request: PreparedRequest, adapter: ResponseAdapter) -> ApiV2Response[Any]:
        now = self._connection.now()
        entry = await self._read_cache(request)
        if entry is not None and not entry.is_expired(now):
            try:
                content = adapter.parse(decode_body(entry.body))
            except (ValueError, ValidationError):
                logger.warning(
                    "cache_entry_unreadable",
                    extra={"endpoint": request.endpoint_name, "fingerprint": request.fingerprint},
                )
            else:
                if content is not None:
                    logger.debug(
                        "request_cache_hit",
                        extra={"endpoint": request.endpoint_name, "fingerprint": request.fingerprint},
                    )
                    return ApiV2Response.from_cache(
                        content, PageTotals(entry.page_total, entry.result_total)
                    )

        response = await self._send(request)
        if not response.ok:
            error = api_error_for_status(
                response.status_code, error_message(response), retry_after=_retry_after(response)
            )
            logger.warning(
                "request_failed",
                extra={
                    "endpoint": request.endpoint_name,
                    "status_code": response.status_code,
                    "error_message": error.message,
                },
            )
            raise error.with_context(endpoint=request.endpoint_name, fingerprint=request.fingerprint)

        try:
            content = adapter.parse(decode_body(response.body))
        except (ValueError, ValidationError) as e:
            raise ResponseDecodeError(
                f"Endpoint '{request.endpoint_name}' returned an unreadable body: {e}"
            ).with_context(endpoint=request.endpoint_name, fingerprint=request.fingerprint) from e

        envelope = ApiV2Response.from_http(response, content)
        logger.debug("response_envelope", extra={"endpoint": request.endpoint_name, **envelope_meta(envelope)})
        await self._write_cache(request, response.body, envelope, self._connection.now())
        return envelope

    async def _send(self, request: PreparedRequest) -> TransportResponse:
        transport = self._connection.transport
        started = perf_counter()
        try:
            response = await transport.send(request.method, request.url, request.headers)
        except Gw2Error as e:
            logger.error(
                "transport_error",
                extra={"endpoint": request.endpoint_name, "error_type": type(e).__name__},
            )
            raise e.with_context(endpoint=request.endpoint_name, fingerprint=request.fingerprint)
        except Exception as e:
            e.add_note(f"while sending '{request.endpoint_name}' (fingerprint {request.fingerprint})")
            raise
        logger.info(
            "request_sent",
            extra={
                "endpoint": request.endpoint_name,
                "url": request.url,
                "status_code": response.status_code,
                "latency_ms": (perf_counter() - started) * 1000.0,
            },
        )
        return response

    async def _read_cache(self, request: PreparedRequest) -> CacheEntry | None:
        try:
            return await self._connection.cache.get(request.fingerprint)
        except Exception as e:
            e.add_note(f"while reading cache for '{request.endpoint_name}' ({request.fingerprint})")
            raise

    async def _write_cache(
        self,
        request: PreparedRequest,
        body: bytes,
        envelope: ApiV2Response[Any],
        now: datetime,
    ) -> None:
        if not body.strip():
            return
        expires_at = envelope.expiry(now) or now + self._connection.default_cache_duration
        if expires_at <= now:
            return
        try:
            entry = CacheEntry(
                body=body,
                expires_at=expires_at,
                page_total=envelope.page_total,
                result_total=envelope.result_total,
            )
            await self._connection.cache.set(request.fingerprint, entry)
        except Exception as e:
            e.add_note(f"while writing cache for '{request.endpoint_name}' ({request.fingerprint})")
            raise
        logger.debug(
            "cache_store",
            extra={
                "endpoint": request.endpoint_name,
                "fingerprint": request.fingerprint,
                "expires_at": expires_at.isoformat(),
            },
        )
