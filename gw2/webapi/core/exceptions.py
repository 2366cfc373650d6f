"""Custom exception hierarchy."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class Gw2Error(Exception):
    """Base exception for all library errors.

    ``endpoint`` and ``fingerprint`` are filled in by the request runtime
    when the error is raised while serving a specific request.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.endpoint: str | None = None
        self.fingerprint: str | None = None

    def with_context(self, *, endpoint: str, fingerprint: str) -> Gw2Error:
        """Attach request context in place and return ``self`` for re-raising."""
        self.endpoint = endpoint
        self.fingerprint = fingerprint
        return self


class InvalidArgumentError(Gw2Error, ValueError):
    """Malformed caller input (missing content, empty id set, bad page size)."""

    pass


class AuthenticationRequiredError(Gw2Error):
    """Endpoint requires an access token but the connection has none."""

    def __init__(self, message: str, endpoint: str | None = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class CapabilityError(Gw2Error):
    """Endpoint client composition does not match its declared capabilities."""

    pass


class TransportError(Gw2Error):
    """Network or transport-layer failure. Never cached."""

    pass


class RequestTimeoutError(TransportError):
    """The transport gave up waiting for a response."""

    pass


class ConnectionFailedError(TransportError):
    """The transport could not reach the server."""

    pass


class ApiError(Gw2Error):
    """Non-2xx response from the web API. Never cached."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class AuthorizationError(ApiError):
    """Token rejected or lacking a required permission (401/403)."""

    pass


class NotFoundError(ApiError):
    """Unknown resource or all requested ids invalid (404)."""

    pass


class TooManyRequestsError(ApiError):
    """Rate limit exceeded (429)."""

    def __init__(self, message: str, status_code: int = 429, retry_after: int | None = None) -> None:
        super().__init__(message, status_code)
        self.retry_after = retry_after


class ServerError(ApiError):
    """Server-side failure (5xx)."""

    pass


class ResponseDecodeError(Gw2Error):
    """A 2xx response body is not valid JSON or does not fit the endpoint model."""

    pass


class PartialResultError(Gw2Error):
    """Raised on request when a by-ids fetch did not return every id."""

    def __init__(self, missing_ids: Sequence[Any]) -> None:
        ids = ", ".join(str(i) for i in missing_ids)
        super().__init__(f"Missing ids in response: {ids}")
        self.missing_ids = list(missing_ids)


def api_error_for_status(status_code: int, message: str, retry_after: int | None = None) -> ApiError:
    """Map an HTTP status code to the matching ApiError subclass."""
    if status_code in (401, 403):
        return AuthorizationError(message, status_code)
    if status_code == 404:
        return NotFoundError(message, status_code)
    if status_code == 429:
        return TooManyRequestsError(message, status_code, retry_after=retry_after)
    if status_code >= 500:
        return ServerError(message, status_code)
    return ApiError(message, status_code)
