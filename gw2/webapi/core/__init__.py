"""Core components."""

from .connection import Connection
from .endpoint import EndpointDescriptor
from .enums import Capability, Locale
from .exceptions import (
    ApiError,
    AuthenticationRequiredError,
    AuthorizationError,
    CapabilityError,
    ConnectionFailedError,
    Gw2Error,
    InvalidArgumentError,
    NotFoundError,
    PartialResultError,
    RequestTimeoutError,
    ResponseDecodeError,
    ServerError,
    TooManyRequestsError,
    TransportError,
)
from .request import PreparedRequest, build_request, compute_fingerprint

__all__ = [
    "Connection",
    "EndpointDescriptor",
    "Capability",
    "Locale",
    "PreparedRequest",
    "build_request",
    "compute_fingerprint",
    "Gw2Error",
    "InvalidArgumentError",
    "AuthenticationRequiredError",
    "CapabilityError",
    "TransportError",
    "RequestTimeoutError",
    "ConnectionFailedError",
    "ApiError",
    "AuthorizationError",
    "NotFoundError",
    "TooManyRequestsError",
    "ServerError",
    "ResponseDecodeError",
    "PartialResultError",
]
