"""gw2.webapi - typed async client for the Guild Wars 2 web API."""

from .client import Gw2Client
from .clients import BaseEndpointClient, EndpointRegistry, build_client_class, get_endpoint_registry
from .core import (
    ApiError,
    AuthenticationRequiredError,
    AuthorizationError,
    Capability,
    CapabilityError,
    Connection,
    ConnectionFailedError,
    EndpointDescriptor,
    Gw2Error,
    InvalidArgumentError,
    Locale,
    NotFoundError,
    PartialResultError,
    RequestTimeoutError,
    ResponseDecodeError,
    ServerError,
    TooManyRequestsError,
    TransportError,
)
from .models import ApiV2Response, BulkResult, PartialResult
from .runtime import (
    AiohttpTransport,
    CacheEntry,
    CacheMethod,
    DiskCacheMethod,
    MemoryCacheMethod,
    NullCacheMethod,
    PagedSequence,
    Transport,
    TransportResponse,
)
from .v2 import Gw2WebApiV2Client

__version__ = "0.1.0"

__all__ = [
    "Gw2Client",
    "Gw2WebApiV2Client",
    "Connection",
    "Locale",
    "Capability",
    "EndpointDescriptor",
    "BaseEndpointClient",
    "EndpointRegistry",
    "build_client_class",
    "get_endpoint_registry",
    "ApiV2Response",
    "BulkResult",
    "PartialResult",
    "PagedSequence",
    "CacheEntry",
    "CacheMethod",
    "NullCacheMethod",
    "MemoryCacheMethod",
    "DiskCacheMethod",
    "Transport",
    "TransportResponse",
    "AiohttpTransport",
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
