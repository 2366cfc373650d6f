"""Endpoint client base types and the endpoint registry."""

from .base import (
    AllCapability,
    AuthenticatedCapability,
    BaseEndpointClient,
    BlobCapability,
    ByIdCapability,
    ByIdsCapability,
    PaginatedCapability,
    SingleCapability,
    merge_by_ids,
)
from .registry import (
    CAPABILITY_MIXINS,
    EndpointRegistry,
    build_client_class,
    get_endpoint_registry,
)

__all__ = [
    "AllCapability",
    "AuthenticatedCapability",
    "BaseEndpointClient",
    "BlobCapability",
    "ByIdCapability",
    "ByIdsCapability",
    "CAPABILITY_MIXINS",
    "EndpointRegistry",
    "PaginatedCapability",
    "SingleCapability",
    "build_client_class",
    "get_endpoint_registry",
    "merge_by_ids",
]
