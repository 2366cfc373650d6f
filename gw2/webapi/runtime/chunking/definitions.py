"""Chunking metadata definitions and policy structures.

This module defines the data structures used to describe how a by-ids
request is split into several requests, including policies, plans and
results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ...core.connection import Connection
    from ...core.endpoint import EndpointDescriptor


@dataclass(frozen=True)
class ChunkPolicy:
    """Chunking policy for an endpoint.

    Attributes:
        max_ids: Maximum number of ids per request (e.g., 200)
        max_concurrency: Maximum number of chunk requests in flight at once
        max_chunks: Maximum number of chunks to plan (None = unlimited)
    """

    max_ids: int
    max_concurrency: int = 1
    max_chunks: int | None = None

    def __post_init__(self) -> None:
        """Validate chunk policy configuration."""
        if self.max_ids < 1:
            raise ValueError("ChunkPolicy max_ids must be positive")
        if self.max_concurrency < 1:
            raise ValueError("ChunkPolicy max_concurrency must be positive")
        if self.max_chunks is not None and self.max_chunks < 1:
            raise ValueError("ChunkPolicy max_chunks must be positive")


@dataclass(frozen=True)
class ChunkPlan:
    """Plan for a single chunk.

    Attributes:
        ids: Ids requested by this chunk, in caller order
        chunk_index: Zero-based index of this chunk in the overall plan
        endpoint_id: Endpoint name, for logging
    """

    ids: tuple[Any, ...]
    chunk_index: int = 0
    endpoint_id: str = "unknown"

    @property
    def limit(self) -> int:
        return len(self.ids)


@dataclass
class ChunkResult:
    """Result of chunked execution.

    Attributes:
        data: One fetch result per plan, in plan order
        chunks_used: Number of chunks that were fetched
        total_points: Total number of items across all chunks
    """

    data: list[Any]
    chunks_used: int
    total_points: int = 0
    latencies_ms: list[float] = field(default_factory=list)


def extract_chunk_policy(
    endpoint: EndpointDescriptor, connection: Connection | None = None
) -> ChunkPolicy:
    """Derive the chunk policy for an endpoint.

    The id limit comes from the endpoint descriptor, the concurrency bound
    from the connection (sequential when no connection is given).
    """
    return ChunkPolicy(
        max_ids=endpoint.max_ids_per_request,
        max_concurrency=connection.max_concurrency if connection is not None else 1,
    )
