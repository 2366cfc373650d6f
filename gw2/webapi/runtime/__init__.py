"""Runtime layer: transport, cache, request execution, chunking and pagination."""

from .cache import CacheEntry, CacheMethod, DiskCacheMethod, MemoryCacheMethod, NullCacheMethod
from .chunking import ChunkExecutor, ChunkPlan, ChunkPlanner, ChunkPolicy, ChunkResult
from .pagination import PagedSequence, PageState
from .rest import (
    AiohttpTransport,
    ModelAdapter,
    RequestCoalescer,
    ResponseAdapter,
    RestRunner,
    Transport,
    TransportResponse,
)

__all__ = [
    "CacheEntry",
    "CacheMethod",
    "NullCacheMethod",
    "MemoryCacheMethod",
    "DiskCacheMethod",
    "ChunkExecutor",
    "ChunkPlan",
    "ChunkPlanner",
    "ChunkPolicy",
    "ChunkResult",
    "PagedSequence",
    "PageState",
    "AiohttpTransport",
    "Transport",
    "TransportResponse",
    "RequestCoalescer",
    "RestRunner",
    "ResponseAdapter",
    "ModelAdapter",
]
