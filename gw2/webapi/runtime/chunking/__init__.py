"""Generic chunking layer for by-ids requests.

This module splits large id batches into requests the API accepts and
recombines the results in request order.

Architecture:
    The chunking layer consists of:
    - definitions.py: Chunk metadata structures (ChunkPolicy, ChunkPlan, ChunkResult)
    - planners.py: Chunk planning logic (splits ids by the endpoint limit)
    - executors.py: Chunk execution logic (bounded concurrency, ordered results)

Usage:
    The chunk policy is read from the endpoint descriptor (id limit) and the
    connection (concurrency bound).
"""

from __future__ import annotations

from .definitions import ChunkPlan, ChunkPolicy, ChunkResult, extract_chunk_policy
from .executors import ChunkExecutor
from .planners import ChunkPlanner, unique_ids

__all__ = [
    "ChunkPolicy",
    "ChunkResult",
    "ChunkPlan",
    "ChunkPlanner",
    "ChunkExecutor",
    "extract_chunk_policy",
    "unique_ids",
]
