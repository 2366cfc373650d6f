"""Chunk planning logic for splitting id batches.

This module provides the ChunkPlanner class that determines how to split
a requested id set into multiple requests based on the endpoint's id limit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ...core.exceptions import InvalidArgumentError
from .definitions import ChunkPlan, ChunkPolicy

logger = logging.getLogger(__name__)


def unique_ids(ids: Iterable[Any]) -> list[Any]:
    """Drop duplicate ids, keeping each id's first position."""
    seen: set[str] = set()
    out: list[Any] = []
    for item_id in ids:
        key = str(item_id)
        if key in seen:
            continue
        seen.add(key)
        out.append(item_id)
    return out


class ChunkPlanner:
    """Plans id chunks for by-ids requests."""

    def __init__(self, policy: ChunkPolicy, endpoint_id: str = "unknown") -> None:
        """Initialize chunk planner.

        Args:
            policy: Chunking policy for the endpoint
            endpoint_id: endpoint name, for logging
        """
        self._policy = policy
        self._endpoint_id = endpoint_id

    def plan(self, ids: Iterable[Any]) -> list[ChunkPlan]:
        """Plan chunks for a set of ids.

        Args:
            ids: Requested ids; duplicates are collapsed

        Returns:
            List of chunk plans in caller id order

        Raises:
            InvalidArgumentError: If no ids are given, or the plan would
                exceed the policy's max_chunks
        """
        if isinstance(ids, (str, bytes)):
            raise InvalidArgumentError("ids must be an iterable of ids, not a string")
        distinct = unique_ids(ids)
        if not distinct:
            raise InvalidArgumentError("At least one id is required")
        for item_id in distinct:
            if item_id is None or str(item_id) == "":
                raise InvalidArgumentError("ids must not contain empty values")

        size = self._policy.max_ids
        plans = [
            ChunkPlan(
                ids=tuple(distinct[start : start + size]),
                chunk_index=index,
                endpoint_id=self._endpoint_id,
            )
            for index, start in enumerate(range(0, len(distinct), size))
        ]

        if self._policy.max_chunks is not None and len(plans) > self._policy.max_chunks:
            raise InvalidArgumentError(
                f"Request needs {len(plans)} chunks, more than the allowed {self._policy.max_chunks}"
            )

        logger.debug(
            "chunk_plan_created",
            extra={"endpoint_id": self._endpoint_id, "chunks": len(plans), "ids": len(distinct)},
        )
        return plans
