"""Static endpoint metadata.

Every endpoint client is described by an :class:`EndpointDescriptor`: where
it lives, which schema version pins its response shape, and which
:class:`~gw2.webapi.core.enums.Capability` set it supports. Descriptors are
defined once at import time and never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from ..config import DEFAULT_PAGE_SIZE, DEFAULT_SCHEMA_VERSION, MAX_IDS_PER_REQUEST, MAX_PAGE_SIZE
from .enums import Capability
from .exceptions import CapabilityError, InvalidArgumentError

PLACEHOLDER_PATTERN = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")

# Capabilities that all expose a ``get`` method and therefore exclude each other
_GET_CAPABILITIES = frozenset({Capability.SINGLE, Capability.BLOB, Capability.BY_ID})


@dataclass(frozen=True)
class EndpointDescriptor:
    """Declarative description of one web API endpoint.

    Attributes:
        name: Dotted identifier used in logs (e.g. "account.bank")
        path: Path template below ``/v2/`` with ``:placeholder`` segments
        capabilities: Access patterns the endpoint supports
        schema_version: ISO-8601 timestamp sent as ``v``
        model: Type of one item (collections) or of the whole body (single)
        localized: Whether ``lang`` is sent and part of the cache key
        supports_ids_all: Whether ``ids=all`` returns every item in one call
        id_field: Attribute/key holding an item's id
        max_ids_per_request: Largest id batch the server accepts
        default_page_size: Page size used when the caller gives none
        max_page_size: Largest page size the server accepts
    """

    name: str
    path: str
    capabilities: frozenset[Capability] = field(default_factory=frozenset)
    schema_version: str = DEFAULT_SCHEMA_VERSION
    model: Any = None
    localized: bool = False
    supports_ids_all: bool = False
    id_field: str = "id"
    max_ids_per_request: int = MAX_IDS_PER_REQUEST
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "capabilities", frozenset(self.capabilities))
        object.__setattr__(self, "path", self.path.strip("/"))

        getters = self.capabilities & _GET_CAPABILITIES
        if len(getters) > 1:
            names = ", ".join(sorted(c.value for c in getters))
            raise CapabilityError(f"{self.name}: capabilities {names} cannot be combined")
        if Capability.ALL in self.capabilities and not (
            Capability.BY_IDS in self.capabilities or self.supports_ids_all
        ):
            raise CapabilityError(f"{self.name}: 'all' needs 'by_ids' or supports_ids_all")
        if self.max_ids_per_request < 1:
            raise CapabilityError(f"{self.name}: max_ids_per_request must be positive")
        if not 1 <= self.default_page_size <= self.max_page_size:
            raise CapabilityError(f"{self.name}: default_page_size out of range")

    @classmethod
    def define(
        cls,
        name: str,
        path: str,
        capabilities: Iterable[Capability],
        **kwargs: Any,
    ) -> EndpointDescriptor:
        """Convenience constructor accepting any iterable of capabilities."""
        return cls(name=name, path=path, capabilities=frozenset(capabilities), **kwargs)

    @property
    def authenticated(self) -> bool:
        return Capability.AUTHENTICATED in self.capabilities

    @property
    def placeholders(self) -> tuple[str, ...]:
        return tuple(PLACEHOLDER_PATTERN.findall(self.path))

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def build_path(self, path_params: Mapping[str, Any] | None = None) -> str:
        """Substitute placeholders with URL-quoted values.

        Raises:
            InvalidArgumentError: If a placeholder has no (or an empty) value
        """
        params = path_params or {}

        def substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            value = params.get(key)
            if value is None or str(value) == "":
                raise InvalidArgumentError(f"{self.name}: missing path parameter '{key}'")
            return quote(str(value), safe="")

        return PLACEHOLDER_PATTERN.sub(substitute, self.path)
