"""Endpoint registry: descriptors in, composed client classes out.

The registry maps endpoint names to their descriptors and builds one client
class per descriptor by composing the capability mixins the descriptor
declares.

Architecture:
    - build_client_class(): descriptor -> class composed of capability mixins
    - EndpointRegistry: name -> descriptor/class lookup, client construction
    - get_endpoint_registry(): process-wide singleton, injectable for testing

Design Decisions:
    - Generated classes are cached per descriptor, so every client for the
      same endpoint shares one class
    - Mixins are composed in a fixed order, so method resolution does not
      depend on the order capabilities were declared in
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..core.enums import Capability
from ..core.exceptions import CapabilityError
from .base import (
    AllCapability,
    AuthenticatedCapability,
    BaseEndpointClient,
    BlobCapability,
    ByIdCapability,
    ByIdsCapability,
    PaginatedCapability,
    SingleCapability,
)

if TYPE_CHECKING:
    from ..core.connection import Connection
    from ..core.endpoint import EndpointDescriptor

CAPABILITY_MIXINS: dict[Capability, type[BaseEndpointClient[Any]]] = {
    Capability.SINGLE: SingleCapability,
    Capability.BLOB: BlobCapability,
    Capability.BY_ID: ByIdCapability,
    Capability.BY_IDS: ByIdsCapability,
    Capability.ALL: AllCapability,
    Capability.PAGINATED: PaginatedCapability,
    Capability.AUTHENTICATED: AuthenticatedCapability,
}

_class_cache: dict[EndpointDescriptor, type[BaseEndpointClient[Any]]] = {}


def client_class_name(descriptor: EndpointDescriptor) -> str:
    """``"account.bank"`` -> ``"AccountBankClient"``."""
    parts = descriptor.name.replace("-", ".").replace("_", ".").split(".")
    return "".join(part[:1].upper() + part[1:] for part in parts if part) + "Client"


def build_client_class(descriptor: EndpointDescriptor) -> type[BaseEndpointClient[Any]]:
    """Compose the client class for ``descriptor``.

    Args:
        descriptor: Endpoint metadata

    Returns:
        A subclass of every mixin the descriptor's capabilities name

    Raises:
        CapabilityError: If the descriptor declares no capabilities
    """
    cached = _class_cache.get(descriptor)
    if cached is not None:
        return cached

    bases = tuple(mixin for cap, mixin in CAPABILITY_MIXINS.items() if cap in descriptor.capabilities)
    if not bases:
        raise CapabilityError(f"{descriptor.name}: no capabilities declared")

    namespace = {
        "descriptor": descriptor,
        "__module__": __name__,
        "__doc__": f"Client for /v2/{descriptor.path}.",
    }
    cls: type[BaseEndpointClient[Any]] = type(client_class_name(descriptor), bases, namespace)
    _class_cache[descriptor] = cls
    return cls


class EndpointRegistry:
    """Lookup of endpoint descriptors and their client classes by name."""

    def __init__(self) -> None:
        self._descriptors: dict[str, EndpointDescriptor] = {}
        self._classes: dict[str, type[BaseEndpointClient[Any]]] = {}

    def register(self, descriptor: EndpointDescriptor) -> type[BaseEndpointClient[Any]]:
        """Register an endpoint and return its client class.

        Raises:
            CapabilityError: If the name is taken by a different descriptor
        """
        existing = self._descriptors.get(descriptor.name)
        if existing is not None:
            if existing == descriptor:
                return self._classes[descriptor.name]
            raise CapabilityError(f"Endpoint '{descriptor.name}' is already registered")

        cls = build_client_class(descriptor)
        self._descriptors[descriptor.name] = descriptor
        self._classes[descriptor.name] = cls
        return cls

    def descriptor(self, name: str) -> EndpointDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise KeyError(f"Unknown endpoint '{name}'") from None

    def client_class(self, name: str) -> type[BaseEndpointClient[Any]]:
        self.descriptor(name)
        return self._classes[name]

    def create(self, name: str, connection: Connection, **path_params: Any) -> BaseEndpointClient[Any]:
        """Instantiate the client for ``name`` bound to ``connection``."""
        return self.client_class(name)(connection, **path_params)

    def supports(self, name: str, capability: Capability) -> bool:
        return self.descriptor(name).supports(capability)

    def names(self) -> list[str]:
        return sorted(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


_default_registry: EndpointRegistry | None = None


def get_endpoint_registry() -> EndpointRegistry:
    """Get the global endpoint registry singleton.

    Created on first access; tests may build their own ``EndpointRegistry``.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = EndpointRegistry()
    return _default_registry
