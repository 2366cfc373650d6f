"""The v2 client tree.

Leaf endpoints are generated by the endpoint registry. Endpoints that also
have sub-endpoints (``account``, ``characters``, ``continents``) are spelled
out here so they can carry their children::

    v2 = Gw2WebApiV2Client(connection)
    await v2.account.bank.get()
    await v2.characters["Logan Thackeray"].crafting.get()
    await v2.continents[1].floors.many([0, 1])
"""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Any

from ..clients.base import (
    AllCapability,
    AuthenticatedCapability,
    BaseEndpointClient,
    ByIdCapability,
    ByIdsCapability,
    PaginatedCapability,
    SingleCapability,
)
from ..clients.registry import EndpointRegistry
from ..core.exceptions import InvalidArgumentError
from . import endpoints
from .schemas import Account, Character, Continent

if TYPE_CHECKING:
    from ..core.connection import Connection


def _check_id(value: Any, what: str) -> Any:
    if value is None or str(value).strip() == "":
        raise InvalidArgumentError(f"{what} must not be empty")
    return value


class AccountClient(SingleCapability[Account], AuthenticatedCapability[Account]):
    """/v2/account and its sub-endpoints."""

    descriptor = endpoints.ACCOUNT

    def __init__(self, connection: Connection, registry: EndpointRegistry) -> None:
        super().__init__(connection)
        self.bank = registry.create("account.bank", connection)
        self.emotes = registry.create("account.emotes", connection)
        self.materials = registry.create("account.materials", connection)


class CharactersIdClient:
    """Sub-endpoints of one character (``/v2/characters/:id/...``)."""

    def __init__(self, connection: Connection, registry: EndpointRegistry, character_name: str) -> None:
        self.character_name = _check_id(character_name, "character name")
        self.crafting = registry.create("characters.crafting", connection, id=character_name)
        self.training = registry.create("characters.training", connection, id=character_name)
        self.active_equipment_tab = registry.create(
            "characters.equipmenttabs.active", connection, id=character_name
        )

    def __repr__(self) -> str:
        return f"CharactersIdClient({self.character_name!r})"


class CharactersClient(
    ByIdCapability[Character],
    ByIdsCapability[Character],
    AllCapability[Character],
    PaginatedCapability[Character],
    AuthenticatedCapability[Character],
):
    """/v2/characters; index by name for per-character sub-endpoints."""

    descriptor = endpoints.CHARACTERS

    def __init__(self, connection: Connection, registry: EndpointRegistry) -> None:
        super().__init__(connection)
        self._registry = registry

    def __getitem__(self, character_name: str) -> CharactersIdClient:
        return CharactersIdClient(self._connection, self._registry, character_name)


class ContinentsIdClient:
    """Sub-endpoints of one continent (``/v2/continents/:id/...``)."""

    def __init__(self, connection: Connection, registry: EndpointRegistry, continent_id: int) -> None:
        self.continent_id = _check_id(continent_id, "continent id")
        self.floors = registry.create("continents.floors", connection, id=continent_id)

    def __repr__(self) -> str:
        return f"ContinentsIdClient({self.continent_id!r})"


class ContinentsClient(
    ByIdCapability[Continent],
    ByIdsCapability[Continent],
    AllCapability[Continent],
    PaginatedCapability[Continent],
):
    """/v2/continents; index by id for per-continent sub-endpoints."""

    descriptor = endpoints.CONTINENTS

    def __init__(self, connection: Connection, registry: EndpointRegistry) -> None:
        super().__init__(connection)
        self._registry = registry

    def __getitem__(self, continent_id: int) -> ContinentsIdClient:
        return ContinentsIdClient(self._connection, self._registry, continent_id)


class Gw2WebApiV2Client:
    """Entry point to every v2 endpoint, sharing one connection.

    Sub-clients are created on first access.

    Args:
        connection: Connection used by every endpoint client
        registry: Endpoint registry (defaults to the global one, populated
            with the v2 table)
    """

    def __init__(self, connection: Connection, registry: EndpointRegistry | None = None) -> None:
        self._connection = connection
        self._registry = endpoints.register_all(registry)

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def registry(self) -> EndpointRegistry:
        return self._registry

    def _create(self, name: str) -> BaseEndpointClient[Any]:
        return self._registry.create(name, self._connection)

    @cached_property
    def account(self) -> AccountClient:
        return AccountClient(self._connection, self._registry)

    @cached_property
    def characters(self) -> CharactersClient:
        return CharactersClient(self._connection, self._registry)

    @cached_property
    def continents(self) -> ContinentsClient:
        return ContinentsClient(self._connection, self._registry)

    @cached_property
    def items(self) -> Any:
        return self._create("items")

    @cached_property
    def outfits(self) -> Any:
        return self._create("outfits")

    @cached_property
    def colors(self) -> Any:
        return self._create("colors")

    @cached_property
    def worlds(self) -> Any:
        return self._create("worlds")

    @cached_property
    def quaggans(self) -> Any:
        return self._create("quaggans")

    @cached_property
    def build(self) -> Any:
        return self._create("build")

    @cached_property
    def tokeninfo(self) -> Any:
        return self._create("tokeninfo")
