"""The v2 endpoint table.

Each endpoint is declared once as an :class:`EndpointDescriptor`; client
classes are generated from these declarations by the endpoint registry.
"""

from __future__ import annotations

from ..clients.registry import EndpointRegistry, get_endpoint_registry
from ..core.endpoint import EndpointDescriptor
from ..core.enums import Capability
from .schemas import (
    Account,
    AccountItem,
    AccountMaterial,
    Build,
    Character,
    CharacterEquipmentTab,
    CharactersCrafting,
    CharactersTraining,
    Color,
    Continent,
    ContinentFloor,
    Item,
    Outfit,
    Quaggan,
    TokenInfo,
    World,
)

SINGLE = Capability.SINGLE
BLOB = Capability.BLOB
BY_ID = Capability.BY_ID
BY_IDS = Capability.BY_IDS
ALL = Capability.ALL
PAGINATED = Capability.PAGINATED
AUTHENTICATED = Capability.AUTHENTICATED

# Capability set of a plain "bulk expanded" collection endpoint
BULK = (BY_ID, BY_IDS, ALL, PAGINATED)

ACCOUNT = EndpointDescriptor.define("account", "account", {SINGLE, AUTHENTICATED}, model=Account)
ACCOUNT_BANK = EndpointDescriptor.define(
    "account.bank", "account/bank", {BLOB, AUTHENTICATED}, model=list[AccountItem | None]
)
ACCOUNT_EMOTES = EndpointDescriptor.define(
    "account.emotes", "account/emotes", {BLOB, AUTHENTICATED}, model=list[str]
)
ACCOUNT_MATERIALS = EndpointDescriptor.define(
    "account.materials", "account/materials", {BLOB, AUTHENTICATED}, model=list[AccountMaterial]
)

CHARACTERS = EndpointDescriptor.define(
    "characters",
    "characters",
    {*BULK, AUTHENTICATED},
    model=Character,
    id_field="name",
    supports_ids_all=True,
)
CHARACTERS_CRAFTING = EndpointDescriptor.define(
    "characters.crafting",
    "characters/:id/crafting",
    {BLOB, AUTHENTICATED},
    model=CharactersCrafting,
)
CHARACTERS_TRAINING = EndpointDescriptor.define(
    "characters.training",
    "characters/:id/training",
    {BLOB, AUTHENTICATED},
    model=CharactersTraining,
)
CHARACTERS_EQUIPMENTTABS_ACTIVE = EndpointDescriptor.define(
    "characters.equipmenttabs.active",
    "characters/:id/equipmenttabs/active",
    {BLOB, AUTHENTICATED},
    model=CharacterEquipmentTab,
)

CONTINENTS = EndpointDescriptor.define(
    "continents", "continents", BULK, model=Continent, localized=True, supports_ids_all=True
)
CONTINENTS_FLOORS = EndpointDescriptor.define(
    "continents.floors",
    "continents/:id/floors",
    BULK,
    model=ContinentFloor,
    localized=True,
    supports_ids_all=True,
)

# /v2/items rejects ids=all, so "all" walks the id list in chunks
ITEMS = EndpointDescriptor.define("items", "items", BULK, model=Item, localized=True)
OUTFITS = EndpointDescriptor.define(
    "outfits", "outfits", BULK, model=Outfit, localized=True, supports_ids_all=True
)
COLORS = EndpointDescriptor.define(
    "colors", "colors", BULK, model=Color, localized=True, supports_ids_all=True
)
WORLDS = EndpointDescriptor.define(
    "worlds", "worlds", BULK, model=World, localized=True, supports_ids_all=True
)
QUAGGANS = EndpointDescriptor.define(
    "quaggans", "quaggans", BULK, model=Quaggan, supports_ids_all=True
)

BUILD = EndpointDescriptor.define("build", "build", {SINGLE}, model=Build)
TOKENINFO = EndpointDescriptor.define(
    "tokeninfo", "tokeninfo", {SINGLE, AUTHENTICATED}, model=TokenInfo
)

ENDPOINTS: tuple[EndpointDescriptor, ...] = (
    ACCOUNT,
    ACCOUNT_BANK,
    ACCOUNT_EMOTES,
    ACCOUNT_MATERIALS,
    CHARACTERS,
    CHARACTERS_CRAFTING,
    CHARACTERS_TRAINING,
    CHARACTERS_EQUIPMENTTABS_ACTIVE,
    CONTINENTS,
    CONTINENTS_FLOORS,
    ITEMS,
    OUTFITS,
    COLORS,
    WORLDS,
    QUAGGANS,
    BUILD,
    TOKENINFO,
)


def register_all(registry: EndpointRegistry | None = None) -> EndpointRegistry:
    """Register every v2 endpoint with the registry.

    Args:
        registry: Optional registry instance (defaults to global singleton)

    Returns:
        The registry the endpoints were registered with
    """
    if registry is None:
        registry = get_endpoint_registry()
    for descriptor in ENDPOINTS:
        registry.register(descriptor)
    return registry
