"""Resource models for the v2 endpoints.

Only the commonly used fields are declared; anything else the API returns is
kept as extra attributes, so new fields never break parsing.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Gw2Model(BaseModel):
    """Base for v2 resources: immutable, tolerant of undeclared fields."""

    model_config = ConfigDict(frozen=True, extra="allow", str_strip_whitespace=True)


class Account(Gw2Model):
    """/v2/account"""

    id: str
    name: str
    age: int = Field(default=0, ge=0)
    world: int
    guilds: list[str] = Field(default_factory=list)
    guild_leader: list[str] | None = None
    created: datetime
    access: list[str] = Field(default_factory=list)
    commander: bool = False
    fractal_level: int | None = None
    wvw_rank: int | None = None
    last_modified: datetime | None = None


class AccountItem(Gw2Model):
    """One bank or inventory slot."""

    id: int
    count: int = Field(..., ge=0)
    charges: int | None = None
    skin: int | None = None
    upgrades: list[int] | None = None
    infusions: list[int] | None = None
    binding: str | None = None
    bound_to: str | None = None


class AccountMaterial(Gw2Model):
    """One material storage slot."""

    id: int
    category: int
    count: int = Field(..., ge=0)
    binding: str | None = None


class Character(Gw2Model):
    """/v2/characters/:id (core fields)."""

    name: str = Field(..., min_length=1)
    race: str
    gender: str
    profession: str
    level: int = Field(..., ge=1)
    guild: str | None = None
    age: int = 0
    created: datetime | None = None
    deaths: int = 0


class CraftingDiscipline(Gw2Model):
    discipline: str
    rating: int
    active: bool


class CharactersCrafting(Gw2Model):
    """/v2/characters/:id/crafting"""

    crafting: list[CraftingDiscipline] = Field(default_factory=list)


class TrainingTree(Gw2Model):
    id: int
    spent: int
    done: bool


class CharactersTraining(Gw2Model):
    """/v2/characters/:id/training"""

    training: list[TrainingTree] = Field(default_factory=list)


class EquipmentTabSlot(Gw2Model):
    id: int
    slot: str | None = None
    skin: int | None = None
    upgrades: list[int] = Field(default_factory=list)
    infusions: list[int] = Field(default_factory=list)
    dyes: list[int | None] = Field(default_factory=list)


class CharacterEquipmentTab(Gw2Model):
    """/v2/characters/:id/equipmenttabs/active"""

    tab: int = Field(ge=1)
    name: str = ""
    is_active: bool = False
    equipment: list[EquipmentTabSlot] = Field(default_factory=list)
    equipment_pvp: dict | None = None


class Continent(Gw2Model):
    """/v2/continents/:id"""

    id: int
    name: str
    continent_dims: list[int]
    min_zoom: int
    max_zoom: int
    floors: list[int] = Field(default_factory=list)


class ContinentFloor(Gw2Model):
    """/v2/continents/:id/floors/:floor (regions are left undeclared)."""

    id: int
    texture_dims: list[int]
    clamped_view: list[list[int]] | None = None


class Item(Gw2Model):
    """/v2/items/:id"""

    id: int
    name: str
    type: str
    rarity: str
    level: int = 0
    vendor_value: int = 0
    description: str | None = None
    icon: str | None = None
    chat_link: str | None = None
    flags: list[str] = Field(default_factory=list)
    game_types: list[str] = Field(default_factory=list)
    restrictions: list[str] = Field(default_factory=list)


class Outfit(Gw2Model):
    """/v2/outfits/:id"""

    id: int
    name: str
    icon: str | None = None
    unlock_items: list[int] = Field(default_factory=list)


class Color(Gw2Model):
    """/v2/colors/:id"""

    id: int
    name: str
    base_rgb: list[int]
    item: int | None = None
    categories: list[str] = Field(default_factory=list)


class World(Gw2Model):
    """/v2/worlds/:id"""

    id: int
    name: str
    population: str


class Quaggan(Gw2Model):
    """/v2/quaggans/:id"""

    id: str
    url: str


class Build(Gw2Model):
    """/v2/build"""

    id: int


class TokenInfo(Gw2Model):
    """/v2/tokeninfo"""

    id: str
    name: str
    permissions: list[str] = Field(default_factory=list)
    type: str | None = None
    expires_at: datetime | None = None
    issued_at: datetime | None = None
    urls: list[str] | None = None
