"""
Response models for the catalog API.

Field names serialize in the reference data's camelCase. Internal row ids
never leave the service; a card's set relation is exposed as the related
set's business key.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tcgcatalog.models.db import CardDB, SetDB


class CatalogModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SetResponse(CatalogModel):
    """A set as returned by the API."""

    set_id: str
    name: str
    series: str | None = None
    printed_total: int | None = None
    total: int | None = None
    legalities: dict[str, Any] | None = None
    ptcgo_code: str | None = None
    release_date: str | None = None
    updated_at: str | None = None
    images: dict[str, Any] | None = None


class CardResponse(CatalogModel):
    """A card as returned by the API."""

    card_id: str
    name: str
    supertype: str | None = None
    subtypes: list[str] = Field(default_factory=list)
    level: str | None = None
    hp: str | None = None
    types: list[str] = Field(default_factory=list)
    evolves_from: str | None = None
    evolves_to: list[str] = Field(default_factory=list)
    abilities: Any = None
    attacks: Any = None
    weaknesses: Any = None
    resistances: Any = None
    retreat_cost: list[str] = Field(default_factory=list)
    converted_retreat_cost: int | None = None
    number: str | None = None
    artist: str | None = None
    rarity: str | None = None
    flavor_text: str | None = None
    national_pokedex_numbers: list[int] = Field(default_factory=list)
    legalities: dict[str, Any] | None = None
    regulation_mark: str | None = None
    images: dict[str, Any] | None = None
    tcgplayer: Any = None
    cardmarket: Any = None
    rules: list[str] = Field(default_factory=list)
    ancient_trait: Any = None
    set_id: str | None = None


class ErrorResponse(BaseModel):
    """Stable error body for 404/500 responses."""

    error: str


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str
    timestamp: str


class ReadinessResponse(BaseModel):
    """Readiness response."""

    status: str
    database: str | None = None


def set_to_response(db_set: SetDB) -> SetResponse:
    """Convert a stored set to its API representation."""
    return SetResponse(
        set_id=db_set.set_id,
        name=db_set.name,
        series=db_set.series,
        printed_total=db_set.printed_total,
        total=db_set.total,
        legalities=db_set.legalities,
        ptcgo_code=db_set.ptcgo_code,
        release_date=db_set.release_date,
        updated_at=db_set.updated_at,
        images=db_set.images,
    )


def card_to_response(db_card: CardDB) -> CardResponse:
    """Convert a stored card to its API representation (card_set must be loaded)."""
    return CardResponse(
        card_id=db_card.card_id,
        name=db_card.name,
        supertype=db_card.supertype,
        subtypes=db_card.subtypes or [],
        level=db_card.level,
        hp=db_card.hp,
        types=db_card.types or [],
        evolves_from=db_card.evolves_from,
        evolves_to=db_card.evolves_to or [],
        abilities=db_card.abilities,
        attacks=db_card.attacks,
        weaknesses=db_card.weaknesses,
        resistances=db_card.resistances,
        retreat_cost=db_card.retreat_cost or [],
        converted_retreat_cost=db_card.converted_retreat_cost,
        number=db_card.number,
        artist=db_card.artist,
        rarity=db_card.rarity,
        flavor_text=db_card.flavor_text,
        national_pokedex_numbers=db_card.national_pokedex_numbers or [],
        legalities=db_card.legalities,
        regulation_mark=db_card.regulation_mark,
        images=db_card.images,
        tcgplayer=db_card.tcgplayer,
        cardmarket=db_card.cardmarket,
        rules=db_card.rules or [],
        ancient_trait=db_card.ancient_trait,
        set_id=db_card.card_set.set_id if db_card.card_set else None,
    )
