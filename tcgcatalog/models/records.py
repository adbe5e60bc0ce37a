"""
Normalized reference records.

Raw JSON objects from the bundled data files pass through `from_source`
exactly once. Every defaulting rule lives here so the insert and update
paths of an upsert always see the same values.
"""

from dataclasses import asdict, dataclass, field
from typing import Any


class RecordError(ValueError):
    """Raised when a source record cannot be normalized."""

    pass


def _optional(raw: dict[str, Any], key: str) -> Any:
    """Optional scalar: absent, null or empty string become None."""
    value = raw.get(key)
    if value is None or value == "":
        return None
    return value


def _list(raw: dict[str, Any], key: str) -> list[Any]:
    """List-typed field: absent or null become an empty list, a scalar a singleton."""
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        return [value]
    return list(value)


def _business_key(raw: Any, kind: str) -> str:
    if not isinstance(raw, dict):
        raise RecordError(f"{kind} record must be an object, got {type(raw).__name__}")
    key = raw.get("id")
    if not isinstance(key, str) or not key:
        raise RecordError(f"{kind} record is missing its 'id': {raw.get('name')!r}")
    return key


def set_id_from_card_id(card_id: str) -> str:
    """
    Derive a set's business key from a card's business key.

    Card ids are formatted <setId>-<localNumber>; the set id is everything
    before the first dash (e.g. "base1-4" -> "base1").
    """
    return card_id.split("-", 1)[0]


@dataclass(frozen=True)
class SetRecord:
    """
    A set as read from the sets file.

    Attributes:
        set_id: Business key (e.g., "base1")
        name: Display name
        series: Series grouping (e.g., "Base")
        printed_total: Number printed on the cards
        total: Number of cards including secret rares
        legalities: Format -> legality string
        ptcgo_code: Pokemon TCG Online code, if any
        release_date: Source string, stored verbatim (e.g., "1999/01/09")
        updated_at: Source timestamp string, stored verbatim
        images: Symbol/logo URLs, stored opaquely
    """

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

    @classmethod
    def from_source(cls, raw: dict[str, Any]) -> "SetRecord":
        return cls(
            set_id=_business_key(raw, "Set"),
            name=raw.get("name") or "",
            series=_optional(raw, "series"),
            printed_total=raw.get("printedTotal"),
            total=raw.get("total"),
            legalities=raw.get("legalities"),
            ptcgo_code=_optional(raw, "ptcgoCode"),
            release_date=_optional(raw, "releaseDate"),
            updated_at=_optional(raw, "updatedAt"),
            images=raw.get("images"),
        )

    def columns(self) -> dict[str, Any]:
        """Column values for SetDB, keyed by attribute name."""
        return asdict(self)


@dataclass(frozen=True)
class CardRecord:
    """
    A card as read from a cards file.

    `hp` stays a string; `retreat_cost` and `converted_retreat_cost` are
    both kept as given even when the list length and the number disagree.
    """

    card_id: str
    name: str
    supertype: str | None = None
    subtypes: list[str] = field(default_factory=list)
    level: str | None = None
    hp: str | None = None
    types: list[str] = field(default_factory=list)
    evolves_from: str | None = None
    evolves_to: list[str] = field(default_factory=list)
    abilities: Any = None
    attacks: Any = None
    weaknesses: Any = None
    resistances: Any = None
    retreat_cost: list[str] = field(default_factory=list)
    converted_retreat_cost: int | None = None
    number: str | None = None
    artist: str | None = None
    rarity: str | None = None
    flavor_text: str | None = None
    national_pokedex_numbers: list[int] = field(default_factory=list)
    legalities: dict[str, Any] | None = None
    regulation_mark: str | None = None
    images: dict[str, Any] | None = None
    tcgplayer: Any = None
    cardmarket: Any = None
    rules: list[str] = field(default_factory=list)
    ancient_trait: Any = None

    @property
    def set_id(self) -> str:
        return set_id_from_card_id(self.card_id)

    @classmethod
    def from_source(cls, raw: dict[str, Any]) -> "CardRecord":
        return cls(
            card_id=_business_key(raw, "Card"),
            name=raw.get("name") or "",
            supertype=_optional(raw, "supertype"),
            subtypes=_list(raw, "subtypes"),
            level=_optional(raw, "level"),
            hp=_optional(raw, "hp"),
            types=_list(raw, "types"),
            evolves_from=_optional(raw, "evolvesFrom"),
            evolves_to=_list(raw, "evolvesTo"),
            abilities=raw.get("abilities"),
            attacks=raw.get("attacks"),
            weaknesses=raw.get("weaknesses"),
            resistances=raw.get("resistances"),
            retreat_cost=_list(raw, "retreatCost"),
            converted_retreat_cost=raw.get("convertedRetreatCost"),
            number=_optional(raw, "number"),
            artist=_optional(raw, "artist"),
            rarity=_optional(raw, "rarity"),
            flavor_text=_optional(raw, "flavorText"),
            national_pokedex_numbers=_list(raw, "nationalPokedexNumbers"),
            legalities=raw.get("legalities"),
            regulation_mark=_optional(raw, "regulationMark"),
            images=raw.get("images"),
            tcgplayer=raw.get("tcgplayer"),
            cardmarket=raw.get("cardmarket"),
            rules=_list(raw, "rules"),
            ancient_trait=raw.get("ancientTrait"),
        )

    def columns(self) -> dict[str, Any]:
        """Column values for CardDB, keyed by attribute name (set_pk excluded)."""
        return asdict(self)
