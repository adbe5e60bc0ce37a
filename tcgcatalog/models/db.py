"""
SQLAlchemy ORM models for persistent storage.

Sets and cards are keyed internally by an autoincrement id; the public
business keys (set_id, card_id) carry unique constraints and drive upserts.
"""

from typing import Any

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class SetDB(Base):
    """
    A card set (expansion) from the reference data.

    Release date and updated-at are kept verbatim as the source strings.
    """

    __tablename__ = "sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    set_id: Mapped[str] = mapped_column(String, unique=True, index=True)
    name: Mapped[str] = mapped_column(String)
    series: Mapped[str | None] = mapped_column(String, nullable=True)
    printed_total: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total: Mapped[int | None] = mapped_column(Integer, nullable=True)
    legalities: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    ptcgo_code: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    release_date: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    updated_at: Mapped[str | None] = mapped_column(String, nullable=True)
    images: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    cards: Mapped[list["CardDB"]] = relationship(back_populates="card_set")

    def __repr__(self) -> str:
        return f"<SetDB(set_id={self.set_id}, name={self.name})>"


class CardDB(Base):
    """
    A single card from the reference data.

    Evolution links are card names, not foreign keys. The set relation is
    nullable: a card whose set is absent from the store keeps set_pk NULL.
    """

    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    card_id: Mapped[str] = mapped_column(String, unique=True, index=True)
    name: Mapped[str] = mapped_column(String, index=True)
    supertype: Mapped[str | None] = mapped_column(String, nullable=True)
    subtypes: Mapped[list[str]] = mapped_column(JSON, default=list)
    level: Mapped[str | None] = mapped_column(String, nullable=True)
    hp: Mapped[str | None] = mapped_column(String, nullable=True)
    types: Mapped[list[str]] = mapped_column(JSON, default=list)
    evolves_from: Mapped[str | None] = mapped_column(String, nullable=True)
    evolves_to: Mapped[list[str]] = mapped_column(JSON, default=list)

    # Structured game text, stored opaquely
    abilities: Mapped[Any] = mapped_column(JSON, nullable=True)
    attacks: Mapped[Any] = mapped_column(JSON, nullable=True)
    weaknesses: Mapped[Any] = mapped_column(JSON, nullable=True)
    resistances: Mapped[Any] = mapped_column(JSON, nullable=True)

    # Both kept as given; they may disagree in source data
    retreat_cost: Mapped[list[str]] = mapped_column(JSON, default=list)
    converted_retreat_cost: Mapped[int | None] = mapped_column(Integer, nullable=True)

    number: Mapped[str | None] = mapped_column(String, nullable=True)
    artist: Mapped[str | None] = mapped_column(String, nullable=True)
    rarity: Mapped[str | None] = mapped_column(String, nullable=True)
    flavor_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    national_pokedex_numbers: Mapped[list[int]] = mapped_column(JSON, default=list)
    legalities: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    regulation_mark: Mapped[str | None] = mapped_column(String, nullable=True)
    images: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    # Marketplace metadata
    tcgplayer: Mapped[Any] = mapped_column(JSON, nullable=True)
    cardmarket: Mapped[Any] = mapped_column(JSON, nullable=True)

    rules: Mapped[list[str]] = mapped_column(JSON, default=list)
    ancient_trait: Mapped[Any] = mapped_column(JSON, nullable=True)

    set_pk: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sets.id"), nullable=True, index=True
    )
    card_set: Mapped["SetDB | None"] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        return f"<CardDB(card_id={self.card_id}, name={self.name})>"
