"""
Database read and upsert operations.

Reads serve the HTTP API; upserts serve the bulk loader. Every function takes
an explicit session and never commits; transaction boundaries belong to the
caller.
"""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from tcgcatalog.models.db import CardDB, SetDB
from tcgcatalog.models.records import CardRecord, SetRecord

# --- Set Operations ---


async def get_set_by_set_id(session: AsyncSession, set_id: str) -> SetDB | None:
    """
    Get a set by its business key.

    Returns None if no set has this set_id.
    """
    result = await session.execute(select(SetDB).where(SetDB.set_id == set_id))
    return result.scalar_one_or_none()


async def get_set_by_ptcgo_code(session: AsyncSession, ptcgo_code: str) -> SetDB | None:
    """Get the first set carrying a PTCGO code, in storage order."""
    result = await session.execute(
        select(SetDB).where(SetDB.ptcgo_code == ptcgo_code).order_by(SetDB.id).limit(1)
    )
    return result.scalars().first()


async def list_sets(
    session: AsyncSession, limit: int, offset: int
) -> tuple[list[SetDB], int]:
    """
    Get one page of sets, newest release first.

    Returns:
        Tuple of (sets on this page, total number of sets).
    """
    result = await session.execute(
        select(SetDB)
        .order_by(SetDB.release_date.desc(), SetDB.id)
        .offset(offset)
        .limit(limit)
    )
    total = await session.scalar(select(func.count()).select_from(SetDB))
    return list(result.scalars().all()), int(total or 0)


async def get_set_pk_map(session: AsyncSession) -> dict[str, int]:
    """Map every stored set's business key to its internal id."""
    result = await session.execute(select(SetDB.set_id, SetDB.id))
    return {set_id: pk for set_id, pk in result.all()}


async def upsert_set(session: AsyncSession, record: SetRecord) -> SetDB:
    """
    Insert or update a set.

    If a set with the same set_id exists, every attribute is overwritten
    with the incoming record. Otherwise creates a new row.
    """
    existing = await get_set_by_set_id(session, record.set_id)

    if existing:
        for column, value in record.columns().items():
            setattr(existing, column, value)
        await session.flush()
        return existing

    db_set = SetDB(**record.columns())
    session.add(db_set)
    await session.flush()
    return db_set


# --- Card Operations ---


def _card_query() -> Select[tuple[CardDB]]:
    return select(CardDB).options(selectinload(CardDB.card_set))


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def get_card_by_card_id(session: AsyncSession, card_id: str) -> CardDB | None:
    """
    Get a card by its business key.

    Returns None if no card has this card_id.
    """
    result = await session.execute(_card_query().where(CardDB.card_id == card_id))
    return result.scalar_one_or_none()


async def _paged_cards(
    session: AsyncSession, criteria: list[Any], limit: int, offset: int
) -> tuple[list[CardDB], int]:
    result = await session.execute(
        _card_query().where(*criteria).order_by(CardDB.id).offset(offset).limit(limit)
    )
    total = await session.scalar(select(func.count(CardDB.id)).where(*criteria))
    return list(result.scalars().all()), int(total or 0)


async def list_cards(
    session: AsyncSession,
    limit: int,
    offset: int,
    search_name: str | None = None,
) -> tuple[list[CardDB], int]:
    """
    Get one page of cards in storage order.

    When search_name is given, only cards whose name contains it
    (case-insensitive, wildcards taken literally) are returned and counted.
    """
    criteria: list[Any] = []
    if search_name:
        criteria.append(CardDB.name.ilike(f"%{_escape_like(search_name)}%", escape="\\"))
    return await _paged_cards(session, criteria, limit, offset)


async def list_cards_by_set(
    session: AsyncSession, db_set: SetDB, limit: int, offset: int
) -> tuple[list[CardDB], int]:
    """Get one page of the cards whose set relation points at db_set."""
    return await _paged_cards(session, [CardDB.set_pk == db_set.id], limit, offset)


async def _get_card_for_update(session: AsyncSession, card_id: str) -> CardDB | None:
    result = await session.execute(select(CardDB).where(CardDB.card_id == card_id))
    return result.scalar_one_or_none()


async def upsert_card(session: AsyncSession, record: CardRecord, set_pk: int | None) -> CardDB:
    """
    Insert or update a card.

    If a card with the same card_id exists, every attribute (including the
    set relation) is overwritten. Otherwise creates a new row.
    """
    existing = await _get_card_for_update(session, record.card_id)

    if existing:
        for column, value in record.columns().items():
            setattr(existing, column, value)
        existing.set_pk = set_pk
        await session.flush()
        return existing

    db_card = CardDB(**record.columns(), set_pk=set_pk)
    session.add(db_card)
    await session.flush()
    return db_card
