"""
Card API endpoints.

Lists cards (optionally filtered by a case-insensitive name fragment),
looks cards up by business key, and lists the cards of one set.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from tcgcatalog.api.errors import EntityNotFoundError
from tcgcatalog.api.pagination import Page, PageRequest, paginate, pagination_params
from tcgcatalog.api.schemas import CardResponse, ErrorResponse, card_to_response
from tcgcatalog.db import get_card_by_card_id, get_set_by_set_id, list_cards, list_cards_by_set
from tcgcatalog.db.database import get_session

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=Page[CardResponse])
async def get_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
    paging: Annotated[PageRequest, Depends(pagination_params)],
    search_name: Annotated[str | None, Query(alias="searchName")] = None,
) -> Page[CardResponse]:
    """List cards, optionally only those whose name contains searchName."""
    db_cards, total = await list_cards(
        session, paging.limit, paging.offset, search_name=search_name
    )
    return paginate([card_to_response(c) for c in db_cards], total, paging)


@router.get(
    "/id/{card_id}",
    response_model=CardResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_card_by_id(
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """Get a card by its cardId. Returns 404 if the card does not exist."""
    db_card = await get_card_by_card_id(session, card_id)
    if db_card is None:
        raise EntityNotFoundError("Card")
    return card_to_response(db_card)


@router.get(
    "/set/{set_id}",
    response_model=Page[CardResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_cards_by_set(
    set_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    paging: Annotated[PageRequest, Depends(pagination_params)],
) -> Page[CardResponse]:
    """
    List the cards of a set.

    Returns 404 if the set does not exist, an empty page if it has no cards.
    """
    db_set = await get_set_by_set_id(session, set_id)
    if db_set is None:
        raise EntityNotFoundError("Set")

    db_cards, total = await list_cards_by_set(session, db_set, paging.limit, paging.offset)
    return paginate([card_to_response(c) for c in db_cards], total, paging)
