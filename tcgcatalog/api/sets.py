"""
Set API endpoints.

Lists sets newest-first and looks single sets up by business key or
PTCGO code.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tcgcatalog.api.errors import EntityNotFoundError
from tcgcatalog.api.pagination import Page, PageRequest, paginate, pagination_params
from tcgcatalog.api.schemas import ErrorResponse, SetResponse, set_to_response
from tcgcatalog.db import get_set_by_ptcgo_code, get_set_by_set_id, list_sets
from tcgcatalog.db.database import get_session

router = APIRouter(prefix="/sets", tags=["sets"])


@router.get("", response_model=Page[SetResponse])
async def get_sets(
    session: Annotated[AsyncSession, Depends(get_session)],
    paging: Annotated[PageRequest, Depends(pagination_params)],
) -> Page[SetResponse]:
    """List sets ordered by release date (descending)."""
    db_sets, total = await list_sets(session, paging.limit, paging.offset)
    return paginate([set_to_response(s) for s in db_sets], total, paging)


@router.get(
    "/id/{set_id}",
    response_model=SetResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_set_by_id(
    set_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SetResponse:
    """Get a set by its setId. Returns 404 if the set does not exist."""
    db_set = await get_set_by_set_id(session, set_id)
    if db_set is None:
        raise EntityNotFoundError("Set")
    return set_to_response(db_set)


@router.get(
    "/code/{ptcgo_code}",
    response_model=SetResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_set_by_code(
    ptcgo_code: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SetResponse:
    """Get the first set with a PTCGO code. Returns 404 if none matches."""
    db_set = await get_set_by_ptcgo_code(session, ptcgo_code)
    if db_set is None:
        raise EntityNotFoundError("Set")
    return set_to_response(db_set)
