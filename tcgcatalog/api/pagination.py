"""
Pagination contract shared by every list endpoint.

Raw `limit` and `offset` query values are accepted as strings so that
non-numeric input falls back to defaults instead of failing validation.
All paging math lives here; routers only pass the parsed values through.
"""

import math
import re
from dataclasses import dataclass
from typing import Annotated, Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tcgcatalog.config import DEFAULT_PAGE_SIZE, MAX_OFFSET, MAX_PAGE_SIZE

T = TypeVar("T")

# Leading optionally-signed integer, so "20abc" reads as 20
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(raw: str | int | None) -> int | None:
    """Read a leading integer from a query value, or None if there is none."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


@dataclass(frozen=True)
class PageRequest:
    """Effective paging window derived from raw query input."""

    limit: int
    offset: int

    @property
    def page(self) -> int:
        """1-indexed page number containing offset."""
        return self.offset // self.limit + 1


def parse_pagination(
    limit: str | int | None = None, offset: str | int | None = None
) -> PageRequest:
    """
    Clamp raw limit/offset into an effective paging window.

    - limit: absent, non-numeric or < 1 -> DEFAULT_PAGE_SIZE; capped at MAX_PAGE_SIZE
    - offset: absent or non-numeric -> 0; negative clamped to 0; capped at MAX_OFFSET
    """
    parsed_limit = parse_int(limit)
    if parsed_limit is None or parsed_limit < 1:
        parsed_limit = DEFAULT_PAGE_SIZE
    parsed_offset = parse_int(offset)
    if parsed_offset is None or parsed_offset < 0:
        parsed_offset = 0
    return PageRequest(
        limit=min(parsed_limit, MAX_PAGE_SIZE),
        offset=min(parsed_offset, MAX_OFFSET),
    )


class PaginationMeta(BaseModel):
    """Page metadata returned alongside every list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total: int
    page: int
    size: int
    total_pages: int
    has_next: bool
    has_prev: bool


def build_pagination(total: int, request: PageRequest) -> PaginationMeta:
    """Compute page metadata for a result set of `total` rows."""
    total_pages = math.ceil(total / request.limit)
    return PaginationMeta(
        total=total,
        page=request.page,
        size=request.limit,
        total_pages=total_pages,
        has_next=request.page < total_pages,
        has_prev=request.page > 1,
    )


class Page(BaseModel, Generic[T]):
    """The {data, pagination} envelope for list responses."""

    data: list[T] = Field(default_factory=list)
    pagination: PaginationMeta


def paginate(items: list[T], total: int, request: PageRequest) -> Page[T]:
    """Wrap one page of items in the shared envelope."""
    return Page(data=items, pagination=build_pagination(total, request))


def pagination_params(
    limit: Annotated[str | None, Query(description="Page size (default 50, max 200)")] = None,
    offset: Annotated[str | None, Query(description="Number of rows to skip")] = None,
) -> PageRequest:
    """FastAPI dependency resolving raw query values into a PageRequest."""
    return parse_pagination(limit, offset)
