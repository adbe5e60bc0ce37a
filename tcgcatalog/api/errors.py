"""
Error translation for the catalog API.

Route handlers raise EntityNotFoundError for missing sets/cards. Unmatched
routes and unexpected failures are converted here into stable bodies that
carry no internal detail.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger(__name__)

ENDPOINT_NOT_FOUND = "Endpoint not found"
INTERNAL_SERVER_ERROR = "Internal server error"
ROUTE_MISS_STATUSES = (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED)


class EntityNotFoundError(Exception):
    """Raised when a set or card looked up by key does not exist."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"{entity} not found")


async def entity_not_found_handler(_request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Route misses, by path or by method, get a generic 404 distinct from entity misses."""
    if exc.status_code in ROUTE_MISS_STATUSES:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": ENDPOINT_NOT_FOUND},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def catch_unhandled_errors(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Catch-all: log the failure, answer with a generic 500."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_SERVER_ERROR},
        )


def register_error_handlers(app: FastAPI) -> None:
    """Install the catalog's exception handlers and catch-all middleware."""
    app.add_exception_handler(EntityNotFoundError, entity_not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware("http")(catch_unhandled_errors)
