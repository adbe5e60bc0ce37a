import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from tcgcatalog.api import cards_router, health_router, sets_router
from tcgcatalog.api.errors import register_error_handlers
from tcgcatalog.config import settings
from tcgcatalog.db.database import engine, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    logger.info("%s ready on port %d", settings.app_name, settings.port)
    yield
    await engine.dispose()


async def strip_trailing_slash(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Serve "/sets/" as "/sets" instead of redirecting."""
    path = request.scope["path"]
    if path != "/" and path.endswith("/"):
        request.scope["path"] = path.rstrip("/") or "/"
    return await call_next(request)


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("tcgcatalog"),
    lifespan=lifespan,
    redirect_slashes=False,
)

app.include_router(sets_router)
app.include_router(cards_router)
app.include_router(health_router)

register_error_handlers(app)
app.middleware("http")(strip_trailing_slash)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def main() -> None:
    """CLI entry point for serving the API."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
