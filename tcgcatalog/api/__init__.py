from tcgcatalog.api.cards import router as cards_router
from tcgcatalog.api.health import router as health_router
from tcgcatalog.api.sets import router as sets_router

__all__ = [
    "cards_router",
    "health_router",
    "sets_router",
]
