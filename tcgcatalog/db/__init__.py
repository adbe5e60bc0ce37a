from tcgcatalog.db.database import get_session, init_db
from tcgcatalog.db.operations import (
    get_card_by_card_id,
    get_set_by_ptcgo_code,
    get_set_by_set_id,
    get_set_pk_map,
    list_cards,
    list_cards_by_set,
    list_sets,
    upsert_card,
    upsert_set,
)

__all__ = [
    "get_card_by_card_id",
    "get_session",
    "get_set_by_ptcgo_code",
    "get_set_by_set_id",
    "get_set_pk_map",
    "init_db",
    "list_cards",
    "list_cards_by_set",
    "list_sets",
    "upsert_card",
    "upsert_set",
]
