from tcgcatalog.models.db import Base, CardDB, SetDB
from tcgcatalog.models.records import (
    CardRecord,
    RecordError,
    SetRecord,
    set_id_from_card_id,
)

__all__ = [
    "Base",
    "CardDB",
    "CardRecord",
    "RecordError",
    "SetDB",
    "SetRecord",
    "set_id_from_card_id",
]
