"""
Bulk load bundled reference data into the catalog database.

Reads <data_dir>/sets/<lang>.json and every <data_dir>/cards/<lang>/*.json
file, upserting sets first and cards second. Re-running with the same
input leaves the stored state unchanged.

Can be run as a standalone script: python -m tcgcatalog.jobs.load_data
"""

import argparse
import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tcgcatalog.config import settings
from tcgcatalog.db.database import async_session_factory, engine, init_db
from tcgcatalog.db.operations import get_set_pk_map, upsert_card, upsert_set
from tcgcatalog.models.records import CardRecord, SetRecord

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10


class LoadError(Exception):
    """Raised when an input file cannot be read as an array of records."""

    pass


@dataclass
class LoadSummary:
    """Counts reported at the end of a load run."""

    sets_loaded: int = 0
    cards_loaded: int = 0
    card_files: int = 0
    cards_without_set: int = 0


def sets_file(data_dir: Path, language: str) -> Path:
    return data_dir / "sets" / f"{language}.json"


def card_files(data_dir: Path, language: str) -> list[Path]:
    """Card files in directory-listing order (sorted by name)."""
    cards_dir = data_dir / "cards" / language
    if not cards_dir.is_dir():
        raise LoadError(f"Cards directory not found: {cards_dir}")
    return sorted(p for p in cards_dir.iterdir() if p.suffix == ".json")


def read_records(path: Path) -> list[dict[str, Any]]:
    """
    Read one JSON data file.

    Raises:
        LoadError: If the file is missing, malformed, or not a JSON array
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise LoadError(f"Could not read {path}: {e}") from e

    if not isinstance(data, list):
        raise LoadError(f"{path} must contain a JSON array, got {type(data).__name__}")
    return data


async def load_sets(session: AsyncSession, path: Path) -> int:
    """
    Upsert every set in a sets file, in file order.

    Returns:
        Number of sets upserted
    """
    logger.info("Loading sets from %s...", path)
    raw_sets = read_records(path)

    count = 0
    for raw in raw_sets:
        await upsert_set(session, SetRecord.from_source(raw))
        count += 1
        if count % PROGRESS_EVERY == 0:
            logger.info("  Loaded %d/%d sets...", count, len(raw_sets))

    logger.info("Loaded %d sets", count)
    return count


async def load_card_file(
    session: AsyncSession,
    path: Path,
    set_pks: dict[str, int],
    summary: LoadSummary,
) -> int:
    """
    Upsert every card in one cards file.

    Each card's set relation is resolved from its id prefix; a prefix with
    no stored set leaves the relation empty and the load continues.
    """
    raw_cards = read_records(path)
    for raw in raw_cards:
        record = CardRecord.from_source(raw)
        set_pk = set_pks.get(record.set_id)
        if set_pk is None:
            logger.debug("No set %r for card %s", record.set_id, record.card_id)
            summary.cards_without_set += 1
        await upsert_card(session, record, set_pk)
    return len(raw_cards)


async def load_cards(
    session: AsyncSession, files: list[Path], summary: LoadSummary
) -> int:
    """Upsert the cards of every file, committing after each file."""
    logger.info("Loading cards from %d files...", len(files))
    set_pks = await get_set_pk_map(session)

    total = 0
    for index, path in enumerate(files, start=1):
        count = await load_card_file(session, path, set_pks, summary)
        await session.commit()
        total += count
        summary.card_files += 1
        logger.info("  [%d/%d] Processed %s (%d cards)", index, len(files), path.name, count)

    logger.info("Loaded %d cards from %d files", total, len(files))
    return total


async def run_load(
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
    data_dir: Path | None = None,
    language: str | None = None,
) -> LoadSummary:
    """
    Load sets, then cards.

    The two phases are committed separately. Any failure aborts the run
    and propagates to the caller.

    Args:
        session_factory: Where to open the load session
        data_dir: Root of the bundled data. Defaults to settings.data_dir
        language: Data language subdirectory. Defaults to settings.data_language

    Returns:
        Counts for the completed run
    """
    data_dir = data_dir or settings.data_dir
    language = language or settings.data_language
    summary = LoadSummary()

    async with session_factory() as session:
        summary.sets_loaded = await load_sets(session, sets_file(data_dir, language))
        await session.commit()

        summary.cards_loaded = await load_cards(
            session, card_files(data_dir, language), summary
        )

    if summary.cards_without_set:
        logger.warning("%d cards reference a set that is not loaded", summary.cards_without_set)
    return summary


async def _main(data_dir: Path | None, language: str | None) -> LoadSummary:
    await init_db()
    try:
        return await run_load(data_dir=data_dir, language=language)
    finally:
        await engine.dispose()


def main() -> None:
    """CLI entry point for the bulk loader."""
    parser = argparse.ArgumentParser(description="Load bundled set and card data")
    parser.add_argument("--data-dir", type=Path, default=None, help="Reference data root")
    parser.add_argument("--language", default=None, help="Data language (default: en)")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting data import...")

    try:
        summary = asyncio.run(_main(args.data_dir, args.language))
    except Exception as e:
        logger.error("Error loading data: %s", e)
        raise SystemExit(1) from e

    logger.info(
        "All data loaded: %d sets, %d cards from %d files",
        summary.sets_loaded,
        summary.cards_loaded,
        summary.card_files,
    )


if __name__ == "__main__":
    main()
