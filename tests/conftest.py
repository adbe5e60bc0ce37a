import json
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tcgcatalog.db.database import get_session
from tcgcatalog.jobs.load_data import LoadSummary, run_load
from tcgcatalog.main import app
from tcgcatalog.models.db import Base


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Provide an async test client with overridden database session."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def base_set() -> dict[str, Any]:
    return {
        "id": "base1",
        "name": "Base",
        "series": "Base",
        "printedTotal": 102,
        "total": 102,
        "legalities": {"unlimited": "Legal"},
        "ptcgoCode": "BS",
        "releaseDate": "1999/01/09",
        "updatedAt": "2022/10/10 15:12:00",
        "images": {
            "symbol": "https://images.pokemontcg.io/base1/symbol.png",
            "logo": "https://images.pokemontcg.io/base1/logo.png",
        },
    }


@pytest.fixture
def jungle_set() -> dict[str, Any]:
    return {
        "id": "base2",
        "name": "Jungle",
        "series": "Base",
        "printedTotal": 64,
        "total": 64,
        "legalities": {"unlimited": "Legal"},
        "ptcgoCode": "JU",
        "releaseDate": "1999/06/16",
        "updatedAt": "2020/08/14 09:35:00",
        "images": {},
    }


@pytest.fixture
def charizard() -> dict[str, Any]:
    return {
        "id": "base1-4",
        "name": "Charizard",
        "supertype": "Pokémon",
        "subtypes": ["Stage 2"],
        "hp": "120",
        "types": ["Fire"],
        "evolvesFrom": "Charmeleon",
        "abilities": [
            {
                "name": "Energy Burn",
                "text": "As often as you like during your turn...",
                "type": "Pokémon Power",
            }
        ],
        "attacks": [
            {
                "name": "Fire Spin",
                "cost": ["Fire", "Fire", "Fire", "Fire"],
                "convertedEnergyCost": 4,
                "damage": "100",
                "text": "Discard 2 Energy cards attached to Charizard.",
            }
        ],
        "weaknesses": [{"type": "Water", "value": "×2"}],
        "resistances": [{"type": "Fighting", "value": "-30"}],
        "retreatCost": ["Colorless", "Colorless", "Colorless"],
        "convertedRetreatCost": 3,
        "number": "4",
        "artist": "Mitsuhiro Arita",
        "rarity": "Rare Holo",
        "flavorText": "Spits fire that is hot enough to melt boulders.",
        "nationalPokedexNumbers": [6],
        "legalities": {"unlimited": "Legal"},
        "images": {"small": "https://images.pokemontcg.io/base1/4.png"},
        "tcgplayer": {"url": "https://prices.pokemontcg.io/tcgplayer/base1-4"},
        "cardmarket": {"url": "https://prices.pokemontcg.io/cardmarket/base1-4"},
    }


@pytest.fixture
def charmander() -> dict[str, Any]:
    return {
        "id": "base1-46",
        "name": "Charmander",
        "supertype": "Pokémon",
        "subtypes": ["Basic"],
        "hp": "50",
        "types": ["Fire"],
        "evolvesTo": ["Charmeleon"],
        "attacks": [
            {"name": "Scratch", "cost": ["Colorless"], "damage": "10"},
            {"name": "Ember", "cost": ["Fire", "Colorless"], "damage": "30"},
        ],
        "retreatCost": ["Colorless"],
        "convertedRetreatCost": 1,
        "number": "46",
        "rarity": "Common",
        "nationalPokedexNumbers": [4],
        "legalities": {"unlimited": "Legal"},
        "images": {},
    }


@pytest.fixture
def energy_removal() -> dict[str, Any]:
    return {
        "id": "base1-92",
        "name": "Energy Removal",
        "supertype": "Trainer",
        "rules": ["Flip a coin..."],
        "number": "92",
        "rarity": "Common",
        "legalities": {"unlimited": "Legal"},
        "images": {},
    }


def _write_data_dir(
    root: Path,
    sets: list[dict[str, Any]],
    card_files: dict[str, list[dict[str, Any]]],
    language: str = "en",
) -> Path:
    """Lay out sets/<lang>.json and cards/<lang>/<file> under root."""
    (root / "sets").mkdir(parents=True, exist_ok=True)
    (root / "sets" / f"{language}.json").write_text(json.dumps(sets), encoding="utf-8")
    cards_dir = root / "cards" / language
    cards_dir.mkdir(parents=True, exist_ok=True)
    for name, cards in card_files.items():
        (cards_dir / name).write_text(json.dumps(cards), encoding="utf-8")
    return root


@pytest.fixture
def make_data_dir():
    """Factory writing a bundled-data layout."""
    return _write_data_dir


@pytest.fixture
def data_dir(tmp_path, base_set, jungle_set, charizard, charmander, energy_removal) -> Path:
    """Bundled-data layout with two sets and one card file."""
    return _write_data_dir(
        tmp_path / "data",
        [base_set, jungle_set],
        {"base1.json": [charizard, charmander, energy_removal]},
    )


@pytest.fixture
async def loaded(session_factory, data_dir) -> LoadSummary:
    """Run the bulk loader over the default data layout."""
    return await run_load(session_factory, data_dir=data_dir, language="en")
