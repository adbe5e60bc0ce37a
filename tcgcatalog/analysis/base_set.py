"""
Stat analysis of the Pokémon in one set.

Pages through GET /cards/set/{setId} on the catalog API and summarizes HP,
attack damage, attack cost and retreat cost.

Run with: python -m tcgcatalog.analysis.base_set --set-id base1
"""

import argparse
import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any

import pandas as pd

from tcgcatalog.services.catalog_client import CatalogClient, key_path

logger = logging.getLogger(__name__)

POKEMON_SUPERTYPE = "Pokémon"
DEFAULT_SET_ID = "base1"
DEFAULT_PAGE_SIZE = 50

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(value: str) -> int | None:
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class StatSummary:
    """Min/max/mean over a series of values."""

    min: float
    max: float
    avg: float
    count: int


@dataclass(frozen=True)
class SetAnalysis:
    set_id: str
    total_pokemon: int
    pokemon_with_attacks: int
    attacks_analyzed: int
    hp: StatSummary
    attack_damage: StatSummary
    attack_cost: StatSummary
    retreat_cost: StatSummary


async def fetch_all_pokemon(
    client: CatalogClient,
    set_id: str = DEFAULT_SET_ID,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[dict[str, Any]]:
    """
    Fetch every Pokémon card of a set, following pagination.hasNext.

    Raises:
        CatalogAPIError: If the set does not exist or a page request fails
    """
    pokemon: list[dict[str, Any]] = []
    offset = 0
    while True:
        page = await client.get_json(
            key_path("cards", "set", set_id), {"limit": page_size, "offset": offset}
        )
        batch = [card for card in page["data"] if card.get("supertype") == POKEMON_SUPERTYPE]
        pokemon.extend(batch)
        logger.info("Fetched %d Pokémon (total: %d)", len(batch), len(pokemon))

        if not page["pagination"]["hasNext"]:
            return pokemon
        offset += page_size


def parse_hp(hp: str | None) -> int | None:
    """HP is stored as a string; only a leading integer counts."""
    if not hp:
        return None
    return _leading_int(hp)


def parse_damage(damage: str | None) -> int | None:
    """
    Base damage of an attack.

    "30+" -> 30, "10×" -> 10; variable ("?") and empty damage are skipped.
    """
    if not damage:
        return None
    if "+" in damage:
        damage = damage.split("+")[0]
    elif "×" in damage:
        damage = damage.split("×")[0]
    elif "?" in damage:
        return None
    return _leading_int(damage)


def retreat_cost_length(card: dict[str, Any]) -> int:
    """Canonical retreat cost: the number of energy tokens in retreatCost."""
    retreat_cost = card.get("retreatCost")
    if not isinstance(retreat_cost, list):
        return 0
    return len(retreat_cost)


def attack_cost_length(attack: dict[str, Any]) -> int:
    cost = attack.get("cost")
    if not isinstance(cost, list):
        return 0
    return len(cost)


def summarize(values: list[int]) -> StatSummary:
    """Summary stats; an empty series summarizes to zeros."""
    series = pd.Series(values, dtype="float64")
    if series.empty:
        return StatSummary(min=0, max=0, avg=0, count=0)
    return StatSummary(
        min=float(series.min()),
        max=float(series.max()),
        avg=float(series.mean()),
        count=int(series.count()),
    )


def analyze_pokemon(set_id: str, pokemon: list[dict[str, Any]]) -> SetAnalysis:
    """Compute the stat summaries for a list of Pokémon cards."""
    hp_values: list[int] = []
    damage_values: list[int] = []
    attack_cost_values: list[int] = []
    retreat_values: list[int] = []
    with_attacks = 0

    for card in pokemon:
        hp = parse_hp(card.get("hp"))
        if hp is not None:
            hp_values.append(hp)

        retreat_values.append(retreat_cost_length(card))

        attacks = card.get("attacks") or []
        if attacks:
            with_attacks += 1
        for attack in attacks:
            damage = parse_damage(attack.get("damage"))
            if damage is not None:
                damage_values.append(damage)
            attack_cost_values.append(attack_cost_length(attack))

    return SetAnalysis(
        set_id=set_id,
        total_pokemon=len(pokemon),
        pokemon_with_attacks=with_attacks,
        attacks_analyzed=len(damage_values),
        hp=summarize(hp_values),
        attack_damage=summarize(damage_values),
        attack_cost=summarize(attack_cost_values),
        retreat_cost=summarize(retreat_values),
    )


def _stat_lines(label: str, unit: str, stats: StatSummary, counted: str) -> list[str]:
    return [
        f"{label}:",
        f"  Min {unit}: {stats.min:g}",
        f"  Max {unit}: {stats.max:g}",
        f"  Avg {unit}: {stats.avg:.2f}",
        f"  {counted}: {stats.count}",
    ]


def format_report(analysis: SetAnalysis) -> str:
    """Render an analysis as a plain-text report."""
    rule = "=" * 50
    lines = [
        rule,
        f"{analysis.set_id.upper()} POKÉMON ANALYSIS",
        rule,
        "",
        "OVERVIEW:",
        f"  Total Pokémon: {analysis.total_pokemon}",
        f"  Pokémon with attacks: {analysis.pokemon_with_attacks}",
        f"  Total attacks analyzed: {analysis.attacks_analyzed}",
        "",
        *_stat_lines("HP STATISTICS", "HP", analysis.hp, "Pokémon with HP"),
        "",
        *_stat_lines(
            "ATTACK DAMAGE STATISTICS", "Damage", analysis.attack_damage, "Attacks analyzed"
        ),
        "",
        *_stat_lines(
            "ATTACK COST STATISTICS", "Attack Cost", analysis.attack_cost, "Attacks analyzed"
        ),
        "",
        *_stat_lines(
            "RETREAT COST STATISTICS", "Retreat Cost", analysis.retreat_cost, "Pokémon analyzed"
        ),
        rule,
    ]
    return "\n".join(lines)


async def run_analysis(
    set_id: str = DEFAULT_SET_ID,
    page_size: int = DEFAULT_PAGE_SIZE,
    client: CatalogClient | None = None,
) -> SetAnalysis:
    """Fetch a set's Pokémon from the API and analyze them."""
    if client is None:
        async with CatalogClient() as owned:
            pokemon = await fetch_all_pokemon(owned, set_id, page_size)
    else:
        pokemon = await fetch_all_pokemon(client, set_id, page_size)
    logger.info("Analyzing %d Pokémon...", len(pokemon))
    return analyze_pokemon(set_id, pokemon)


def main() -> None:
    """CLI entry point for the set analysis."""
    parser = argparse.ArgumentParser(description="Analyze the Pokémon of one set")
    parser.add_argument("--set-id", default=DEFAULT_SET_ID)
    parser.add_argument("--page-size", type=int, default=DEFAULT_PAGE_SIZE)
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    analysis = asyncio.run(run_analysis(args.set_id, args.page_size))
    print(format_report(analysis))


if __name__ == "__main__":
    main()
