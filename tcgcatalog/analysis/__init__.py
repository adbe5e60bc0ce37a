from tcgcatalog.analysis.base_set import analyze_pokemon, fetch_all_pokemon, format_report

__all__ = [
    "analyze_pokemon",
    "fetch_all_pokemon",
    "format_report",
]
