from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Pokemon TCG Catalog"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/tcgcatalog"

    host: str = "0.0.0.0"
    port: int = 3000

    # Bundled reference data: <data_dir>/sets/<lang>.json and <data_dir>/cards/<lang>/*.json
    data_dir: Path = Path("data")
    data_language: str = "en"

    # Base URL the MCP bridge and analysis script use to reach the HTTP API
    pokemon_tcg_api_url: str = "http://localhost:3000"
    api_timeout: float = 30.0

    resource_scheme: str = "pokemontcg"


settings = Settings()


# =============================================================================
# PAGINATION LIMITS
# =============================================================================

# Page size used when limit is absent, non-numeric or not positive
DEFAULT_PAGE_SIZE = 50

# Hard cap on page size for every list endpoint
MAX_PAGE_SIZE = 200

# Largest offset passed to the store; fits a signed 64-bit integer
MAX_OFFSET = 2**63 - 1
