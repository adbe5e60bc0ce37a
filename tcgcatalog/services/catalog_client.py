"""
HTTP client for the catalog API.

Used by the MCP bridge and the analysis script. Every request carries a
bounded timeout; failures are raised to the caller without retrying.
"""

from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from tcgcatalog.config import settings


class CatalogAPIError(Exception):
    """Raised when the catalog API answers with a non-success status."""

    def __init__(self, status_code: int, reason: str) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP {status_code}: {reason}")


def key_path(*segments: str) -> str:
    """Build an API path, URL-quoting each segment (e.g. "/cards/id/xy7-54")."""
    return "/" + "/".join(quote(str(s), safe="") for s in segments)


class CatalogClient:
    """
    Thin async wrapper over httpx for the catalog API.

    Either pass an existing httpx.AsyncClient or let the wrapper create one
    from base_url/timeout. Use as an async context manager to close it.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or settings.pokemon_tcg_api_url).rstrip("/")
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.api_timeout,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a catalog path and decode the JSON body.

        Args:
            path: API path, e.g. "/sets" or key_path("cards", "id", card_id)
            params: Query parameters; None values are dropped

        Raises:
            CatalogAPIError: If the API answers with a non-2xx status
            httpx.HTTPError: On transport failures and timeouts
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        response = await self._client.get(path, params=query)
        if not response.is_success:
            raise CatalogAPIError(response.status_code, response.reason_phrase)
        return response.json()
