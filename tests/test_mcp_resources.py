"""Tests for MCP resource URI translation."""

import json

import httpx
import pytest
import respx

from tcgcatalog.mcp.resources import (
    RESOURCE_TEMPLATES,
    read_resource,
    resolve_resource_uri,
)
from tcgcatalog.services.catalog_client import CatalogAPIError, CatalogClient

API = "http://api.test"


@pytest.fixture
async def catalog():
    async with CatalogClient(base_url=API) as client:
        yield client


class TestTemplates:
    def test_uri_templates(self) -> None:
        assert [t.uri_template("pokemontcg") for t in RESOURCE_TEMPLATES] == [
            "pokemontcg://sets",
            "pokemontcg://sets/id/{setId}",
            "pokemontcg://sets/code/{ptcgoCode}",
            "pokemontcg://cards",
            "pokemontcg://cards/id/{cardId}",
            "pokemontcg://cards/set/{setId}",
        ]


class TestResolveResourceUri:
    def test_set_list(self) -> None:
        resolved = resolve_resource_uri("pokemontcg://sets?limit=10&offset=20")

        assert resolved.path == "/sets"
        assert resolved.params == {"limit": "10", "offset": "20"}

    def test_set_by_id(self) -> None:
        resolved = resolve_resource_uri("pokemontcg://sets/id/base1")

        assert resolved.path == "/sets/id/base1"
        assert resolved.params == {}

    def test_set_by_code(self) -> None:
        assert resolve_resource_uri("pokemontcg://sets/code/BS").path == "/sets/code/BS"

    def test_card_list_with_search(self) -> None:
        resolved = resolve_resource_uri("pokemontcg://cards?searchName=char&limit=5")

        assert resolved.path == "/cards"
        assert resolved.params == {"searchName": "char", "limit": "5"}

    def test_card_by_id(self) -> None:
        assert resolve_resource_uri("pokemontcg://cards/id/base1-4").path == "/cards/id/base1-4"

    def test_cards_by_set(self) -> None:
        resolved = resolve_resource_uri("pokemontcg://cards/set/base1?limit=2")

        assert resolved.path == "/cards/set/base1"
        assert resolved.params == {"limit": "2"}

    def test_unlisted_params_dropped(self) -> None:
        resolved = resolve_resource_uri("pokemontcg://sets?searchName=base&debug=1&limit=3")

        assert resolved.params == {"limit": "3"}

    def test_single_item_takes_no_params(self) -> None:
        resolved = resolve_resource_uri("pokemontcg://cards/id/base1-4?limit=3")

        assert resolved.params == {}

    def test_encoded_key(self) -> None:
        resolved = resolve_resource_uri("pokemontcg://sets/code/A%20B")

        assert resolved.path == "/sets/code/A%20B"

    @pytest.mark.parametrize(
        "uri",
        [
            "pokemontcg://decks",
            "pokemontcg://sets/name/Base",
            "pokemontcg://sets/id",
            "pokemontcg://cards/id/base1-4/extra",
            "https://sets/id/base1",
        ],
    )
    def test_unknown_uri_raises(self, uri: str) -> None:
        with pytest.raises(LookupError, match="Unknown resource"):
            resolve_resource_uri(uri)

    def test_custom_scheme(self) -> None:
        resolved = resolve_resource_uri("tcg://sets/id/base1", scheme="tcg")

        assert resolved.path == "/sets/id/base1"


class TestReadResource:
    @respx.mock
    async def test_returns_api_json_verbatim(self, catalog: CatalogClient) -> None:
        body = {"cardId": "base1-4", "name": "Charizard", "hp": "120"}
        respx.get(f"{API}/cards/id/base1-4").mock(return_value=httpx.Response(200, json=body))

        text = await read_resource(catalog, "pokemontcg://cards/id/base1-4")

        assert json.loads(text) == body

    @respx.mock
    async def test_forwards_allowed_params(self, catalog: CatalogClient) -> None:
        route = respx.get(f"{API}/cards/set/base1").mock(
            return_value=httpx.Response(200, json={"data": [], "pagination": {}})
        )

        await read_resource(catalog, "pokemontcg://cards/set/base1?offset=50&searchName=x")

        params = route.calls.last.request.url.params
        assert params["offset"] == "50"
        assert "searchName" not in params

    async def test_unknown_uri_propagates(self, catalog: CatalogClient) -> None:
        with pytest.raises(LookupError):
            await read_resource(catalog, "pokemontcg://trainers")

    @respx.mock
    async def test_api_error_propagates(self, catalog: CatalogClient) -> None:
        respx.get(f"{API}/sets/id/nope").mock(
            return_value=httpx.Response(404, json={"error": "Set not found"})
        )

        with pytest.raises(CatalogAPIError):
            await read_resource(catalog, "pokemontcg://sets/id/nope")
