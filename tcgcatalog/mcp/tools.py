"""
MCP tool definitions for the catalog.

Each tool maps onto one catalog API endpoint. Arguments are forwarded as
query parameters unchanged; the API's JSON response is returned verbatim
as text content.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from tcgcatalog.services.catalog_client import CatalogClient, key_path

logger = logging.getLogger(__name__)


class ToolArgumentError(ValueError):
    """Raised when a tool call is missing a required argument."""

    pass


@dataclass
class ToolDefinition:
    """Definition of an MCP tool."""

    name: str
    description: str
    parameters: dict[str, Any]


_LIMIT = {"type": "number", "description": "Number of results to return"}
_OFFSET = {"type": "number", "description": "Offset for pagination"}
_SET_ID = {"type": "string", "description": "The set ID (e.g., 'base1')"}


TOOL_DEFINITIONS: list[ToolDefinition] = [
    ToolDefinition(
        name="get_sets",
        description="List all Pokemon TCG sets with pagination",
        parameters={
            "type": "object",
            "properties": {"limit": _LIMIT, "offset": _OFFSET},
        },
    ),
    ToolDefinition(
        name="get_set_by_id",
        description="Get a specific set by its setId",
        parameters={
            "type": "object",
            "properties": {"setId": _SET_ID},
            "required": ["setId"],
        },
    ),
    ToolDefinition(
        name="get_set_by_code",
        description="Get a specific set by its PTCGO code",
        parameters={
            "type": "object",
            "properties": {
                "ptcgoCode": {"type": "string", "description": "The PTCGO code"},
            },
            "required": ["ptcgoCode"],
        },
    ),
    ToolDefinition(
        name="get_cards",
        description="List all Pokemon TCG cards with pagination and search",
        parameters={
            "type": "object",
            "properties": {
                "limit": _LIMIT,
                "offset": _OFFSET,
                "searchName": {
                    "type": "string",
                    "description": "Search for cards by name",
                },
            },
        },
    ),
    ToolDefinition(
        name="get_card_by_id",
        description="Get a specific card by its cardId",
        parameters={
            "type": "object",
            "properties": {
                "cardId": {"type": "string", "description": "The card ID (e.g., 'base1-4')"},
            },
            "required": ["cardId"],
        },
    ),
    ToolDefinition(
        name="get_cards_by_set",
        description="Get all cards from a specific set",
        parameters={
            "type": "object",
            "properties": {"setId": _SET_ID, "limit": _LIMIT, "offset": _OFFSET},
            "required": ["setId"],
        },
    ),
]


def _require(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if value is None or value == "":
        raise ToolArgumentError(f"Missing required argument: {key}")
    return str(value)


def _query(arguments: dict[str, Any], *keys: str) -> dict[str, Any]:
    return {key: arguments[key] for key in keys if key in arguments}


async def get_sets(client: CatalogClient, arguments: dict[str, Any]) -> Any:
    return await client.get_json("/sets", _query(arguments, "limit", "offset"))


async def get_set_by_id(client: CatalogClient, arguments: dict[str, Any]) -> Any:
    return await client.get_json(key_path("sets", "id", _require(arguments, "setId")))


async def get_set_by_code(client: CatalogClient, arguments: dict[str, Any]) -> Any:
    return await client.get_json(key_path("sets", "code", _require(arguments, "ptcgoCode")))


async def get_cards(client: CatalogClient, arguments: dict[str, Any]) -> Any:
    return await client.get_json("/cards", _query(arguments, "limit", "offset", "searchName"))


async def get_card_by_id(client: CatalogClient, arguments: dict[str, Any]) -> Any:
    return await client.get_json(key_path("cards", "id", _require(arguments, "cardId")))


async def get_cards_by_set(client: CatalogClient, arguments: dict[str, Any]) -> Any:
    set_id = _require(arguments, "setId")
    return await client.get_json(
        key_path("cards", "set", set_id), _query(arguments, "limit", "offset")
    )


_HANDLERS: dict[str, Callable[[CatalogClient, dict[str, Any]], Awaitable[Any]]] = {
    "get_sets": get_sets,
    "get_set_by_id": get_set_by_id,
    "get_set_by_code": get_set_by_code,
    "get_cards": get_cards,
    "get_card_by_id": get_card_by_id,
    "get_cards_by_set": get_cards_by_set,
}


async def execute_tool(
    client: CatalogClient,
    tool_name: str,
    arguments: dict[str, Any] | None,
) -> Any:
    """
    Execute a catalog tool by name.

    Args:
        client: Catalog API client
        tool_name: Name of the tool to execute
        arguments: Tool arguments

    Returns:
        Decoded JSON response from the catalog API

    Raises:
        ValueError: If tool name is unknown
        ToolArgumentError: If a required business key is missing
        CatalogAPIError: If the API answers with a non-success status
    """
    handler = _HANDLERS.get(tool_name)
    if handler is None:
        raise ValueError(f"Unknown tool: {tool_name}")
    return await handler(client, arguments or {})


def text_result(text: str, is_error: bool = False) -> dict[str, Any]:
    """MCP tool result with a single text content block."""
    result: dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


async def call_tool(
    client: CatalogClient,
    tool_name: str,
    arguments: dict[str, Any] | None,
) -> dict[str, Any]:
    """
    Run a tool and wrap its outcome as an MCP result.

    Never raises for tool failures: the error message comes back as a
    flagged text result instead.
    """
    try:
        data = await execute_tool(client, tool_name, arguments)
    except Exception as e:
        logger.warning("Tool %s failed: %s", tool_name, e)
        return text_result(f"Error: {e}", is_error=True)
    return text_result(json.dumps(data, indent=2, ensure_ascii=False))
