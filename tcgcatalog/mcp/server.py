"""
MCP stdio server exposing the catalog tools and resources.

Run with: python -m tcgcatalog.mcp.server
Logs go to stderr; stdout carries the protocol.
"""

import asyncio
import logging
import sys

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from tcgcatalog.config import settings
from tcgcatalog.mcp.resources import RESOURCE_TEMPLATES, read_resource
from tcgcatalog.mcp.tools import TOOL_DEFINITIONS, call_tool
from tcgcatalog.services.catalog_client import CatalogClient

logger = logging.getLogger(__name__)

SERVER_NAME = "pokemon-tcg-mcp"
JSON_MIME = "application/json"


class ToolCallFailed(Exception):
    """Carries a flagged tool result's message back to the MCP runtime."""

    pass


def build_server(client: CatalogClient, scheme: str | None = None) -> Server:
    """Create an MCP server whose handlers all go through `client`."""
    scheme = scheme or settings.resource_scheme
    server: Server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=t.name, description=t.description, inputSchema=t.parameters)
            for t in TOOL_DEFINITIONS
        ]

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
        result = await call_tool(client, name, arguments)
        text = result["content"][0]["text"]
        if result.get("isError"):
            # The runtime turns a raised error into an isError result
            raise ToolCallFailed(text)
        return [types.TextContent(type="text", text=text)]

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return [
            types.Resource(
                uri=AnyUrl(t.uri_template(scheme)),
                name=t.name,
                description=t.description,
                mimeType=JSON_MIME,
            )
            for t in RESOURCE_TEMPLATES
            if t.operation is None
        ]

    @server.list_resource_templates()
    async def list_resource_templates() -> list[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=t.uri_template(scheme),
                name=t.name,
                description=t.description,
                mimeType=JSON_MIME,
            )
            for t in RESOURCE_TEMPLATES
        ]

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
        text = await read_resource(client, str(uri), scheme)
        return [ReadResourceContents(content=text, mime_type=JSON_MIME)]

    return server


async def serve() -> None:
    """Run the MCP server over stdio until the client disconnects."""
    async with CatalogClient() as client:
        server = build_server(client)
        logger.info("Pokemon TCG MCP server started (API: %s)", client.base_url)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """CLI entry point for the MCP server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    asyncio.run(serve())


if __name__ == "__main__":
    main()
