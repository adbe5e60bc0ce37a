"""MCP tool and resource definitions for the catalog."""

from tcgcatalog.mcp.resources import RESOURCE_TEMPLATES, read_resource, resolve_resource_uri
from tcgcatalog.mcp.tools import TOOL_DEFINITIONS, ToolArgumentError, call_tool, execute_tool

__all__ = [
    "RESOURCE_TEMPLATES",
    "TOOL_DEFINITIONS",
    "ToolArgumentError",
    "call_tool",
    "execute_tool",
    "read_resource",
    "resolve_resource_uri",
]
