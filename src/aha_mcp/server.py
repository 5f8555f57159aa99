"""Aha! MCP Server - Expose Aha! features, requirements, pages and releases to AI assistants."""
import sys
import asyncio
import logging
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    Tool,
    TextContent,
    CallToolRequest,
    CallToolResult,
    ErrorData,
    METHOD_NOT_FOUND,
    ServerResult,
)

from . import tools
from . import handlers
from .client import AhaClient
from .config import AhaSettings, load_settings
from .errors import McpError


# Configure logging to stderr; stdout carries the MCP protocol
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr,
    force=True
)
logger = logging.getLogger("aha-mcp")


# MCP Server instance
app = Server("aha-mcp")

# Loaded once in main(); missing credentials stop the process before serving
_settings: Optional[AhaSettings] = None

# Map tool names to handler functions
HANDLERS: dict[str, handlers.Handler] = {
    # GraphQL handlers
    "get_record": handlers.handle_get_record,
    "get_page": handlers.handle_get_page,
    "search_documents": handlers.handle_search_documents,
    "introspect_feature": handlers.handle_introspect_feature,
    # REST handlers
    "get_record_rest": handlers.handle_get_record_rest,
    "update_feature": handlers.handle_update_feature,
    "list_features_in_release": handlers.handle_list_features_in_release,
    "list_releases": handlers.handle_list_releases,
    "update_release": handlers.handle_update_release,
}


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available MCP tools for Aha! records."""
    return tools.get_tools()


async def dispatch(name: str, arguments: Any, client: AhaClient) -> list[TextContent]:
    """Run one tool against an open client and render its result.

    Raises:
        McpError: For unknown tools and for ERROR results
    """
    handler = HANDLERS.get(name)
    if not handler:
        logger.warning(f"Unknown tool requested: {name}")
        raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

    result = await handler(arguments or {}, client)
    if result.is_error:
        logger.error(f"Tool {name} failed ({result.error_kind.value}): {result.message}")
    return result.to_content()


def open_client() -> AhaClient:
    """Build a client for one tool call from the loaded settings."""
    settings = _settings or load_settings()
    return AhaClient.from_settings(settings)


async def call_tool(request: CallToolRequest) -> ServerResult:
    """Handle MCP tool calls with a client opened for this call only.

    Registered directly in app.request_handlers rather than through
    @app.call_tool(), which turns every exception into an isError text
    result. A raised McpError is sent as a JSON-RPC error with its code.
    """
    name = request.params.name
    arguments = request.params.arguments
    logger.info(f"Tool call: {name} with arguments: {arguments}")

    async with open_client() as client:
        content = await dispatch(name, arguments, client)
    return ServerResult(CallToolResult(content=content, isError=False))


app.request_handlers[CallToolRequest] = call_tool


async def main():
    """Run the MCP server."""
    global _settings
    _settings = load_settings()
    logger.info(f"Aha! MCP server starting for https://{_settings.domain}.aha.io")

    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
