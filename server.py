#!/usr/bin/env python3
"""
Trello MCP Server
A Model Context Protocol server exposing Trello boards, lists, cards and
attachments over stdio.
"""

import asyncio
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent, ImageContent, Resource

import resources
import tools
from config import configure_logging, load_credentials
from trello_api.client import TrelloClient

logger = logging.getLogger("trello_mcp")


def create_server(client: TrelloClient) -> Server:
    """Build the MCP server around a configured Trello client."""
    app = Server("trello-mcp-server")

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available Trello tools."""
        return tools.TOOLS

    @app.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent | ImageContent]:
        """Handle tool calls. Exceptions become error results for the client."""
        return await tools.call_tool(client, name, arguments)

    @app.list_resources()
    async def list_resources() -> list[Resource]:
        """List available resources."""
        return resources.RESOURCES

    @app.read_resource()
    async def read_resource(uri) -> str:
        """Read a resource by URI."""
        return resources.read_resource(uri, client.credentials)

    return app


async def main():
    """Run the MCP server."""
    configure_logging()
    credentials = load_credentials()

    # Missing credentials are reported per tool call, not fatal here
    logger.info("Starting Trello MCP server")
    logger.info("API key: %s", credentials.masked_key())
    logger.info("Token: %s", "set" if credentials.token else "missing")
    logger.info("Default board: %s", credentials.default_board_id or "not set")
    if not credentials.is_complete():
        logger.warning("TRELLO_API_KEY and TRELLO_TOKEN are required; tool calls will fail until they are set")

    app = create_server(TrelloClient(credentials))
    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
